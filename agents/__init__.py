from .base_agent import BaseAgent
from .factory import create_agent_from_spec
from .minimax_agent import MinimaxAgent
from .pathing_agent import PathingAgent
from .random_agent import RandomAgent
from .registry import AGENT_REGISTRY, available_agents, register_agent, resolve_agent_class
from .spec import AgentSpec
from .translation import PrimitiveAttack, PrimitiveMove, translate_joint_action

__all__ = [
    "BaseAgent",
    "MinimaxAgent",
    "PathingAgent",
    "RandomAgent",
    "AgentSpec",
    "AGENT_REGISTRY",
    "available_agents",
    "create_agent_from_spec",
    "register_agent",
    "resolve_agent_class",
    "PrimitiveAttack",
    "PrimitiveMove",
    "translate_joint_action",
]
