from __future__ import annotations

import importlib
from typing import Callable, Dict, Type, TypeVar

from .base_agent import BaseAgent

AGENT_REGISTRY: Dict[str, Type[BaseAgent]] = {}
AgentType = TypeVar("AgentType", bound=Type[BaseAgent])


def register_agent(key: str, cls: AgentType | None = None) -> AgentType | Callable[[AgentType], AgentType]:
    """
    Register an agent class under a key so the CLI and AgentSpec can name it.

    Works as a decorator (`@register_agent("minimax")`) or as a direct
    call (`register_agent("minimax", MinimaxAgent)`).
    """
    def decorator(target_cls: AgentType) -> AgentType:
        AGENT_REGISTRY[key] = target_cls
        return target_cls

    if cls is None:
        return decorator

    return decorator(cls)


def available_agents() -> list[str]:
    return sorted(AGENT_REGISTRY)


def resolve_agent_class(type_ref: str) -> Type[BaseAgent]:
    """
    Resolve an agent class from a registry key or an import path.

    Strings that are not registered keys are treated as "module.Class".

    Raises:
        ValueError: For an unknown key without a module part
        TypeError: If the imported object is not a BaseAgent subclass
    """
    if type_ref in AGENT_REGISTRY:
        return AGENT_REGISTRY[type_ref]

    if "." not in type_ref:
        raise ValueError(
            f"Unknown agent type '{type_ref}'. "
            f"Use one of {available_agents()} or an import path like 'pkg.module.Class'."
        )

    module_name, class_name = type_ref.rsplit(".", 1)
    module = importlib.import_module(module_name)
    cls = getattr(module, class_name)

    if not (isinstance(cls, type) and issubclass(cls, BaseAgent)):
        raise TypeError(f"{type_ref} is not a BaseAgent subclass")

    return cls
