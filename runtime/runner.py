from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from agents import BaseAgent, translate_joint_action
from agents.translation import Primitive
from infra.logger import clear_match_context, get_logger, set_match_context
from skirmish.core.actions import describe_joint_action, joint_action_to_dict
from skirmish.world.snapshot import WorldSnapshot
from .arena import ActionResolutionResult, HostSimulation
from .victory import VictoryConditions, VictoryResult

log = get_logger(__name__)


@dataclass
class TurnRecord:
    """What one player did on one turn."""
    turn: int
    player: int
    decision: str
    actions: Dict[str, Any]
    primitives: List[str]
    resolution: ActionResolutionResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "turn": self.turn,
            "player": self.player,
            "decision": self.decision,
            "actions": self.actions,
            "primitives": self.primitives,
            "resolution": self.resolution.to_dict(),
        }


@dataclass
class EpisodeResult:
    """Final outcome and turn history of a match."""
    victory: VictoryResult
    turns: int
    final_world: WorldSnapshot
    history: List[TurnRecord] = field(default_factory=list)

    @property
    def winner(self) -> Optional[int]:
        return self.victory.winner

    def to_dict(self) -> Dict[str, Any]:
        return {
            "victory": self.victory.to_dict(),
            "turns": self.turns,
            "history": [record.to_dict() for record in self.history],
        }


class MatchRunner:
    """
    Drives agents against a HostSimulation in strict alternation.

    Agents are held by composition, keyed by the player they control. A
    player without an agent passes every turn.
    """

    def __init__(
        self,
        host: HostSimulation,
        agents: Mapping[int, BaseAgent],
        conditions: Optional[VictoryConditions] = None,
    ):
        for player, agent in agents.items():
            if agent.player != player:
                raise ValueError(f"{agent} registered for player {player}")
        self.host = host
        self.agents: Dict[int, BaseAgent] = dict(agents)
        self.conditions = conditions or VictoryConditions(players=host.players)

    @classmethod
    def from_world(
        cls,
        world: WorldSnapshot,
        agents: Mapping[int, BaseAgent],
        max_turns: Optional[int] = None,
        max_idle_turns: Optional[int] = 20,
    ) -> "MatchRunner":
        host = HostSimulation(world)
        conditions = VictoryConditions(max_turns=max_turns, max_idle_turns=max_idle_turns, players=host.players)
        return cls(host, agents, conditions)

    def run_episode(self) -> EpisodeResult:
        """Play until a victory condition fires and return the outcome."""
        world = self.host.snapshot()
        log.info("Episode start: %s", world)
        for agent in self.agents.values():
            agent.on_episode_start(world)

        history: List[TurnRecord] = []
        victory = self.conditions.check_all(world, self.host.idle_turns)
        try:
            while not victory.is_game_over:
                history.append(self.play_turn())
                victory = self.conditions.check_all(self.host.snapshot(), self.host.idle_turns)
        finally:
            clear_match_context()

        final = self.host.snapshot()
        for agent in self.agents.values():
            agent.on_episode_end(final)
        log.info("Episode over after %d turns: %s", final.turn, victory)

        return EpisodeResult(victory=victory, turns=final.turn, final_world=final, history=history)

    def play_turn(self) -> TurnRecord:
        """Let the current player act once, then pass the turn."""
        player = self.host.current_player
        world = self.host.snapshot()
        agent = self.agents.get(player)
        set_match_context(world.turn, player)

        joint = agent.on_turn(world) if agent is not None else {}
        primitives: List[Primitive] = translate_joint_action(joint, world)
        resolution = self.host.apply(primitives, player)

        decision = describe_joint_action(joint)
        log.debug("Turn %d player %d: %s", world.turn, player, decision)
        self.host.end_turn()

        return TurnRecord(
            turn=world.turn,
            player=player,
            decision=decision,
            actions=joint_action_to_dict(joint),
            primitives=[str(p) for p in primitives],
            resolution=resolution,
        )
