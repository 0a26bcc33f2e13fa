"""
Random agent implementation for testing and baseline comparison.

This agent makes random legal decisions for all its units.
"""

import random
from typing import Any, Optional

from skirmish.core.actions import JointAction
from skirmish.core.types import Side
from skirmish.model.state import CombatSnapshot
from skirmish.world.snapshot import WorldSnapshot
from .base_agent import BaseAgent
from .registry import register_agent


@register_agent("random")
class RandomAgent(BaseAgent):
    """
    Agent that takes random actions.

    Decision process:
    - For each live unit, sample uniformly from its legal actions.

    Legal actions follow the same rules as the search engine, so a unit
    with an enemy in reach always attacks.
    """

    def __init__(
        self,
        player: int,
        name: str = None,
        seed: Optional[int] = None,
        **_: Any,
    ):
        """
        Initialize random agent.

        Args:
            player: Player to control
            name: Agent name (default: "RandomAgent")
            seed: Random seed for reproducibility (None = random)
        """
        super().__init__(player, name)
        self.rng = random.Random(seed)

    def on_turn(self, world: WorldSnapshot) -> JointAction:
        snapshot = CombatSnapshot.from_world(world, self.player)
        actions: JointAction = {}

        for unit in snapshot.live_units(Side.FRIENDLY):
            allowed = snapshot.legal_actions(unit)
            if not allowed:
                continue
            actions[unit.id] = self.rng.choice(allowed)

        return actions
