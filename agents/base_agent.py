"""
Turn-handler interface for agents driven by a host loop.

Agents are plain objects implementing this interface; the host loop
holds them by composition (see runtime.runner.MatchRunner) and calls the
three hooks below.
"""

from abc import ABC, abstractmethod

from skirmish.core.actions import JointAction
from skirmish.world.snapshot import WorldSnapshot


class BaseAgent(ABC):
    """
    Abstract base class for all agents.

    Subclasses must implement:
    - on_turn(): Produce a joint action for the controlled units

    Attributes:
        player: Host player number this agent controls
        name: Agent name for logging/identification
    """

    def __init__(self, player: int, name: str = None):
        """
        Initialize the agent.

        Args:
            player: Player number this agent controls
            name: Optional name for the agent (defaults to class name)
        """
        self.player = player
        self.name = name or self.__class__.__name__

    def on_episode_start(self, world: WorldSnapshot) -> None:
        """
        Called once before the first turn of an episode.

        Override to locate units or plan ahead. Any state kept from a
        previous episode must be cleared here.
        """
        pass

    @abstractmethod
    def on_turn(self, world: WorldSnapshot) -> JointAction:
        """
        Decide this turn's actions.

        Args:
            world: Read-only snapshot of the host world

        Returns:
            Dict mapping unit_id -> Action for units that should act.
            An empty dict means "no action this turn".

        Notes:
            - Dead units should not have actions
            - Must not raise for expected situations (no path, no moves)
        """
        pass

    def on_episode_end(self, world: WorldSnapshot) -> None:
        """Called once after the last turn of an episode."""
        pass

    def __str__(self) -> str:
        """String representation."""
        return f"{self.name} (player {self.player})"

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"{self.__class__.__name__}(player={self.player}, name='{self.name}')"
