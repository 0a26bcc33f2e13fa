from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class AgentSpec:
    """
    Serializable description of an agent.

    Lets the CLI and tests build agents by name through the registry.
    """
    type: str
    player: int
    name: Optional[str] = None
    init_params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "type": self.type,
            "player": self.player,
            "name": self.name,
            "init_params": self.init_params,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentSpec":
        """Construct from a dict (e.g., loaded from JSON)."""
        player = data.get("player")
        if player is None:
            raise ValueError("AgentSpec requires 'player'")
        return cls(
            type=data["type"],
            player=int(player),
            name=data.get("name"),
            init_params=data.get("init_params", {}) or {},
        )

    def with_player(self, player: int) -> "AgentSpec":
        """Return a copy controlling another player."""
        return AgentSpec(
            type=self.type,
            player=player,
            name=self.name,
            init_params=dict(self.init_params),
        )
