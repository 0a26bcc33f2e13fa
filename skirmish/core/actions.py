"""
Action definitions and utilities.

Actions are the abstract per-unit commands produced by the decision
core. This module provides:
- Action dataclass
- Action validation
- Action factory methods
- JointAction helpers for turn records and logs
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any, Mapping

from .types import ActionType, MoveDir


@dataclass
class Action:
    """
    An abstract action taken by one unit in one ply.

    Use static factory methods for convenient construction:
        - Action.move(direction)
        - Action.attack(target_id)

    Or construct directly:
        - Action(ActionType.MOVE, {"dir": MoveDir.UP})
        - Action(ActionType.ATTACK, {"target_id": 7})
    """

    type: ActionType
    params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate action parameters after initialization."""
        self._validate()

    def _validate(self) -> None:
        """
        Validate that parameters match the action type.

        Raises:
            ValueError: If parameters are invalid for the action type
        """
        if self.type == ActionType.MOVE:
            if "dir" not in self.params:
                raise ValueError("MOVE action requires 'dir' parameter")
            if not isinstance(self.params["dir"], MoveDir):
                raise ValueError(f"'dir' must be a MoveDir enum, got {type(self.params['dir'])}")

        elif self.type == ActionType.ATTACK:
            if "target_id" not in self.params:
                raise ValueError("ATTACK action requires 'target_id' parameter")
            target_id = self.params["target_id"]
            if not isinstance(target_id, int) or isinstance(target_id, bool):
                raise ValueError(f"'target_id' must be an int, got {type(target_id)}")

    @property
    def direction(self) -> MoveDir | None:
        """Direction of a MOVE action, None otherwise."""
        return self.params.get("dir")

    @property
    def target_id(self) -> int | None:
        """Target of an ATTACK action, None otherwise."""
        return self.params.get("target_id")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert action to a JSON-serializable dictionary.

        Returns:
            Dictionary representation of the action
        """
        params_dict = {}
        for key, value in self.params.items():
            if isinstance(value, MoveDir):
                params_dict[key] = value.name
            else:
                params_dict[key] = value

        return {
            "type": self.type.name,
            "params": params_dict
        }

    def __str__(self) -> str:
        """Human-readable string representation."""
        if self.type == ActionType.MOVE:
            return f"MOVE {self.params['dir'].name}"
        elif self.type == ActionType.ATTACK:
            return f"ATTACK target={self.params['target_id']}"
        return f"{self.type.name}({self.params})"

    # FACTORY METHODS
    @staticmethod
    def move(direction: MoveDir) -> Action:
        """Create a MOVE action one cell in the given direction."""
        return Action(ActionType.MOVE, {"dir": direction})

    @staticmethod
    def attack(target_id: int) -> Action:
        """Create an ATTACK action against the given unit."""
        return Action(ActionType.ATTACK, {"target_id": target_id})


# One entry per acting unit of the side to move: unit_id -> Action.
JointAction = Dict[int, Action]


def joint_action_to_dict(joint: Mapping[int, Action]) -> Dict[str, Any]:
    """Serialize a joint action; JSON object keys are unit ids as strings."""
    return {str(unit_id): action.to_dict() for unit_id, action in joint.items()}


def describe_joint_action(joint: Mapping[int, Action]) -> str:
    """Compact one-line description used in logs."""
    if not joint:
        return "<no action>"
    return ", ".join(f"#{unit_id}: {action}" for unit_id, action in joint.items())
