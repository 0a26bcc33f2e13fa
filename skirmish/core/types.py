"""
Core type definitions for the skirmish decision core.

This module contains the fundamental value types and enums used
throughout the system. No logic beyond small conversions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import NamedTuple, Tuple

# ============================================================================
# SPATIAL TYPES
# ============================================================================


class Cell(NamedTuple):
    """
    A grid coordinate.

    - X increases to the RIGHT
    - Y increases UPWARD
    - Origin (0, 0) is at BOTTOM-LEFT

    Equality and hashing are by coordinates only, so a Cell compares
    equal to the plain tuple ``(x, y)``.
    """
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Cell:
        """Return the cell displaced by (dx, dy)."""
        return Cell(self.x + dx, self.y + dy)


class Side(Enum):
    """Side affiliation for units in a combat snapshot."""
    FRIENDLY = "FRIENDLY"
    ENEMY = "ENEMY"

    def __str__(self) -> str:
        return self.value

    @property
    def opponent(self) -> Side:
        """Get the opposing side."""
        return Side.ENEMY if self == Side.FRIENDLY else Side.FRIENDLY

    @property
    def maximizing(self) -> bool:
        """The friendly side is the maximizing player of the search."""
        return self == Side.FRIENDLY


# ============================================================================
# ACTIONS
# ============================================================================

class ActionType(Enum):
    """Types of abstract actions a unit can take in one ply."""
    MOVE = auto()  # Step one cell in a cardinal direction
    ATTACK = auto()  # Basic attack against a target unit

    def __str__(self) -> str:
        return self.name


class MoveDir(Enum):
    """
    Movement directions using mathematical coordinates (Y+ = UP).
    Each direction provides a delta tuple (dx, dy). Declaration order
    is the enumeration order used by child generation.
    """
    UP = (0, 1)  # Move upward (increase Y)
    DOWN = (0, -1)  # Move downward (decrease Y)
    LEFT = (-1, 0)  # Move left (decrease X)
    RIGHT = (1, 0)  # Move right (increase X)

    @property
    def delta(self) -> Tuple[int, int]:
        """Get the (dx, dy) movement delta."""
        return self.value

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> MoveDir:
        """
        Map a unit displacement to a cardinal direction.

        Raises:
            ValueError: For diagonal, degenerate or multi-cell displacements
        """
        for direction in cls:
            if direction.value == (dx, dy):
                return direction
        raise ValueError(f"No cardinal direction for displacement ({dx}, {dy})")

    def __str__(self) -> str:
        return self.name


# ============================================================================
# UNIT KINDS
# ============================================================================

class UnitKind(Enum):
    """Unit-type tags carried by combat units."""
    MELEE = "melee"
    RANGED = "ranged"
    STRUCTURE = "structure"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def mobile(self) -> bool:
        """Structures never move."""
        return self != UnitKind.STRUCTURE

    @classmethod
    def from_label(cls, label: str) -> UnitKind:
        """Classify a host unit-type label such as 'Footman' or 'TownHall'."""
        normalized = label.strip().lower()
        if normalized in cls._value2member_map_:
            return cls(normalized)
        return _LABEL_KINDS.get(normalized, cls.UNKNOWN)

    @property
    def icon(self) -> str:
        """Get the display icon for this unit kind."""
        return {
            UnitKind.MELEE: "F",
            UnitKind.RANGED: "A",
            UnitKind.STRUCTURE: "H",
            UnitKind.UNKNOWN: "U",
        }[self]


_LABEL_KINDS = {
    "footman": UnitKind.MELEE,
    "knight": UnitKind.MELEE,
    "archer": UnitKind.RANGED,
    "ballista": UnitKind.RANGED,
    "townhall": UnitKind.STRUCTURE,
    "tower": UnitKind.STRUCTURE,
}


# ============================================================================
# GAME RESULT
# ============================================================================

class GameResult(Enum):
    """Possible match outcomes. The winning player is reported separately."""
    IN_PROGRESS = "in_progress"
    VICTORY = "victory"
    DRAW = "draw"

    def __str__(self) -> str:
        return self.value.replace("_", " ").title()


# ============================================================================
# ACTION VALIDATION
# ============================================================================

@dataclass
class ActionValidation:
    """
    Structured result of validating a host command.

    Attributes:
        valid: Whether the command is valid
        error_code: Machine-readable error code (None if valid)
        message: Human-readable message explaining the result

    Error codes:
        - "UNIT_DEAD": Unit is not alive
        - "UNKNOWN_UNIT": Unit id is not in the world
        - "NOT_OWNER": Unit belongs to another player
        - "IMMOBILE": Unit cannot move (structure)
        - "OUT_OF_BOUNDS": Movement would leave grid bounds
        - "OBSTACLE": Movement would enter an obstacle cell
        - "COLLISION": Destination is occupied by a live unit
        - "INVALID_TARGET": Target id is invalid, friendly or dead
        - "OUT_OF_RANGE": Target is outside attack reach
        - "NO_CAPABILITY": Unit deals no damage
    """
    valid: bool
    error_code: str | None = None
    message: str = ""

    @staticmethod
    def success(message: str = "") -> ActionValidation:
        """Create a validation success result."""
        return ActionValidation(valid=True, error_code=None, message=message)

    @staticmethod
    def fail(error_code: str, message: str) -> ActionValidation:
        """Create a validation failure result."""
        return ActionValidation(valid=False, error_code=error_code, message=message)
