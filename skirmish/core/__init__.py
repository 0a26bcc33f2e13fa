"""
Core types and constants for the skirmish decision core.
"""

# Instead of from skirmish.core.types import Cell, you can do: from skirmish.core import Cell
from .types import (
    Cell,
    Side,
    ActionType,
    MoveDir,
    UnitKind,
    GameResult,
    ActionValidation,
)
from .actions import Action, JointAction
from .errors import (
    SkirmishError,
    ConfigurationError,
    WorldLookupError,
    ActionTranslationError,
)


__all__ = [
    "Cell",
    "Side",
    "ActionType",
    "MoveDir",
    "UnitKind",
    "GameResult",
    "ActionValidation",
    "Action",
    "JointAction",
    "SkirmishError",
    "ConfigurationError",
    "WorldLookupError",
    "ActionTranslationError",
]
