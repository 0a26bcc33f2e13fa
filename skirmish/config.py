"""
Search configuration.

The only required setting is the search depth in plies. It can be passed
explicitly or read from the SKIRMISH_PLIES environment variable (a .env
file in the working directory is loaded first). A missing or non-numeric
depth raises ConfigurationError, which callers treat as fatal.
"""

from __future__ import annotations

import os
from typing import Any, Literal, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.errors import ConfigurationError
from .model.evaluation import EvaluationWeights

PLIES_ENV_VAR = "SKIRMISH_PLIES"


class SearchSettings(BaseModel):
    """Validated settings for a minimax agent."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    depth: int = Field(ge=1, description="Search depth in plies (one side's move per ply)")
    allow_stacking: bool = Field(
        default=False,
        description="Allow two units of one side to end a joint move on the same cell",
    )
    hp_weight: float = Field(default=1.0, gt=0, description="Weight of the HP differential")
    distance_weight: float = Field(default=-2.0, le=0, description="Weight of summed hop distance")
    force_weight: float = Field(default=50.0, ge=0, description="Weight of the live-unit differential")
    heuristic: Literal["chebyshev", "manhattan"] = Field(
        default="chebyshev", description="A* heuristic used by the distance feature"
    )
    time_budget: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds per turn for iterative deepening; None searches the full depth once",
    )

    @field_validator("depth", mode="before")
    @classmethod
    def _depth_must_be_integral(cls, value: Any) -> Any:
        # bool is an int subclass and floats like 2.5 would be truncated
        if isinstance(value, bool) or isinstance(value, float):
            raise ValueError(f"depth must be a whole number of plies, got {value!r}")
        if isinstance(value, str):
            value = value.strip()
            if not value.lstrip("-").isdigit():
                raise ValueError(f"depth must be numeric, got {value!r}")
        return value

    @property
    def weights(self) -> EvaluationWeights:
        return EvaluationWeights(
            hp=self.hp_weight,
            distance=self.distance_weight,
            force=self.force_weight,
        )


def build_settings(**values: Any) -> SearchSettings:
    """
    Validate settings, converting pydantic errors to ConfigurationError.

    Raises:
        ConfigurationError: If depth is missing or any value is invalid
    """
    if values.get("depth") is None:
        raise ConfigurationError("You must specify the number of plies")
    try:
        return SearchSettings(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid search settings: {exc}") from exc


def load_settings(plies: Any = None, **overrides: Any) -> SearchSettings:
    """
    Resolve settings from an explicit ply count or the environment.

    Args:
        plies: Explicit depth; falls back to $SKIRMISH_PLIES when None
        **overrides: Any other SearchSettings field

    Raises:
        ConfigurationError: If no valid ply count can be found
    """
    if plies is None:
        load_dotenv(find_dotenv(usecwd=True))
        plies = os.getenv(PLIES_ENV_VAR)
    return build_settings(depth=plies, **overrides)
