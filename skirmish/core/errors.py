"""
Error taxonomy for the skirmish decision core.

Only misconfiguration is fatal. "No path" and "no legal moves" are
ordinary return values and have no exception type.
"""


class SkirmishError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(SkirmishError, ValueError):
    """Missing or invalid configuration (e.g. the search depth in plies)."""


class WorldLookupError(SkirmishError, LookupError):
    """An expected unit or player was not found in the world snapshot."""


class ActionTranslationError(SkirmishError, ValueError):
    """An abstract action could not be translated into a host primitive."""
