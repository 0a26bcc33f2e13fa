from .arena import ActionResolutionResult, CommandResult, HostSimulation
from .runner import EpisodeResult, MatchRunner, TurnRecord
from .victory import VictoryConditions, VictoryResult

__all__ = [
    "ActionResolutionResult",
    "CommandResult",
    "HostSimulation",
    "EpisodeResult",
    "MatchRunner",
    "TurnRecord",
    "VictoryConditions",
    "VictoryResult",
]
