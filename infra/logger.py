from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from infra.paths import LOG_DIR

# Match logs carry the host turn and acting player; "-" outside a match.
DEFAULT_FORMAT = "%(asctime)s %(levelname)s [turn %(turn)s p%(player)s] [%(name)s:%(lineno)d] %(message)s"
JSON_FORMAT = (
    '{"time":"%(asctime)s","level":"%(levelname)s","turn":"%(turn)s","player":"%(player)s",'
    '"logger":"%(name)s","line":%(lineno)d,"msg":"%(message)s"}'
)
DEFAULT_LOGFILE = LOG_DIR / "skirmish.log"
NO_MATCH = "-"


class MatchContextFilter(logging.Filter):
    """Stamps every record with the turn and player currently being played."""

    def __init__(self):
        super().__init__()
        self.turn: Union[int, str] = NO_MATCH
        self.player: Union[int, str] = NO_MATCH

    def filter(self, record: logging.LogRecord) -> bool:
        record.turn = self.turn
        record.player = self.player
        return True


_context = MatchContextFilter()


def set_match_context(turn: Optional[int], player: Optional[int]) -> None:
    """Tag subsequent log records with a host turn and player (None clears)."""
    _context.turn = NO_MATCH if turn is None else turn
    _context.player = NO_MATCH if player is None else player


def clear_match_context() -> None:
    set_match_context(None, None)


def configure_logging(
    level: Union[str, int] = "INFO",
    *,
    json: bool = False,
    logfile: str | Path | None = DEFAULT_LOGFILE,
    stream=None,
) -> None:
    """
    Configure the root logger for matches: console output plus an optional log file.

    Args:
        level: Logging level name or int (e.g., "debug", logging.INFO).
        json: Emit JSON lines when True; otherwise a human-friendly format.
        logfile: File path to append logs; set to None to disable file output.
        stream: Console stream (defaults to stdout).

    Raises:
        ValueError: For an unknown level name.
    """
    if isinstance(level, str):
        level = level.upper()

    formatter = logging.Formatter(JSON_FORMAT if json else DEFAULT_FORMAT)
    targets: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if logfile is not None:
        log_path = Path(logfile)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        targets.append(logging.FileHandler(log_path, encoding="utf-8"))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    for handler in targets:
        handler.setFormatter(formatter)
        handler.addFilter(_context)
        root.addHandler(handler)

    logging.captureWarnings(True)


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger; configure_logging() should be called once on startup."""
    return logging.getLogger(name)
