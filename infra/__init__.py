from .paths import LOG_DIR, PROJECT_ROOT, STORAGE_DIR
from .logger import clear_match_context, configure_logging, get_logger, set_match_context

__all__ = [
    "PROJECT_ROOT",
    "STORAGE_DIR",
    "LOG_DIR",
    "configure_logging",
    "get_logger",
    "set_match_context",
    "clear_match_context",
]
