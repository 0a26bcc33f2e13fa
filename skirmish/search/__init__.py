"""
Adversarial Search Engine.
"""

from .alphabeta import (
    INFINITY,
    AlphaBetaSearch,
    SearchResult,
    SearchStats,
    minimax,
)

__all__ = [
    "INFINITY",
    "AlphaBetaSearch",
    "SearchResult",
    "SearchStats",
    "minimax",
]
