"""Exhaustive memoized game-tree search."""

from .transposition import MAX_PROBES, TranspositionTable
from .negamax import (
    LOSS_SCORE,
    TERMINAL_SCORE,
    WIN_SCORE,
    MoveOrder,
    SearchConfig,
    SearchResult,
    SearchStats,
    determine_move_order_advantage,
    evaluate,
    select_best_move,
)

__all__ = [
    "MAX_PROBES",
    "TranspositionTable",
    "LOSS_SCORE",
    "TERMINAL_SCORE",
    "WIN_SCORE",
    "MoveOrder",
    "SearchConfig",
    "SearchResult",
    "SearchStats",
    "determine_move_order_advantage",
    "evaluate",
    "select_best_move",
]
