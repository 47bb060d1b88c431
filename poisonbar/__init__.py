"""Poison bar solver core package."""

from . import core, env, evaluation, search
from .core import Direction, GameState, Move
from .env import PoisonBarEnv
from .evaluation import WinMapSummary, build_win_map, format_win_map, summarize_win_map, sweep_win_maps
from .search import (
    MoveOrder,
    SearchConfig,
    SearchResult,
    SearchStats,
    TranspositionTable,
    determine_move_order_advantage,
    evaluate,
    select_best_move,
)

__all__ = [
    "core",
    "env",
    "evaluation",
    "search",
    "Direction",
    "GameState",
    "Move",
    "PoisonBarEnv",
    "WinMapSummary",
    "build_win_map",
    "format_win_map",
    "summarize_win_map",
    "sweep_win_maps",
    "MoveOrder",
    "SearchConfig",
    "SearchResult",
    "SearchStats",
    "TranspositionTable",
    "determine_move_order_advantage",
    "evaluate",
    "select_best_move",
]
