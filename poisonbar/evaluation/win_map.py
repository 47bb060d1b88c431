from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from poisonbar.core import GameState
from poisonbar.search import MAX_PROBES, MoveOrder, determine_move_order_advantage

WIN_MAP_SYMBOLS = {int(MoveOrder.FIRST): "F", int(MoveOrder.SECOND): "S"}


@dataclass
class WinMapSummary:
    rows: int
    columns: int
    first: int
    second: int

    @property
    def positions(self) -> int:
        return self.first + self.second

    def first_rate(self) -> float:
        return self.first / max(1, self.positions)


def build_win_map(
    rows: int,
    columns: int,
    capacity: int,
    *,
    max_probes: int = MAX_PROBES,
    cross_check: bool = False,
) -> np.ndarray:
    """Preferred move order for every poison location on a ``rows x columns`` bar.

    The second-mover recomputation is off by default since it doubles the
    work of every cell.
    """
    grid = np.zeros((rows, columns), dtype=np.int8)
    for poison_row in range(rows):
        for poison_column in range(columns):
            state = GameState(rows, columns, poison_row, poison_column)
            order = determine_move_order_advantage(
                state, capacity, max_probes=max_probes, cross_check=cross_check
            )
            grid[poison_row, poison_column] = int(order)
    return grid


def format_win_map(grid: np.ndarray) -> str:
    return "\n".join("".join(WIN_MAP_SYMBOLS[int(cell)] for cell in row) for row in grid)


def summarize_win_map(grid: np.ndarray) -> WinMapSummary:
    rows, columns = grid.shape
    first = int(np.count_nonzero(grid == int(MoveOrder.FIRST)))
    second = int(np.count_nonzero(grid == int(MoveOrder.SECOND)))
    return WinMapSummary(rows=rows, columns=columns, first=first, second=second)


def sweep_win_maps(
    max_rows: int,
    max_columns: int,
    capacity: int,
    *,
    max_probes: int = MAX_PROBES,
    cross_check: bool = False,
) -> Dict[Tuple[int, int], WinMapSummary]:
    summaries: Dict[Tuple[int, int], WinMapSummary] = {}
    for rows in range(1, max_rows + 1):
        for columns in range(1, max_columns + 1):
            grid = build_win_map(rows, columns, capacity, max_probes=max_probes, cross_check=cross_check)
            summaries[(rows, columns)] = summarize_win_map(grid)
    return summaries
