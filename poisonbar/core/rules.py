from __future__ import annotations

import logging
from dataclasses import replace
from typing import List

from .state import Direction, GameState, Move

logger = logging.getLogger(__name__)

POISON_SYMBOL = "P"
CHOCOLATE_SYMBOL = "#"


def action_space_size(rows: int, columns: int) -> int:
    return (rows - 1) + (columns - 1)


def encode_move(move: Move, rows: int, columns: int) -> int:
    """Map a move on a ``rows x columns`` bar to a dense action index.

    Horizontal splits occupy indices ``0..rows-2``, vertical splits follow.
    """
    if move.direction == Direction.HORIZONTAL:
        if not 1 <= move.location < rows:
            raise ValueError(f"Horizontal split {move.location} out of range for {rows} rows.")
        return move.location - 1
    if not 1 <= move.location < columns:
        raise ValueError(f"Vertical split {move.location} out of range for {columns} columns.")
    return (rows - 1) + move.location - 1


def decode_move(index: int, rows: int, columns: int) -> Move:
    if not 0 <= index < action_space_size(rows, columns):
        raise ValueError("Action index out of range.")
    if index < rows - 1:
        return Move(Direction.HORIZONTAL, index + 1)
    return Move(Direction.VERTICAL, index - (rows - 1) + 1)


def valid_moves(state: GameState) -> List[Move]:
    moves: List[Move] = []
    for row in range(1, state.rows):
        moves.append(Move(Direction.HORIZONTAL, row))
    for column in range(1, state.columns):
        moves.append(Move(Direction.VERTICAL, column))
    return moves


def is_valid_move(state: GameState, move: Move) -> bool:
    if move.location < 1:
        return False
    if move.direction == Direction.VERTICAL:
        return move.location < state.columns
    return move.location < state.rows


def apply_move(state: GameState, move: Move) -> GameState:
    """Split the bar and keep the part that still holds the poison."""
    if not is_valid_move(state, move):
        raise ValueError(f"{move.describe()} is not legal on {state!r}.")

    split = move.location
    if move.direction == Direction.VERTICAL:
        if state.poison_column >= split:
            return replace(
                state,
                columns=state.columns - split,
                poison_column=state.poison_column - split,
            )
        return replace(state, columns=split)

    if state.poison_row >= split:
        return replace(
            state,
            rows=state.rows - split,
            poison_row=state.poison_row - split,
        )
    return replace(state, rows=split)


def is_terminal(state: GameState) -> bool:
    if state.rows == 1 and state.columns == 1:
        if state.poison_row != 0 or state.poison_column != 0:
            logger.warning("Poison square was not left in terminal state %r", state)
        return True
    return False


def render_bar(state: GameState) -> str:
    lines = []
    for row in range(state.rows):
        line = "".join(
            POISON_SYMBOL if (row, column) == (state.poison_row, state.poison_column) else CHOCOLATE_SYMBOL
            for column in range(state.columns)
        )
        lines.append(line)
    return "\n".join(lines)
