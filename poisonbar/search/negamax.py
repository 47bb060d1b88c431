from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from poisonbar.core import GameState, Move, apply_move, fingerprint, valid_moves

from .transposition import MAX_PROBES, TranspositionTable

logger = logging.getLogger(__name__)

# The player left facing the lone poison cell has lost, so the score is
# taken from the side of the player who produced the position.
TERMINAL_SCORE = 1.0
WIN_SCORE = 1.0
LOSS_SCORE = -1.0


class MoveOrder(IntEnum):
    FIRST = 1
    SECOND = 2


@dataclass
class SearchConfig:
    table_capacity: int = 100_000
    max_probes: int = MAX_PROBES

    def make_table(self) -> TranspositionTable:
        return TranspositionTable(self.table_capacity, max_probes=self.max_probes)


@dataclass
class SearchStats:
    positions_searched: int = 0
    elapsed_ms: float = 0.0


@dataclass
class SearchResult:
    move: Optional[Move]
    score: float
    stats: SearchStats = field(default_factory=SearchStats)


def evaluate(state: GameState, table: TranspositionTable, stats: Optional[SearchStats] = None) -> float:
    """Exact value of ``state``, memoized in ``table`` by child fingerprint.

    A position without moves scores ``TERMINAL_SCORE``. Otherwise each child
    contributes the negation of its own value and the position is worth the
    minimum over its children, since the opponent picks the child.
    """
    if stats is None:
        stats = SearchStats()

    moves = valid_moves(state)
    if not moves:
        return TERMINAL_SCORE

    value = float("inf")
    for move in moves:
        child = apply_move(state, move)
        child_key = fingerprint(child)
        child_score = table.lookup(child_key)
        if child_score is None:
            stats.positions_searched += 1
            child_score = -evaluate(child, table, stats)
            table.insert(child_key, child_score)
        if child_score < value:
            value = child_score
    return value


def select_best_move(
    state: GameState,
    table: TranspositionTable,
    stats: Optional[SearchStats] = None,
) -> SearchResult:
    """Pick the first move whose child scores highest.

    Stops at the first move worth ``WIN_SCORE``; siblings after a guaranteed
    win are not searched.
    """
    if stats is None:
        stats = SearchStats()
    start = time.perf_counter()

    best_move: Optional[Move] = None
    best_score = float("-inf")
    for move in valid_moves(state):
        child = apply_move(state, move)
        score = evaluate(child, table, stats)
        if score > best_score:
            best_score = score
            best_move = move
        if best_score >= WIN_SCORE:
            logger.debug("Guaranteed win found: %s", best_move.describe())
            break

    stats.elapsed_ms = (time.perf_counter() - start) * 1000.0

    if best_move is None:
        logger.error("No move found for %r; reporting a loss for the side to move", state)
        return SearchResult(move=None, score=LOSS_SCORE, stats=stats)

    logger.info(
        "Searched %d positions in %.3fms (table %d/%d, hit rate %.2f)",
        stats.positions_searched,
        stats.elapsed_ms,
        len(table),
        table.capacity,
        table.stats()["hit_rate"],
    )
    return SearchResult(move=best_move, score=best_score, stats=stats)


def determine_move_order_advantage(
    state: GameState,
    capacity: int,
    *,
    max_probes: int = MAX_PROBES,
    cross_check: bool = True,
) -> MoveOrder:
    """Decide whether moving first or second from ``state`` is better.

    Each role gets its own table; the two subgames would otherwise read each
    other's memoized scores. The second-mover score is derived as the
    negation of the first. With ``cross_check`` it is also recomputed on the
    second table, which runs a second full search and doubles the cost.
    """
    if not valid_moves(state):
        # Nothing left to split: whoever would move first is already beaten.
        logger.debug("%r has no moves; second mover wins", state)
        return MoveOrder.SECOND

    first_table = TranspositionTable(capacity, max_probes=max_probes)
    first_score = select_best_move(state, first_table).score
    second_score = -first_score

    if cross_check:
        second_table = TranspositionTable(capacity, max_probes=max_probes)
        recomputed = evaluate(state, second_table)
        if recomputed != second_score:
            logger.warning(
                "Second-mover score %.3f disagrees with derived %.3f for %r",
                recomputed,
                second_score,
                state,
            )

    if first_score > second_score:
        return MoveOrder.FIRST
    if second_score > first_score:
        return MoveOrder.SECOND
    logger.warning("Move order tie (%.3f) for %r; defaulting to FIRST", first_score, state)
    return MoveOrder.FIRST
