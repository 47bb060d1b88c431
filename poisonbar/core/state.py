from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

FIELD_BITS = 16
FIELD_MAX = (1 << FIELD_BITS) - 1

# Every field would have to be 65535, which puts the poison outside the bar.
EMPTY_FINGERPRINT = 0xFFFF_FFFF_FFFF_FFFF


class Direction(Enum):
    HORIZONTAL = "h"
    VERTICAL = "v"


@dataclass(frozen=True)
class Move:
    direction: Direction
    location: int

    def describe(self) -> str:
        kind = "Horizontal" if self.direction == Direction.HORIZONTAL else "Vertical"
        return f"{kind} split at: {self.location}"


@dataclass(frozen=True)
class GameState:
    rows: int
    columns: int
    poison_row: int
    poison_column: int

    def __post_init__(self) -> None:
        for name in ("rows", "columns", "poison_row", "poison_column"):
            value = getattr(self, name)
            if not 0 <= value <= FIELD_MAX:
                raise ValueError(f"{name}={value} does not fit in {FIELD_BITS} bits.")
        if self.rows < 1 or self.columns < 1:
            raise ValueError("Bar must have at least one row and one column.")
        if self.poison_row >= self.rows or self.poison_column >= self.columns:
            raise ValueError(
                f"Poison ({self.poison_row}, {self.poison_column}) lies outside "
                f"a {self.rows}x{self.columns} bar."
            )

    @property
    def cells(self) -> int:
        return self.rows * self.columns

    def fingerprint(self) -> int:
        return fingerprint(self)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.rows, self.columns, self.poison_row, self.poison_column)

    def __repr__(self) -> str:
        return (
            f"GameState(rows={self.rows}, columns={self.columns}, "
            f"poison=({self.poison_row}, {self.poison_column}))"
        )


def fingerprint(state: GameState) -> int:
    """Pack the four 16-bit fields into fixed lanes of a 64-bit key.

    Lane order from the least significant bits: rows, columns, poison row,
    poison column. Distinct states never share a fingerprint.
    """
    return (
        state.rows
        | state.columns << FIELD_BITS
        | state.poison_row << (FIELD_BITS * 2)
        | state.poison_column << (FIELD_BITS * 3)
    )


def from_fingerprint(value: int) -> GameState:
    return GameState(
        rows=value & FIELD_MAX,
        columns=(value >> FIELD_BITS) & FIELD_MAX,
        poison_row=(value >> (FIELD_BITS * 2)) & FIELD_MAX,
        poison_column=(value >> (FIELD_BITS * 3)) & FIELD_MAX,
    )
