"""Core game logic for the poison bar game."""

from .state import (
    EMPTY_FINGERPRINT,
    Direction,
    GameState,
    Move,
    fingerprint,
    from_fingerprint,
)
from .rules import (
    action_space_size,
    apply_move,
    decode_move,
    encode_move,
    is_terminal,
    is_valid_move,
    render_bar,
    valid_moves,
)

__all__ = [
    "EMPTY_FINGERPRINT",
    "Direction",
    "GameState",
    "Move",
    "fingerprint",
    "from_fingerprint",
    "action_space_size",
    "apply_move",
    "decode_move",
    "encode_move",
    "is_terminal",
    "is_valid_move",
    "render_bar",
    "valid_moves",
]
