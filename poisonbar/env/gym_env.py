from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from poisonbar.core import (
    GameState,
    action_space_size,
    apply_move,
    decode_move,
    encode_move,
    is_terminal,
    render_bar,
    valid_moves,
)


class PoisonBarEnv(gym.Env):
    """Two-player poison bar game; both seats act through ``step``.

    Rewards are given to the player who just moved: ``1.0`` when the move
    leaves only the poison cell for the opponent, ``0.0`` otherwise.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        rows: int = 6,
        columns: int = 6,
        poison_row: int = 2,
        poison_column: int = 0,
        *,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._initial = GameState(rows, columns, poison_row, poison_column)
        self.render_mode = render_mode

        high = max(rows, columns)
        self.observation_space = spaces.Box(low=0, high=high, shape=(4,), dtype=np.int64)
        self.action_space = spaces.Discrete(max(1, action_space_size(rows, columns)))

        self._state = self._initial
        self._mover = 0

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> int:
        """Seat (0 or 1) of the player about to move."""
        return self._mover

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._state = self._initial
        if options and "state" in options:
            state = options["state"]
            if state.rows > self._initial.rows or state.columns > self._initial.columns:
                raise ValueError(
                    f"{state!r} does not fit the {self._initial.rows}x{self._initial.columns} "
                    "bar this environment was built for."
                )
            self._state = state
        self._mover = 0
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if is_terminal(self._state):
            raise ValueError("Cannot step a finished game; call reset().")

        legal_mask = self.legal_action_mask()
        if not legal_mask[action_index]:
            raise ValueError("Illegal action for the current bar.")

        move = decode_move(int(action_index), self._initial.rows, self._initial.columns)
        self._state = apply_move(self._state, move)

        terminated = is_terminal(self._state)
        reward = 1.0 if terminated else 0.0
        if not terminated:
            self._mover = 1 - self._mover

        return self._build_observation(), reward, terminated, False, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        for move in valid_moves(self._state):
            mask[encode_move(move, self._initial.rows, self._initial.columns)] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return render_bar(self._state)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> np.ndarray:
        return np.asarray(self._state.as_tuple(), dtype=np.int64)

    def _build_info(self) -> Dict[str, object]:
        return {"legal_action_mask": self.legal_action_mask(), "current_player": self._mover}
