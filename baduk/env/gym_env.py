from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from baduk.core import (
    BOARD_SIZE,
    GameState,
    Stone,
    action_space_size,
    decode_action,
    legal_action_mask,
    pass_turn,
    play_move,
)
from baduk.features import AUX_VECTOR_SIZE, BOARD_CHANNELS, build_aux_vector, build_board_tensor


class GoEnv(gym.Env):
    """Two-colour environment; the acting colour alternates every step.

    Actions index points row-major, the last index passes. The game ends after
    two consecutive passes and is truncated at ``max_ply``. Rewards are always
    zero since the engine does not score finished games.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        board_size: int = BOARD_SIZE,
        max_ply: int = 722,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._board_size = board_size
        self._max_ply = max_ply
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        board_shape = (BOARD_CHANNELS, board_size, board_size)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(action_space_size(board_size))

        self._state = GameState.new(board_size)
        self._last_info: Dict[str, np.ndarray] = {}

    @property
    def state(self) -> GameState:
        return self._state

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        if options:
            self._max_ply = options.get("max_ply", self._max_ply)
        self._state = GameState.new(self._board_size)
        observation = self._build_observation()
        info = self._build_info()
        self._last_info = info
        return observation, info

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._state.is_over:
            raise ValueError("Cannot step a finished game; call reset().")

        legal_mask = self.legal_action_mask()
        if self._enforce_legal and not legal_mask[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        position = decode_action(int(action_index), self._board_size)
        if position is None:
            self._state = pass_turn(self._state)
        else:
            self._state = play_move(self._state, position)

        observation = self._build_observation()
        info = self._build_info()
        self._last_info = info

        terminated = self._state.is_over
        truncated = not terminated and self._state.ply_count >= self._max_ply
        return observation, 0.0, terminated, truncated, info

    def legal_action_mask(self) -> np.ndarray:
        return legal_action_mask(self._state)

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._render_ascii()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, np.ndarray]:
        board = build_board_tensor(self._state)
        aux = build_aux_vector(self._state)
        return {"board": board, "aux": aux}

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "to_move": self._state.to_move,
            "last_move": self._state.last_move,
            "prisoners": dict(self._state.prisoners),
        }

    def _render_ascii(self) -> str:
        symbols = {int(Stone.EMPTY): ".", int(Stone.BLACK): "X", int(Stone.WHITE): "O"}
        last = self._state.last_move
        rows = []
        for r in range(self._board_size):
            cells = []
            for c in range(self._board_size):
                symbol = symbols[int(self._state.board.grid[r, c])]
                # lower-case marks the last move
                cells.append(symbol.lower() if (r, c) == last else symbol)
            rows.append("".join(cells))
        return "\n".join(rows)
