from __future__ import annotations

from typing import Tuple

import numpy as np

from baduk.core import GameState, Stone

BOARD_CHANNELS = 3  # to-move stones, opponent stones, empty points
AUX_VECTOR_SIZE = 3  # to-move one-hot (2) + consecutive-pass flag


def build_board_tensor(state: GameState) -> np.ndarray:
    """Return board tensor with shape (3, size, size) channel-first."""
    grid = state.board.grid
    tensor = np.zeros((BOARD_CHANNELS,) + grid.shape, dtype=np.float32)
    tensor[0] = grid == int(state.to_move)
    tensor[1] = grid == int(state.to_move.opponent)
    tensor[2] = grid == int(Stone.EMPTY)
    return tensor


def build_aux_vector(state: GameState) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[int(state.to_move) - 1] = 1.0
    aux[2] = 1.0 if state.consecutive_passes > 0 else 0.0
    return aux


def state_to_numpy(state: GameState) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(state), build_aux_vector(state)
