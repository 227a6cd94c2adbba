import numpy as np

from baduk.core import GameState, Stone, pass_turn, play_move
from baduk.features import AUX_VECTOR_SIZE, BOARD_CHANNELS, build_board_tensor, state_to_numpy


def test_state_to_numpy_initial_board():
    board, aux = state_to_numpy(GameState.new(5))

    assert board.shape == (BOARD_CHANNELS, 5, 5)
    assert aux.shape == (AUX_VECTOR_SIZE,)
    assert board[2].sum() == 25
    assert board[:2].sum() == 0
    # black to move
    assert aux.tolist() == [1.0, 0.0, 0.0]


def test_channels_are_relative_to_player_to_move():
    state = play_move(GameState.new(5), (2, 2))
    board, aux = state_to_numpy(state)

    assert state.to_move == Stone.WHITE
    assert board[1, 2, 2] == 1.0
    assert board[0].sum() == 0
    assert board[2].sum() == 24
    assert aux[1] == 1.0


def test_pass_flag_set_after_pass():
    state = pass_turn(GameState.new(5))
    _, aux = state_to_numpy(state)
    assert aux[2] == 1.0
    assert np.array_equal(build_board_tensor(state)[2], np.ones((5, 5), dtype=np.float32))
