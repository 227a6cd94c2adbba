import numpy as np
import pytest

from baduk import GoEnv
from baduk.core import Stone, encode_action, enumerate_legal_moves, pass_action


def test_reset_returns_valid_observation():
    env = GoEnv(board_size=9)
    obs, info = env.reset()

    assert obs["board"].shape == (3, 9, 9)
    assert obs["aux"].shape == (3,)
    assert info["legal_action_mask"].shape == (82,)
    assert info["to_move"] == Stone.BLACK
    assert env.observation_space.contains(obs)


def test_legal_mask_matches_enumeration():
    env = GoEnv(board_size=5)
    env.reset()
    env.step(encode_action((2, 2), 5))
    mask = env.legal_action_mask()
    legal = enumerate_legal_moves(env.state.board, env.state.to_move)
    assert np.count_nonzero(mask) == len(legal) + 1
    for position in legal:
        assert mask[encode_action(position, 5)] == 1
    assert mask[pass_action(5)] == 1


def test_step_places_stone_and_flips_turn():
    env = GoEnv(board_size=9)
    obs, info = env.reset()

    next_obs, reward, terminated, truncated, next_info = env.step(encode_action((4, 4), 9))

    assert reward == 0.0
    assert not terminated
    assert not truncated
    assert env.state.board[(4, 4)] == Stone.BLACK
    assert next_info["to_move"] == Stone.WHITE
    assert next_info["last_move"] == (4, 4)
    assert np.any(next_obs["board"] != obs["board"])


def test_illegal_action_rejected():
    env = GoEnv(board_size=9)
    env.reset()
    env.step(encode_action((4, 4), 9))
    with pytest.raises(ValueError):
        env.step(encode_action((4, 4), 9))
    with pytest.raises(ValueError):
        env.step(82)


def test_two_passes_terminate():
    env = GoEnv(board_size=5)
    env.reset()
    obs, _, terminated, _, _ = env.step(pass_action(5))
    assert not terminated
    assert obs["aux"][2] == 1.0
    _, _, terminated, truncated, _ = env.step(pass_action(5))
    assert terminated
    assert not truncated
    with pytest.raises(ValueError):
        env.step(pass_action(5))


def test_max_ply_truncates():
    env = GoEnv(board_size=5, max_ply=2)
    env.reset()
    _, _, _, truncated, _ = env.step(encode_action((0, 0), 5))
    assert not truncated
    _, _, terminated, truncated, _ = env.step(encode_action((4, 4), 5))
    assert truncated
    assert not terminated


def test_ansi_render_marks_last_move():
    env = GoEnv(board_size=5, render_mode="ansi")
    env.reset()
    env.step(encode_action((0, 0), 5))
    env.step(encode_action((0, 1), 5))
    rows = env.render().splitlines()
    assert rows[0] == "Xo..."
    assert rows[4] == "....."
