from pathlib import Path

import numpy as np
import pytest

from baduk.ai import (
    DEFAULT_DIFFICULTY_WEIGHTS,
    ConfigError,
    Difficulty,
    EngineConfig,
    default_engine_config,
    engine_config_from_dict,
    load_engine_config,
)

CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs"


def test_shipped_config_matches_defaults():
    config = load_engine_config(CONFIG_DIR / "engine.yaml")
    default = default_engine_config()
    assert config.board_size == 19
    assert dict(config.difficulties) == dict(DEFAULT_DIFFICULTY_WEIGHTS)
    np.testing.assert_array_equal(config.positional, default.positional)


def test_difficulty_overrides_keep_other_tiers():
    config = engine_config_from_dict({"difficulties": {"easy": {"capture": 7, "top_k": 2}}})
    easy = config.weights_for("easy")
    assert easy.capture == 7
    assert easy.top_k == 2
    assert easy.defense == DEFAULT_DIFFICULTY_WEIGHTS[Difficulty.EASY].defense
    assert config.weights_for(Difficulty.HARD) == DEFAULT_DIFFICULTY_WEIGHTS[Difficulty.HARD]


def test_defaults_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_DIFFICULTY_WEIGHTS[Difficulty.EASY] = None
    with pytest.raises(ValueError):
        default_engine_config().positional[0, 0] = 10


def test_positional_table_follows_board_size():
    config = engine_config_from_dict({"board_size": 9, "positional": {"centre": 8}})
    assert config.positional.shape == (9, 9)
    assert config.positional[4, 4] == 8
    assert config.positional[2, 2] == 5


@pytest.mark.parametrize(
    "cfg",
    [
        {"unknown": 1},
        {"positional": {"edge": 1}},
        {"difficulties": {"easy": {"aggression": 3}}},
        {"difficulties": {"impossible": {}}},
        {"difficulties": {"hard": {"top_k": 0}}},
        {"board_size": 0},
    ],
)
def test_invalid_config_rejected(cfg):
    with pytest.raises(ConfigError):
        engine_config_from_dict(cfg)


def test_engine_config_checks_table_shape():
    with pytest.raises(ConfigError):
        EngineConfig(board_size=9)


def test_difficulty_parse():
    assert Difficulty.parse("HARD") is Difficulty.HARD
    assert Difficulty.parse(Difficulty.EASY) is Difficulty.EASY
    with pytest.raises(ValueError):
        Difficulty.parse("expert")
