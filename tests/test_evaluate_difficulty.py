from pathlib import Path

from baduk.ai import Difficulty
from baduk.core import Stone
from baduk.evaluation import EvaluationResult

from scripts.evaluate_difficulty import build_engine_config, load_yaml_config, summarise

ROOT = Path(__file__).resolve().parents[1]


def test_engine_config_resized_for_match():
    config = build_engine_config(str(ROOT / "configs" / "engine.yaml"), 9)
    assert config.board_size == 9
    assert config.positional.shape == (9, 9)
    assert config.weights_for(Difficulty.HARD).advanced


def test_missing_config_files_fall_back_to_defaults(tmp_path):
    assert load_yaml_config(str(tmp_path / "missing.yaml")) == {}
    assert build_engine_config(None, 7).board_size == 7


def test_match_config_is_loadable():
    cfg = load_yaml_config(str(ROOT / "configs" / "difficulty_match.yaml"))
    assert Difficulty.parse(cfg["black"]) is Difficulty.HARD
    assert cfg["board_size"] == 9


def test_summarise_reports_capture_share():
    result = EvaluationResult(
        games_played=4, completed_games=0, black_prisoners=6, white_prisoners=2, average_length=120.0
    )
    summary = summarise(result, Difficulty.HARD, Difficulty.EASY)
    assert summary["black"] == "hard"
    assert summary["white"] == "easy"
    assert summary["black_capture_share"] == 0.75
    assert summary["games"] == 4
    assert result.capture_share(Stone.WHITE) == 0.25
