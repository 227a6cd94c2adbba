import numpy as np

from baduk import GoEnv
from baduk.ai import HeuristicPolicy, RandomPolicy
from baduk.core import Stone
from baduk.evaluation import EvaluationResult, evaluate_policies


def test_evaluate_random_vs_random_small():
    policy_a = RandomPolicy(np.random.default_rng(0))
    policy_b = RandomPolicy(np.random.default_rng(1))
    result = evaluate_policies(
        policy_a,
        policy_b,
        episodes=2,
        env_factory=lambda: GoEnv(board_size=7, max_ply=20),
        rng=np.random.default_rng(2),
    )
    assert result.games_played == 2
    # random play never passes while points remain
    assert result.completed_games == 0
    assert result.average_length == 20.0


def test_heuristic_tiers_play_a_short_game():
    result = evaluate_policies(
        HeuristicPolicy("hard", rng=np.random.default_rng(0)),
        HeuristicPolicy("easy", rng=np.random.default_rng(1)),
        episodes=1,
        env_factory=lambda: GoEnv(board_size=5, max_ply=6),
        rng=np.random.default_rng(2),
    )
    assert result.games_played == 1
    assert result.average_length == 6.0


def test_capture_share():
    result = EvaluationResult(
        games_played=2, completed_games=1, black_prisoners=3, white_prisoners=1, average_length=10.0
    )
    assert result.capture_share(Stone.BLACK) == 0.75
    assert result.prisoners_per_game(Stone.WHITE) == 0.5
    empty = EvaluationResult(
        games_played=0, completed_games=0, black_prisoners=0, white_prisoners=0, average_length=0.0
    )
    assert empty.capture_share(Stone.WHITE) == 0.5
