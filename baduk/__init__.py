"""Go rules engine and heuristic automated opponent."""

from . import ai, core, env, evaluation, features
from .ai import (
    Difficulty,
    DifficultyWeights,
    EngineConfig,
    HeuristicPolicy,
    MoveEvaluator,
    Policy,
    RandomPolicy,
    default_engine_config,
    load_engine_config,
    rank_moves,
    score_move,
    select_automated_move,
)
from .core import (
    Board,
    GameState,
    InvalidMove,
    NoLegalMove,
    Stone,
    apply_move,
    create_empty_board,
    find_group,
    is_legal_move,
    pass_turn,
    play_move,
)
from .env import GoEnv
from .evaluation import EvaluationResult, evaluate_policies

__all__ = [
    "ai",
    "core",
    "env",
    "evaluation",
    "features",
    "Board",
    "GameState",
    "InvalidMove",
    "NoLegalMove",
    "Stone",
    "apply_move",
    "create_empty_board",
    "find_group",
    "is_legal_move",
    "pass_turn",
    "play_move",
    "Difficulty",
    "DifficultyWeights",
    "EngineConfig",
    "HeuristicPolicy",
    "MoveEvaluator",
    "Policy",
    "RandomPolicy",
    "default_engine_config",
    "load_engine_config",
    "rank_moves",
    "score_move",
    "select_automated_move",
    "GoEnv",
    "EvaluationResult",
    "evaluate_policies",
]
