"""Heuristic move evaluation and selection."""

from .evaluator import MoveEvaluator, score_move
from .policy import HeuristicPolicy, Policy, RandomPolicy, select_action
from .selector import candidate_pool, rank_moves, select_automated_move
from .weights import (
    DEFAULT_DIFFICULTY_WEIGHTS,
    ConfigError,
    Difficulty,
    DifficultyWeights,
    EngineConfig,
    PositionalTable,
    default_engine_config,
    engine_config_from_dict,
    load_engine_config,
    positional_weights,
)

__all__ = [
    "MoveEvaluator",
    "score_move",
    "HeuristicPolicy",
    "Policy",
    "RandomPolicy",
    "select_action",
    "candidate_pool",
    "rank_moves",
    "select_automated_move",
    "DEFAULT_DIFFICULTY_WEIGHTS",
    "ConfigError",
    "Difficulty",
    "DifficultyWeights",
    "EngineConfig",
    "PositionalTable",
    "default_engine_config",
    "engine_config_from_dict",
    "load_engine_config",
    "positional_weights",
]
