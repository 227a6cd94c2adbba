from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple, Union

import numpy as np

from baduk.core.state import BoardArray, GridLike, Position, Stone, as_grid

from . import patterns, scores
from .weights import Difficulty, DifficultyWeights, EngineConfig, default_engine_config

SubScore = Callable[[BoardArray, Position, Stone], float]

BASE_TERMS: Tuple[Tuple[str, SubScore], ...] = (
    ("capture", scores.capture_score),
    ("defense", scores.defense_score),
    ("connection", scores.connection_score),
    ("territory", scores.territory_score),
    ("influence", scores.influence_score),
)

ADVANCED_TERMS: Tuple[Tuple[str, SubScore], ...] = (
    ("pattern", patterns.pattern_score),
    ("shape", patterns.shape_score),
    ("potential", patterns.potential_score),
    ("global_position", patterns.global_position_score),
)

RANDOMNESS_SCALE = 10.0


class MoveEvaluator:
    """Scores a single candidate point as a weighted sum of heuristics.

    The only non-deterministic term is the noise drawn from ``rng``; pass
    ``rng=None`` to get a reproducible score.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or default_engine_config()

    def breakdown(
        self,
        board: GridLike,
        position: Position,
        color: Stone,
        *,
        advanced: bool = False,
    ) -> Dict[str, float]:
        grid = as_grid(board)
        self._check_size(grid)
        terms: Dict[str, float] = {"center": float(self.config.positional[position])}
        for name, fn in BASE_TERMS:
            terms[name] = float(fn(grid, position, color))
        if advanced:
            for name, fn in ADVANCED_TERMS:
                terms[name] = float(fn(grid, position, color))
        return terms

    def score(
        self,
        board: GridLike,
        position: Position,
        color: Stone,
        difficulty: Union[str, Difficulty, DifficultyWeights],
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> float:
        weights = difficulty if isinstance(difficulty, DifficultyWeights) else self.config.weights_for(difficulty)
        terms = self.breakdown(board, position, color, advanced=weights.advanced)
        total = sum(value * getattr(weights, name) for name, value in terms.items())
        if rng is not None and weights.randomness > 0:
            total += float(rng.uniform(0.0, 1.0)) * weights.randomness * RANDOMNESS_SCALE
        return float(total)

    def _check_size(self, grid: BoardArray) -> None:
        if grid.shape[0] != self.config.board_size:
            raise ValueError(
                f"Board size {grid.shape[0]} does not match engine config size {self.config.board_size}."
            )


def score_move(
    board: GridLike,
    position: Position,
    color: Stone,
    difficulty: Union[str, Difficulty, DifficultyWeights],
    *,
    rng: Optional[np.random.Generator] = None,
    config: Optional[EngineConfig] = None,
) -> float:
    grid = as_grid(board)
    evaluator = MoveEvaluator(config or default_engine_config(grid.shape[0]))
    return evaluator.score(grid, position, color, difficulty, rng=rng)
