from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

import numpy as np

from baduk.core.rules import NoLegalMove, illegal_reason
from baduk.core.state import Board, Position, Stone

from .evaluator import MoveEvaluator
from .weights import Difficulty, EngineConfig, default_engine_config

logger = logging.getLogger(__name__)

ScoredMove = Tuple[Position, float]


def rank_moves(
    board: Board,
    color: Stone,
    difficulty: Union[str, Difficulty],
    *,
    rng: Optional[np.random.Generator] = None,
    evaluator: Optional[MoveEvaluator] = None,
) -> List[ScoredMove]:
    """Score every legal point for ``color``, best first.

    All probing happens on a single scratch grid; each candidate is placed and
    removed again, so the board itself is never copied per candidate.
    """
    evaluator = evaluator or MoveEvaluator(default_engine_config(board.size))
    weights = evaluator.config.weights_for(difficulty)
    scratch = board.scratch()

    ranked: List[ScoredMove] = []
    for row, col in np.argwhere(board.grid == 0):
        position = (int(row), int(col))
        if illegal_reason(scratch, position, color) is not None:
            continue
        ranked.append((position, evaluator.score(scratch, position, color, weights, rng=rng)))

    # stable sort keeps row-major order among equal scores
    ranked.sort(key=lambda item: item[1], reverse=True)
    return ranked


def candidate_pool(
    board: Board,
    color: Stone,
    difficulty: Union[str, Difficulty],
    *,
    rng: Optional[np.random.Generator] = None,
    evaluator: Optional[MoveEvaluator] = None,
) -> List[ScoredMove]:
    """The ``top_k`` best moves of the tier; raises ``NoLegalMove`` if there are none."""
    evaluator = evaluator or MoveEvaluator(default_engine_config(board.size))
    ranked = rank_moves(board, color, difficulty, rng=rng, evaluator=evaluator)
    if not ranked:
        raise NoLegalMove(color)
    top_k = evaluator.config.weights_for(difficulty).top_k
    return ranked[:top_k]


def select_automated_move(
    board: Board,
    color: Stone,
    difficulty: Union[str, Difficulty] = Difficulty.MEDIUM,
    *,
    rng: Optional[np.random.Generator] = None,
    config: Optional[EngineConfig] = None,
) -> Position:
    rng = rng or np.random.default_rng()
    evaluator = MoveEvaluator(config or default_engine_config(board.size))
    pool = candidate_pool(board, color, difficulty, rng=rng, evaluator=evaluator)
    position, score = pool[int(rng.integers(0, len(pool)))]
    logger.debug(
        "%s (%s) chose %s with score %.2f from a pool of %d",
        color.name,
        Difficulty.parse(difficulty).value,
        position,
        score,
        len(pool),
    )
    return position
