from __future__ import annotations

from typing import Optional, Union

import numpy as np

from baduk.core import GameState, NoLegalMove, encode_action, pass_action

from .evaluator import MoveEvaluator
from .selector import candidate_pool
from .weights import Difficulty, EngineConfig, default_engine_config


class Policy:
    """Policy interface producing action probabilities over legal moves."""

    def act(self, state: GameState, legal_mask: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def spawn(self, seed: Optional[int] = None) -> "Policy":
        """Return an independent copy of this policy with its own generator."""
        return self


class RandomPolicy(Policy):
    def __init__(self, rng: Optional[np.random.Generator] = None, *, allow_pass: bool = False) -> None:
        self.rng = rng or np.random.default_rng()
        self.allow_pass = allow_pass

    def act(self, state: GameState, legal_mask: np.ndarray) -> np.ndarray:
        logits = legal_mask.astype(np.float64)
        if not self.allow_pass and logits[:-1].sum() > 0:
            logits[-1] = 0.0
        if logits.sum() == 0:
            return logits.astype(np.float32)
        probs = logits / logits.sum()
        return probs.astype(np.float32, copy=True)

    def spawn(self, seed: Optional[int] = None) -> "RandomPolicy":
        return RandomPolicy(np.random.default_rng(seed), allow_pass=self.allow_pass)


class HeuristicPolicy(Policy):
    """Automated opponent: uniform over the top-K heuristic candidates.

    When no point is legal the whole probability mass goes to passing.
    """

    def __init__(
        self,
        difficulty: Union[str, Difficulty] = Difficulty.MEDIUM,
        *,
        config: Optional[EngineConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.difficulty = Difficulty.parse(difficulty)
        self.config = config
        self.rng = rng or np.random.default_rng()

    def act(self, state: GameState, legal_mask: np.ndarray) -> np.ndarray:
        size = state.board.size
        probs = np.zeros_like(legal_mask, dtype=np.float32)
        evaluator = MoveEvaluator(self.config or default_engine_config(size))
        try:
            pool = candidate_pool(state.board, state.to_move, self.difficulty, rng=self.rng, evaluator=evaluator)
        except NoLegalMove:
            probs[pass_action(size)] = 1.0
            return probs
        for position, _ in pool:
            probs[encode_action(position, size)] = 1.0 / len(pool)
        return probs

    def spawn(self, seed: Optional[int] = None) -> "HeuristicPolicy":
        return HeuristicPolicy(self.difficulty, config=self.config, rng=np.random.default_rng(seed))


def select_action(
    probabilities: np.ndarray,
    temperature: float,
    rng: np.random.Generator,
) -> int:
    if probabilities.sum() == 0:
        raise ValueError(
            "Policy produced zero probability over legal actions."
        )
    probs = probabilities.astype(np.float64, copy=True)
    if temperature <= 1e-6:
        return int(np.argmax(probs))
    adjusted = probs ** (1.0 / temperature)
    adjusted /= adjusted.sum()
    return int(rng.choice(len(adjusted), p=adjusted))
