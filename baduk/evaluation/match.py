from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from baduk.ai.policy import Policy, select_action
from baduk.core import Stone
from baduk.env import GoEnv

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    games_played: int
    completed_games: int
    black_prisoners: int
    white_prisoners: int
    average_length: float

    def prisoners_per_game(self, color: Stone) -> float:
        total = self.black_prisoners if color == Stone.BLACK else self.white_prisoners
        return total / max(1, self.games_played)

    def capture_share(self, color: Stone) -> float:
        """Fraction of all captured stones that ``color`` took."""
        total = self.black_prisoners + self.white_prisoners
        own = self.black_prisoners if color == Stone.BLACK else self.white_prisoners
        return own / total if total else 0.5


def evaluate_policies(
    policy_black: Policy,
    policy_white: Policy,
    *,
    episodes: int,
    env_factory: Optional[Callable[[], GoEnv]] = None,
    temperature: float = 1.0,
    rng: Optional[np.random.Generator] = None,
) -> EvaluationResult:
    env_factory = env_factory or GoEnv
    rng = rng or np.random.default_rng()

    completed = 0
    black_prisoners = 0
    white_prisoners = 0
    total_ply = 0

    for episode in range(episodes):
        env = env_factory()
        obs, info = env.reset()
        terminated = truncated = False
        ply = 0

        while not (terminated or truncated):
            state = env.state
            legal_mask = info["legal_action_mask"]
            policy = policy_black if state.to_move == Stone.BLACK else policy_white
            probs = policy.act(state, legal_mask) * legal_mask
            if probs.sum() <= 0:
                probs = legal_mask.astype(np.float32)
            probs = probs / probs.sum()
            action_index = select_action(probs, temperature, rng)
            obs, reward, terminated, truncated, info = env.step(action_index)
            ply += 1

        final = env.state
        total_ply += ply
        completed += int(terminated)
        black_prisoners += final.prisoners[Stone.BLACK]
        white_prisoners += final.prisoners[Stone.WHITE]
        logger.info(
            "Game %d finished after %d plies (%s), prisoners B%d/W%d",
            episode + 1,
            ply,
            "double pass" if terminated else "truncated",
            final.prisoners[Stone.BLACK],
            final.prisoners[Stone.WHITE],
        )

    return EvaluationResult(
        games_played=episodes,
        completed_games=completed,
        black_prisoners=black_prisoners,
        white_prisoners=white_prisoners,
        average_length=total_ply / max(1, episodes),
    )
