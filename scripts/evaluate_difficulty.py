#!/usr/bin/env python3
"""Pit two difficulty tiers of the heuristic opponent against each other."""

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import yaml

from baduk import GoEnv, HeuristicPolicy
from baduk.ai import Difficulty, EngineConfig, engine_config_from_dict
from baduk.core import Stone
from baduk.evaluation import EvaluationResult, evaluate_policies


def load_yaml_config(path_str: Optional[str]) -> Dict[str, Any]:
    if not path_str:
        return {}
    path = Path(path_str)
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def build_engine_config(path_str: Optional[str], board_size: int) -> EngineConfig:
    engine_cfg = dict(load_yaml_config(path_str))
    engine_cfg["board_size"] = board_size
    return engine_config_from_dict(engine_cfg)


def summarise(result: EvaluationResult, black: Difficulty, white: Difficulty) -> Dict[str, Any]:
    return {
        "black": black.value,
        "white": white.value,
        "games": result.games_played,
        "completed_games": result.completed_games,
        "average_length": result.average_length,
        "black_prisoners": result.black_prisoners,
        "white_prisoners": result.white_prisoners,
        "black_capture_share": result.capture_share(Stone.BLACK),
    }


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/difficulty_match.yaml")
    parser.add_argument("--engine-config", type=str)
    parser.add_argument("--black", choices=[d.value for d in Difficulty])
    parser.add_argument("--white", choices=[d.value for d in Difficulty])
    parser.add_argument("--episodes", type=int)
    parser.add_argument("--board-size", type=int)
    parser.add_argument("--max-ply", type=int)
    parser.add_argument("--temperature", type=float)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    cfg = load_yaml_config(args.config)
    black = Difficulty.parse(args.black or cfg.get("black", "hard"))
    white = Difficulty.parse(args.white or cfg.get("white", "easy"))
    episodes = args.episodes if args.episodes is not None else cfg.get("episodes", 4)
    board_size = args.board_size if args.board_size is not None else cfg.get("board_size", 9)
    max_ply = args.max_ply if args.max_ply is not None else cfg.get("max_ply", 120)
    temperature = args.temperature if args.temperature is not None else cfg.get("temperature", 1.0)
    seed = args.seed if args.seed is not None else cfg.get("seed")
    engine_config = build_engine_config(args.engine_config or cfg.get("engine_config"), board_size)

    seeds = np.random.SeedSequence(seed).spawn(3)
    policy_black = HeuristicPolicy(black, config=engine_config, rng=np.random.default_rng(seeds[0]))
    policy_white = HeuristicPolicy(white, config=engine_config, rng=np.random.default_rng(seeds[1]))

    result = evaluate_policies(
        policy_black,
        policy_white,
        episodes=episodes,
        env_factory=lambda: GoEnv(board_size=board_size, max_ply=max_ply),
        temperature=temperature,
        rng=np.random.default_rng(seeds[2]),
    )
    print(json.dumps(summarise(result, black, white), indent=2))


if __name__ == "__main__":
    main()
