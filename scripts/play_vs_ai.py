#!/usr/bin/env python3
"""Play baduk against the heuristic opponent via the console, with optional logging & replay."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from baduk import GoEnv, HeuristicPolicy, load_engine_config
from baduk.ai import Difficulty, select_action
from baduk.core import Stone, decode_action, encode_action

COLUMN_LABELS = "ABCDEFGHJKLMNOPQRSTUVWXYZ"


def format_point(position: Optional[tuple]) -> str:
    if position is None:
        return "pass"
    row, col = position
    return f"{COLUMN_LABELS[col]}{row + 1}"


def parse_point(raw: str, size: int) -> Optional[tuple]:
    """Parse ``D4``-style coordinates or ``pass``; raise ValueError otherwise."""
    text = raw.strip().upper()
    if text in {"PASS", "P"}:
        return None
    if len(text) < 2 or text[0] not in COLUMN_LABELS[:size] or not text[1:].isdigit():
        raise ValueError(f"Cannot parse point {raw!r}.")
    row = int(text[1:]) - 1
    col = COLUMN_LABELS.index(text[0])
    if not 0 <= row < size:
        raise ValueError(f"Row {row + 1} is off the board.")
    return row, col


def format_board(env: GoEnv) -> str:
    state = env.state
    size = state.board.size
    header = "   " + "".join(COLUMN_LABELS[:size])
    body = env.render().splitlines()
    rows = [f"{r + 1:>2} {line}" for r, line in enumerate(body)]
    return "\n".join([header] + rows)


def prompt_human_move(env: GoEnv, legal_mask: np.ndarray) -> int:
    size = env.state.board.size
    while True:
        raw = input("Your move (e.g. D4, 'pass', q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Leaving the game.")
            sys.exit(0)
        try:
            point = parse_point(raw, size)
        except ValueError as exc:
            print(exc)
            continue
        index = encode_action(point, size)
        if legal_mask[index]:
            return index
        print("That point is not a legal move. Try again.")


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, ensure_ascii=False, indent=2))
    print(f"Game log written to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    metadata = data.get("metadata", {})
    moves = data.get("moves", [])
    env = GoEnv(board_size=int(metadata.get("board_size", 19)), render_mode="ansi")
    env.reset()
    if verbose:
        print("Replaying logged game.")
        print(format_board(env))
    for entry in moves:
        idx = entry["action_index"]
        env.step(idx)
        if verbose:
            actor = entry.get("actor", "unknown")
            color = entry.get("color", "?")
            point = decode_action(idx, env.state.board.size)
            print(f"{actor} ({color}) played {format_point(point)}")
            print(format_board(env))
    state = env.state
    summary = {
        "moves": len(moves),
        "finished": state.is_over,
        "prisoners": {color.name.lower(): count for color, count in state.prisoners.items()},
        "board": state.board.grid.tolist(),
    }
    if verbose:
        print("Replay finished.")
        print(f"Prisoners: {summary['prisoners']}")
    return summary


def play_interactive(args: argparse.Namespace) -> None:
    config = load_engine_config(args.engine_config) if args.engine_config else None
    if config is not None and config.board_size != args.board_size:
        raise SystemExit(f"--board-size {args.board_size} does not match engine config size {config.board_size}.")
    policy_ai = HeuristicPolicy(args.difficulty, config=config, rng=np.random.default_rng(args.seed))
    human_color = Stone.BLACK if args.human_color == "black" else Stone.WHITE
    log_records: List[Dict] = []

    env = GoEnv(board_size=args.board_size, max_ply=args.max_ply, render_mode="ansi")
    obs, info = env.reset()
    rng = np.random.default_rng(args.seed)

    terminated = truncated = False
    move_index = 0
    while not (terminated or truncated):
        state = env.state
        legal_mask = info["legal_action_mask"]

        print("\nCurrent board:")
        print(format_board(env))
        print(
            f"To move: {state.to_move.name} | prisoners "
            f"B{state.prisoners[Stone.BLACK]} W{state.prisoners[Stone.WHITE]}"
        )

        if state.to_move == human_color:
            action_index = prompt_human_move(env, legal_mask)
            actor = "human"
        else:
            probs = policy_ai.act(state, legal_mask) * legal_mask
            action_index = select_action(probs, 1.0, rng)
            actor = "ai"
            print(f"AI ({state.to_move.name}) plays {format_point(decode_action(action_index, args.board_size))}")

        log_records.append(
            {
                "move_index": move_index,
                "actor": actor,
                "color": state.to_move.name.lower(),
                "action_index": int(action_index),
                "point": format_point(decode_action(action_index, args.board_size)),
            }
        )

        obs, reward, terminated, truncated, info = env.step(action_index)
        move_index += 1

    print("\nFinal board:")
    print(format_board(env))
    final = env.state
    print(f"Prisoners: black {final.prisoners[Stone.BLACK]}, white {final.prisoners[Stone.WHITE]}")

    if args.log_file:
        metadata = {
            "human_color": args.human_color,
            "difficulty": policy_ai.difficulty.value,
            "board_size": args.board_size,
            "seed": args.seed,
            "finished": final.is_over,
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(args.log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play baduk in the console against the heuristic AI.")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default="medium")
    parser.add_argument("--human-color", choices=["black", "white"], default="black")
    parser.add_argument("--board-size", type=int, default=19)
    parser.add_argument("--engine-config", help="YAML engine config", default=None)
    parser.add_argument("--max-ply", type=int, default=722)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args)


if __name__ == "__main__":
    main()
