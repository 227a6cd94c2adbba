import json
from pathlib import Path

import pytest

from baduk.core import encode_action

from scripts.play_vs_ai import format_point, parse_point, replay_logged_game


def create_sample_log(path: Path) -> None:
    moves = [
        {
            "move_index": 0,
            "actor": "human",
            "color": "black",
            "action_index": encode_action((2, 2), 9),
            "point": "C3",
        },
        {
            "move_index": 1,
            "actor": "ai",
            "color": "white",
            "action_index": encode_action((6, 6), 9),
            "point": "G7",
        },
    ]
    log = {"metadata": {"board_size": 9}, "moves": moves}
    path.write_text(json.dumps(log))


def test_replay_logged_game(tmp_path):
    log_path = tmp_path / "game.json"
    create_sample_log(log_path)
    summary = replay_logged_game(log_path, verbose=False)
    assert summary["moves"] == 2
    assert not summary["finished"]
    board = summary["board"]
    assert board[2][2] == 1
    assert board[6][6] == 2


def test_point_notation_skips_i():
    assert format_point((2, 2)) == "C3"
    assert format_point((0, 8)) == "J1"
    assert format_point(None) == "pass"
    assert parse_point("j1", 9) == (0, 8)
    assert parse_point("pass", 9) is None
    with pytest.raises(ValueError):
        parse_point("Z30", 9)
