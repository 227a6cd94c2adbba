"""Core game logic for baduk."""

from .state import BOARD_SIZE, Board, GameState, Group, MoveResult, Position, Stone
from .rules import (
    DIRECTIONS,
    InvalidMove,
    NoLegalMove,
    action_space_size,
    adjacent_groups,
    apply_move,
    create_empty_board,
    decode_action,
    encode_action,
    enumerate_legal_moves,
    find_group,
    illegal_reason,
    is_legal_move,
    legal_action_mask,
    neighbours,
    pass_action,
    pass_turn,
    play_move,
    probe,
)

__all__ = [
    "Board",
    "GameState",
    "Group",
    "MoveResult",
    "Position",
    "Stone",
    "BOARD_SIZE",
    "DIRECTIONS",
    "InvalidMove",
    "NoLegalMove",
    "action_space_size",
    "adjacent_groups",
    "apply_move",
    "create_empty_board",
    "decode_action",
    "encode_action",
    "enumerate_legal_moves",
    "find_group",
    "illegal_reason",
    "is_legal_move",
    "legal_action_mask",
    "neighbours",
    "pass_action",
    "pass_turn",
    "play_move",
    "probe",
]
