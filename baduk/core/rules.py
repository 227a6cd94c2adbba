from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Set, Tuple

import numpy as np

from .state import (
    BOARD_SIZE,
    Board,
    BoardArray,
    GameState,
    GridLike,
    Group,
    MoveResult,
    Position,
    Stone,
    as_grid,
)

logger = logging.getLogger(__name__)

DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

OUT_OF_BOUNDS = "out of bounds"
OCCUPIED = "occupied"
SUICIDE = "suicide"
GAME_OVER = "game over"


class InvalidMove(ValueError):
    def __init__(self, reason: str, position: Optional[Position] = None) -> None:
        detail = reason if position is None else f"{reason} at {position}"
        super().__init__(f"Invalid move: {detail}")
        self.reason = reason
        self.position = position


class NoLegalMove(RuntimeError):
    def __init__(self, color: Stone) -> None:
        super().__init__(f"No legal move for {color.name}.")
        self.color = color


def create_empty_board(size: int = BOARD_SIZE) -> Board:
    return Board.empty(size)


def action_space_size(size: int = BOARD_SIZE) -> int:
    # every point plus one pass action
    return size * size + 1


def pass_action(size: int = BOARD_SIZE) -> int:
    return size * size


def encode_action(position: Optional[Position], size: int = BOARD_SIZE) -> int:
    if position is None:
        return pass_action(size)
    row, col = position
    if not (0 <= row < size and 0 <= col < size):
        raise ValueError(f"Position {position} is off a {size}x{size} board.")
    return row * size + col


def decode_action(index: int, size: int = BOARD_SIZE) -> Optional[Position]:
    """Return the point for ``index``, or ``None`` for the pass action."""
    if not 0 <= index < action_space_size(size):
        raise ValueError("Action index out of range.")
    if index == pass_action(size):
        return None
    return divmod(int(index), size)


def neighbours(grid: BoardArray, position: Position) -> Iterator[Position]:
    size = grid.shape[0]
    row, col = position
    for dr, dc in DIRECTIONS:
        nr, nc = row + dr, col + dc
        if 0 <= nr < size and 0 <= nc < size:
            yield nr, nc


def find_group(board: GridLike, position: Position, color: Stone) -> Group:
    """Return the connected group of ``color`` containing ``position``.

    Liberties are the distinct empty points orthogonally adjacent to any
    stone of the group. An empty group is returned when the seed does not
    hold ``color``.
    """
    grid = as_grid(board)
    if not _in_bounds(grid, position) or grid[position] != int(color):
        return Group(color=color)

    stones: Set[Position] = set()
    liberties: Set[Position] = set()
    stack = [position]
    while stack:
        current = stack.pop()
        if current in stones:
            continue
        stones.add(current)
        for adjacent in neighbours(grid, current):
            value = grid[adjacent]
            if value == 0:
                liberties.add(adjacent)
            elif value == int(color) and adjacent not in stones:
                stack.append(adjacent)
    return Group(color=color, stones=frozenset(stones), liberties=frozenset(liberties))


def adjacent_groups(grid: BoardArray, position: Position, color: Stone) -> List[Group]:
    """Distinct groups of ``color`` touching ``position``."""
    groups: List[Group] = []
    seen: Set[Position] = set()
    for adjacent in neighbours(grid, position):
        if adjacent in seen or grid[adjacent] != int(color):
            continue
        group = find_group(grid, adjacent, color)
        seen.update(group.stones)
        groups.append(group)
    return groups


@contextmanager
def probe(grid: BoardArray, position: Position, color: Stone) -> Iterator[BoardArray]:
    """Temporarily place ``color`` on a writable ``grid`` and undo on exit."""
    previous = grid[position]
    grid[position] = int(color)
    try:
        yield grid
    finally:
        grid[position] = previous


def illegal_reason(board: GridLike, position: Position, color: Stone) -> Optional[str]:
    """Return why ``color`` may not play ``position``, or ``None`` if it may.

    A writable ndarray is borrowed as scratch space: the trial stone is placed
    in it and removed before returning, so it must not be read concurrently.
    Read-only grids (every :class:`Board`) are copied first.
    """
    grid = as_grid(board)
    if not _in_bounds(grid, position):
        return OUT_OF_BOUNDS
    if grid[position] != 0:
        return OCCUPIED
    scratch = grid if grid.flags.writeable else grid.copy()
    with probe(scratch, position, color):
        if find_group(scratch, position, color).liberties:
            return None
        for group in adjacent_groups(scratch, position, color.opponent):
            if not group.liberties:
                return None
    return SUICIDE


def is_legal_move(board: GridLike, position: Position, color: Stone) -> bool:
    return illegal_reason(board, position, color) is None


def enumerate_legal_moves(board: GridLike, color: Stone) -> List[Position]:
    grid = as_grid(board)
    scratch = grid.copy()
    legal: List[Position] = []
    for row, col in np.argwhere(grid == 0):
        position = (int(row), int(col))
        if illegal_reason(scratch, position, color) is None:
            legal.append(position)
    return legal


def apply_move(board: Board, position: Position, color: Stone) -> MoveResult:
    reason = illegal_reason(board, position, color)
    if reason is not None:
        logger.debug("Rejected %s at %s: %s", color.name, position, reason)
        raise InvalidMove(reason, position)

    grid = board.scratch()
    grid[position] = int(color)
    captured: List[Position] = []
    for group in adjacent_groups(grid, position, color.opponent):
        if group.liberties:
            continue
        for stone in group.stones:
            grid[stone] = 0
        captured.extend(group.stones)

    return MoveResult(
        board=Board(grid),
        captured=len(captured),
        captured_positions=tuple(sorted(captured)),
    )


def play_move(state: GameState, position: Position) -> GameState:
    if state.is_over:
        raise InvalidMove(GAME_OVER, position)
    result = apply_move(state.board, position, state.to_move)
    return state.advance(result.board, move=position, captured=result.captured)


def pass_turn(state: GameState) -> GameState:
    if state.is_over:
        raise InvalidMove(GAME_OVER)
    return state.advance(state.board, move=None)


def legal_action_mask(state: GameState) -> np.ndarray:
    size = state.board.size
    mask = np.zeros(action_space_size(size), dtype=np.int8)
    if state.is_over:
        return mask
    for position in enumerate_legal_moves(state.board, state.to_move):
        mask[encode_action(position, size)] = 1
    mask[pass_action(size)] = 1
    return mask


def _in_bounds(grid: BoardArray, position: Position) -> bool:
    row, col = position
    size = grid.shape[0]
    return 0 <= row < size and 0 <= col < size
