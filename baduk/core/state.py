from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Dict, FrozenSet, Iterable, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray

BoardArray = NDArray[np.int8]

BOARD_SIZE = 19


class Stone(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @property
    def opponent(self) -> "Stone":
        if self == Stone.EMPTY:
            raise ValueError("Empty cells have no opponent.")
        return Stone.WHITE if self == Stone.BLACK else Stone.BLACK


class Board:
    """Immutable square grid of :class:`Stone` values.

    The underlying array is flagged read-only; derive new boards through the
    rules module instead of writing into ``grid``.
    """

    __slots__ = ("_grid",)

    def __init__(self, grid: BoardArray) -> None:
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValueError(f"Board grid must be square, got shape {grid.shape}.")
        frozen = np.array(grid, dtype=np.int8, copy=True)
        frozen.flags.writeable = False
        self._grid = frozen

    @classmethod
    def empty(cls, size: int = BOARD_SIZE) -> "Board":
        if size < 1:
            raise ValueError("Board size must be positive.")
        return cls(np.zeros((size, size), dtype=np.int8))

    @property
    def grid(self) -> BoardArray:
        return self._grid

    @property
    def size(self) -> int:
        return int(self._grid.shape[0])

    def in_bounds(self, position: Position) -> bool:
        row, col = position
        return 0 <= row < self.size and 0 <= col < self.size

    def __getitem__(self, position: Position) -> Stone:
        if not self.in_bounds(position):
            raise IndexError(f"Position {position} is off a {self.size}x{self.size} board.")
        return Stone(int(self._grid[position]))

    def scratch(self) -> BoardArray:
        """Writable copy of the grid for hypothetical probing."""
        return self._grid.copy()

    def stones(self, color: Stone) -> Iterable[Position]:
        for r, c in np.argwhere(self._grid == int(color)):
            yield int(r), int(c)

    def count(self, color: Stone) -> int:
        return int(np.count_nonzero(self._grid == int(color)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self._grid, other._grid)

    def __hash__(self) -> int:
        return hash((self.size, self._grid.tobytes()))

    def __repr__(self) -> str:
        symbols = {0: ".", 1: "X", 2: "O"}
        rows = ["".join(symbols[int(cell)] for cell in row) for row in self._grid]
        return f"Board(size={self.size})\n" + "\n".join(rows)


GridLike = Union[Board, BoardArray]


def as_grid(board: GridLike) -> BoardArray:
    return board.grid if isinstance(board, Board) else board


@dataclass(frozen=True)
class Group:
    color: Stone
    stones: FrozenSet[Position] = frozenset()
    liberties: FrozenSet[Position] = frozenset()

    @property
    def size(self) -> int:
        return len(self.stones)

    @property
    def liberty_count(self) -> int:
        return len(self.liberties)

    @property
    def is_captured(self) -> bool:
        return bool(self.stones) and not self.liberties


@dataclass(frozen=True)
class MoveResult:
    board: Board
    captured: int = 0
    captured_positions: Tuple[Position, ...] = field(default_factory=tuple)


def _no_prisoners() -> Dict[Stone, int]:
    return {Stone.BLACK: 0, Stone.WHITE: 0}


@dataclass(frozen=True)
class GameState:
    board: Board
    to_move: Stone = Stone.BLACK
    # stones captured by each colour
    prisoners: Dict[Stone, int] = field(default_factory=_no_prisoners)
    history: Tuple[Board, ...] = field(default_factory=tuple)
    last_move: Optional[Position] = None
    ply_count: int = 0
    consecutive_passes: int = 0

    @classmethod
    def new(cls, size: int = BOARD_SIZE, to_move: Stone = Stone.BLACK) -> "GameState":
        board = Board.empty(size)
        return cls(board=board, to_move=to_move, history=(board,))

    @property
    def is_over(self) -> bool:
        return self.consecutive_passes >= 2

    def advance(self, board: Board, *, move: Optional[Position], captured: int = 0) -> "GameState":
        prisoners = dict(self.prisoners)
        prisoners[self.to_move] += captured
        return replace(
            self,
            board=board,
            to_move=self.to_move.opponent,
            prisoners=prisoners,
            history=self.history + (board,),
            last_move=move,
            ply_count=self.ply_count + 1,
            consecutive_passes=0 if move is not None else self.consecutive_passes + 1,
        )

    def __hash__(self) -> int:
        # prisoners is a dict; hash its items
        return hash(
            (
                self.board,
                self.to_move,
                tuple(sorted(self.prisoners.items())),
                self.history,
                self.last_move,
                self.ply_count,
                self.consecutive_passes,
            )
        )

    def __repr__(self) -> str:
        return (
            f"GameState(to_move={self.to_move.name}, ply={self.ply_count}, "
            f"prisoners=B{self.prisoners[Stone.BLACK]}/W{self.prisoners[Stone.WHITE]})\n"
            f"{self.board!r}"
        )


# Convenient tuple aliases used across modules
Position = Tuple[int, int]
