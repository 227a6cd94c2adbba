"""Shape, pattern and whole-board heuristics used by the hard tier."""

from __future__ import annotations

import math
from collections import deque
from typing import Set, Tuple

import numpy as np

from baduk.core.rules import DIRECTIONS, neighbours, probe
from baduk.core.state import BoardArray, Position, Stone

from .scores import in_bounds, liberties_after, writable

LINE_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 0), (0, 1), (1, 1), (1, -1))

# (substrings, bonus); "O" friendly, "." empty, "X" enemy
TESUJI_LINES: Tuple[Tuple[Tuple[str, ...], float], ...] = (
    (("OO.O", "O.OO"), 3.0),
    (("O.O.O",), 4.0),
    (("OO..O", "O..OO"), 2.0),
)

KNIGHT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
)

TIGER_MOUTHS: Tuple[Tuple[Tuple[int, int], ...], ...] = (
    ((-1, -1), (-1, 0), (-1, 1)),
    ((1, -1), (1, 0), (1, 1)),
    ((-1, -1), (0, -1), (1, -1)),
    ((-1, 1), (0, 1), (1, 1)),
)

CUT_AXES: Tuple[Tuple[Tuple[int, int], Tuple[int, int]], ...] = (
    ((-1, 0), (1, 0)),
    ((0, -1), (0, 1)),
    ((-1, -1), (1, 1)),
    ((-1, 1), (1, -1)),
)


def _holds(grid: BoardArray, position: Position, offset: Tuple[int, int], value: int) -> bool:
    r, c = position[0] + offset[0], position[1] + offset[1]
    return in_bounds(grid, r, c) and grid[r, c] == value


# ----------------------------------------------------------------------
# Patterns
# ----------------------------------------------------------------------
def wall_score(grid: BoardArray, position: Position, color: Stone) -> float:
    row, col = position
    score = 0.0
    for dr, dc in LINE_DIRECTIONS:
        count = 0
        space = 0
        for i in range(-2, 3):
            r, c = row + dr * i, col + dc * i
            if not in_bounds(grid, r, c):
                continue
            if grid[r, c] == int(color):
                count += 1
            elif grid[r, c] == 0:
                space += 1
        if count >= 3 and space > 0:
            score += count + space * 0.5
    return score


def eye_score(grid: BoardArray, position: Position, color: Stone) -> float:
    """Reward empty neighbours the candidate helps surround; a closed eye scores most."""
    score = 0.0
    scratch = writable(grid)
    with probe(scratch, position, color):
        for empty in neighbours(scratch, position):
            if scratch[empty] != 0:
                continue
            friendly = sum(1 for p in neighbours(scratch, empty) if scratch[p] == int(color))
            if friendly >= 3:
                score += friendly - 2
                if friendly == 4:
                    score += 2
    return score


def linearise(grid: BoardArray, position: Position, color: Stone, direction: Tuple[int, int]) -> str:
    """Nine-point window through ``position``; off-board points are dropped."""
    row, col = position
    dr, dc = direction
    cells = []
    for i in range(-4, 5):
        r, c = row + dr * i, col + dc * i
        if not in_bounds(grid, r, c):
            continue
        value = grid[r, c]
        if value == int(color):
            cells.append("O")
        elif value == 0:
            cells.append(".")
        else:
            cells.append("X")
    return "".join(cells)


def line_score(grid: BoardArray, position: Position, color: Stone) -> float:
    score = 0.0
    for direction in LINE_DIRECTIONS:
        line = linearise(grid, position, color, direction)
        for needles, bonus in TESUJI_LINES:
            if any(needle in line for needle in needles):
                score += bonus
    return score


def pattern_score(grid: BoardArray, position: Position, color: Stone) -> float:
    return (
        wall_score(grid, position, color)
        + eye_score(grid, position, color) * 2
        + line_score(grid, position, color)
        + shape_score(grid, position, color)
    )


# ----------------------------------------------------------------------
# Shape
# ----------------------------------------------------------------------
def is_empty_triangle(grid: BoardArray, position: Position, color: Stone) -> bool:
    friend = int(color)
    for dr in (-1, 1):
        for dc in (-1, 1):
            if (
                _holds(grid, position, (dr, 0), friend)
                and _holds(grid, position, (0, dc), friend)
                and _holds(grid, position, (dr, dc), 0)
            ):
                return True
    return False


def is_knight_shape(grid: BoardArray, position: Position, color: Stone) -> bool:
    return any(_holds(grid, position, offset, int(color)) for offset in KNIGHT_OFFSETS)


def is_tiger_mouth(grid: BoardArray, position: Position, color: Stone) -> bool:
    return any(
        all(_holds(grid, position, offset, int(color)) for offset in arc)
        for arc in TIGER_MOUTHS
    )


def is_one_point_jump(grid: BoardArray, position: Position, color: Stone) -> bool:
    return any(
        _holds(grid, position, (2 * dr, 2 * dc), int(color)) and _holds(grid, position, (dr, dc), 0)
        for dr, dc in DIRECTIONS
    )


def is_good_shape(grid: BoardArray, position: Position, color: Stone) -> bool:
    return (
        is_knight_shape(grid, position, color)
        or is_tiger_mouth(grid, position, color)
        or is_one_point_jump(grid, position, color)
    )


def shape_score(grid: BoardArray, position: Position, color: Stone) -> float:
    score = 0.0
    if is_empty_triangle(grid, position, color):
        score -= 3
    if is_good_shape(grid, position, color):
        score += 2
    liberties = liberties_after(grid, position, color)
    if liberties <= 1:
        score -= 5
    elif liberties >= 4:
        score += 2
    return score


# ----------------------------------------------------------------------
# Potential
# ----------------------------------------------------------------------
def potential_eye_score(grid: BoardArray, position: Position, color: Stone) -> float:
    score = 0.0
    seen: Set[Position] = {position}
    queue = deque([position])
    while queue:
        current = queue.popleft()
        empty = 0
        friendly = 0
        for adjacent in neighbours(grid, current):
            value = grid[adjacent]
            if value == 0:
                empty += 1
                if adjacent not in seen:
                    seen.add(adjacent)
                    queue.append(adjacent)
            elif value == int(color):
                friendly += 1
        if empty == 1 and friendly >= 2:
            score += 2
        elif empty == 2 and friendly >= 1:
            score += 1
    return score


def expansion_score(grid: BoardArray, position: Position, color: Stone) -> float:
    row, col = position
    score = 0.0
    for dr, dc in DIRECTIONS:
        r, c = row + dr, col + dc
        empty = 0
        while in_bounds(grid, r, c) and empty < 3 and grid[r, c] == 0:
            empty += 1
            score += 1 / (empty + 1)
            r += dr
            c += dc
    return score


def cut_score(grid: BoardArray, position: Position, color: Stone) -> float:
    enemy = int(color.opponent)
    return sum(
        3.0
        for first, second in CUT_AXES
        if _holds(grid, position, first, enemy) and _holds(grid, position, second, enemy)
    )


def potential_score(grid: BoardArray, position: Position, color: Stone) -> float:
    return (
        potential_eye_score(grid, position, color) * 2
        + expansion_score(grid, position, color)
        + cut_score(grid, position, color) * 3
    )


# ----------------------------------------------------------------------
# Whole board
# ----------------------------------------------------------------------
def global_position_score(grid: BoardArray, position: Position, color: Stone) -> float:
    size = grid.shape[0]
    row, col = position
    centre = size // 2
    score = -math.hypot(row - centre, col - centre) * 0.5

    enemies = np.argwhere(grid == int(color.opponent))
    if len(enemies):
        nearest = float(np.min(np.hypot(enemies[:, 0] - row, enemies[:, 1] - col)))
        if nearest < 3:
            score += 2
        elif nearest < 5:
            score += 1

    window = grid[max(0, row - 3):row + 4, max(0, col - 3):col + 4]
    density = int(np.count_nonzero(window))
    score += -1 if density > 10 else 1
    return score
