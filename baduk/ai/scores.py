"""Base heuristic sub-scores shared by every difficulty tier.

Each function scores one empty candidate point for ``color`` on a grid that
does not yet hold the candidate stone. Functions that need the stone on the
board place it with :func:`baduk.core.probe` and restore the grid before
returning, so callers may pass one writable scratch grid for a whole sweep.
A writable array handed in is borrowed for the duration of the call and must
not be read by anyone else meanwhile; read-only grids are copied.
"""

from __future__ import annotations

from collections import deque
from typing import Set, Tuple

from baduk.core.rules import adjacent_groups, find_group, neighbours, probe
from baduk.core.state import BoardArray, Position, Stone

EIGHT_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)

CONNECTION_RADIUS = 2
INFLUENCE_REACH = 4


def writable(grid: BoardArray) -> BoardArray:
    return grid if grid.flags.writeable else grid.copy()


def in_bounds(grid: BoardArray, row: int, col: int) -> bool:
    size = grid.shape[0]
    return 0 <= row < size and 0 <= col < size


def capture_score(grid: BoardArray, position: Position, color: Stone) -> float:
    """Pressure on neighbouring enemy groups once the stone is down.

    A group taken off the board scores three times its size, a group left in
    atari twice its size and a group left on two liberties its size.
    """
    score = 0.0
    scratch = writable(grid)
    with probe(scratch, position, color):
        for group in adjacent_groups(scratch, position, color.opponent):
            liberties = group.liberty_count
            if liberties == 0:
                score += 3 * group.size
            elif liberties == 1:
                score += 2 * group.size
            elif liberties == 2:
                score += group.size
    return score


def defense_score(grid: BoardArray, position: Position, color: Stone) -> float:
    score = 0.0
    for group in adjacent_groups(grid, position, color):
        if group.liberty_count <= 2:
            score += (3 - group.liberty_count) * group.size
    for group in adjacent_groups(grid, position, color.opponent):
        if group.liberty_count == 2:
            score += group.size
    return score


def connection_score(grid: BoardArray, position: Position, color: Stone) -> float:
    row, col = position
    score = 0.0
    for dr in range(-CONNECTION_RADIUS, CONNECTION_RADIUS + 1):
        for dc in range(-CONNECTION_RADIUS, CONNECTION_RADIUS + 1):
            r, c = row + dr, col + dc
            if (dr, dc) == (0, 0) or not in_bounds(grid, r, c):
                continue
            if grid[r, c] != int(color):
                continue
            score += (CONNECTION_RADIUS + 1) - max(abs(dr), abs(dc))
            if dr != 0 and dc != 0:
                score -= 0.5
    return score


def territory_score(grid: BoardArray, position: Position, color: Stone) -> float:
    """Size of the empty region reachable from ``position`` plus friendly walls.

    Every empty point reached adds 1, every contact with a friendly stone from
    inside the region adds 0.5.
    """
    score = 0.0
    reached: Set[Position] = {position}
    queue = deque([position])
    while queue:
        current = queue.popleft()
        for adjacent in neighbours(grid, current):
            value = grid[adjacent]
            if value == 0:
                if adjacent not in reached:
                    reached.add(adjacent)
                    score += 1
                    queue.append(adjacent)
            elif value == int(color):
                score += 0.5
    return score


def influence_score(grid: BoardArray, position: Position, color: Stone) -> float:
    row, col = position
    enemy = int(color.opponent)
    score = 0.0
    for dr, dc in EIGHT_DIRECTIONS:
        r, c = row + dr, col + dc
        distance = 1
        while in_bounds(grid, r, c) and distance <= INFLUENCE_REACH:
            weight = (INFLUENCE_REACH + 1) - distance
            value = grid[r, c]
            if value == int(color):
                score += weight
            elif value == enemy:
                score -= weight
                break
            else:
                score += weight * 0.5
            r += dr
            c += dc
            distance += 1
    return score


def liberties_after(grid: BoardArray, position: Position, color: Stone) -> int:
    scratch = writable(grid)
    with probe(scratch, position, color):
        return find_group(scratch, position, color).liberty_count
