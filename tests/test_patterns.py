import numpy as np
import pytest

from baduk.ai import patterns
from baduk.core import Stone


def make_grid(size=9, black=(), white=()) -> np.ndarray:
    grid = np.zeros((size, size), dtype=np.int8)
    for position in black:
        grid[position] = Stone.BLACK
    for position in white:
        grid[position] = Stone.WHITE
    return grid


def test_wall_needs_three_stones_and_space():
    grid = make_grid(black=[(2, 4), (3, 4), (5, 4)])
    assert patterns.wall_score(grid, (4, 4), Stone.BLACK) == 4.0
    grid = make_grid(black=[(2, 4), (3, 4)])
    assert patterns.wall_score(grid, (4, 4), Stone.BLACK) == 0.0


def test_eye_score_counts_friendly_surroundings():
    # the candidate closes (3, 4) on all four sides
    grid = make_grid(black=[(2, 4), (3, 3), (3, 5)])
    assert patterns.eye_score(grid, (4, 4), Stone.BLACK) == 4.0
    corner = make_grid(black=[(1, 0)])
    # (0, 0) has a single friendly neighbour
    assert patterns.eye_score(corner, (0, 1), Stone.BLACK) == 0.0


def test_closing_an_eye_beats_a_three_sided_point():
    three_sided = make_grid(black=[(3, 4), (4, 3)])
    closed = make_grid(black=[(3, 4), (4, 3), (5, 4)])
    assert patterns.eye_score(three_sided, (4, 5), Stone.BLACK) == 1.0
    assert patterns.eye_score(closed, (4, 5), Stone.BLACK) == 4.0


def test_eye_score_leaves_grid_untouched():
    grid = make_grid(black=[(3, 4), (4, 3), (5, 4)])
    before = grid.copy()
    patterns.eye_score(grid, (4, 5), Stone.BLACK)
    np.testing.assert_array_equal(grid, before)


def test_linearise_drops_off_board_points():
    grid = make_grid(black=[(4, 0), (4, 1), (4, 3)], white=[(4, 6)])
    assert patterns.linearise(grid, (4, 2), Stone.BLACK, (0, 1)) == "OO.O..X"


def test_line_score_matches_tesuji_substrings():
    grid = make_grid(black=[(4, 0), (4, 1), (4, 3)])
    assert patterns.line_score(grid, (4, 2), Stone.BLACK) == 3.0
    grid = make_grid(black=[(4, 1), (4, 3), (4, 5)])
    assert patterns.line_score(grid, (4, 2), Stone.BLACK) == 4.0
    grid = make_grid(black=[(4, 1), (4, 3), (4, 4)])
    assert patterns.line_score(grid, (4, 2), Stone.BLACK) == 3.0


def test_line_score_rewards_two_point_gaps():
    grid = make_grid(black=[(4, 0), (4, 1), (4, 4)])
    assert patterns.linearise(grid, (4, 2), Stone.BLACK, (0, 1)) == "OO..O.."
    assert patterns.line_score(grid, (4, 2), Stone.BLACK) == 2.0
    grid = make_grid(black=[(4, 1), (4, 4), (4, 5)])
    assert patterns.line_score(grid, (4, 2), Stone.BLACK) == 2.0


def test_empty_triangle_detection():
    grid = make_grid(black=[(3, 4), (4, 3)])
    assert patterns.is_empty_triangle(grid, (4, 4), Stone.BLACK)
    solid = make_grid(black=[(3, 4), (4, 3), (3, 3)])
    assert not patterns.is_empty_triangle(solid, (4, 4), Stone.BLACK)


def test_good_shapes():
    assert patterns.is_tiger_mouth(make_grid(black=[(3, 3), (3, 4), (3, 5)]), (4, 4), Stone.BLACK)
    assert patterns.is_one_point_jump(make_grid(black=[(4, 6)]), (4, 4), Stone.BLACK)
    assert not patterns.is_one_point_jump(make_grid(black=[(4, 6), (4, 5)]), (4, 4), Stone.BLACK)
    assert patterns.is_knight_shape(make_grid(black=[(2, 5)]), (4, 4), Stone.BLACK)
    assert not patterns.is_good_shape(make_grid(black=[(3, 3)]), (4, 4), Stone.BLACK)


def test_shape_score_penalises_self_atari():
    assert patterns.shape_score(make_grid(), (4, 4), Stone.BLACK) == 2.0
    assert patterns.shape_score(make_grid(), (0, 0), Stone.BLACK) == 0.0
    atari = make_grid(white=[(3, 4), (5, 4), (4, 3)])
    assert patterns.shape_score(atari, (4, 4), Stone.BLACK) == -5.0


def test_potential_eye_flood():
    assert patterns.potential_eye_score(make_grid(size=5), (2, 2), Stone.BLACK) == 0.0
    grid = make_grid(size=3, black=[(0, 1), (1, 0), (1, 1)])
    assert patterns.potential_eye_score(grid, (0, 2), Stone.BLACK) == 2.0


def test_expansion_score_decays_along_open_lines():
    open_line = 1 / 2 + 1 / 3 + 1 / 4
    assert patterns.expansion_score(make_grid(), (4, 4), Stone.BLACK) == pytest.approx(4 * open_line)
    assert patterns.expansion_score(make_grid(), (0, 0), Stone.BLACK) == pytest.approx(2 * open_line)


def test_cut_score_counts_enemy_pairs():
    grid = make_grid(white=[(3, 4), (5, 4)])
    assert patterns.cut_score(grid, (4, 4), Stone.BLACK) == 3.0
    grid = make_grid(white=[(3, 4), (5, 4), (3, 3), (5, 5)])
    assert patterns.cut_score(grid, (4, 4), Stone.BLACK) == 6.0


def test_global_position_score():
    assert patterns.global_position_score(make_grid(), (4, 4), Stone.BLACK) == 1.0
    assert patterns.global_position_score(make_grid(), (0, 0), Stone.BLACK) == pytest.approx(
        1 - 0.5 * np.hypot(4, 4)
    )
    near_enemy = make_grid(white=[(4, 6)])
    assert patterns.global_position_score(near_enemy, (4, 4), Stone.BLACK) == 3.0
