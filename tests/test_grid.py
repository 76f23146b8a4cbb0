"""Tests for the Grid module."""

import numpy as np
import pytest

from torus_snake.config import GameConfig
from torus_snake.grid import CellType, Grid, StepOutcome
from torus_snake.snake import Block, Direction


def _grow(grid, *cells):
    for x, y in cells:
        grid.add_to_snake(Block.at(x, y))


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.cols == 64
        assert grid.rows == 48
        assert grid.cells.shape == (48, 64)

    def test_from_config(self):
        grid = Grid.from_config(GameConfig(window_width=80, window_height=40, block_size=10))
        assert (grid.cols, grid.rows) == (8, 4)

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 1"):
            Grid(cols=0, rows=4)

    def test_snake_starts_at_center(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 0]))
        assert grid.snake == [Block.at(2, 2)]
        assert grid.head() == Block.at(2, 2)

    def test_food_spawned_on_init(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([1, 3]))
        assert grid.food == Block.at(1, 3)
        assert grid.get(grid.food) == CellType.FOOD
        grid.check_invariants()

    def test_only_snake_and_food_occupied(self):
        grid = Grid(cols=10, rows=10, rng=np.random.default_rng(0))
        assert grid.free_cells() == 98


class TestGridBounds:
    def test_valid(self, scripted_rng):
        grid = Grid(cols=4, rows=3, rng=scripted_rng([0, 0]))
        assert grid.valid(0, 0)
        assert grid.valid(3, 2)
        assert not grid.valid(4, 0)
        assert not grid.valid(0, 3)
        assert not grid.valid_x(-1)
        assert not grid.valid_y(-1)

    def test_location_tolerates_dimension(self, scripted_rng):
        grid = Grid(cols=4, rows=3, rng=scripted_rng([0, 0]))
        assert grid.location(4, 3).as_tuple() == (4, 3)

    def test_location_beyond_dimension_fails(self, scripted_rng):
        grid = Grid(cols=4, rows=3, rng=scripted_rng([0, 0]))
        with pytest.raises(ValueError, match="outside"):
            grid.location(5, 0)
        with pytest.raises(ValueError, match="outside"):
            grid.location(0, 4)


class TestGridOccupancy:
    def test_insert_and_contains(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 0]))
        block = Block.at(3, 1)
        assert not grid.contains(block)
        grid.insert(block)
        assert grid.contains(block)
        assert grid.get(block) == CellType.SNAKE

    def test_insert_out_of_bounds_is_noop(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 0]))
        before = grid.cells.copy()
        grid.insert(Block.at(4, 4))
        assert np.array_equal(grid.cells, before)
        assert not grid.contains(Block.at(4, 4))

    def test_remove(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 0]))
        _grow(grid, (2, 1))
        grid.remove(Block.at(2, 2))
        assert grid.snake == [Block.at(2, 1)]
        assert not grid.contains(Block.at(2, 2))
        grid.check_invariants()

    def test_head_of_empty_snake_fails(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 0]))
        grid.snake.clear()
        with pytest.raises(RuntimeError, match="no segments"):
            grid.head()


class TestAddBlock:
    def test_rejects_occupied_cells(self, scripted_rng):
        rng = scripted_rng([0, 0, 2, 2, 0, 0, 3, 1])
        grid = Grid(cols=4, rows=4, rng=rng)
        placed = grid.add_block()
        # (2, 2) is the snake and (0, 0) the old food.
        assert placed == Block.at(3, 1)
        assert grid.food == placed
        assert rng.calls == 8

    def test_full_grid_returns_none(self, scripted_rng):
        grid = Grid(cols=2, rows=1, rng=scripted_rng([0, 0]))
        _grow(grid, (0, 0))
        assert grid.add_block() is None
        assert grid.food is None
        assert grid.free_cells() == 0
        grid.check_invariants()

    def test_seeded_placement_is_free(self):
        grid = Grid(cols=6, rows=6, rng=np.random.default_rng(3))
        for _ in range(10):
            grid.add_to_snake(grid.food)
            food = grid.add_block()
            assert food not in grid.snake
            grid.check_invariants()

    def test_samples_every_free_cell_evenly(self):
        grid = Grid(cols=4, rows=4, rng=np.random.default_rng(7))
        grid.remove(grid.food)
        _grow(
            grid,
            (0, 0), (1, 0), (2, 0), (3, 0), (0, 1),
            (1, 1), (2, 1), (3, 1), (0, 2), (1, 2),
        )
        free = {(3, 2), (0, 3), (1, 3), (2, 3), (3, 3)}
        assert grid.free_cells() == len(free)

        counts: dict[tuple[int, int], int] = {}
        for _ in range(2000):
            food = grid.add_block()
            cell = food.loc.as_tuple()
            counts[cell] = counts.get(cell, 0) + 1
            grid.remove(food)

        assert set(counts) == free
        # Expected 400 per cell; the binomial standard deviation is about 18.
        assert all(300 < n < 500 for n in counts.values())


class TestMoveSnake:
    def test_slide_wraps_right(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([1, 0]))
        grid.move_snake(Direction.RIGHT)
        assert grid.snake == [Block.at(3, 2)]
        grid.check_invariants()
        grid.move_snake(Direction.RIGHT)
        assert grid.snake == [Block.at(0, 2)]
        assert not grid.contains(Block.at(3, 2))
        grid.check_invariants()

    def test_segments_shift_toward_head(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 0]))
        _grow(grid, (2, 1), (3, 1))
        grid.move_snake(Direction.DOWN)
        assert grid.snake == [Block.at(2, 1), Block.at(3, 1), Block.at(3, 2)]
        assert not grid.contains(Block.at(2, 2))
        grid.check_invariants()

    def test_add_to_snake_keeps_tail(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 0]))
        grid.add_to_snake(Block.at(2, 1))
        assert grid.snake == [Block.at(2, 2), Block.at(2, 1)]
        assert grid.head() == Block.at(2, 1)


class TestAdvance:
    def test_slide(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 0]))
        _grow(grid, (2, 1))
        tail = grid.snake[0]
        expected_head = grid.head().in_direction(grid, Direction.RIGHT)
        assert grid.advance(Direction.RIGHT) is StepOutcome.MOVED
        assert len(grid.snake) == 2
        assert grid.head() == expected_head
        assert not grid.contains(tail)
        grid.check_invariants()

    def test_grow_across_edge(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 2, 3, 2, 0, 2, 1, 1]))
        grid.move_snake(Direction.RIGHT)
        assert grid.head() == Block.at(3, 2)

        assert grid.advance(Direction.RIGHT) is StepOutcome.GREW
        assert grid.snake == [Block.at(3, 2), Block.at(0, 2)]
        assert grid.food == Block.at(1, 1)
        assert grid.food not in grid.snake
        grid.check_invariants()

    def test_collision_leaves_grid_untouched(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 0]))
        _grow(grid, (3, 2), (0, 2), (0, 3), (3, 3))
        cells = grid.cells.copy()
        body = list(grid.snake)

        assert grid.advance(Direction.UP) is StepOutcome.COLLIDED
        assert np.array_equal(grid.cells, cells)
        assert grid.snake == body
        grid.check_invariants()

    def test_last_free_cell_wins(self, scripted_rng):
        grid = Grid(cols=2, rows=1, rng=scripted_rng([0, 0]))
        assert grid.advance(Direction.RIGHT) is StepOutcome.WON
        assert grid.snake == [Block.at(1, 0), Block.at(0, 0)]
        assert grid.food is None
        grid.check_invariants()


class TestInvariantCheck:
    def test_detects_stray_cell(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 0]))
        grid.cells[3, 3] = CellType.SNAKE
        with pytest.raises(RuntimeError, match="does not match"):
            grid.check_invariants()

    def test_detects_missing_food(self, scripted_rng):
        grid = Grid(cols=4, rows=4, rng=scripted_rng([0, 0]))
        grid.remove(grid.food)
        with pytest.raises(RuntimeError, match="No food"):
            grid.check_invariants()


class TestGridSerialization:
    def test_to_dict(self, scripted_rng):
        grid = Grid(cols=4, rows=3, rng=scripted_rng([0, 0]))
        d = grid.to_dict()
        assert d["cols"] == 4
        assert d["rows"] == 3
        assert d["snake"] == [[2, 1]]
        assert d["food"] == [0, 0]
        assert len(d["cells"]) == 3
        assert d["cells"][1][2] == CellType.SNAKE
