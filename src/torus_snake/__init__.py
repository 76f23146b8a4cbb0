"""Torus Snake — core game engine."""

from torus_snake.config import GameConfig
from torus_snake.engine import GameEngine, Snapshot
from torus_snake.grid import CellType, Grid, StepOutcome
from torus_snake.snake import Block, Direction, Location, in_direction

__all__ = [
    "Block",
    "CellType",
    "Direction",
    "GameConfig",
    "GameEngine",
    "Grid",
    "Location",
    "Snapshot",
    "StepOutcome",
    "in_direction",
]
