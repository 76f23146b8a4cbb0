"""Game configuration: window geometry and tick timing."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Fixed game settings.

    The grid size is derived from the window size and the block size, so
    both window dimensions must be multiples of ``block_size``.
    """

    # Window
    window_width: int = 640
    window_height: int = 480
    block_size: int = 10

    # Timing (seconds)
    update_period: float = 1 / 30
    fps: int = 30

    # Speed-up as the snake grows
    variable_snake_speed: bool = False
    speedup_step: float = 0.001
    min_update_period: float = 0.01

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            expected = _FIELD_TYPES[f.name]
            if isinstance(value, bool) != (expected is bool) or not isinstance(value, expected):
                raise ValueError(
                    f"{f.name} has the wrong type: {type(value).__name__}."
                )
        if self.block_size < 1:
            raise ValueError("block_size must be at least 1.")
        if self.window_width < self.block_size or self.window_height < self.block_size:
            raise ValueError("Window must be at least one block wide and tall.")
        if self.window_width % self.block_size or self.window_height % self.block_size:
            raise ValueError(
                f"Window size {self.window_width}x{self.window_height} is not "
                f"divisible by block_size {self.block_size}."
            )
        if self.update_period <= 0 or self.min_update_period <= 0:
            raise ValueError("update periods must be positive.")
        if self.speedup_step < 0:
            raise ValueError("speedup_step must be non-negative.")
        if self.fps < 1:
            raise ValueError("fps must be at least 1.")

    @property
    def cols(self) -> int:
        return self.window_width // self.block_size

    @property
    def rows(self) -> int:
        return self.window_height // self.block_size

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write the settings as JSON, creating parent directories."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Game config written to %s", target)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Read settings from JSON; missing keys keep their defaults.

        Raises ``ValueError`` for malformed JSON, unknown keys or values of
        the wrong type, and ``OSError`` if the file cannot be read.
        """
        settings = json.loads(Path(path).read_text())
        if not isinstance(settings, dict):
            raise ValueError(f"{path} must contain a JSON object.")
        unknown = sorted(set(settings) - {f.name for f in fields(cls)})
        if unknown:
            raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}.")
        return cls(**settings)


# Accepted runtime types per field; ints are fine wherever seconds are expected.
_FIELD_TYPES: dict[str, type | tuple[type, ...]] = {
    "window_width": int,
    "window_height": int,
    "block_size": int,
    "update_period": (int, float),
    "fps": int,
    "variable_snake_speed": bool,
    "speedup_step": (int, float),
    "min_update_period": (int, float),
}
