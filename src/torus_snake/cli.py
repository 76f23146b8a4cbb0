"""CLI launcher for the windowed game."""

from __future__ import annotations

import argparse
import logging
import sys

from torus_snake.config import GameConfig

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="torus-snake",
        description="Snake on a wrap-around grid.",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file; other flags override it.",
    )
    parser.add_argument(
        "--variable-snake-speed", action="store_true", default=None,
        help="The snake speeds up as it grows.",
    )
    parser.add_argument("--block-size", type=int, default=None)
    parser.add_argument(
        "--update-period", type=float, default=None,
        help="Seconds between simulation steps.",
    )
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def build_config(args: argparse.Namespace) -> GameConfig:
    """Merge the optional config file with command-line overrides."""
    config = GameConfig.load(args.config) if args.config else GameConfig()

    flag_map = {
        "variable_snake_speed": "variable_snake_speed",
        "block_size": "block_size",
        "update_period": "update_period",
        "fps": "fps",
    }
    overrides: dict = {}
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val

    if overrides:
        d = config.to_dict()
        d.update(overrides)
        config = GameConfig(**d)
    return config


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``torus-snake`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config = build_config(args)
    except (ValueError, OSError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    from torus_snake.engine import GameEngine

    try:
        from torus_snake.frontend import PygameFrontend
    except ImportError as exc:
        logger.error(
            "The game window needs pygame (%s); install it with "
            "`pip install torus-snake[gui]`.", exc,
        )
        return 2

    PygameFrontend(GameEngine(config)).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
