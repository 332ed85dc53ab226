"""User-configurable game settings."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass

from checkie.core.enums import Color
from checkie.core.types import DEFAULT_BOARD_SIZE


@dataclass
class GameSettings:
    """All settings a local game can be started with."""

    # Board
    board_size: int = DEFAULT_BOARD_SIZE

    # Players
    first_color: Color = Color.BLACK  # color of player 1
    player_names: tuple[str, str] = ("Player 1", "Player 2")

    # Interface
    use_gui: bool = False  # Qt board window instead of the terminal

    # Diagnostics
    log_level: str = "WARNING"

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        return level

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> GameSettings:
        return cls(
            board_size=args.board_size,
            first_color=Color[args.first_color.upper()],
            player_names=(args.player1, args.player2),
            use_gui=args.gui,
            log_level=args.log_level,
        )


def build_parser() -> argparse.ArgumentParser:
    defaults = GameSettings()
    parser = argparse.ArgumentParser(
        prog="checkie", description="Play draughts in the terminal or a Qt window."
    )
    parser.add_argument(
        "--board-size",
        type=int,
        default=defaults.board_size,
        help="Even board size, at least 4 (default: %(default)s)",
    )
    parser.add_argument(
        "--first-color",
        choices=[str(c) for c in Color],
        default=str(defaults.first_color),
        help="Color of player 1; black moves first (default: %(default)s)",
    )
    parser.add_argument("--player1", default=defaults.player_names[0])
    parser.add_argument("--player2", default=defaults.player_names[1])
    parser.add_argument(
        "--gui",
        action="store_true",
        help="Play in a Qt board window instead of the terminal",
    )
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser
