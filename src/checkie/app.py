"""Application entry point."""

from __future__ import annotations

import logging
import sys

from checkie.config import GameSettings, build_parser
from checkie.core.player import Player
from checkie.game.engine import GameEngine
from checkie.ui.console import run_console_game

_LOGGER = logging.getLogger(__name__)


def create_engine(settings: GameSettings) -> GameEngine:
    """Build and start an engine from *settings*."""
    first, second = settings.player_names
    engine = GameEngine(
        [
            Player(settings.first_color, first),
            Player(settings.first_color.opposite, second),
        ],
        board_size=settings.board_size,
    )
    engine.start()
    return engine


def main(argv: list[str] | None = None) -> int:
    """Launch a two-player game in the terminal, or in a Qt window with --gui."""
    args = build_parser().parse_args(argv)
    settings = GameSettings.from_args(args)
    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        engine = create_engine(settings)
    except ValueError as exc:
        _LOGGER.error("Cannot start game: %s", exc)
        return 2

    if settings.use_gui:
        from checkie.ui.bootstrap import run_application

        return run_application(engine)

    try:
        run_console_game(engine)
    except (KeyboardInterrupt, EOFError):
        print("\nGame aborted.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
