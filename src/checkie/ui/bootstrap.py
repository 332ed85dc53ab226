"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

    from checkie.game.engine import GameEngine

_LOGGER = logging.getLogger(__name__)


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings."""
    app.setApplicationName("Checkie")
    app.setStyle("Fusion")


def run_application(engine: GameEngine, argv: list[str] | None = None) -> int:
    """Show a board window for a started *engine* and run the Qt event loop."""
    from PyQt6.QtWidgets import QApplication

    from checkie.ui.board_widget import BoardWidget
    from checkie.ui.qt_bridge import GameBridge

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    bridge = GameBridge(engine)
    window = BoardWidget(bridge)
    window.show()
    _LOGGER.info("Board window opened")

    return app.exec()
