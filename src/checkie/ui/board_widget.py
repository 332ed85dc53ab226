"""BoardWidget — clickable draughts board driven through a GameBridge."""

from __future__ import annotations

import logging

from PyQt6.QtCore import pyqtSlot
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QGridLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from checkie.core.piece import Piece
from checkie.core.types import Path, Position, is_playable_square
from checkie.game.interfaces import MoveRejection
from checkie.ui.console import render_status
from checkie.ui.qt_bridge import GameBridge

_LOGGER = logging.getLogger(__name__)

_DARK = "QPushButton { background-color: #6b4f3a; color: #f4f4f4; }"
_LIGHT = "QPushButton { background-color: #e8d5b0; }"
_SELECTED = "QPushButton { background-color: #3a6b4f; color: #f4f4f4; }"
_TARGET = "QPushButton { background-color: #4f7fa0; color: #f4f4f4; }"

_REJECTION_TEXT: dict[MoveRejection, str] = {
    MoveRejection.GAME_NOT_IN_PROGRESS: "The game is over.",
    MoveRejection.INVALID_PIECE_REFERENCE: "That piece is no longer in play.",
    MoveRejection.WRONG_TURN: "It is not that side's turn.",
    MoveRejection.ILLEGAL_PATH: "That move is not allowed.",
    MoveRejection.OUT_OF_BOUNDS: "That square is off the board.",
}


class BoardWidget(QWidget):
    """One button per square. Click a piece, then the square its move ends on.

    Only the final square of a path is clicked; when a piece has several
    paths ending there, the first one listed by the engine is played.
    """

    def __init__(self, bridge: GameBridge, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._bridge = bridge
        self._selected: Piece | None = None
        self._paths: list[Path] = []
        self._message = ""
        self._squares: dict[Position, QPushButton] = {}
        self._setup_ui()

        bridge.turn_changed.connect(self._on_turn_changed)
        bridge.game_over.connect(self._on_game_over)
        bridge.move_rejected.connect(self._on_move_rejected)
        self.refresh()

    def _setup_ui(self) -> None:
        self.setWindowTitle("Checkie")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        grid = QGridLayout()
        grid.setSpacing(0)
        size = self._bridge.engine.board.size
        square_font = QFont()
        square_font.setPointSize(16)
        square_font.setBold(True)
        for y in range(size):
            for x in range(size):
                position = Position(x, y)
                button = QPushButton()
                button.setFixedSize(48, 48)
                button.setFont(square_font)
                button.clicked.connect(
                    lambda _checked=False, p=position: self.select_square(p)
                )
                # row 1 at the bottom, like the console board
                grid.addWidget(button, size - 1 - y, x)
                self._squares[position] = button
        layout.addLayout(grid)

        self._status = QLabel()
        layout.addWidget(self._status)

        self._btn_new = QPushButton("New game")
        self._btn_new.setMinimumHeight(36)
        self._btn_new.clicked.connect(self._on_new_game)
        layout.addWidget(self._btn_new)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def selected(self) -> Piece | None:
        return self._selected

    @property
    def status_text(self) -> str:
        return self._status.text()

    def square_text(self, position: Position) -> str:
        return self._squares[position].text()

    def select_square(self, position: Position) -> None:
        """Handle a click on *position*: pick a piece or finish a move."""
        engine = self._bridge.engine
        piece = engine.piece_at(position)

        if piece is not None and piece.color == engine.current_player.color:
            self._selected = piece
            self._paths = engine.legal_moves(piece)
            self._message = "" if self._paths else "That piece cannot move."
            self.refresh()
            return

        if self._selected is None:
            return

        path = next((p for p in self._paths if p[-1] == position), (position,))
        selected = self._clear_selection()
        if self._bridge.submit_move(selected, path):
            self._message = ""
        self.refresh()

    def refresh(self) -> None:
        """Redraw every square and the status line from the engine."""
        engine = self._bridge.engine
        targets = {path[-1] for path in self._paths}
        origin = (
            engine.board.position_of(self._selected)
            if self._selected is not None
            else None
        )
        for position, button in self._squares.items():
            piece = engine.piece_at(position)
            button.setText(str(piece) if piece is not None else "")
            if position == origin:
                style = _SELECTED
            elif position in targets:
                style = _TARGET
            elif is_playable_square(position):
                style = _DARK
            else:
                style = _LIGHT
            button.setStyleSheet(style)

        status = render_status(engine)
        if self._message:
            status = f"{status}\n{self._message}"
        self._status.setText(status)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _clear_selection(self) -> Piece:
        selected = self._selected
        assert selected is not None
        self._selected = None
        self._paths = []
        return selected

    # ── Bridge slots ─────────────────────────────────────────────────────

    @pyqtSlot()
    def _on_new_game(self) -> None:
        self._selected = None
        self._paths = []
        self._message = ""
        self._bridge.restart()

    @pyqtSlot(object)
    def _on_turn_changed(self, player: object) -> None:
        self.refresh()

    @pyqtSlot(object)
    def _on_game_over(self, winner: object) -> None:
        _LOGGER.info("Board window: %s won", winner)
        self.refresh()

    @pyqtSlot(int)
    def _on_move_rejected(self, value: int) -> None:
        self._message = _REJECTION_TEXT[MoveRejection(value)]
