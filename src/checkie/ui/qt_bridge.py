"""Qt bridge exposing a game engine through signals and slots."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from checkie.core.events import PieceCaptured, PiecePromoted, TurnChanged
from checkie.core.piece import Piece
from checkie.core.player import Player
from checkie.core.types import Path
from checkie.game.engine import GameEngine


class GameBridge(QObject):
    """Main-thread adapter between a :class:`GameEngine` and Qt widgets.

    Moves arrive through :meth:`submit_move`. The bridge subscribes to the
    engine's callbacks, so signals fire in the engine's event order with
    ``game_over`` last.
    """

    piece_captured = pyqtSignal(object, object)  # piece, position
    piece_promoted = pyqtSignal(object, object)  # piece, position
    turn_changed = pyqtSignal(object)  # player
    game_over = pyqtSignal(object)  # winner
    move_rejected = pyqtSignal(int)  # MoveRejection value

    def __init__(self, engine: GameEngine, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        events = engine.events
        events.on_piece_captured.append(self._on_piece_captured)
        events.on_piece_promoted.append(self._on_piece_promoted)
        events.on_turn_changed.append(self._on_turn_changed)
        events.on_game_over.append(self._on_game_over)

    @property
    def engine(self) -> GameEngine:
        return self._engine

    @pyqtSlot(object, object, result=bool)
    def submit_move(self, piece_obj: object, path_obj: object) -> bool:
        """Play *path_obj* with *piece_obj*. Returns True if the move was made."""
        if not isinstance(piece_obj, Piece):
            return False
        path: Path = tuple(path_obj)  # type: ignore[call-overload]

        rejection = self._engine.validate_move(piece_obj, path)
        if rejection is not None:
            self.move_rejected.emit(int(rejection))
            return False
        return bool(self._engine.move_piece(piece_obj, path))

    @pyqtSlot()
    def restart(self) -> None:
        """Start a new game with the standard opening."""
        self._engine.start()
        self.turn_changed.emit(self._engine.current_player)

    # ── Engine callbacks ─────────────────────────────────────────────────

    def _on_piece_captured(self, event: PieceCaptured) -> None:
        self.piece_captured.emit(event.piece, event.position)

    def _on_piece_promoted(self, event: PiecePromoted) -> None:
        self.piece_promoted.emit(event.piece, event.position)

    def _on_turn_changed(self, event: TurnChanged) -> None:
        self.turn_changed.emit(event.player)

    def _on_game_over(self, winner: Player) -> None:
        self.game_over.emit(winner)
