"""Engine interface plus the phase and rejection enums shared with callers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from checkie.core.board import Board
    from checkie.core.enums import Color
    from checkie.core.events import GameEvent
    from checkie.core.piece import Piece
    from checkie.core.player import Player
    from checkie.core.types import Path, Position


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class MoveRejection(IntEnum):
    """Why a requested move was turned down. Rejections never mutate state."""

    GAME_NOT_IN_PROGRESS = auto()
    INVALID_PIECE_REFERENCE = auto()  # piece is not on the board
    WRONG_TURN = auto()
    ILLEGAL_PATH = auto()
    OUT_OF_BOUNDS = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameEngine(ABC):
    """Interface for the turn engine."""

    @property
    @abstractmethod
    def board(self) -> Board: ...

    @property
    @abstractmethod
    def players(self) -> tuple[Player, Player]: ...

    @property
    @abstractmethod
    def current_player(self) -> Player: ...

    @property
    @abstractmethod
    def winner(self) -> Player | None: ...

    @property
    @abstractmethod
    def phase(self) -> GamePhase: ...

    @abstractmethod
    def start(self, layout: str | None = None, to_move: Color | None = None) -> None:
        """Set up (or restart) the game."""

    @abstractmethod
    def legal_moves(self, piece: Piece) -> list[Path]:
        """Paths the current player may play with *piece*."""

    @abstractmethod
    def movable_pieces(self, player: Player) -> list[tuple[Piece, Position]]:
        """Pieces *player* may move under the forced-capture rule."""

    @abstractmethod
    def validate_move(self, piece: Piece, path: Path) -> MoveRejection | None:
        """Reason *path* would be refused, or None if it is playable."""

    @abstractmethod
    def move_piece(self, piece: Piece, path: Path) -> list[GameEvent]:
        """Play *path*. Returns the emitted events, empty if refused."""

    @abstractmethod
    def check_win(self) -> Player | None:
        """Recompute and return the winner."""
