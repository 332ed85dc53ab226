"""GameEngine — the turn engine of a draughts game.

Coordinates: Board, MoveGenerator, the two Players and their piece sets.
Every committed move returns its events in order; the same events are also
pushed to the callbacks in :class:`GameEvents` so a UI can subscribe.

Thread-safety: none. A single engine must only be driven by one caller at
a time; :class:`checkie.service.GameStore` wraps it in a lock. The board must
only be changed through the engine, which caches each side's movable pieces
until its next move or restart.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from checkie.core.board import Board
from checkie.core.enums import Color
from checkie.core.events import GameEvent, PieceCaptured, PiecePromoted, TurnChanged
from checkie.core.move_generator import MoveGenerator
from checkie.core.notation import parse_layout, starting_layout
from checkie.core.piece import Piece
from checkie.core.player import Player
from checkie.core.types import DEFAULT_BOARD_SIZE, Path, Position
from checkie.game.interfaces import GamePhase, IGameEngine, MoveRejection

_LOGGER = logging.getLogger(__name__)

FIRST_COLOR = Color.BLACK

# ── Event definitions ────────────────────────────────────────────────────────

CapturedCallback = Callable[[PieceCaptured], None]
PromotedCallback = Callable[[PiecePromoted], None]
TurnCallback = Callable[[TurnChanged], None]
GameOverCallback = Callable[[Player], None]  # winner


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_piece_captured: list[CapturedCallback] = field(default_factory=list)
    on_piece_promoted: list[PromotedCallback] = field(default_factory=list)
    on_turn_changed: list[TurnCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Engine ───────────────────────────────────────────────────────────────────


class GameEngine(IGameEngine):
    """Runs a two-player game: validates and applies moves, promotes men,
    rotates turns and detects the winner.

    Each side's pieces are tracked twice: on the board and in a per-color
    ``id -> Piece`` set. Both views are only ever changed together, by
    :meth:`start` and :meth:`_remove_piece`.
    """

    __slots__ = (
        "_board",
        "_generator",
        "_players",
        "_current",
        "_winner",
        "_phase",
        "_player_pieces",
        "_movable",
        "events",
    )

    def __init__(
        self,
        players: Sequence[Player],
        board_size: int = DEFAULT_BOARD_SIZE,
    ) -> None:
        if len(players) != 2:
            raise ValueError(f"A game needs exactly two players, got {len(players)}")
        if players[0].color == players[1].color:
            raise ValueError("Players must have different colors")
        if board_size < 4 or board_size % 2:
            raise ValueError(f"Board size must be an even number >= 4, got {board_size}")

        self._board = Board(board_size)
        self._generator = MoveGenerator(self._board)
        self._players: tuple[Player, Player] = (players[0], players[1])
        self._current = self._player_of(FIRST_COLOR)
        self._winner: Player | None = None
        self._phase = GamePhase.NOT_STARTED
        self._player_pieces: dict[Color, dict[int, Piece]] = {c: {} for c in Color}
        # color -> movable pieces, valid until the board next changes
        self._movable: dict[Color, list[tuple[Piece, Position]]] = {}
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def players(self) -> tuple[Player, Player]:
        return self._players

    @property
    def current_player(self) -> Player:
        return self._current

    @property
    def winner(self) -> Player | None:
        return self._winner

    @property
    def phase(self) -> GamePhase:
        return self._phase

    def player_pieces(self) -> dict[Player, list[Piece]]:
        """Snapshot of each player's remaining pieces."""
        return {
            player: list(self._player_pieces[player.color].values())
            for player in self._players
        }

    def piece_at(self, position: Position) -> Piece | None:
        if not self._board.is_inside(position):
            return None
        return self._board[position]

    def opponent_of(self, player: Player) -> Player:
        return self._player_of(player.color.opposite)

    # ── IGameEngine impl ─────────────────────────────────────────────────

    def start(self, layout: str | None = None, to_move: Color | None = None) -> None:
        """Set up a fresh game, from the standard opening or a text *layout*.

        Calling it again restarts from scratch: the board and both piece sets
        are rebuilt, so pieces handed out earlier are no longer in play.
        """
        size, placements = parse_layout(
            layout if layout is not None else starting_layout(self._board.size)
        )
        if size != self._board.size:
            raise ValueError(
                f"Layout is {size}x{size}, board is {self._board.size}x{self._board.size}"
            )

        self._board.clear()
        self._player_pieces = {c: {} for c in Color}
        self._movable.clear()
        for piece_id, (position, color, piece_type) in enumerate(placements, start=1):
            piece = Piece(piece_id, color, piece_type)
            self._board.place(piece, position)
            self._player_pieces[color][piece.id] = piece

        self._current = self._player_of(to_move if to_move is not None else FIRST_COLOR)
        self._winner = None
        self._phase = GamePhase.AWAITING_MOVE
        _LOGGER.info(
            "Game started on %dx%d board: %d black, %d white, %s to move",
            size,
            size,
            len(self._player_pieces[Color.BLACK]),
            len(self._player_pieces[Color.WHITE]),
            self._current,
        )

    def movable_pieces(self, player: Player) -> list[tuple[Piece, Position]]:
        """Pieces *player* may move, computed once per board state."""
        color = player.color
        if color not in self._movable:
            self._movable[color] = self._generator.movable_pieces(color)
        return list(self._movable[color])

    def legal_moves(self, piece: Piece) -> list[Path]:
        """Paths *piece* may play right now.

        Empty unless the game is in progress, *piece* belongs to the side to
        move and the side-wide forced-capture rule leaves it movable, so every
        returned path is accepted by :meth:`move_piece`.
        """
        if self._phase != GamePhase.AWAITING_MOVE:
            return []
        if piece.color != self._current.color:
            return []
        if not any(p is piece for p, _ in self.movable_pieces(self._current)):
            return []
        return self._generator.legal_moves(piece)

    def validate_move(self, piece: Piece, path: Sequence[Position]) -> MoveRejection | None:
        if self._phase != GamePhase.AWAITING_MOVE:
            return MoveRejection.GAME_NOT_IN_PROGRESS
        if (
            self._board.position_of(piece) is None
            or self._player_pieces[piece.color].get(piece.id) is not piece
        ):
            return MoveRejection.INVALID_PIECE_REFERENCE
        if piece.color != self._current.color:
            return MoveRejection.WRONG_TURN
        if not all(self._board.is_inside(p) for p in path):
            return MoveRejection.OUT_OF_BOUNDS
        if tuple(path) not in self.legal_moves(piece):
            return MoveRejection.ILLEGAL_PATH
        return None

    def move_piece(self, piece: Piece, path: Sequence[Position]) -> list[GameEvent]:
        """Play *path* with *piece*.

        Refused moves change nothing and return an empty list. A committed
        move returns its events: one :class:`PieceCaptured` per jump, then at
        most one :class:`PiecePromoted`, then the :class:`TurnChanged`.
        """
        rejection = self.validate_move(piece, path)
        if rejection is not None:
            _LOGGER.debug(
                "Rejected move of piece #%d along %s: %s",
                piece.id,
                [str(p) for p in path],
                rejection.name,
            )
            return []

        origin = self._board.position_of(piece)
        assert origin is not None
        emitted: list[GameEvent] = []

        current = origin
        for hop in path:
            if abs(hop.x - current.x) == 2:
                captured_at = current.midpoint(hop)
                captured = self._remove_piece(captured_at)
                emitted.append(PieceCaptured(captured, captured_at))
            self._board.relocate(piece, hop)
            current = hop
        self._movable.clear()

        # Promotion is only decided where the move ends.
        if not piece.is_king and current.y == piece.color.promotion_row(
            self._board.size
        ):
            piece.promote()
            emitted.append(PiecePromoted(piece, current))
            _LOGGER.info("Piece #%d promoted to king on %s", piece.id, current)

        emitted.append(self._advance_turn())

        for event in emitted:
            self._emit(event)
        self.check_win()
        return emitted

    def switch_player(self) -> TurnChanged:
        """Hand the turn to the other player and notify listeners."""
        event = self._advance_turn()
        self._emit(event)
        return event

    def check_win(self) -> Player | None:
        """Decide the winner, if any.

        The side to move loses when it has no movable piece; otherwise a
        side with no pieces left loses.
        """
        if self._phase == GamePhase.NOT_STARTED:
            return None

        winner: Player | None = None
        if not self.movable_pieces(self._current):
            winner = self.opponent_of(self._current)
        else:
            for player in self._players:
                if not self._player_pieces[player.color]:
                    winner = self.opponent_of(player)
                    break

        was_over = self._phase == GamePhase.GAME_OVER
        self._winner = winner
        self._phase = GamePhase.GAME_OVER if winner is not None else GamePhase.AWAITING_MOVE

        if winner is not None and not was_over:
            _LOGGER.info("Game over: %s wins", winner)
            for cb in self.events.on_game_over:
                cb(winner)
        return winner

    # ── Internal helpers ─────────────────────────────────────────────────

    def _player_of(self, color: Color) -> Player:
        for player in self._players:
            if player.color == color:
                return player
        raise ValueError(f"No player plays {color}")

    def _advance_turn(self) -> TurnChanged:
        self._current = self.opponent_of(self._current)
        return TurnChanged(self._current)

    def _remove_piece(self, position: Position) -> Piece:
        """Take the piece on *position* off the board and out of its piece set."""
        piece = self._board.remove(position)
        if piece is None:
            raise ValueError(f"No piece to capture on {position}")
        del self._player_pieces[piece.color][piece.id]
        return piece

    def _emit(self, event: GameEvent) -> None:
        if isinstance(event, PieceCaptured):
            for cb in self.events.on_piece_captured:
                cb(event)
        elif isinstance(event, PiecePromoted):
            for cb in self.events.on_piece_promoted:
                cb(event)
        else:
            for cb in self.events.on_turn_changed:
                cb(event)
