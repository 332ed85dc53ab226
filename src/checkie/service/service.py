"""GameService — request-level operations over the stored game.

Validates raw client input, translates it into engine calls and maps
refused moves to user-facing error messages.
"""

from __future__ import annotations

import logging
from typing import Annotated

from pydantic import BeforeValidator, StringConstraints, TypeAdapter, ValidationError

from checkie.core.enums import Color
from checkie.core.events import GameEvent, PieceCaptured, PiecePromoted
from checkie.core.player import Player
from checkie.game.engine import GameEngine
from checkie.game.interfaces import MoveRejection
from checkie.service.dto import (
    AvailablePieceDto,
    BoardDto,
    GameDto,
    MoveDto,
    PieceDto,
    PlayerDto,
    PositionDto,
)
from checkie.service.result import Result
from checkie.service.store import GameStore

_LOGGER = logging.getLogger(__name__)

GAME_NOT_STARTED = "Game not started"
INVALID_PIECE = "Invalid piece"
INVALID_MOVE = "Invalid move"


def _color_from_name(raw: object) -> Color:
    name = raw.strip().upper() if isinstance(raw, str) else ""
    if name not in Color.__members__:
        raise ValueError(f"Unknown color: {raw!r}")
    return Color[name]


# Case-insensitive color name, e.g. "white" -> Color.WHITE
_COLOR_NAME = TypeAdapter(Annotated[Color, BeforeValidator(_color_from_name)])
_PLAYER_NAME = TypeAdapter(
    Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
)


def describe_event(event: GameEvent) -> str:
    """One-line notification text for an engine event (1-based squares)."""
    if isinstance(event, PieceCaptured):
        p, pos = event.piece, event.position
        return (
            f"Piece Captured! {p.color.name.title()} {p.piece_type.name.title()} "
            f"({pos.x + 1},{pos.y + 1}) was removed from the board."
        )
    if isinstance(event, PiecePromoted):
        p, pos = event.piece, event.position
        return (
            f"Piece Promoted! {p.color.name.title()} piece "
            f"({pos.x + 1},{pos.y + 1}) has become a King!"
        )
    player = event.player
    return f"Turn switched to {player.name} ({player.color.name.title()})"


class GameService:
    """Start games, list a piece's paths and play moves for remote clients."""

    __slots__ = ("_store", "_board_size")

    def __init__(self, store: GameStore | None = None, board_size: int = 8) -> None:
        self._store = store if store is not None else GameStore()
        self._board_size = board_size

    @property
    def store(self) -> GameStore:
        return self._store

    def start(self, players: list[PlayerDto]) -> Result[GameDto]:
        if len(players) != 2:
            return Result.failure("Invalid number of players")

        names: list[str] = []
        for index, dto in enumerate(players, start=1):
            try:
                names.append(_PLAYER_NAME.validate_python(dto.name))
            except ValidationError:
                return Result.failure(f"Invalid name for Player {index}")
        if names[0] == names[1]:
            return Result.failure("Players must have different names")

        colors: list[Color] = []
        for index, dto in enumerate(players, start=1):
            try:
                colors.append(_COLOR_NAME.validate_python(dto.color))
            except ValidationError:
                return Result.failure(f"Invalid color for Player {index}")
        if colors[0] == colors[1]:
            return Result.failure("Players must have different colors")

        engine = GameEngine(
            [Player(colors[0], names[0]), Player(colors[1], names[1])],
            board_size=self._board_size,
        )
        with self._store.lock:
            engine.start()
            self._store.game = engine
            self._store.game_dto = GameDto()
            self._refresh()
            return Result.success(self._store.game_dto)

    def available_moves(self, position: PositionDto) -> Result[list[list[PositionDto]]]:
        with self._store.lock:
            game = self._store.game
            if game is None:
                return Result.failure(GAME_NOT_STARTED)

            piece = game.piece_at(position.to_position())
            if piece is None or piece.color != game.current_player.color:
                return Result.failure(INVALID_PIECE)

            paths = game.legal_moves(piece)
            if not paths:
                return Result.failure(INVALID_PIECE)
            return Result.success(
                [[PositionDto.of(p) for p in path] for path in paths]
            )

    def move_piece(self, move: MoveDto) -> Result[GameDto]:
        with self._store.lock:
            game = self._store.game
            if game is None:
                return Result.failure(GAME_NOT_STARTED)

            piece = game.piece_at(move.position.to_position())
            path = tuple(p.to_position() for p in move.path)
            if piece is None or not path:
                return Result.failure(INVALID_MOVE)

            rejection = game.validate_move(piece, path)
            if rejection is not None:
                _LOGGER.debug("Move refused: %s", rejection.name)
                return Result.failure(_rejection_message(rejection))

            dto = self._store.game_dto
            dto.notifications.clear()
            events = game.move_piece(piece, path)
            dto.notifications.extend(describe_event(e) for e in events)
            self._refresh()
            return Result.success(dto)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _refresh(self) -> None:
        """Rebuild the denormalised view from the engine."""
        game = self._store.game
        assert game is not None
        dto = self._store.game_dto

        winner = game.check_win()
        if winner is not None:
            dto.notifications.append(
                f"{winner.name} ({winner.color.name.title()}) WINS!"
            )

        current = game.current_player
        dto.board = BoardDto.of(game.board)
        dto.players = [PlayerDto.of(p) for p in game.players]
        dto.current_player = PlayerDto.of(current)
        dto.winner = PlayerDto.of(winner) if winner is not None else None
        dto.available_pieces = [
            AvailablePieceDto(position=PositionDto.of(position), piece=PieceDto.of(piece))
            for piece, position in game.movable_pieces(current)
        ]


def _rejection_message(rejection: MoveRejection) -> str:
    if rejection == MoveRejection.GAME_NOT_IN_PROGRESS:
        return "Game is over"
    return INVALID_MOVE
