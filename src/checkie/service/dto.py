"""Transport objects exchanged with the request/response layer.

Fields are snake_case in Python and camelCase on the wire: serialise with
``model_dump(by_alias=True)``. Either spelling is accepted on input.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from checkie.core.board import Board
from checkie.core.piece import Piece
from checkie.core.player import Player
from checkie.core.types import Position


class _Dto(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PositionDto(_Dto):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    @classmethod
    def of(cls, position: Position) -> PositionDto:
        return cls(x=position.x, y=position.y)

    def to_position(self) -> Position:
        return Position(self.x, self.y)


class PieceDto(_Dto):
    model_config = ConfigDict(frozen=True)

    color: str
    type: str

    @classmethod
    def of(cls, piece: Piece) -> PieceDto:
        return cls(color=piece.color.name.title(), type=piece.piece_type.name.title())


class PlayerDto(_Dto):
    model_config = ConfigDict(frozen=True)

    name: str
    color: str

    @classmethod
    def of(cls, player: Player) -> PlayerDto:
        return cls(name=player.name, color=player.color.name.title())


class CellDto(_Dto):
    model_config = ConfigDict(frozen=True)

    position: PositionDto
    piece: PieceDto | None = None


class BoardDto(_Dto):
    size: int = 0
    cells: list[CellDto] = Field(default_factory=list)

    @classmethod
    def of(cls, board: Board) -> BoardDto:
        return cls(
            size=board.size,
            cells=[
                CellDto(
                    position=PositionDto.of(cell.position),
                    piece=PieceDto.of(cell.piece) if cell.piece is not None else None,
                )
                for cell in board.cells()
            ],
        )


class AvailablePieceDto(_Dto):
    model_config = ConfigDict(frozen=True)

    position: PositionDto
    piece: PieceDto


class MoveDto(_Dto):
    """A move request: the square of the piece and the chosen path."""

    position: PositionDto
    path: list[PositionDto] = Field(default_factory=list)


class GameDto(_Dto):
    """Denormalised view of the active game."""

    board: BoardDto = Field(default_factory=BoardDto)
    players: list[PlayerDto] = Field(default_factory=list)
    current_player: PlayerDto | None = None
    winner: PlayerDto | None = None
    available_pieces: list[AvailablePieceDto] = Field(default_factory=list)
    notifications: list[str] = Field(default_factory=list)
