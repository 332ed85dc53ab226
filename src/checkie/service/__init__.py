"""Request/response service layer over a stored game."""

from checkie.service.dto import (
    AvailablePieceDto,
    BoardDto,
    CellDto,
    GameDto,
    MoveDto,
    PieceDto,
    PlayerDto,
    PositionDto,
)
from checkie.service.result import Result
from checkie.service.service import GameService, describe_event
from checkie.service.store import GameStore

__all__ = [
    "AvailablePieceDto",
    "BoardDto",
    "CellDto",
    "GameDto",
    "GameService",
    "GameStore",
    "MoveDto",
    "PieceDto",
    "PlayerDto",
    "PositionDto",
    "Result",
    "describe_event",
]
