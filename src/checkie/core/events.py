"""Domain events reported by a committed move, in the order they happen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from checkie.core.piece import Piece
    from checkie.core.player import Player
    from checkie.core.types import Position


@dataclass(frozen=True, slots=True)
class PieceCaptured:
    """An opponent piece was jumped and taken off *position*."""

    piece: Piece
    position: Position


@dataclass(frozen=True, slots=True)
class PiecePromoted:
    """A man finished its move on *position*, its promotion row."""

    piece: Piece
    position: Position


@dataclass(frozen=True, slots=True)
class TurnChanged:
    player: Player


GameEvent: TypeAlias = PieceCaptured | PiecePromoted | TurnChanged
