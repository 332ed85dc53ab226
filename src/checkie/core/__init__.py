"""Draughts rules: geometry, pieces, the board and move generation.

Quick start::

    from checkie.core import Board, MoveGenerator, Piece, Position, Color

    board = Board(8)
    piece = Piece(1, Color.BLACK)
    board.place(piece, Position(1, 2))
    gen = MoveGenerator(board)
    print(gen.legal_moves(piece))
"""

from checkie.core.board import Board, Cell
from checkie.core.enums import Color, PieceType
from checkie.core.events import GameEvent, PieceCaptured, PiecePromoted, TurnChanged
from checkie.core.move_generator import MoveGenerator
from checkie.core.notation import layout_to_text, parse_layout, starting_layout
from checkie.core.piece import Piece
from checkie.core.player import Player
from checkie.core.types import (
    ALL_DIRECTIONS,
    DEFAULT_BOARD_SIZE,
    Direction,
    Path,
    Position,
    is_inside_board,
    is_playable_square,
)

__all__ = [
    # Enums
    "Color",
    "PieceType",
    # Geometry
    "ALL_DIRECTIONS",
    "DEFAULT_BOARD_SIZE",
    "Direction",
    "Path",
    "Position",
    "is_inside_board",
    "is_playable_square",
    # Entities
    "Board",
    "Cell",
    "Piece",
    "Player",
    # Rules
    "MoveGenerator",
    # Events
    "GameEvent",
    "PieceCaptured",
    "PiecePromoted",
    "TurnChanged",
    # Notation
    "layout_to_text",
    "parse_layout",
    "starting_layout",
]
