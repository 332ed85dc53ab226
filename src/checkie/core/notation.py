"""Text layouts for draughts positions.

A layout is one line per board row, top row (``y == 0``) first. Spaces are
ignored, ``.`` marks an empty square, ``b``/``w`` a black/white man and
``B``/``W`` a king::

    . b . b . b . b
    b . b . b . b .
    . b . b . b . b
    . . . . . . . .
    . . . . . . . .
    w . w . w . w .
    . w . w . w . w
    w . w . w . w .
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from checkie.core.enums import Color, PieceType
from checkie.core.piece import PIECE_CHARS
from checkie.core.types import DEFAULT_BOARD_SIZE, Position, is_playable_square

if TYPE_CHECKING:
    from checkie.core.board import Board

EMPTY_CHAR = "."

Placement = tuple[Position, Color, PieceType]


def rows_per_side(size: int) -> int:
    """Rows each side fills at the start, leaving a two-row gap in the middle."""
    return (size - 2) // 2


def starting_layout(size: int = DEFAULT_BOARD_SIZE) -> str:
    """Standard opening layout for a ``size`` x ``size`` board."""
    filled = rows_per_side(size)
    lines: list[str] = []
    for y in range(size):
        if y < filled:
            mark = "b"
        elif y >= size - filled:
            mark = "w"
        else:
            mark = EMPTY_CHAR
        lines.append(
            " ".join(
                mark if is_playable_square(Position(x, y)) else EMPTY_CHAR
                for x in range(size)
            )
        )
    return "\n".join(lines)


def parse_layout(text: str) -> tuple[int, list[Placement]]:
    """Parse a layout into ``(board_size, placements)``.

    Raises:
        ValueError: on a non-square grid, unknown characters or a piece on
            a light square.
    """
    rows = ["".join(line.split()) for line in text.strip().splitlines()]
    rows = [row for row in rows if row]
    size = len(rows)
    if size == 0:
        raise ValueError("Empty layout")

    placements: list[Placement] = []
    for y, row in enumerate(rows):
        if len(row) != size:
            raise ValueError(
                f"Layout row {y} has {len(row)} squares, expected {size}"
            )
        for x, char in enumerate(row):
            if char == EMPTY_CHAR:
                continue
            try:
                color, ptype = PIECE_CHARS[char]
            except KeyError:
                raise ValueError(f"Invalid layout character: {char!r}") from None
            position = Position(x, y)
            if not is_playable_square(position):
                raise ValueError(f"Piece {char!r} placed on light square {position}")
            placements.append((position, color, ptype))
    return size, placements


def layout_to_text(board: Board) -> str:
    """Serialise the board back into layout form."""
    lines: list[str] = []
    for y in range(board.size):
        marks = []
        for x in range(board.size):
            piece = board[Position(x, y)]
            marks.append(str(piece) if piece is not None else EMPTY_CHAR)
        lines.append(" ".join(marks))
    return "\n".join(lines)
