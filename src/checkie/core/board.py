"""Board - piece placement on a square draughts board."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from checkie.core.enums import Color
from checkie.core.piece import Piece
from checkie.core.types import (
    DEFAULT_BOARD_SIZE,
    Position,
    is_inside_board,
    is_playable_square,
)


@dataclass(slots=True)
class Cell:
    """One square of the grid and the piece standing on it, if any."""

    position: Position
    piece: Piece | None = None

    @property
    def is_empty(self) -> bool:
        return self.piece is None


class Board:
    """Fixed-size grid of cells with an incremental piece-id -> square index.

    The board is the only owner of piece placement: every mutation goes
    through :meth:`place`, :meth:`remove` or :meth:`relocate`, which keep the
    cells and the index consistent.
    """

    __slots__ = ("_size", "_cells", "_positions")

    def __init__(self, size: int = DEFAULT_BOARD_SIZE) -> None:
        if size < 2:
            raise ValueError(f"Board size must be at least 2, got {size}")
        self._size = size
        # [y][x] -> Cell
        self._cells: list[list[Cell]] = [
            [Cell(Position(x, y)) for x in range(size)] for y in range(size)
        ]
        # piece id -> square currently holding it
        self._positions: dict[int, Position] = {}

    @property
    def size(self) -> int:
        return self._size

    # -- Element access -----------------------------------------------------

    def __getitem__(self, position: Position) -> Piece | None:
        return self.cell(position).piece

    def cell(self, position: Position) -> Cell:
        if not self.is_inside(position):
            raise IndexError(f"{position} is outside a {self._size}x{self._size} board")
        return self._cells[position.y][position.x]

    def is_inside(self, position: Position) -> bool:
        return is_inside_board(position, self._size)

    def is_empty(self, position: Position) -> bool:
        return self.cell(position).piece is None

    # -- Query helpers ------------------------------------------------------

    def position_of(self, piece: Piece) -> Position | None:
        """Square holding *piece* (by identity), or None if it is off the board."""
        position = self._positions.get(piece.id)
        if position is None or self.cell(position).piece is not piece:
            return None
        return position

    def pieces(self, color: Color) -> list[tuple[Piece, Position]]:
        """*color*'s pieces with their squares, scanned row by row."""
        found: list[tuple[Piece, Position]] = []
        for position in sorted(self._positions.values(), key=lambda p: p.row_major):
            piece = self.cell(position).piece
            if piece is not None and piece.color == color:
                found.append((piece, position))
        return found

    def cells(self) -> Iterator[Cell]:
        """All cells, row by row."""
        for row in self._cells:
            yield from row

    def count(self, color: Color) -> int:
        return sum(1 for piece, _ in self.pieces(color))

    # -- Mutation -----------------------------------------------------------

    def place(self, piece: Piece, position: Position) -> None:
        """Put a piece that is not yet on the board onto an empty dark square."""
        if not is_playable_square(position):
            raise ValueError(f"Pieces only stand on dark squares, not {position}")
        cell = self.cell(position)
        if cell.piece is not None:
            raise ValueError(f"Square {position} is already occupied")
        if piece.id in self._positions:
            raise ValueError(f"Piece #{piece.id} is already on the board")
        cell.piece = piece
        self._positions[piece.id] = position

    def remove(self, position: Position) -> Piece | None:
        """Lift whatever stands on *position* off the board."""
        cell = self.cell(position)
        piece = cell.piece
        if piece is None:
            return None
        cell.piece = None
        del self._positions[piece.id]
        return piece

    def relocate(self, piece: Piece, to: Position) -> None:
        """Move *piece* to the empty square *to*."""
        origin = self.position_of(piece)
        if origin is None:
            raise ValueError(f"Piece #{piece.id} is not on the board")
        target = self.cell(to)
        if target.piece is not None:
            raise ValueError(f"Square {to} is already occupied")
        self.cell(origin).piece = None
        target.piece = piece
        self._positions[piece.id] = to

    def clear(self) -> None:
        for cell in self.cells():
            cell.piece = None
        self._positions.clear()

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for y, row in enumerate(self._cells):
            marks = " ".join(str(c.piece) if c.piece else "." for c in row)
            rows.append(f"{y} {marks}")
        rows.append("  " + " ".join(str(x) for x in range(self._size)))
        return "\n".join(rows)
