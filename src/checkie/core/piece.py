"""Piece entity."""

from __future__ import annotations

from dataclasses import dataclass

from checkie.core.enums import Color, PieceType

# Layout character <-> (Color, PieceType)
PIECE_CHARS: dict[str, tuple[Color, PieceType]] = {
    "b": (Color.BLACK, PieceType.MAN),
    "B": (Color.BLACK, PieceType.KING),
    "w": (Color.WHITE, PieceType.MAN),
    "W": (Color.WHITE, PieceType.KING),
}

_LAYOUT_CHARS: dict[tuple[Color, PieceType], str] = {
    v: k for k, v in PIECE_CHARS.items()
}


@dataclass(eq=False, slots=True)
class Piece:
    """A single checker.

    Unlike a value object, a piece keeps its identity for the whole game:
    the engine hands out the same instance every time, and ``piece_type``
    is mutated in place on promotion. Equality is therefore identity.
    """

    id: int
    color: Color
    piece_type: PieceType = PieceType.MAN

    @property
    def is_king(self) -> bool:
        return self.piece_type == PieceType.KING

    def promote(self) -> bool:
        """Crown a man. Returns False if the piece already is a king."""
        if self.is_king:
            return False
        self.piece_type = PieceType.KING
        return True

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Layout character (lowercase = man, uppercase = king)."""
        return _LAYOUT_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str, piece_id: int) -> Piece:
        """Create a piece from a layout character, e.g. 'W' -> white king."""
        try:
            color, ptype = PIECE_CHARS[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(piece_id, color, ptype)
