"""Core enumerations for the draughts domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color. BLACK starts on the low rows and moves first."""

    BLACK = 0
    WHITE = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Row delta of a man's step (+1 = toward higher ``y``)."""
        return 1 if self is Color.BLACK else -1

    def promotion_row(self, board_size: int) -> int:
        """Row farthest from this side's starting edge."""
        return board_size - 1 if self is Color.BLACK else 0

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Man or king. A man becomes a king at most once."""

    MAN = 0
    KING = 1

    def __str__(self) -> str:
        return self.name.lower()
