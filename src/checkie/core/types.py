"""Board geometry: positions, diagonal directions and bounds checks.

Coordinates are ``(x, y)`` with ``(0, 0)`` in the top-left corner; ``y``
grows downwards, so the "top" directions decrease ``y``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

DEFAULT_BOARD_SIZE = 8


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable board coordinate."""

    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)

    def midpoint(self, other: Position) -> Position:
        """Square halfway between two positions a jump apart."""
        return Position((self.x + other.x) // 2, (self.y + other.y) // 2)

    @property
    def row_major(self) -> tuple[int, int]:
        """Sort key scanning the board row by row."""
        return (self.y, self.x)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


Path: TypeAlias = tuple[Position, ...]


class Direction(Enum):
    """The four diagonals, each valued by its single-step ``(dx, dy)``."""

    TOP_LEFT = (-1, -1)
    TOP_RIGHT = (1, -1)
    BOTTOM_LEFT = (-1, 1)
    BOTTOM_RIGHT = (1, 1)

    @property
    def move(self) -> tuple[int, int]:
        """Offset of a one-square diagonal move."""
        return self.value

    @property
    def jump(self) -> tuple[int, int]:
        """Offset of the landing square of a capture."""
        dx, dy = self.value
        return (dx * 2, dy * 2)

    @property
    def dy(self) -> int:
        return self.value[1]


ALL_DIRECTIONS: tuple[Direction, ...] = tuple(Direction)


def is_inside_board(position: Position, size: int = DEFAULT_BOARD_SIZE) -> bool:
    """Whether *position* lies on a ``size`` x ``size`` board."""
    return 0 <= position.x < size and 0 <= position.y < size


def is_playable_square(position: Position) -> bool:
    """Dark squares, the only ones that ever hold a piece."""
    return (position.x + position.y) % 2 == 1
