"""Legal move generation: single steps and maximal capture chains."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from checkie.core.enums import Color
from checkie.core.piece import Piece
from checkie.core.types import ALL_DIRECTIONS, Direction, Path, Position

if TYPE_CHECKING:
    from checkie.core.board import Board

_LOGGER = logging.getLogger(__name__)

_FORWARD_DIRECTIONS: dict[Color, tuple[Direction, ...]] = {
    color: tuple(d for d in ALL_DIRECTIONS if d.dy == color.forward) for color in Color
}


class MoveGenerator:
    """Computes normal moves and capture chains on a :class:`Board`.

    The jump search relocates the moving piece on the board while it
    explores a chain, but always restores it before returning.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def normal_moves(self, piece: Piece, position: Position) -> list[Position]:
        """Empty diagonal neighbours *piece* may step to.

        No forced-capture filtering happens here.
        """
        board = self._board
        moves: list[Position] = []
        for direction in self._step_directions(piece):
            target = position.shifted(*direction.move)
            if board.is_inside(target) and board.is_empty(target):
                moves.append(target)
        return moves

    def jump_paths(self, piece: Piece, position: Position) -> list[Path]:
        """Every complete capture chain *piece* can make from *position*.

        A path lists the landing squares in order. It is complete when no
        further capture is possible from its last square, so shorter
        prefixes of a longer chain are never reported.
        """
        paths: list[Path] = []
        self._explore(piece, position, [], set(), set(), paths)
        return paths

    def legal_moves(self, piece: Piece) -> list[Path]:
        """Paths *piece* may play when considered on its own.

        Captures are mandatory: if any chain exists, only the longest ones
        are returned (all of them on a tie). Otherwise each normal step is
        a one-square path.
        """
        position = self._board.position_of(piece)
        if position is None:
            return []

        jumps = self.jump_paths(piece, position)
        if jumps:
            longest = max(len(path) for path in jumps)
            return [path for path in jumps if len(path) == longest]

        return [(target,) for target in self.normal_moves(piece, position)]

    def max_chain_length(self, piece: Piece) -> int:
        """Number of captures in *piece*'s longest chain, 0 if it cannot capture."""
        position = self._board.position_of(piece)
        if position is None:
            return 0
        return max((len(p) for p in self.jump_paths(piece, position)), default=0)

    def movable_pieces(self, color: Color) -> list[tuple[Piece, Position]]:
        """Pieces *color* may move this turn, with their squares.

        Forced capture applies across the whole side: when any piece can
        capture, only the pieces whose longest chain matches the side-wide
        maximum are movable.
        """
        owned = self._board.pieces(color)

        chain_lengths: list[int] = []
        for piece, position in owned:
            paths = self.jump_paths(piece, position)
            chain_lengths.append(max((len(p) for p in paths), default=0))

        longest = max(chain_lengths, default=0)
        if longest > 0:
            movable = [
                entry
                for entry, length in zip(owned, chain_lengths)
                if length == longest
            ]
            _LOGGER.debug(
                "%s must capture: %d piece(s) with %d-jump chains",
                color,
                len(movable),
                longest,
            )
            return movable

        return [
            (piece, position)
            for piece, position in owned
            if self.normal_moves(piece, position)
        ]

    # -- Internals ----------------------------------------------------------

    @staticmethod
    def _step_directions(piece: Piece) -> tuple[Direction, ...]:
        if piece.is_king:
            return ALL_DIRECTIONS
        return _FORWARD_DIRECTIONS[piece.color]

    def _explore(
        self,
        piece: Piece,
        current: Position,
        path: list[Position],
        consumed: set[int],
        landed: set[Position],
        paths: list[Path],
    ) -> None:
        board = self._board
        extended = False

        # Men step forward only but capture along every diagonal.
        for direction in ALL_DIRECTIONS:
            landing = current.shifted(*direction.jump)
            if not board.is_inside(landing) or landing in landed:
                continue

            victim = board[current.shifted(*direction.move)]
            if victim is None or victim.color == piece.color or victim.id in consumed:
                continue

            # The mover itself stands on ``current``, so its origin is free.
            if not board.is_empty(landing):
                continue

            extended = True
            consumed.add(victim.id)
            landed.add(landing)
            path.append(landing)
            board.relocate(piece, landing)
            try:
                self._explore(piece, landing, path, consumed, landed, paths)
            finally:
                board.relocate(piece, current)
                path.pop()
                landed.discard(landing)
                consumed.discard(victim.id)

        if not extended and path:
            paths.append(tuple(path))
