"""Terminal rendering and the interactive console game loop."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from checkie.core.board import Board
from checkie.core.events import GameEvent
from checkie.core.types import Path, Position
from checkie.game.engine import GameEngine
from checkie.service.service import describe_event

_HIGHLIGHT = "*"
_DARK = "."
_LIGHT = " "

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def render_board(board: Board, highlights: Iterable[Position] = ()) -> str:
    """Board as text. Squares are numbered 1-based, like the prompts."""
    marked = set(highlights)
    size = board.size
    header = "    " + " ".join(f"{x + 1:>2}" for x in range(size))
    lines = [header]
    for y in range(size):
        row: list[str] = []
        for x in range(size):
            position = Position(x, y)
            piece = board[position]
            if piece is not None:
                mark = str(piece)
            elif position in marked:
                mark = _HIGHLIGHT
            elif (x + y) % 2:
                mark = _DARK
            else:
                mark = _LIGHT
            row.append(f"{mark:>2}")
        lines.append(f"{y + 1:>2} |" + " ".join(row) + " |")
    return "\n".join(lines)


def render_status(engine: GameEngine) -> str:
    parts = []
    for player, pieces in engine.player_pieces().items():
        parts.append(f"{player.name} ({player.color}): {len(pieces)} pieces")
    line = " | ".join(parts)
    if engine.winner is not None:
        return f"{line}\n{engine.winner.name} ({engine.winner.color}) WINS!"
    current = engine.current_player
    return f"{line}\n{current.name}'s turn ({current.color})"


def format_path(path: Path) -> str:
    return " -> ".join(f"({p.x + 1},{p.y + 1})" for p in path)


def _choose(prompt: str, count: int, read: InputFn, write: OutputFn) -> int:
    """Ask for a 1-based choice until a valid one is given."""
    while True:
        raw = read(prompt).strip()
        if raw.isdigit() and 1 <= int(raw) <= count:
            return int(raw) - 1
        write(f"Invalid selection. Enter a number from 1 to {count}.")


def play_turn(engine: GameEngine, read: InputFn, write: OutputFn) -> list[GameEvent]:
    """Let the current player pick a piece and a path, then play it."""
    movable = engine.movable_pieces(engine.current_player)
    for index, (piece, position) in enumerate(movable, start=1):
        write(f"{index}. {piece.piece_type} at ({position.x + 1},{position.y + 1})")
    piece, _ = movable[_choose("Select piece: ", len(movable), read, write)]

    paths = engine.legal_moves(piece)
    write(render_board(engine.board, (path[-1] for path in paths)))
    for index, path in enumerate(paths, start=1):
        write(f"{index}. {format_path(path)}")
    path = paths[_choose("Select move: ", len(paths), read, write)]

    events = engine.move_piece(piece, path)
    for event in events:
        write(describe_event(event))
    return events


def run_console_game(
    engine: GameEngine,
    read: InputFn = input,
    write: OutputFn = print,
) -> None:
    """Play *engine* to the end in the terminal. The engine must be started."""
    while engine.check_win() is None:
        write(render_board(engine.board))
        write(render_status(engine))
        play_turn(engine, read, write)

    write(render_board(engine.board))
    write(render_status(engine))
    write("Thanks for playing Checkie!")
