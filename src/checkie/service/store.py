"""In-process holder for the active game."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from checkie.game.engine import GameEngine
from checkie.service.dto import GameDto


@dataclass
class GameStore:
    """The active engine, its transport view and the lock guarding both.

    A :class:`GameEngine` is not safe for concurrent callers, so every
    read-modify-write of ``game`` or ``game_dto`` happens under ``lock``.
    """

    game: GameEngine | None = None
    game_dto: GameDto = field(default_factory=GameDto)
    lock: threading.RLock = field(default_factory=threading.RLock)
