"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from checkie.core.enums import Color
from checkie.core.player import Player
from checkie.game.engine import GameEngine

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


def _is_ui_test(request: pytest.FixtureRequest) -> bool:
    return "ui" in Path(str(request.node.fspath)).parts


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for Qt tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _ensure_qapp_for_ui(request: pytest.FixtureRequest) -> Iterator[None]:
    """UI tests always run with a QApplication alive."""
    if _is_ui_test(request):
        request.getfixturevalue("qapp")
    yield


@pytest.fixture
def players() -> tuple[Player, Player]:
    return (Player(Color.BLACK, "Alice"), Player(Color.WHITE, "Bob"))


@pytest.fixture
def make_engine(
    players: tuple[Player, Player],
) -> Callable[..., GameEngine]:
    """Factory for a started engine, optionally from a custom layout."""

    def _make(
        text: str | None = None,
        to_move: Color | None = None,
        board_size: int = 8,
    ) -> GameEngine:
        engine = GameEngine(players, board_size=board_size)
        engine.start(text, to_move)
        return engine

    return _make
