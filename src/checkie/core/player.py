"""Player entity."""

from __future__ import annotations

from checkie.core.enums import Color


class Player:
    """A participant identified by a unique, immutable color.

    Players compare by identity so two engines never confuse each other's
    participants, even when names collide.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Player({self._color.name}, {self._name!r})"

    def __str__(self) -> str:
        return f"{self._name} ({self._color})"
