from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, ConfigDict


class Transition(BaseModel):
    """A value that takes effect from ``level`` onwards."""

    model_config = ConfigDict(frozen=True)

    level: int
    value: int


def from_dungeon_level(table: Sequence[Transition], level: int) -> int:
    """Return the value of the last transition whose level is <= ``level``.

    Tables are ordered by ascending level; levels below the first entry yield 0.
    """
    for transition in reversed(table):
        if level >= transition.level:
            return transition.value
    return 0


def table(*pairs: tuple) -> list:
    """Shorthand for building a transition table from ``(level, value)`` pairs."""
    return [Transition(level=lvl, value=val) for lvl, val in pairs]


__all__ = ["Transition", "from_dungeon_level", "table"]
