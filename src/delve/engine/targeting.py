from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

from ..world.entities import PLAYER
from .interfaces import InputSource, KeyEvent, MouseEvent, Renderer, ViewState, Visibility

if TYPE_CHECKING:
    from ..game.state import World

logger = logging.getLogger(__name__)

CANCEL_KEYS = frozenset({"escape"})


class InteractiveTargeter:
    """Runs the render/poll loop until the player picks a tile or cancels.

    A left click is accepted only inside the field of view and, when a range is
    given, within that distance of the player. A right click or Escape cancels.
    The loop waits indefinitely; there is no timeout.
    """

    def __init__(self, world: "World", visibility: Visibility, renderer: Renderer, input_source: InputSource) -> None:
        self.world = world
        self.visibility = visibility
        self.renderer = renderer
        self.input_source = input_source

    def tile(self, max_range: Optional[float] = None) -> Optional[Tuple[int, int]]:
        game_map = self.world.map
        while True:
            self.renderer.render(ViewState(world=self.world, visibility=self.visibility, targeting=True))
            event = self.input_source.poll()
            if event is None:
                continue
            if isinstance(event, KeyEvent):
                if event.key in CANCEL_KEYS:
                    logger.debug("Targeting cancelled by key %s", event.key)
                    return None
                continue
            if isinstance(event, MouseEvent):
                if event.right:
                    logger.debug("Targeting cancelled by right click")
                    return None
                x, y = event.cx, event.cy
                in_fov = game_map.in_bounds(x, y) and self.visibility.is_in_fov(x, y)
                in_range = max_range is None or self.world.player.distance(x, y) <= max_range
                if event.left and in_fov and in_range:
                    return (x, y)

    def monster(self, max_range: Optional[float] = None) -> Optional[int]:
        while True:
            picked = self.tile(max_range)
            if picked is None:
                return None
            for index, entity in self.world.entities.enumerate():
                if index != PLAYER and entity.fighter is not None and entity.pos == picked:
                    return index


class CancellingTargeter:
    """Targeter for front ends without a pointer: every request is cancelled."""

    def tile(self, max_range: Optional[float] = None) -> Optional[Tuple[int, int]]:
        return None

    def monster(self, max_range: Optional[float] = None) -> Optional[int]:
        return None


class FixedChooser:
    """Chooser that always answers with the same option and confirms it.

    Confirmation prompts (two options, "no"/"yes") are always answered "yes".
    """

    def __init__(self, option: int = 0) -> None:
        self.option = option

    def choose(self, prompt: str, options: Sequence[str]) -> Optional[int]:
        if list(options) == ["no", "yes"]:
            return 1
        return min(self.option, len(options) - 1)


__all__ = ["InteractiveTargeter", "CancellingTargeter", "FixedChooser"]
