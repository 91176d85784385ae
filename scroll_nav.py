"""
scroll_nav.py

Scroll-aware navigation bar and its ambient-audio toggle.

* Scrolling down hides the bar, scrolling up brings it back, both with the
  floating treatment; at the very top it is shown without floating.
* A sample equal to the previous one (away from the top) changes nothing.
* The audio toggle flips playback and the indicator bars together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional

log = logging.getLogger(__name__)


class Direction(Enum):
    AT_TOP    = "at_top"
    DOWN      = "down"
    UP        = "up"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class ScrollState:
    current_y: float = 0
    last_y: float = 0
    direction: Direction = Direction.AT_TOP
    is_visible: bool = True
    is_floating: bool = False


@dataclass(frozen=True)
class AudioState:
    is_playing: bool = False
    indicator_active: bool = False


@dataclass(frozen=True)
class NavOutput:
    is_visible: bool
    is_floating: bool
    is_playing: bool
    indicator_active: bool


# ── reducers ────────────────────────────────────────────────────────────────
def scroll_sample(state: ScrollState, y: float) -> ScrollState:
    """Evaluate one scroll sample against the previous one; y is not validated."""
    if y == 0:
        direction, visible, floating = Direction.AT_TOP, True, False
    elif y > state.last_y:
        direction, visible, floating = Direction.DOWN, False, True
    elif y < state.last_y:
        direction, visible, floating = Direction.UP, True, True
    else:
        direction, visible, floating = (Direction.UNCHANGED,
                                        state.is_visible, state.is_floating)
    return replace(state, current_y=y, last_y=y, direction=direction,
                   is_visible=visible, is_floating=floating)


def toggle_audio(state: AudioState) -> AudioState:
    return AudioState(is_playing=not state.is_playing,
                      indicator_active=not state.indicator_active)


# ── controller ──────────────────────────────────────────────────────────────
class ScrollNav:
    def __init__(self, effects=None):
        self._state = ScrollState()
        self._audio = AudioState()
        self._effects = effects
        self._subscribers: List[Callable[[NavOutput], None]] = []
        self._last_output: Optional[NavOutput] = None

    @property
    def state(self) -> ScrollState:
        return self._state

    @property
    def audio(self) -> AudioState:
        return self._audio

    def output(self) -> NavOutput:
        return NavOutput(self._state.is_visible, self._state.is_floating,
                         self._audio.is_playing, self._audio.indicator_active)

    def subscribe(self, callback: Callable[[NavOutput], None]) -> Callable[[], None]:
        self._subscribers.append(callback)
        self._last_output = self.output()
        callback(self._last_output)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return unsubscribe

    def on_scroll(self, y: float) -> None:
        prev = self._state
        self._state = scroll_sample(prev, y)
        if self._effects is not None:
            self._effects.apply(prev, self._state)
        self._publish()

    def toggle_audio(self) -> None:
        self._audio = toggle_audio(self._audio)
        log.info("ambient audio %s", "on" if self._audio.is_playing else "off")
        self._publish()

    def _publish(self) -> None:
        out = self.output()
        if out == self._last_output:
            return
        self._last_output = out
        for cb in list(self._subscribers):
            cb(out)
