"""
effects.py – tween side effects of the controllers.

Reducers never touch the tween engine.  After every state change a
controller hands (previous, current) to its effect layer, which decides
from the delta which commands to issue.  Each layer owns one
TweenContext: acquired by `activate()`, reverted by `deactivate()`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Optional, Tuple

import config
from hero_cycle import CycleState
from scroll_nav import ScrollState
from tween import TweenContext, TweenEngine

log = logging.getLogger(__name__)


# ── hero transition ────────────────────────────────────────────────────────
class CycleEffects:
    """
    On every user advance: reveal the transition clip and grow it from the
    preview square to the full frame while the preview scales back in from
    nothing.  Both tweens run together; a new advance reverts the running
    pair and starts over.
    """

    def __init__(self,
                 engine: TweenEngine,
                 frame_size: Tuple[int, int] = config.WINDOWED_SIZE,
                 on_play: Optional[Callable[[], None]] = None):
        self.engine     = engine
        self.frame_size = frame_size
        self.on_play    = on_play
        self._ctx: Optional[TweenContext] = None

    @property
    def active(self) -> bool:
        return self._ctx is not None

    def activate(self) -> None:
        if self._ctx is not None:
            return
        fw, fh = self.frame_size
        # resting layout of the two animated video elements
        self.engine.set(config.TRANSITION_TARGET, {
            "visibility": "hidden",
            "scale": 1.0,
            "width": config.PREVIEW_SIZE / fw,
            "height": config.PREVIEW_SIZE / fh,
        })
        self.engine.set(config.PREVIEW_TARGET, {"scale": 1.0})
        self._ctx = self.engine.context(revert_on_update=True)

    def deactivate(self) -> None:
        if self._ctx is None:
            return
        self._ctx.revert()
        self._ctx = None

    def apply(self, prev: CycleState, cur: CycleState) -> None:
        if self._ctx is None:
            return
        if not cur.has_transitioned or cur.active_index == prev.active_index:
            return
        self._ctx.run(self._transition)

    def _transition(self, ctx: TweenContext) -> None:
        ctx.set(config.TRANSITION_TARGET, {"visibility": "visible"})
        ctx.to(config.TRANSITION_TARGET,
               {"scale": 1.0, "width": 1.0, "height": 1.0},
               config.GROW_DURATION,
               ease=config.TRANSITION_EASE,
               on_start=self._start_playback)
        ctx.from_(config.PREVIEW_TARGET,
                  {"scale": 0.0},
                  config.SHRINK_DURATION,
                  ease=config.TRANSITION_EASE)

    def _start_playback(self) -> None:
        if self.on_play:
            self.on_play()


# ── nav slide / fade ───────────────────────────────────────────────────────
class NavEffects:
    """Slide the bar to y=0 / NAV_HIDDEN_Y and fade it whenever a flag changes."""

    def __init__(self, engine: TweenEngine):
        self.engine = engine
        self._ctx: Optional[TweenContext] = None

    @property
    def active(self) -> bool:
        return self._ctx is not None

    def activate(self, state: Optional[ScrollState] = None) -> None:
        if self._ctx is not None:
            return
        self._ctx = self.engine.context()
        self._slide((state or ScrollState()).is_visible)

    def deactivate(self) -> None:
        if self._ctx is None:
            return
        self._ctx.revert()
        self._ctx = None

    def apply(self, prev: ScrollState, cur: ScrollState) -> None:
        if self._ctx is None:
            return
        if (prev.is_visible, prev.is_floating) == (cur.is_visible, cur.is_floating):
            return
        self._slide(cur.is_visible)

    def _slide(self, visible: bool) -> None:
        self._ctx.to(config.NAV_TARGET,
                     {"y": 0.0 if visible else float(config.NAV_HIDDEN_Y),
                      "opacity": 1.0 if visible else 0.0},
                     config.NAV_TWEEN_DURATION)


@contextmanager
def mounted(*layers):
    """Activate effect layers for the duration of a block, then revert them."""
    for layer in layers:
        layer.activate()
    try:
        yield layers
    finally:
        for layer in reversed(layers):
            layer.deactivate()
