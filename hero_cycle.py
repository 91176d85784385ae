"""
hero_cycle.py

Looping hero-video cycle: which clip plays in the background, which one
waits in the preview square, and whether the loading overlay is still up.

State changes go through pure reducers (`report_loaded`, `request_advance`,
`reduce`) that return a new `CycleState`.  `HeroCycle` holds the current
state for the shell, hands every (previous, current) pair to its effect
layer and notifies subscribers when the visible output changed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

import config

log = logging.getLogger(__name__)

Action = dict      # alias for readability


def upcoming_index(index: int, total: int) -> int:
    """Next clip in the cycle, wrapping N → 1."""
    return (index % total) + 1


# ── state ───────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class CycleState:
    total: int = config.TOTAL_VIDEOS
    active_index: int = 1
    loaded_count: int = 0
    is_loading: bool = True
    has_transitioned: bool = False

    @property
    def queued_index(self) -> int:
        return upcoming_index(self.active_index, self.total)

    @property
    def ready_threshold(self) -> int:
        # one lazy or broken clip must not hold the overlay up forever
        return self.total - 1


@dataclass(frozen=True)
class DisplaySources:
    background: str
    preview: str
    transition: str


@dataclass(frozen=True)
class HeroOutput:
    is_loading: bool
    sources: DisplaySources


# ── reducers ────────────────────────────────────────────────────────────────
def report_loaded(state: CycleState) -> CycleState:
    """
    Count one clip-ready signal.  No per-clip identity: a second ready
    signal from the same clip counts again.
    """
    loaded = state.loaded_count + 1
    return replace(
        state,
        loaded_count=loaded,
        is_loading=state.is_loading and loaded < state.ready_threshold,
    )


def request_advance(state: CycleState) -> CycleState:
    return replace(state, has_transitioned=True, active_index=state.queued_index)


def background_index(state: CycleState) -> int:
    """
    Clip behind everything.  The second-to-last clip is never shown here:
    when it is active the background falls back to clip 1.
    """
    if state.active_index == state.total - 1:
        return 1
    return state.active_index


def display_sources(state: CycleState, source: Callable[[int], str]) -> DisplaySources:
    """*source* maps a clip index to a path, e.g. `ClipLibrary.source`."""
    return DisplaySources(
        background=source(background_index(state)),
        preview=source(state.queued_index),
        transition=source(state.active_index),
    )


def reduce(state: CycleState, action: Action) -> CycleState:
    t = action.get("type")
    if t == "media_ready":
        return report_loaded(state)
    if t == "advance":
        return request_advance(state)
    return state


# ── controller ──────────────────────────────────────────────────────────────
class HeroCycle:
    """Owns the CycleState; the shell only reads and forwards events."""

    def __init__(self,
                 source: Callable[[int], str],
                 total: int = config.TOTAL_VIDEOS,
                 effects=None):
        self._source = source
        self._state = CycleState(total=total)
        self._effects = effects
        self._subscribers: List[Callable[[HeroOutput], None]] = []
        self._last_output: Optional[HeroOutput] = None

    # ── reading ──────────────────────────────────────────────────────────
    @property
    def state(self) -> CycleState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    def display_sources(self) -> DisplaySources:
        return display_sources(self._state, self._source)

    def output(self) -> HeroOutput:
        return HeroOutput(self._state.is_loading, self.display_sources())

    def subscribe(self, callback: Callable[[HeroOutput], None]) -> Callable[[], None]:
        """Call *callback* with the output now and after every change."""
        self._subscribers.append(callback)
        self._last_output = self.output()
        callback(self._last_output)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return unsubscribe

    # ── events ───────────────────────────────────────────────────────────
    def report_loaded(self) -> None:
        self.dispatch({"type": "media_ready"})

    def request_advance(self) -> None:
        self.dispatch({"type": "advance"})

    def dispatch(self, action: Action) -> None:
        prev = self._state
        self._state = reduce(prev, action)
        if self._state == prev:
            return

        if prev.is_loading and not self._state.is_loading:
            log.info("loading gate cleared after %d ready signals",
                     self._state.loaded_count)
        if self._state.active_index != prev.active_index:
            log.debug("advance %d → %d (queued %d)", prev.active_index,
                      self._state.active_index, self._state.queued_index)

        if self._effects is not None:
            self._effects.apply(prev, self._state)
        self._publish()

    def _publish(self) -> None:
        out = self.output()
        if out == self._last_output:
            return
        self._last_output = out
        for cb in list(self._subscribers):
            cb(out)
