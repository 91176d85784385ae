# =========  tween.py  =========
"""
Frame-driven property tweening for the hero reel.

Targets are plain string ids ("nav", "video-frame", …).  Each target owns a
dict of property values; the renderer reads them back every frame with
`engine.get(target, prop, default)`.

Public API
----------
set(target, props)                         – apply values immediately
to(target, props, duration, ease, …)       – animate current → props
from_(target, props, duration, ease, …)    – animate props → current
scroll_linked(target, props, start, end)   – scrub props → current by scroll
tick(dt)                                   – advance time-based tweens
scroll_to(y)                               – re-scrub scroll-linked tweens
context(revert_on_update=False)            – scoped group of commands

A new time-based tween overwrites the same properties of any tween still
running on that target; the older tween keeps animating its other
properties.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

log = logging.getLogger(__name__)

Props = Dict[str, Any]
Ease  = Callable[[float], float]

# ── easing ──────────────────────────────────────────────────────────────────
def _power_in(n: int) -> Ease:
    return lambda t: t ** (n + 1)


def _power_out(n: int) -> Ease:
    return lambda t: 1.0 - (1.0 - t) ** (n + 1)


def _power_in_out(n: int) -> Ease:
    def ease(t: float) -> float:
        if t < 0.5:
            return (2.0 * t) ** (n + 1) / 2.0
        return 1.0 - (2.0 * (1.0 - t)) ** (n + 1) / 2.0
    return ease


EASES: Dict[str, Ease] = {"none": lambda t: t, "linear": lambda t: t}
for _n in range(1, 5):
    EASES[f"power{_n}.in"]    = _power_in(_n)
    EASES[f"power{_n}.out"]   = _power_out(_n)
    EASES[f"power{_n}.inOut"] = _power_in_out(_n)
    EASES[f"power{_n}"]       = EASES[f"power{_n}.out"]

DEFAULT_EASE = "power1.out"

# values a target is assumed to have before anything was set on it
PROPERTY_DEFAULTS: Props = {"x": 0.0, "y": 0.0, "scale": 1.0, "opacity": 1.0}

_MISSING = object()


def resolve_ease(ease: str | Ease | None) -> Ease:
    if ease is None:
        ease = DEFAULT_EASE
    if callable(ease):
        return ease
    try:
        return EASES[ease]
    except KeyError:
        raise ValueError(f"Unknown ease {ease!r}") from None


def lerp(a: Any, b: Any, t: float) -> Any:
    """Interpolate numbers and (nested) tuples of numbers; snap anything else."""
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a + (b - a) * t
    if isinstance(a, tuple) and isinstance(b, tuple) and len(a) == len(b):
        return tuple(lerp(x, y, t) for x, y in zip(a, b))
    return b if t >= 1.0 else a


# ── time-based tween ────────────────────────────────────────────────────────
class Tween:
    def __init__(self,
                 engine: "TweenEngine",
                 target: str,
                 start: Props,
                 end: Props,
                 duration: float,
                 ease: Ease,
                 on_start: Optional[Callable[[], None]] = None,
                 on_complete: Optional[Callable[[], None]] = None):
        self.engine      = engine
        self.target      = target
        self.start       = dict(start)
        self.end         = dict(end)
        self.duration    = duration
        self.ease        = ease
        self.on_start    = on_start
        self.on_complete = on_complete
        self.elapsed     = 0.0
        self.started     = False
        self.done        = False

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0 if self.started else 0.0
        return min(1.0, self.elapsed / self.duration)

    def kill(self) -> None:
        self.done = True

    def _drop(self, props) -> None:
        """Give up *props* to a newer tween; die once nothing is left."""
        for k in props:
            self.start.pop(k, None)
            self.end.pop(k, None)
        if not self.end:
            self.done = True

    def _step(self, dt: float) -> None:
        if self.done:
            return
        if not self.started:
            self.started = True
            if self.on_start:
                self.on_start()
        self.elapsed += dt

        p = self.progress
        e = self.ease(p)
        self.engine._write(self.target,
                           {k: lerp(self.start[k], v, e) for k, v in self.end.items()})
        if p >= 1.0:
            self.done = True
            if self.on_complete:
                self.on_complete()


# ── scroll-linked tween ─────────────────────────────────────────────────────
class ScrollTween:
    """
    Maps a scroll offset linearly onto progress 0 → 1 between *start* and
    *end*, then eases and interpolates.  With scrub=False the progress
    snaps to 0 or 1 at the start offset.
    """

    def __init__(self,
                 engine: "TweenEngine",
                 target: str,
                 start_vals: Props,
                 end_vals: Props,
                 start: float,
                 end: float,
                 ease: Ease,
                 scrub: bool = True):
        self.engine     = engine
        self.target     = target
        self.start_vals = dict(start_vals)
        self.end_vals   = dict(end_vals)
        self.start      = float(start)
        self.end        = float(end)
        self.ease       = ease
        self.scrub      = scrub
        self.done       = False

    def progress_at(self, y: float) -> float:
        if not self.scrub:
            return 1.0 if y >= self.start else 0.0
        span = self.end - self.start
        if span == 0:
            return 1.0 if y >= self.end else 0.0
        return min(1.0, max(0.0, (y - self.start) / span))

    def kill(self) -> None:
        self.done = True

    def _scrub(self, y: float) -> None:
        if self.done:
            return
        e = self.ease(self.progress_at(y))
        self.engine._write(self.target,
                           {k: lerp(self.start_vals[k], v, e)
                            for k, v in self.end_vals.items()})


# ── engine ──────────────────────────────────────────────────────────────────
class TweenEngine:
    def __init__(self, default_ease: str = DEFAULT_EASE):
        self.default_ease = resolve_ease(default_ease)
        self.scroll_y = 0.0
        self._values: Dict[str, Props] = {}
        self._tweens: List[Tween] = []
        self._scroll: List[ScrollTween] = []

    # ── reading ──────────────────────────────────────────────────────────
    def get(self, target: str, prop: str, default: Any = None) -> Any:
        return self._values.get(target, {}).get(prop, default)

    def tweens_of(self, target: str) -> List[Tween]:
        return [t for t in self._tweens if t.target == target and not t.done]

    @property
    def active(self) -> int:
        return (sum(1 for t in self._tweens if not t.done)
                + sum(1 for s in self._scroll if not s.done))

    # ── commands ─────────────────────────────────────────────────────────
    def set(self, target: str, props: Props) -> None:
        log.debug("set %s %s", target, props)
        self._write(target, props)

    def to(self,
           target: str,
           props: Props,
           duration: float,
           ease: str | Ease | None = None,
           on_start: Optional[Callable[[], None]] = None,
           on_complete: Optional[Callable[[], None]] = None) -> Tween:
        start = {k: self._current(target, k, v) for k, v in props.items()}
        return self._add(target, start, props, duration, ease, on_start, on_complete)

    def from_(self,
              target: str,
              props: Props,
              duration: float,
              ease: str | Ease | None = None,
              on_start: Optional[Callable[[], None]] = None,
              on_complete: Optional[Callable[[], None]] = None) -> Tween:
        end = {k: self._current(target, k, v) for k, v in props.items()}
        tw = self._add(target, props, end, duration, ease, on_start, on_complete)
        self._write(target, props)          # render the "from" state right away
        return tw

    def scroll_linked(self,
                      target: str,
                      props: Props,
                      start: float,
                      end: float,
                      ease: str | Ease | None = None,
                      scrub: bool = True) -> ScrollTween:
        """Scrub *target* from *props* back to its current values."""
        end_vals = {k: self._current(target, k, v) for k, v in props.items()}
        st = ScrollTween(self, target, props, end_vals, start, end,
                         self._ease(ease), scrub)
        self._scroll.append(st)
        st._scrub(self.scroll_y)
        log.debug("scroll-linked %s %.1f→%.1f", target, st.start, st.end)
        return st

    def kill_tweens_of(self, target: str) -> None:
        for t in self._tweens:
            if t.target == target:
                t.kill()
        for s in self._scroll:
            if s.target == target:
                s.kill()
        self._prune()

    def context(self, revert_on_update: bool = False) -> "TweenContext":
        return TweenContext(self, revert_on_update)

    # ── frame driving ────────────────────────────────────────────────────
    def tick(self, dt: float) -> None:
        for tw in list(self._tweens):
            tw._step(dt)
        self._prune()

    def scroll_to(self, y: float) -> None:
        self.scroll_y = y
        for st in self._scroll:
            st._scrub(y)

    # ── internals ────────────────────────────────────────────────────────
    def _ease(self, ease) -> Ease:
        return self.default_ease if ease is None else resolve_ease(ease)

    def _current(self, target: str, prop: str, fallback: Any) -> Any:
        val = self.get(target, prop, _MISSING)
        if val is _MISSING:
            val = PROPERTY_DEFAULTS.get(prop, fallback)
        return val

    def _write(self, target: str, props: Props) -> None:
        self._values.setdefault(target, {}).update(props)

    def _add(self, target, start, end, duration, ease, on_start, on_complete) -> Tween:
        if duration < 0:
            raise ValueError(f"duration must be >= 0, got {duration}")
        ease_fn = self._ease(ease)
        for old in self.tweens_of(target):
            overlap = set(old.end) & set(end)
            if overlap:
                old._drop(overlap)
        tw = Tween(self, target, start, end, duration, ease_fn, on_start, on_complete)
        self._tweens.append(tw)
        self._prune()
        log.debug("tween %s %s over %.2fs", target, sorted(end), duration)
        return tw

    def _prune(self) -> None:
        self._tweens = [t for t in self._tweens if not t.done]
        self._scroll = [s for s in self._scroll if not s.done]


# ── scoped group of commands ────────────────────────────────────────────────
class TweenContext:
    """
    Records every command issued through it so the whole group can be
    reverted: tweens are killed and the touched properties go back to the
    values they had before the context first changed them.

    With revert_on_update=True, `run(fn)` reverts the previous run before
    calling `fn(self)` again.  Used as a context manager it reverts on exit.
    """

    def __init__(self, engine: TweenEngine, revert_on_update: bool = False):
        self.engine = engine
        self.revert_on_update = revert_on_update
        self._tweens: list = []
        self._originals: Dict[Tuple[str, str], Any] = {}

    def __enter__(self) -> "TweenContext":
        return self

    def __exit__(self, *exc) -> None:
        self.revert()

    @property
    def tweens(self) -> list:
        return [t for t in self._tweens if not t.done]

    def run(self, fn: Callable[["TweenContext"], None]) -> None:
        if self.revert_on_update and (self._tweens or self._originals):
            self.revert()
        fn(self)

    # ── recorded commands ────────────────────────────────────────────────
    def set(self, target: str, props: Props) -> None:
        self._remember(target, props)
        self.engine.set(target, props)

    def to(self, target: str, props: Props, duration: float, **kw) -> Tween:
        self._remember(target, props)
        return self._keep(self.engine.to(target, props, duration, **kw))

    def from_(self, target: str, props: Props, duration: float, **kw) -> Tween:
        self._remember(target, props)
        return self._keep(self.engine.from_(target, props, duration, **kw))

    def scroll_linked(self, target: str, props: Props, start: float, end: float,
                      **kw) -> ScrollTween:
        self._remember(target, props)
        return self._keep(self.engine.scroll_linked(target, props, start, end, **kw))

    # ── teardown ─────────────────────────────────────────────────────────
    def kill(self) -> None:
        for t in self._tweens:
            t.kill()
        self._tweens.clear()
        self.engine._prune()

    def revert(self) -> None:
        self.kill()
        values = self.engine._values
        for (target, prop), val in self._originals.items():
            if val is _MISSING:
                values.get(target, {}).pop(prop, None)
            else:
                values.setdefault(target, {})[prop] = val
        self._originals.clear()

    def _remember(self, target: str, props: Props) -> None:
        for k in props:
            key = (target, k)
            if key not in self._originals:
                self._originals[key] = self.engine.get(target, k, _MISSING)

    def _keep(self, tween):
        self._tweens = [t for t in self._tweens if not t.done]
        self._tweens.append(tween)
        return tween
