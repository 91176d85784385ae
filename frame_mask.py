"""
frame_mask.py

Polygon clip-path + corner rounding on the hero video frame.

On mount the frame gets its clipped/rounded shape; a scroll-linked tween
then scrubs it *from* the full rectangle with square corners back to that
shape while the frame travels between two trigger offsets.

Shapes are written CSS-style in config.py:
    polygon(14% 0%, 72% 0%, 90% 90%, 0% 100%)
    0 0 40% 10%          (top-left, top-right, bottom-right, bottom-left)
"""

from __future__ import annotations

import re
from typing import Tuple, Union

import config

Polygon = Tuple[Tuple[float, float], ...]
Radius  = Tuple[float, float, float, float]
Anchor  = Union[str, float, int]

# ── Regex helpers ───────────────────────────────────────────────────────────
_POLY_RE = re.compile(r"^\s*polygon\((.*)\)\s*$", re.IGNORECASE)
_LEN_RE  = re.compile(r"^(-?\d+(?:\.\d+)?)%?$")

ANCHORS = {"top": 0.0, "center": 0.5, "bottom": 1.0}


# ── parsing ─────────────────────────────────────────────────────────────────
def _pct(tok: str) -> float:
    m = _LEN_RE.match(tok.strip())
    if not m:
        raise ValueError(f"Bad length {tok!r}")
    return float(m.group(1))


def parse_polygon(text: str) -> Polygon:
    """'polygon(14% 0%, …)' → ((14.0, 0.0), …) in percent of the box."""
    m = _POLY_RE.match(text)
    if not m:
        raise ValueError(f"Not a polygon(): {text!r}")
    pts = []
    for pair in m.group(1).split(","):
        parts = pair.split()
        if len(parts) != 2:
            raise ValueError(f"Bad polygon point {pair!r}")
        pts.append((_pct(parts[0]), _pct(parts[1])))
    if len(pts) < 3:
        raise ValueError(f"Polygon needs 3+ points: {text!r}")
    return tuple(pts)


def parse_radius(text: str) -> Radius:
    """CSS border-radius shorthand with 1–4 values → (tl, tr, br, bl)."""
    vals = [_pct(t) for t in text.split()]
    if len(vals) == 1:
        return (vals[0],) * 4
    if len(vals) == 2:
        return (vals[0], vals[1], vals[0], vals[1])
    if len(vals) == 3:
        return (vals[0], vals[1], vals[2], vals[1])
    if len(vals) == 4:
        return tuple(vals)
    raise ValueError(f"Bad border-radius {text!r}")


def format_polygon(poly: Polygon) -> str:
    return "polygon(" + ", ".join(f"{x:g}% {y:g}%" for x, y in poly) + ")"


# ── trigger geometry ────────────────────────────────────────────────────────
def _resolve(anchor: Anchor, length: float) -> float:
    if isinstance(anchor, (int, float)):
        return float(anchor)                  # plain pixels from the top
    try:
        return ANCHORS[anchor] * length
    except KeyError:
        raise ValueError(f"Unknown anchor {anchor!r}") from None


def trigger_offset(element_top: float,
                   element_height: float,
                   viewport_height: float,
                   anchors: Tuple[Anchor, Anchor]) -> float:
    """
    Scroll offset at which the element's anchor meets the viewport's anchor,
    e.g. ("bottom", "center") → element bottom reaches viewport middle.
    """
    elem, view = anchors
    return element_top + _resolve(elem, element_height) - _resolve(view, viewport_height)


# ── install ─────────────────────────────────────────────────────────────────
def install(ctx,
            element_top: float,
            element_height: float,
            viewport_height: float,
            target: str = config.FRAME_TARGET):
    """
    Issue the mount-time mask commands through *ctx* (a TweenEngine or
    TweenContext) and return the scroll-linked tween.
    """
    ctx.set(target, {
        "clip_path":     parse_polygon(config.FRAME_MASK_POLYGON),
        "border_radius": parse_radius(config.FRAME_MASK_RADIUS),
    })
    start = trigger_offset(element_top, element_height, viewport_height,
                           config.FRAME_MASK_START)
    end   = trigger_offset(element_top, element_height, viewport_height,
                           config.FRAME_MASK_END)
    return ctx.scroll_linked(
        target,
        {
            "clip_path":     parse_polygon(config.FRAME_FULL_POLYGON),
            "border_radius": parse_radius(config.FRAME_FULL_RADIUS),
        },
        start,
        end,
        ease=config.FRAME_MASK_EASE,
    )


# ── pixel geometry for the renderer ─────────────────────────────────────────
def polygon_points(poly: Polygon, size: Tuple[int, int]) -> list[tuple[int, int]]:
    w, h = size
    return [(round(x * w / 100.0), round(y * h / 100.0)) for x, y in poly]


def radius_pixels(radius: Radius, size: Tuple[int, int]) -> Tuple[int, int, int, int]:
    """Percent radii → pixel radii (circular, relative to the shorter side)."""
    short = min(size)
    return tuple(max(0, round(r * short / 100.0)) for r in radius)
