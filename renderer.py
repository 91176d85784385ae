"""
renderer.py – page geometry and video blitting for the hero reel.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import pygame

import config


# ── geometry ───────────────────────────────────────────────────────────────
@dataclass
class Layout:
    viewport: Tuple[int, int]
    frame_rect: pygame.Rect          # hero frame on screen (moves with scroll)
    preview_rect: pygame.Rect        # clickable preview square
    nav_rect: pygame.Rect            # nav bar on screen (moves with its tween)
    audio_rect: pygame.Rect          # indicator bars / audio toggle
    max_scroll: int
    is_loading: bool = False

    @property
    def viewport_height(self) -> int:
        return self.viewport[1]


def compute_layout(size: Tuple[int, int],
                   scroll_y: float = 0.0,
                   nav_y: float = 0.0,
                   is_loading: bool = False) -> Layout:
    sw, sh = size
    frame = pygame.Rect(0, -int(scroll_y), sw, sh)

    ps = config.PREVIEW_SIZE
    preview = pygame.Rect(0, 0, ps, ps)
    preview.center = frame.center

    inset = 24 if sw >= 640 else 0
    nav = pygame.Rect(inset, config.NAV_TOP + int(nav_y),
                      sw - 2 * inset, config.NAV_HEIGHT)

    bars_w = config.AUDIO_BARS * 6
    audio = pygame.Rect(0, 0, bars_w + 16, 32)
    audio.midright = (nav.right - 16, nav.centery)

    return Layout(
        viewport=(sw, sh),
        frame_rect=frame,
        preview_rect=preview,
        nav_rect=nav,
        audio_rect=audio,
        max_scroll=max(0, sh * config.PAGE_SCREENS - sh),
        is_loading=is_loading,
    )


# ── frames ─────────────────────────────────────────────────────────────────
def frame_surface(frame, sar: float = 1.0) -> pygame.Surface:
    """Raw RGB frame (HxWx3) → Surface, stretched for non-square pixels."""
    surf = pygame.image.frombuffer(frame, frame.shape[1::-1], "RGB")
    if sar != 1.0:
        vw, vh = surf.get_size()
        surf = pygame.transform.scale(surf, (int(vw * sar), vh))
    return surf


def cover(surf: pygame.Surface, size: Tuple[int, int]) -> pygame.Surface:
    """
    Scale *surf* to fill *size* completely, cropping the overflow around the
    centre (object-fit: cover).
    """
    tw, th = max(1, size[0]), max(1, size[1])
    vw, vh = surf.get_size()
    scale = max(tw / vw, th / vh)
    scaled = pygame.transform.smoothscale(
        surf, (max(tw, int(vw * scale)), max(th, int(vh * scale))))
    x = (scaled.get_width() - tw) // 2
    y = (scaled.get_height() - th) // 2
    return scaled.subsurface(pygame.Rect(x, y, tw, th)).copy()


def blit_cover(screen: pygame.Surface, surf: pygame.Surface, rect: pygame.Rect) -> None:
    if rect.width <= 0 or rect.height <= 0:
        return
    screen.blit(cover(surf, rect.size), rect.topleft)


def scaled_rect(center: Tuple[int, int], size: Tuple[float, float], scale: float) -> pygame.Rect:
    w = max(0, int(size[0] * scale))
    h = max(0, int(size[1] * scale))
    r = pygame.Rect(0, 0, w, h)
    r.center = center
    return r


# ── masking ────────────────────────────────────────────────────────────────
def mask_surface(surf: pygame.Surface,
                 points: Sequence[Tuple[int, int]],
                 radii: Tuple[int, int, int, int]) -> pygame.Surface:
    """
    Keep only the part of *surf* inside the polygon *and* inside a rect with
    per-corner radii (top-left, top-right, bottom-right, bottom-left).
    """
    w, h = surf.get_size()
    out = pygame.Surface((w, h), pygame.SRCALPHA)
    out.blit(surf, (0, 0))

    poly = pygame.Surface((w, h), pygame.SRCALPHA)
    pygame.draw.polygon(poly, (255, 255, 255, 255), list(points))

    rounded = pygame.Surface((w, h), pygame.SRCALPHA)
    tl, tr, br, bl = radii
    pygame.draw.rect(rounded, (255, 255, 255, 255), rounded.get_rect(),
                     border_top_left_radius=tl,
                     border_top_right_radius=tr,
                     border_bottom_right_radius=br,
                     border_bottom_left_radius=bl)

    poly.blit(rounded, (0, 0), special_flags=pygame.BLEND_RGBA_MIN)
    out.blit(poly, (0, 0), special_flags=pygame.BLEND_RGBA_MULT)
    return out
