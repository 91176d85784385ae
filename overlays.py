"""
overlays.py

Pygame chrome for the hero reel: loading overlay, nav bar with the audio
indicator, hero headings and the optional diagnostics panel.
"""

from __future__ import annotations

import math, os

import pygame
import psutil

import config

# ── colours ────────────────────────────────────────────────────────────────
WHITE  = (255, 255, 255)
BLACK  = (0, 0, 0)
VIOLET = (245, 243, 255)      # loading backdrop
BLUE   = (223, 223, 242)
INK    = (30, 30, 40)
RED    = (255,  50, 50)
BG     = (0, 0, 0, 180)

pygame.font.init()


# ── helpers ────────────────────────────────────────────────────────────────
def _compute_font_sizes(h: int) -> tuple[int, int, int]:
    return max(12, h // 60), max(16, h // 45), max(48, h // 6)


def _panel(lines: list[str], font: pygame.font.Font, colour=WHITE) -> pygame.Surface:
    widest = max(font.size(t)[0] for t in lines)
    pbg = pygame.Surface(
        (widest + 20, len(lines) * (font.get_linesize() + 2) + 10),
        pygame.SRCALPHA,
    )
    pbg.fill(BG)
    y = 5
    for t in lines:
        pbg.blit(font.render(t, True, colour), (10, y))
        y += font.get_linesize() + 2
    return pbg


# ── loading overlay ────────────────────────────────────────────────────────
def draw_loading(surface: pygame.Surface, t: float) -> None:
    """Full-screen backdrop with three orbiting dots."""
    sw, sh = surface.get_size()
    surface.fill(VIOLET)
    cx, cy = sw // 2, sh // 2
    r = max(8, sh // 40)
    for i in range(3):
        a = t * 2.5 + i * (2 * math.pi / 3)
        pulse = 0.6 + 0.4 * math.sin(t * 5 + i)
        pygame.draw.circle(
            surface, INK,
            (int(cx + math.cos(a) * r * 2), int(cy + math.sin(a) * r * 2)),
            int(r * pulse),
        )


# ── headings ───────────────────────────────────────────────────────────────
def draw_headings(surface: pygame.Surface, frame_rect: pygame.Rect, inside: bool) -> None:
    """'redfine' top-left and 'GAMING' bottom-right of the hero frame."""
    _, _, large_pt = _compute_font_sizes(surface.get_height())
    font = pygame.font.SysFont("sans", large_pt, bold=True)
    colour = BLUE if inside else BLACK
    tag = font.render("GAMING", True, colour)
    surface.blit(tag, (frame_rect.right - tag.get_width() - 20,
                       frame_rect.bottom - tag.get_height() - 20))
    if inside:
        title = font.render("REDFINE", True, BLUE)
        surface.blit(title, (frame_rect.left + 40, frame_rect.top + 96))


# ── nav bar ────────────────────────────────────────────────────────────────
def draw_nav(surface: pygame.Surface,
             nav_rect: pygame.Rect,
             audio_rect: pygame.Rect,
             opacity: float,
             floating: bool,
             indicator_active: bool,
             t: float) -> None:
    if opacity <= 0.0:
        return
    small_pt = _compute_font_sizes(surface.get_height())[1]
    font = pygame.font.SysFont("sans", small_pt)

    bar = pygame.Surface(nav_rect.size, pygame.SRCALPHA)
    if floating:
        pygame.draw.rect(bar, (0, 0, 0, 220), bar.get_rect(), border_radius=8)
        pygame.draw.rect(bar, (80, 80, 80, 255), bar.get_rect(), width=1, border_radius=8)

    logo = font.render("◆", True, WHITE)
    bar.blit(logo, (16, (nav_rect.height - logo.get_height()) // 2))

    x = audio_rect.left - nav_rect.left - 24
    for item in reversed(config.NAV_ITEMS):
        txt = font.render(item.upper(), True, WHITE)
        x -= txt.get_width()
        bar.blit(txt, (x, (nav_rect.height - txt.get_height()) // 2))
        x -= 24

    # indicator bars: flat when idle, staggered bounce when audio plays
    bx = audio_rect.left - nav_rect.left + 8
    base = audio_rect.centery - nav_rect.top
    for i in range(1, config.AUDIO_BARS + 1):
        h = 2
        if indicator_active:
            phase = t * 2 * math.pi - i * config.AUDIO_BAR_DELAY * 2 * math.pi
            h = int(4 + 12 * (0.5 + 0.5 * math.sin(phase)))
        pygame.draw.rect(bar, WHITE, (bx, base - h // 2, 2, h))
        bx += 6

    bar.set_alpha(int(255 * max(0.0, min(1.0, opacity))))
    surface.blit(bar, nav_rect.topleft)


# ── diagnostics ────────────────────────────────────────────────────────────
def draw_diagnostics(surface: pygame.Surface, cycle, nav, engine, fps: float) -> None:
    sw, sh = surface.get_size()
    tiny_pt, small_pt, _ = _compute_font_sizes(sh)
    FT = pygame.font.SysFont("monospace", tiny_pt)
    FS = pygame.font.SysFont("monospace", small_pt)

    cs, ss = cycle.state, nav.state
    lines = [
        f"active   {cs.active_index}/{cs.total}   queued {cs.queued_index}",
        f"loaded   {cs.loaded_count}  (gate {cs.ready_threshold})",
        f"loading  {cs.is_loading}   transitioned {cs.has_transitioned}",
        f"scroll   {ss.current_y:.0f}  {ss.direction.value}",
        f"nav      visible {ss.is_visible}  floating {ss.is_floating}",
        f"audio    {'on' if nav.audio.is_playing else 'off'}",
        f"tweens   {engine.active}",
    ]
    for name, path in (("bg", cycle.display_sources().background),
                       ("preview", cycle.display_sources().preview)):
        lines.append(f"{name:<8} {os.path.basename(path)}")

    pbg = _panel(lines, FT)
    surface.blit(pbg, (10, sh - pbg.get_height() - 10))

    # ── CPU / memory badge ───────────────────────────────────────────────
    cpu = psutil.cpu_percent(interval=None)
    mem = psutil.Process().memory_info().rss // 1024**2
    badge = _panel([f"CPU {cpu:.0f}%  MEM {mem} MB  {fps:.0f} fps"], FS, RED)
    surface.blit(badge, (sw - badge.get_width() - 10, sh - badge.get_height() - 10))
