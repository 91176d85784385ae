#!/usr/bin/env python3
"""
events.py  – central hub

• Translates raw Pygame events to high-level action dicts.
• Exposes a thread-safe queue so *any* source can inject the same actions
  (decoder threads reporting a clip ready, tests, scripted demos).

Actions
-------
{"type": "quit"}
{"type": "scroll", "y": <px>}                 – absolute page offset
{"type": "advance"}                           – preview square clicked
{"type": "media_ready", "slot": <name>}       – a video element prerolled
{"type": "media_error", "slot": <name>, "error": <msg>}  – pipeline failed
{"type": "toggle_audio"}
{"type": "toggle_overlay"}
{"type": "toggle_fullscreen"}
"""

from __future__ import annotations
import queue
from pygame.locals import *

import config

Action = dict      # alias for readability


class EventManager:
    _fifo: "queue.Queue[Action]" = queue.Queue()      # global, thread-safe

    # ── SDL / keyboard / mouse path ────────────────────────────────────
    @classmethod
    def handle(cls, event, scroll_y, layout) -> None:
        """Translate one Pygame event → action and enqueue it."""
        act = cls._translate_pygame(event, scroll_y, layout)
        if act:
            cls._fifo.put(act)

    # ── external / programmatic path ───────────────────────────────────
    @classmethod
    def post(cls, action: Action) -> None:
        """
        Any thread may call this to inject an already-formed action dict, e.g.:
            EventManager.post({"type": "media_ready", "slot": "background"})
        """
        cls._fifo.put(action)

    # ── main-loop consumer ─────────────────────────────────────────────
    @classmethod
    def poll(cls) -> Action | None:
        """Return next queued action or None (non-blocking)."""
        try:
            return cls._fifo.get_nowait()
        except queue.Empty:
            return None

    @classmethod
    def clear(cls) -> None:
        while cls.poll() is not None:
            pass

    # ── internal translator ───────────────────────────────────────────
    @staticmethod
    def _scroll_to(y, layout) -> Action:
        return {"type": "scroll", "y": max(0, min(layout.max_scroll, y))}

    @staticmethod
    def _translate_pygame(event, scroll_y, layout) -> Action | None:
        if event.type == QUIT:
            return {"type": "quit"}

        if event.type == MOUSEWHEEL:
            return EventManager._scroll_to(scroll_y - event.y * config.SCROLL_STEP, layout)

        if event.type == MOUSEBUTTONDOWN and event.button == 1:
            if layout.audio_rect.collidepoint(event.pos):
                return {"type": "toggle_audio"}
            if not layout.is_loading and layout.preview_rect.collidepoint(event.pos):
                return {"type": "advance"}
            return None

        if event.type == KEYDOWN:
            if event.key in (K_ESCAPE, K_q):
                return {"type": "quit"}
            if event.key == K_i:
                return {"type": "toggle_overlay"}
            if event.key == K_f:
                return {"type": "toggle_fullscreen"}
            if event.key == K_m:
                return {"type": "toggle_audio"}
            if event.key == K_DOWN:
                return EventManager._scroll_to(scroll_y + config.SCROLL_STEP, layout)
            if event.key == K_UP:
                return EventManager._scroll_to(scroll_y - config.SCROLL_STEP, layout)
            if event.key == K_PAGEDOWN:
                return EventManager._scroll_to(scroll_y + layout.viewport_height, layout)
            if event.key == K_PAGEUP:
                return EventManager._scroll_to(scroll_y - layout.viewport_height, layout)
            if event.key == K_HOME:
                return EventManager._scroll_to(0, layout)

        return None
