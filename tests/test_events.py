"""
Pygame event → action translation and the shared action queue.
"""

import pygame
import pytest

import config
from events import EventManager
from renderer import compute_layout

SIZE = (1280, 720)


def layout(**kw):
    return compute_layout(SIZE, **kw)


def translate(event, scroll_y=0, **kw):
    return EventManager._translate_pygame(event, scroll_y, layout(**kw))


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k, mod=0, unicode="")


def click(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=button)


class TestScrolling:
    def test_wheel_down_scrolls_page(self):
        wheel = pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=-1)
        assert translate(wheel, 100) == {"type": "scroll", "y": 100 + config.SCROLL_STEP}

    def test_wheel_clamps_at_top(self):
        wheel = pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=3)
        assert translate(wheel, 10) == {"type": "scroll", "y": 0}

    def test_clamps_at_page_end(self):
        assert translate(key(pygame.K_PAGEDOWN), 1400) == {"type": "scroll", "y": 1440}

    @pytest.mark.parametrize("k,expected", [
        (pygame.K_DOWN, 400 + config.SCROLL_STEP),
        (pygame.K_UP, 400 - config.SCROLL_STEP),
        (pygame.K_PAGEUP, 0),
        (pygame.K_HOME, 0),
    ])
    def test_keys(self, k, expected):
        assert translate(key(k), 400) == {"type": "scroll", "y": expected}


class TestClicks:
    def test_preview_click_advances(self):
        assert translate(click((640, 360))) == {"type": "advance"}

    def test_preview_follows_scroll(self):
        assert translate(click((640, 260)), 100) == {"type": "advance"}
        assert translate(click((640, 480)), 100) is None

    def test_ignored_while_loading(self):
        assert translate(click((640, 360)), is_loading=True) is None

    def test_audio_indicator(self):
        assert translate(click((1220, 48))) == {"type": "toggle_audio"}

    def test_audio_indicator_works_while_loading(self):
        assert translate(click((1220, 48)), is_loading=True) == {"type": "toggle_audio"}

    def test_outside_any_control(self):
        assert translate(click((10, 700))) is None

    def test_right_button_ignored(self):
        assert translate(click((640, 360), button=3)) is None


class TestKeys:
    @pytest.mark.parametrize("k,kind", [
        (pygame.K_ESCAPE, "quit"),
        (pygame.K_q, "quit"),
        (pygame.K_i, "toggle_overlay"),
        (pygame.K_f, "toggle_fullscreen"),
        (pygame.K_m, "toggle_audio"),
    ])
    def test_shortcuts(self, k, kind):
        assert translate(key(k)) == {"type": kind}

    def test_unbound_key(self):
        assert translate(key(pygame.K_z)) is None

    def test_window_close(self):
        assert translate(pygame.event.Event(pygame.QUIT)) == {"type": "quit"}


class TestQueue:
    def test_handle_enqueues_translated_action(self):
        EventManager.handle(key(pygame.K_m), 0, layout())
        EventManager.handle(key(pygame.K_z), 0, layout())
        assert EventManager.poll() == {"type": "toggle_audio"}
        assert EventManager.poll() is None

    def test_post_is_fifo(self):
        EventManager.post({"type": "media_ready", "slot": "background"})
        EventManager.post({"type": "advance"})
        assert EventManager.poll()["type"] == "media_ready"
        assert EventManager.poll()["type"] == "advance"
        assert EventManager.poll() is None

    def test_clear(self):
        EventManager.post({"type": "advance"})
        EventManager.clear()
        assert EventManager.poll() is None
