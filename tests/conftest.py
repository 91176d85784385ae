"""pytest configuration file."""

import os, logging

import pytest

# no window or sound card needed for anything under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


@pytest.fixture(autouse=True)
def _empty_event_queue():
    from events import EventManager
    EventManager.clear()
    yield
    EventManager.clear()


@pytest.fixture(autouse=True, scope="session")
def _quiet_logs():
    logging.getLogger("tween").setLevel(logging.INFO)
    yield
