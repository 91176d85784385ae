"""
Page geometry and the frame mask compositing.
"""

import pygame
import pytest

import config
from renderer import compute_layout, mask_surface, scaled_rect

RED = (255, 0, 0)


class TestLayout:
    def test_frame_moves_with_scroll(self):
        lay = compute_layout((1280, 720), scroll_y=200)
        assert lay.frame_rect == pygame.Rect(0, -200, 1280, 720)
        assert lay.preview_rect.size == (config.PREVIEW_SIZE, config.PREVIEW_SIZE)
        assert lay.preview_rect.center == (640, 160)

    def test_nav_follows_its_tween(self):
        lay = compute_layout((1280, 720), nav_y=-100)
        assert lay.nav_rect.top == config.NAV_TOP - 100
        assert lay.nav_rect.left == 24
        assert lay.nav_rect.width == 1280 - 48
        assert lay.audio_rect.right == lay.nav_rect.right - 16
        assert lay.audio_rect.centery == lay.nav_rect.centery

    def test_narrow_window_has_no_inset(self):
        assert compute_layout((480, 800)).nav_rect.left == 0

    def test_page_length(self):
        lay = compute_layout((1280, 720))
        assert lay.max_scroll == 720 * (config.PAGE_SCREENS - 1)
        assert lay.viewport_height == 720

    def test_loading_flag_carried(self):
        assert compute_layout((1280, 720), is_loading=True).is_loading


class TestScaledRect:
    def test_keeps_centre(self):
        r = scaled_rect((100, 100), (40, 20), 0.5)
        assert r.size == (20, 10)
        assert r.center == (100, 100)

    def test_zero_scale_is_empty(self):
        assert scaled_rect((5, 5), (40, 20), 0.0).size == (0, 0)


class TestMaskSurface:
    def _red(self):
        surf = pygame.Surface((100, 100))
        surf.fill(RED)
        return surf

    def test_full_rectangle_keeps_everything(self):
        out = mask_surface(self._red(), [(0, 0), (99, 0), (99, 99), (0, 99)], (0, 0, 0, 0))
        assert out.get_at((50, 50)) == pygame.Color(255, 0, 0, 255)
        assert out.get_at((1, 98)).a == 255

    def test_outside_polygon_is_transparent(self):
        out = mask_surface(self._red(), [(0, 0), (99, 0), (0, 99)], (0, 0, 0, 0))
        assert out.get_at((10, 10)).a == 255
        assert out.get_at((90, 90)).a == 0

    @pytest.mark.parametrize("radii,corner", [
        ((40, 0, 0, 0), (1, 1)),
        ((0, 0, 40, 0), (98, 98)),
        ((0, 0, 0, 40), (1, 98)),
    ])
    def test_rounded_corners_cut_away(self, radii, corner):
        out = mask_surface(self._red(), [(0, 0), (99, 0), (99, 99), (0, 99)], radii)
        assert out.get_at(corner).a == 0
        assert out.get_at((50, 50)).a == 255
