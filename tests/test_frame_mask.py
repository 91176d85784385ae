"""
Unit tests for the scroll-linked frame mask.
"""

import pytest

import config
from frame_mask import (
    format_polygon,
    install,
    parse_polygon,
    parse_radius,
    polygon_points,
    radius_pixels,
    trigger_offset,
)
from tween import TweenEngine

MASK = ((14.0, 0.0), (72.0, 0.0), (90.0, 90.0), (0.0, 100.0))
FULL = ((0.0, 0.0), (100.0, 0.0), (100.0, 100.0), (0.0, 100.0))


class TestParsing:
    def test_polygon(self):
        assert parse_polygon(config.FRAME_MASK_POLYGON) == MASK

    def test_polygon_tolerates_spacing_and_decimals(self):
        assert parse_polygon("  polygon( 1.5% 2%,3% 4% , 5% 6%) ") == \
            ((1.5, 2.0), (3.0, 4.0), (5.0, 6.0))

    @pytest.mark.parametrize("text", [
        "circle(50%)",
        "polygon(0% 0%, 10% 10%)",
        "polygon(0% 0%, 10%, 5% 5%)",
        "polygon(a% 0%, 1% 1%, 2% 2%)",
    ])
    def test_polygon_errors(self, text):
        with pytest.raises(ValueError):
            parse_polygon(text)

    @pytest.mark.parametrize("text,expected", [
        ("0 0 40% 10%", (0.0, 0.0, 40.0, 10.0)),
        ("5%", (5.0, 5.0, 5.0, 5.0)),
        ("1 2", (1.0, 2.0, 1.0, 2.0)),
        ("1 2 3", (1.0, 2.0, 3.0, 2.0)),
    ])
    def test_radius_shorthand(self, text, expected):
        assert parse_radius(text) == expected

    def test_radius_errors(self):
        with pytest.raises(ValueError):
            parse_radius("1 2 3 4 5")
        with pytest.raises(ValueError):
            parse_radius("")

    def test_format(self):
        assert format_polygon(MASK) == "polygon(14% 0%, 72% 0%, 90% 90%, 0% 100%)"


class TestTriggerOffset:
    def test_centre_meets_centre(self):
        assert trigger_offset(0, 720, 720, ("center", "center")) == 0.0

    def test_bottom_meets_centre(self):
        assert trigger_offset(0, 720, 720, ("bottom", "center")) == 360.0

    def test_top_meets_bottom_is_negative(self):
        assert trigger_offset(0, 720, 720, ("top", "bottom")) == -720.0

    def test_pixel_anchor(self):
        assert trigger_offset(100, 720, 720, (50, "top")) == 150.0

    def test_unknown_anchor(self):
        with pytest.raises(ValueError):
            trigger_offset(0, 720, 720, ("middle", "center"))


class TestInstall:
    def test_offsets_from_frame_geometry(self):
        st = install(TweenEngine(), 0, 720, 720)
        assert (st.start, st.end) == (0.0, 360.0)

    def test_full_shape_at_top_of_page(self):
        eng = TweenEngine()
        install(eng, 0, 720, 720)
        assert eng.get(config.FRAME_TARGET, "clip_path") == FULL
        assert eng.get(config.FRAME_TARGET, "border_radius") == (0.0, 0.0, 0.0, 0.0)

    def test_mask_shape_once_past_end(self):
        eng = TweenEngine()
        install(eng, 0, 720, 720)
        eng.scroll_to(360)
        assert eng.get(config.FRAME_TARGET, "clip_path") == MASK
        assert eng.get(config.FRAME_TARGET, "border_radius") == (0.0, 0.0, 40.0, 10.0)
        eng.scroll_to(2000)
        assert eng.get(config.FRAME_TARGET, "clip_path") == MASK

    def test_halfway(self):
        eng = TweenEngine()
        install(eng, 0, 720, 720)
        eng.scroll_to(180)
        poly = eng.get(config.FRAME_TARGET, "clip_path")
        assert poly[0] == pytest.approx((7.0, 0.0))
        assert eng.get(config.FRAME_TARGET, "border_radius") == \
            pytest.approx((0.0, 0.0, 20.0, 5.0))

    def test_context_revert_removes_mask(self):
        eng = TweenEngine()
        ctx = eng.context()
        install(ctx, 0, 720, 720)
        ctx.revert()
        assert eng.get(config.FRAME_TARGET, "clip_path") is None
        assert eng.active == 0


class TestPixels:
    def test_polygon_points(self):
        assert polygon_points(MASK, (200, 100)) == [(28, 0), (144, 0), (180, 90), (0, 100)]

    def test_radius_uses_shorter_side(self):
        assert radius_pixels((0.0, 0.0, 40.0, 10.0), (1280, 720)) == (0, 0, 288, 72)
