"""
Unit tests for the hero clip cycle: queue order, loading gate, advance and
the background source fallback.
"""

import pytest

from hero_cycle import (
    CycleState,
    DisplaySources,
    HeroCycle,
    background_index,
    display_sources,
    reduce,
    report_loaded,
    request_advance,
    upcoming_index,
)


def src(i):
    return f"videos/hero-{i}.mp4"


class TestQueuedIndex:
    @pytest.mark.parametrize("active,queued", [(1, 2), (2, 3), (3, 4), (4, 1)])
    def test_wraps_after_last_clip(self, active, queued):
        assert CycleState(active_index=active).queued_index == queued
        assert upcoming_index(active, 4) == queued

    def test_initial_state(self):
        s = CycleState()
        assert (s.active_index, s.queued_index) == (1, 2)
        assert s.loaded_count == 0
        assert s.is_loading is True
        assert s.has_transitioned is False


class TestLoadingGate:
    def test_clears_after_three_of_four(self):
        s = CycleState()
        for expected in (1, 2):
            s = report_loaded(s)
            assert s.loaded_count == expected
            assert s.is_loading
        s = report_loaded(s)
        assert s.loaded_count == 3
        assert not s.is_loading

    def test_never_reverts_once_cleared(self):
        s = CycleState()
        for _ in range(3):
            s = report_loaded(s)
        s = report_loaded(s)          # the 4th clip
        assert not s.is_loading
        for _ in range(10):
            s = report_loaded(s)
            assert not s.is_loading
        assert s.loaded_count == 14

    def test_duplicate_ready_from_same_clip_counts_again(self):
        # no per-clip identity: three signals from one clip clear the gate
        s = CycleState()
        for _ in range(3):
            s = reduce(s, {"type": "media_ready", "slot": "background"})
        assert not s.is_loading

    def test_other_sizes_use_n_minus_one(self):
        s = CycleState(total=6)
        for _ in range(4):
            s = report_loaded(s)
        assert s.is_loading
        assert not report_loaded(s).is_loading


class TestAdvance:
    def test_from_last_clip_wraps_to_first(self):
        s = request_advance(CycleState(active_index=4))
        assert s.active_index == 1
        assert s.queued_index == 2

    def test_marks_transitioned_and_keeps_loading_flags(self):
        s = request_advance(CycleState())
        assert s.has_transitioned
        assert s.active_index == 2
        assert s.is_loading and s.loaded_count == 0

    def test_full_lap(self):
        s = CycleState()
        seen = []
        for _ in range(4):
            s = request_advance(s)
            seen.append(s.active_index)
        assert seen == [2, 3, 4, 1]


class TestDisplaySources:
    def test_second_to_last_falls_back_to_first_clip(self):
        s = CycleState(active_index=3)
        assert background_index(s) == 1
        out = display_sources(s, src)
        assert out == DisplaySources(background=src(1), preview=src(4), transition=src(3))

    @pytest.mark.parametrize("active", [1, 2, 4])
    def test_background_follows_active_otherwise(self, active):
        out = display_sources(CycleState(active_index=active), src)
        assert out.background == src(active)
        assert out.transition == src(active)

    def test_preview_shows_queued_clip(self):
        assert display_sources(CycleState(active_index=4), src).preview == src(1)


class TestReduce:
    def test_unknown_action_returns_same_state(self):
        s = CycleState()
        assert reduce(s, {"type": "scroll", "y": 10}) is s

    def test_dispatches_advance(self):
        assert reduce(CycleState(), {"type": "advance"}).active_index == 2


class _RecordingEffects:
    def __init__(self):
        self.calls = []

    def apply(self, prev, cur):
        self.calls.append((prev, cur))


class TestHeroCycleController:
    def test_subscriber_gets_current_output_then_changes(self):
        cycle = HeroCycle(src, 4)
        seen = []
        cycle.subscribe(seen.append)
        assert seen[0].is_loading is True
        assert seen[0].sources.background == src(1)

        cycle.report_loaded()
        cycle.report_loaded()
        assert len(seen) == 1          # loaded count alone is not output
        cycle.report_loaded()
        assert len(seen) == 2
        assert seen[-1].is_loading is False
        assert not cycle.is_loading

    def test_advance_publishes_new_sources(self):
        cycle = HeroCycle(src, 4)
        seen = []
        cycle.subscribe(seen.append)
        cycle.request_advance()
        assert seen[-1].sources.preview == src(3)
        assert cycle.state.active_index == 2

    def test_unsubscribe(self):
        cycle = HeroCycle(src, 4)
        seen = []
        unsubscribe = cycle.subscribe(seen.append)
        unsubscribe()
        cycle.request_advance()
        assert len(seen) == 1

    def test_effects_see_previous_and_current_state(self):
        fx = _RecordingEffects()
        cycle = HeroCycle(src, 4, fx)
        cycle.request_advance()
        cycle.report_loaded()
        assert [(p.active_index, c.active_index) for p, c in fx.calls] == [(1, 2), (2, 2)]
        assert fx.calls[1][1].loaded_count == 1
