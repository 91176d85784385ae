#!/usr/bin/env python3
"""
app.py – hero reel presentation shell

Renders the looping hero carousel and the scroll-aware nav bar.  The shell
never changes controller state itself: raw input goes through events.py,
controllers reduce it, the effect layer drives the tween engine and the
shell draws whatever the controllers and tweens currently say.
"""
from __future__ import annotations

import logging, os, time
from contextlib import contextmanager

import pygame

import config
import frame_mask
import overlays
from effects      import CycleEffects, NavEffects, mounted
from events       import EventManager
from hero_cycle   import HeroCycle, HeroOutput
from media_sources import ClipLibrary
from renderer     import (blit_cover, compute_layout, frame_surface,
                          mask_surface, scaled_rect)
from scroll_nav   import NavOutput, ScrollNav
from tween        import TweenEngine

log = logging.getLogger(__name__)

FRAME_BG = (223, 223, 242)


class HeroSite:
    def __init__(self, player_factory=None):
        # window ----------------------------------------------------------
        pygame.init()
        self.screen = self._set_mode()
        pygame.display.set_caption("hero reel")
        self.clock = pygame.time.Clock()

        # media -----------------------------------------------------------
        self.clips = ClipLibrary(config.VIDEOS_PATH, config.TOTAL_VIDEOS)
        self.clips.verify()

        if player_factory is None:
            from video_player import ClipPlayer      # needs GStreamer
            player_factory = ClipPlayer

        # decoder threads only post; the main loop does the rest
        def ready(slot: str) -> None:
            EventManager.post({"type": "media_ready", "slot": slot})

        def failed(slot: str, message: str) -> None:
            EventManager.post({"type": "media_error", "slot": slot, "error": message})

        self.players = {
            slot: player_factory(slot, ready, failed, autoplay=(slot == "background"))
            for slot in ("background", "preview", "transition")
        }

        # controllers -----------------------------------------------------
        self.engine   = TweenEngine()
        self.cycle_fx = CycleEffects(self.engine, self.screen.get_size(),
                                     on_play=self.players["transition"].play)
        self.nav_fx   = NavEffects(self.engine)
        self.cycle    = HeroCycle(self.clips.source, config.TOTAL_VIDEOS, self.cycle_fx)
        self.nav      = ScrollNav(self.nav_fx)

        # shell state -----------------------------------------------------
        self.scroll_y      = 0
        self.force_overlay = config.SHOW_OVERLAYS
        self.mask_ctx      = None
        self.audio_ok      = self._init_audio()
        self.audio_started = False

    # ── setup ------------------------------------------------------------
    def _set_mode(self) -> pygame.Surface:
        return pygame.display.set_mode(
            (0, 0) if config.FULLSCREEN else config.WINDOWED_SIZE,
            pygame.FULLSCREEN if config.FULLSCREEN else 0,
        )

    def _init_audio(self) -> bool:
        if not os.path.isfile(config.AUDIO_PATH):
            log.warning("audio loop %s not found – toggle is state only", config.AUDIO_PATH)
            return False
        try:
            pygame.mixer.init()
            pygame.mixer.music.load(config.AUDIO_PATH)
        except pygame.error as exc:
            log.warning("audio unavailable (%s) – toggle is state only", exc)
            return False
        return True

    def _mount_mask(self) -> None:
        if self.mask_ctx is not None:
            self.mask_ctx.revert()
        sh = self.screen.get_height()
        self.mask_ctx = self.engine.context()
        frame_mask.install(self.mask_ctx, 0, sh, sh)
        self.engine.scroll_to(self.scroll_y)

    # ── controller output -> shell ------------------------------------------
    def _on_hero(self, out: HeroOutput) -> None:
        src = out.sources
        for slot, path in (("background", src.background),
                           ("preview",    src.preview),
                           ("transition", src.transition)):
            player = self.players[slot]
            if player.path != path:
                player.load(path)

    def _on_nav(self, out: NavOutput) -> None:
        if not self.audio_ok:
            return
        if out.is_playing:
            if self.audio_started:
                pygame.mixer.music.unpause()
            else:
                pygame.mixer.music.play(loops=-1)
                self.audio_started = True
        elif self.audio_started:
            pygame.mixer.music.pause()

    # ── actions ------------------------------------------------------------
    def _dispatch(self, act: dict) -> bool:
        """Apply one action; False means quit."""
        t = act["type"]
        if t == "quit":
            return False
        if t == "scroll":
            self.scroll_y = act["y"]
            self.nav.on_scroll(self.scroll_y)
            self.engine.scroll_to(self.scroll_y)
        elif t == "media_ready":
            log.debug("media ready: %s", act.get("slot"))
            self.cycle.report_loaded()
        elif t == "media_error":
            log.warning("dropping %s clip: %s", act["slot"], act.get("error"))
            self.players[act["slot"]].close()
        elif t == "advance":
            self.cycle.request_advance()
        elif t == "toggle_audio":
            self.nav.toggle_audio()
        elif t == "toggle_overlay":
            self.force_overlay ^= True
        elif t == "toggle_fullscreen":
            config.FULLSCREEN ^= True
            self.screen = self._set_mode()
            self.cycle_fx.frame_size = self.screen.get_size()
            self._mount_mask()
        else:
            log.debug("ignored action %s", act)
        return True

    # ── drawing ------------------------------------------------------------
    def _layout(self):
        return compute_layout(self.screen.get_size(), self.scroll_y,
                              self.engine.get(config.NAV_TARGET, "y", 0.0),
                              self.cycle.is_loading)

    def _frame_of(self, slot: str):
        p = self.players[slot]
        frame = p.frame()
        return None if frame is None else frame_surface(frame, p.sar)

    def _draw_hero(self, lay) -> None:
        rect = lay.frame_rect
        fw, fh = rect.size
        hero = pygame.Surface(rect.size)
        hero.fill(FRAME_BG)
        centre = (fw // 2, fh // 2)

        bg = self._frame_of("background")
        if bg is not None:
            blit_cover(hero, bg, hero.get_rect())

        eng = self.engine
        if eng.get(config.TRANSITION_TARGET, "visibility") == "visible":
            tr = self._frame_of("transition")
            if tr is not None:
                size = (eng.get(config.TRANSITION_TARGET, "width", 1.0) * fw,
                        eng.get(config.TRANSITION_TARGET, "height", 1.0) * fh)
                blit_cover(hero, tr, scaled_rect(
                    centre, size, eng.get(config.TRANSITION_TARGET, "scale", 1.0)))

        if lay.preview_rect.collidepoint(pygame.mouse.get_pos()):
            pv = self._frame_of("preview")
            if pv is not None:
                ps = config.PREVIEW_SIZE
                blit_cover(hero, pv, scaled_rect(
                    centre, (ps, ps), eng.get(config.PREVIEW_TARGET, "scale", 1.0)))

        overlays.draw_headings(hero, hero.get_rect(), inside=True)

        clip = eng.get(config.FRAME_TARGET, "clip_path")
        radius = eng.get(config.FRAME_TARGET, "border_radius")
        if clip is not None and radius is not None:
            hero = mask_surface(hero,
                                frame_mask.polygon_points(clip, rect.size),
                                frame_mask.radius_pixels(radius, rect.size))

        overlays.draw_headings(self.screen, rect, inside=False)   # ghost copy
        self.screen.blit(hero, rect.topleft)

    def _draw(self, t: float) -> None:
        self.screen.fill(overlays.WHITE)
        lay = self._layout()
        if lay.frame_rect.bottom > 0:
            self._draw_hero(lay)

        ns = self.nav.state
        overlays.draw_nav(self.screen, lay.nav_rect, lay.audio_rect,
                          self.engine.get(config.NAV_TARGET, "opacity", 1.0),
                          ns.is_floating, self.nav.audio.indicator_active, t)

        if self.cycle.is_loading:
            overlays.draw_loading(self.screen, t)
        if self.force_overlay:
            overlays.draw_diagnostics(self.screen, self.cycle, self.nav,
                                      self.engine, self.clock.get_fps())

    # ── main loop ---------------------------------------------------------
    @contextmanager
    def session(self):
        """Effects mounted, mask installed and outputs wired to the shell."""
        with mounted(self.cycle_fx, self.nav_fx):
            self._mount_mask()
            unsubscribe = [self.cycle.subscribe(self._on_hero),
                           self.nav.subscribe(self._on_nav)]
            try:
                yield self
            finally:
                for unsub in unsubscribe:
                    unsub()
                if self.mask_ctx is not None:
                    self.mask_ctx.revert()
                    self.mask_ctx = None

    def drain(self) -> bool:
        """Apply every queued action; False once one of them was quit."""
        while (act := EventManager.poll()):
            if not self._dispatch(act):
                return False
        return True

    def step(self) -> float:
        """Wait for the next frame and advance the tweens by its length."""
        dt = min(self.clock.tick(config.FPS) / 1000.0, config.MAX_FRAME_DT)
        self.engine.tick(dt)
        return dt

    def run(self):
        t0 = time.monotonic()
        try:
            with self.session():
                while True:
                    for e in pygame.event.get():
                        EventManager.handle(e, self.scroll_y, self._layout())
                    if not self.drain():
                        break
                    self.step()
                    self._draw(time.monotonic() - t0)
                    pygame.display.flip()
        finally:
            for p in self.players.values():
                p.close()
            pygame.quit()


if __name__ == "__main__":
    HeroSite().run()
