# =========  video_player.py  =========
"""
Muted, looping clip player for one video element of the hero reel.

Public API
----------
load(path)      → start prerolling; returns at once
play() / pause()
frame()         → latest frame (HxWx3 uint8) or None
close()
Properties
----------
.slot        → element name ("background", "preview", "transition")
.path        → current file path
.sar         → sample-aspect ratio
.is_playing

Callbacks run on the bus thread and must only hand off (post an action):
on_ready(slot)            once per load, when the first frame is prerolled
on_error(slot, message)   pipeline error; the owner closes the player
"""
from __future__ import annotations

import logging, threading, queue
from typing import Callable, Optional

import gi, numpy as np
gi.require_version("Gst", "1.0")
from gi.repository import Gst, GLib

log = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────
class ClipPlayer:
    def __init__(self,
                 slot: str,
                 on_ready: Optional[Callable[[str], None]] = None,
                 on_error: Optional[Callable[[str, str], None]] = None,
                 autoplay: bool = False):
        Gst.init(None)

        self.slot      = slot
        self.on_ready  = on_ready
        self.on_error  = on_error
        self.autoplay  = autoplay

        self.player = Gst.ElementFactory.make("playbin", f"player-{slot}")
        self.player.set_property("video-sink", self._build_sink())
        self.player.set_property("mute", True)
        self.player.set_property("audio-sink",
                                 Gst.ElementFactory.make("fakesink", f"aud-{slot}"))

        # state
        self._q, self._last = queue.Queue(maxsize=1), None
        self.sar  = 1.0
        self.path = ""
        self.is_playing = False
        self._prerolling = False
        self._ml  = None
        self._ml_thread = None
        self._bus_handler = 0

    # ── sink ────────────────────────────────────────────────────────────────
    def _build_sink(self):
        """RGB appsink; pushes both preroll and running samples."""
        vs = Gst.ElementFactory.make("appsink", f"vsink-{self.slot}")
        vs.set_property("emit-signals", True)
        vs.set_property("max-buffers", 2)
        vs.set_property("drop", True)
        vs.set_property("sync", True)
        vs.set_property("caps", Gst.Caps.from_string("video/x-raw,format=RGB"))
        vs.connect("new-sample", self._on_sample, "pull-sample")
        vs.connect("new-preroll", self._on_sample, "pull-preroll")
        return vs

    # ── public API ──────────────────────────────────────────────────────────
    def load(self, fp: str) -> None:
        """
        Swap the element's source without waiting for it.  Readiness arrives
        later through on_ready; a clip that cannot preroll reports on_error.
        """
        self.player.set_state(Gst.State.NULL)
        self._drain()
        self._last = None

        self.path = fp
        self._prerolling = True
        self.player.set_property("uri", Gst.filename_to_uri(fp))
        self._watch()
        if self.autoplay:
            self.play()
        else:
            self.player.set_state(Gst.State.PAUSED)
        log.debug("[%s] prerolling %s", self.slot, fp)

    def play(self):
        if self.path:
            self.player.set_state(Gst.State.PLAYING)
            self.is_playing = True

    def pause(self):
        if self.path:
            self.player.set_state(Gst.State.PAUSED)
            self.is_playing = False

    def frame(self):
        item = self._drain()
        if item is not None:
            data, w, h, self.sar = item
            self._last = self._bytes_to_arr(data, w, h)
        return self._last

    def close(self):
        """Stop the pipeline and the bus loop.  Main thread only."""
        if self._ml:
            self._ml.quit()
            self._ml = None
        if self._ml_thread and threading.current_thread() is not self._ml_thread:
            self._ml_thread.join(timeout=0.5)
        self._ml_thread = None
        if self._bus_handler:
            bus = self.player.get_bus()
            bus.disconnect(self._bus_handler)
            bus.remove_signal_watch()
            self._bus_handler = 0
        self.player.set_state(Gst.State.NULL)
        self._prerolling = False
        self.path = ""
        self.is_playing = False
        self._last = None

    # ── internals ───────────────────────────────────────────────────────────
    def _watch(self):
        """Bus watch in a side loop (ready, looping, errors); started once."""
        if self._bus_handler:
            return
        bus = self.player.get_bus()
        bus.add_signal_watch()
        self._bus_handler = bus.connect("message", self._on_bus_msg)
        self._ml = GLib.MainLoop()
        self._ml_thread = threading.Thread(target=self._ml.run, daemon=True)
        self._ml_thread.start()

    def _drain(self):
        item = None
        while True:
            try:
                item = self._q.get_nowait()
            except queue.Empty:
                return item

    @staticmethod
    def _bytes_to_arr(data: bytes, w: int, h: int):
        """Strip row padding from an RGB888 buffer."""
        stride = len(data) // h
        rows   = np.frombuffer(data, np.uint8).reshape((h, stride))
        return np.ascontiguousarray(rows[:, : w * 3].reshape((h, w, 3)))

    def _on_sample(self, sink, signal):
        samp = sink.emit(signal)
        if samp:
            caps = samp.get_caps().get_structure(0)
            w, h = caps.get_int("width")[1], caps.get_int("height")[1]
            sar = 1.0
            if caps.has_field("pixel-aspect-ratio"):
                num, den = caps.get_fraction("pixel-aspect-ratio")[-2:]
                sar = num / den if den else 1.0
            buf = samp.get_buffer()
            ok, mi = buf.map(Gst.MapFlags.READ)
            if ok:
                try:
                    self._q.put_nowait((bytes(mi.data), w, h, sar))
                except queue.Full:
                    pass
                buf.unmap(mi)
        return Gst.FlowReturn.OK

    def _on_bus_msg(self, bus, msg):
        if msg.type == Gst.MessageType.ASYNC_DONE and self._prerolling:
            # the EOS seek below also ends in ASYNC_DONE; report only once
            self._prerolling = False
            log.debug("[%s] ready: %s", self.slot, self.path)
            if self.on_ready:
                self.on_ready(self.slot)
        elif msg.type == Gst.MessageType.EOS:
            # every element loops
            self.player.seek_simple(
                Gst.Format.TIME,
                Gst.SeekFlags.FLUSH | Gst.SeekFlags.KEY_UNIT,
                0,
            )
        elif msg.type == Gst.MessageType.ERROR:
            err = msg.parse_error()[0]
            log.error("[%s] GStreamer error on %s: %s", self.slot, self.path, err)
            self._prerolling = False
            if self.on_error:
                self.on_error(self.slot, str(err))
        return True
