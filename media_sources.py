"""
media_sources.py

Clip library for the hero reel.

* Clips are addressed by a 1-based index through a fixed naming convention
  (`hero-<n>.mp4` under `config.VIDEOS_PATH`); the library never renames or
  reorders them.
* `verify()` probes every expected clip once with PyAV at start-up so a
  missing or unreadable file shows up in the log instead of as a loading
  overlay that never clears.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List

import av  # PyAV – thin FFmpeg bindings

import config

log = logging.getLogger(__name__)

# ── Regex helpers ───────────────────────────────────────────────────────────
_HERO_RE = re.compile(r"^hero-(\d+)\.(?:mkv|mp4|mov|webm)$", re.IGNORECASE)


# ── Duration probe ──────────────────────────────────────────────────────────
def _probe_duration_us(fp: str) -> int:
    """Return clip length in **micro-seconds**. Zero on error."""
    try:
        with av.open(fp) as container:
            stream = next(
                (s for s in container.streams if s.type == "video"),
                container.streams[0],
            )

            if stream.duration:
                dur = stream.duration * stream.time_base
            elif container.duration:
                dur = container.duration / av.time_base
            else:
                dur = 0.0

            return max(0, int(dur * 1_000_000))
    except Exception:
        return 0


# ── Data structures ─────────────────────────────────────────────────────────
@dataclass
class ClipReport:
    playable: Dict[int, int] = field(default_factory=dict)   # index → duration µs
    missing: List[int] = field(default_factory=list)
    unreadable: List[int] = field(default_factory=list)
    extra: List[str] = field(default_factory=list)          # hero-N beyond N

    @property
    def ok(self) -> bool:
        return not self.missing and not self.unreadable


# ── Clip library ────────────────────────────────────────────────────────────
class ClipLibrary:
    """Maps cycle indices 1..N onto clip paths."""

    def __init__(self, root_dir: str | None = None, total: int | None = None) -> None:
        self.root_dir = os.path.abspath(root_dir or config.VIDEOS_PATH)
        self.total = config.TOTAL_VIDEOS if total is None else total
        if self.total < 1:
            raise ValueError(f"Need at least one clip, got {self.total}")

    def source(self, index: int) -> str:
        if not 1 <= index <= self.total:
            raise IndexError(f"Clip index {index} outside 1..{self.total}")
        return os.path.join(self.root_dir, config.VIDEO_NAME_FMT.format(index=index))

    def sources(self) -> List[str]:
        return [self.source(i) for i in range(1, self.total + 1)]

    # ------------------------------------------------------------- probing
    def verify(self) -> ClipReport:
        report = ClipReport()
        for i in range(1, self.total + 1):
            fp = self.source(i)
            if not os.path.isfile(fp):
                report.missing.append(i)
                continue
            dur_us = _probe_duration_us(fp)
            if dur_us:
                report.playable[i] = dur_us
            else:
                report.unreadable.append(i)

        if os.path.isdir(self.root_dir):
            for name in sorted(os.listdir(self.root_dir)):
                m = _HERO_RE.match(name)
                if m and int(m.group(1)) > self.total:
                    report.extra.append(name)

        for i, dur in report.playable.items():
            log.debug("clip %d ok (%.2fs)", i, dur / 1_000_000)
        if report.missing:
            log.warning("missing clips %s in %s", report.missing, self.root_dir)
        if report.unreadable:
            log.warning("unreadable clips %s in %s", report.unreadable, self.root_dir)
        if report.extra:
            log.info("ignoring clips beyond %d: %s", self.total, ", ".join(report.extra))
        if len(report.playable) < self.total - 1:
            log.warning("only %d of %d clips playable – loading overlay may never clear",
                        len(report.playable), self.total)
        return report
