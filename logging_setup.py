"""
logging_setup.py – console + rotating runtime.log for the hero reel.
"""
from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import config

FORMAT  = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATEFMT = "%H:%M:%S"


def _resolve_level(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def setup_logging(level: str | int = config.LOG_LEVEL,
                  log_file: Optional[str | Path] = config.LOG_FILE,
                  add_console: bool = True) -> logging.Logger:
    """
    Configure the root logger once; later calls only adjust the level.
    A log file that cannot be opened leaves console logging in place.
    """
    resolved = _resolve_level(level)
    root = logging.getLogger()
    root.setLevel(resolved)

    if root.handlers:
        for handler in root.handlers:
            handler.setLevel(resolved)
        return root

    formatter = logging.Formatter(fmt=FORMAT, datefmt=DATEFMT)

    if log_file:
        path = Path(log_file)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.handlers.RotatingFileHandler(
                path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        except OSError as exc:
            logging.getLogger(__name__).warning("cannot open %s: %s", path, exc)
        else:
            fh.setLevel(resolved)
            fh.setFormatter(formatter)
            root.addHandler(fh)

    if add_console:
        console = logging.StreamHandler()
        console.setLevel(resolved)
        console.setFormatter(formatter)
        root.addHandler(console)

    return root
