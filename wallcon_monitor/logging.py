from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable


def _default_logger_name() -> logging.Logger:
    return logging.getLogger("wallcon")


class ConsoleLog:
    """Configure console logging for the application."""

    def __init__(self, level: str = "WARNING", quiet: bool = False, debug_modules: Iterable[str] | None = None):
        self.level = level.upper()
        self.quiet = quiet
        self.debug_modules = list(debug_modules or [])

    def setup(self) -> logging.Logger:
        # Root logger handles all levels; handlers control visibility.
        root = logging.getLogger()
        root.handlers.clear()
        root.setLevel(logging.DEBUG)

        if not self.quiet:
            # stdout carries the reports; diagnostics go to stderr
            handler = logging.StreamHandler(sys.stderr)
            handler.setLevel(getattr(logging, self.level, logging.WARNING))
            fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
            handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))
            root.addHandler(handler)

        for name in self.debug_modules:
            logging.getLogger(name).setLevel(logging.DEBUG)

        return _default_logger_name()


class RFC3339Formatter(logging.Formatter):
    """Formatter whose %(asctime)s is an RFC 3339 timestamp with local offset."""

    def formatTime(self, record, datefmt=None):
        stamp = datetime.fromtimestamp(record.created).astimezone()
        return stamp.isoformat(timespec="milliseconds")


class ResponseLog:
    """Append-only record of raw API responses for offline debugging.

    Each fetch becomes one line, ``<timestamp> <endpoint>: <raw body>``.
    The file is opened on construction so an unwritable path fails early.
    """

    def __init__(self, path: str):
        self.path = Path(path).expanduser()
        self.logger = logging.getLogger(f"wallcon.responses.{self.path}")
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False
        self.handler = logging.FileHandler(self.path, mode="a", encoding="utf-8")
        self.handler.setFormatter(RFC3339Formatter("%(asctime)s %(message)s"))
        self.logger.addHandler(self.handler)

    def write(self, endpoint: str, body: str) -> None:
        # keep one response per line even if the device pretty-prints
        flat = " ".join(body.splitlines())
        self.logger.info("%s: %s", endpoint, flat)

    def close(self) -> None:
        self.logger.removeHandler(self.handler)
        self.handler.close()

    def __enter__(self) -> "ResponseLog":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
