"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) with a timestamp and
level, for events at the CLI and HTTP edges where line-oriented parsing is
more useful than free text. Engine modules log through stdlib ``logging``.

Usage:
    from warren.logging_utils import log
    log.info(event="layout_generated", seed=1337, rooms=24)
    log.for_layout(layout).info(event="layout_served", rooms=len(layout.rooms))

Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _current_level() -> int:
    return LEVELS.get(os.getenv("WARREN_LOG_LEVEL", "info").lower(), 20)


def _json_mode() -> bool:
    return os.getenv("WARREN_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _format(level: str, **fields):
    if _json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None, bound: dict | None = None):
        self.name = name or "warren"
        self.bound = bound or {}

    def bind(self, **fields) -> "_Logger":
        """Child logger that adds ``fields`` (e.g. seed, final_seed) to every line."""
        return _Logger(self.name, {**self.bound, **fields})

    def for_layout(self, layout) -> "_Logger":
        """Bind the identifying fields of a generated layout."""
        return self.bind(seed=layout.seed, final_seed=layout.final_seed, grid=f"{layout.width}x{layout.height}")

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < _current_level():
            return
        fields = {**self.bound, **fields}
        if "logger" not in fields:
            fields["logger"] = self.name
        print(_format(lvl, **fields), file=sys.stdout if lvl != "error" else sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("warren")
