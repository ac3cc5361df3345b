"""
project: Warren
module: layout_api.py
License: MIT

Layout retrieval API.

Serves generated layouts as JSON for renderers and pathfinding clients that
run outside this process. Query parameters mirror LayoutConfig fields:

    seed            int or any string (non-digit strings are hashed)
    width, height   grid extent
    min_room_size   minimum partition leaf size
    prune           percentage of smallest rooms to try removing (0..100)
    max_attempts    attempts per seed before reseeding
"""

import hashlib
import os
import random
import threading
from dataclasses import astuple

from flask import Blueprint, current_app, jsonify, request

from warren.layout import ConfigurationError, GenerationFailedError, LayoutGenerator, resolve_config
from warren.logging_utils import get_logger

_log = get_logger("layout_api")

bp_layout = Blueprint("layout", __name__)

SEED_MAX = 9223372036854775807

# Simple in-process cache config tuple -> Layout. Locked because the dev server may run threaded.
_layout_cache = {}
_layout_cache_lock = threading.Lock()


def _coerce_seed(raw):
    """Convert a provided seed (int or str) into a bounded non-negative int."""
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw % SEED_MAX
    s = str(raw).strip()
    if not s:
        return random.randint(1, 1_000_000)
    if s.isdigit():
        return int(s) % SEED_MAX
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def _int_arg(name: str, field: str | None = None):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(field or name, f"cannot parse {raw!r}", "type") from None


def _float_arg(name: str, field: str):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(field, f"cannot parse {raw!r}", "type") from None


def _config_from_request():
    return resolve_config(
        seed=_coerce_seed(request.args.get("seed")),
        width=_int_arg("width"),
        height=_int_arg("height"),
        min_room_size=_int_arg("min_room_size"),
        percent_rooms_to_remove=_float_arg("prune", "percent_rooms_to_remove"),
        max_attempts=_int_arg("max_attempts"),
    ).with_seed()


def get_cached_layout(config):
    if os.environ.get("WARREN_DISABLE_CACHE") == "1":
        return LayoutGenerator(config).generate()
    key = astuple(config)
    with _layout_cache_lock:
        layout = _layout_cache.get(key)
        if layout is not None:
            return layout
    layout = LayoutGenerator(config).generate()
    cap = current_app.config.get("LAYOUT_CACHE_MAX", 8)
    with _layout_cache_lock:
        _layout_cache[key] = layout
        while len(_layout_cache) > cap:
            _layout_cache.pop(next(iter(_layout_cache)))
    return layout


@bp_layout.errorhandler(ConfigurationError)
def _config_error(err):
    _log.warn(event="layout_rejected_config", field=err.field, code=err.code, error=err.message)
    return jsonify(err.to_dict()), 400


@bp_layout.errorhandler(GenerationFailedError)
def _generation_failed(err):
    _log.error(event="layout_generation_failed", attempts=err.attempts, reseeds=err.reseeds)
    return jsonify(err.to_dict()), 503


@bp_layout.route("/api/layout")
def layout():
    """
    Return a generated layout.
    Response: { width, height, seed, final_seed, attempts, rooms, connections, doors, walls, metrics, ... }
    """
    cfg = _config_from_request()
    result = get_cached_layout(cfg)
    _log.for_layout(result).info(event="layout_served", rooms=len(result.rooms), doors=len(result.doors))
    return jsonify(result.to_dict())


@bp_layout.route("/api/layout/metrics")
def layout_metrics():
    cfg = _config_from_request()
    result = get_cached_layout(cfg)
    return jsonify({"seed": result.seed, "final_seed": result.final_seed, "metrics": result.metrics})


@bp_layout.route("/api/layout/walkable")
def layout_walkable():
    """Answer a single cell query: { x, y, kind, walkable }."""
    x = _int_arg("x")
    y = _int_arg("y")
    if x is None or y is None:
        raise ConfigurationError("x" if x is None else "y", "missing required coordinate", "required")
    result = get_cached_layout(_config_from_request())
    return jsonify({"x": x, "y": y, "kind": result.cell_kind(x, y), "walkable": result.is_walkable(x, y)})
