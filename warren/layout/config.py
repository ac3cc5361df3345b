"""Generation settings and their layered resolution.

Precedence (lowest to highest): dataclass defaults, WARREN_LAYOUT_* environment
variables, Flask ``app.config`` LAYOUT_* keys when an application context is
active, explicit keyword overrides.
"""
from __future__ import annotations
import os
import random
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from flask import current_app, has_app_context

from .errors import ConfigurationError


DEFAULT_ATTEMPT_CEILING = 100


@dataclass
class LayoutConfig:
    width: int = 50
    height: int = 50
    min_room_size: int = 6
    percent_rooms_to_remove: float = 0.0
    seed: Optional[int] = None
    max_attempts: int = 3
    max_total_attempts: Optional[int] = None
    enable_metrics: bool = True
    strict: bool = False

    @classmethod
    def from_env(cls, environ=None) -> "LayoutConfig":
        environ = os.environ if environ is None else environ
        return cls(**_env_overrides(environ))

    @property
    def attempt_ceiling(self) -> int:
        """Total attempts allowed across reseeds before generation gives up."""
        if self.max_total_attempts is not None:
            return self.max_total_attempts
        return max(DEFAULT_ATTEMPT_CEILING, self.max_attempts)

    def with_seed(self) -> "LayoutConfig":
        """Return a copy whose seed is concrete (0 is a valid seed; None draws one)."""
        if self.seed is not None:
            return self
        return replace(self, seed=random.randint(1, 1_000_000))

    def validate(self) -> "LayoutConfig":
        for name in ('width', 'height', 'min_room_size', 'max_attempts', 'max_total_attempts'):
            val = getattr(self, name)
            if val is None and name == 'max_total_attempts':
                continue
            if isinstance(val, bool) or not isinstance(val, int):
                raise ConfigurationError(name, 'must be an integer', 'type')
            if val <= 0:
                raise ConfigurationError(name, 'must be positive', 'range')
        if self.min_room_size > min(self.width, self.height):
            raise ConfigurationError(
                'min_room_size',
                f'{self.min_room_size} does not fit a {self.width}x{self.height} grid',
                'too_large',
            )
        pct = self.percent_rooms_to_remove
        if isinstance(pct, bool) or not isinstance(pct, (int, float)):
            raise ConfigurationError('percent_rooms_to_remove', 'must be a number', 'type')
        if not 0 <= pct <= 100:
            raise ConfigurationError('percent_rooms_to_remove', 'must be within 0..100', 'range')
        if self.max_total_attempts is not None and self.max_total_attempts < self.max_attempts:
            raise ConfigurationError(
                'max_total_attempts', 'must be at least max_attempts', 'range'
            )
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigurationError('seed', 'must be an integer', 'type')
        return self


ENV_PREFIX = 'WARREN_LAYOUT_'
# Env var names that differ from the field name
ENV_ALIASES = {
    'WARREN_LAYOUT_PRUNE_PERCENT': 'percent_rooms_to_remove',
}
_BOOL_FIELDS = {'enable_metrics', 'strict'}
_FLOAT_FIELDS = {'percent_rooms_to_remove'}


def _coerce(name: str, raw: Any):
    if not isinstance(raw, str):
        return raw
    val = raw.strip()
    if name in _BOOL_FIELDS:
        return val.lower() not in {'0', 'false', 'no', ''}
    try:
        if name in _FLOAT_FIELDS:
            return float(val)
        return int(val)
    except ValueError:
        raise ConfigurationError(name, f'cannot parse {raw!r}', 'type') from None


def _env_overrides(environ) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    names = {f.name for f in fields(LayoutConfig)}
    for key, raw in environ.items():
        if key in ENV_ALIASES:
            name = ENV_ALIASES[key]
        elif key.startswith(ENV_PREFIX):
            name = key[len(ENV_PREFIX):].lower()
        else:
            continue
        if name in names:
            out[name] = _coerce(name, raw)
    return out


def _app_overrides() -> Dict[str, Any]:
    if not has_app_context():
        return {}
    cfg = current_app.config
    out: Dict[str, Any] = {}
    for f in fields(LayoutConfig):
        key = 'LAYOUT_' + f.name.upper()
        if key in cfg:
            out[f.name] = _coerce(f.name, cfg[key])
    return out


def resolve_config(environ=None, **overrides) -> LayoutConfig:
    """Build a validated LayoutConfig from env, app config and keyword overrides.

    Keyword overrides that are None are ignored so callers can pass optional
    CLI/query values straight through.
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    values.update(_env_overrides(environ))
    values.update(_app_overrides())
    values.update({k: v for k, v in overrides.items() if v is not None})
    return LayoutConfig(**values).validate()


__all__ = ["LayoutConfig", "resolve_config", "ENV_PREFIX"]
