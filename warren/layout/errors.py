"""Exception types raised by the layout engine.

Configuration problems are reported before any generation attempt. Layouts
that fail to connect are retried internally; only running out of the total
attempt budget reaches the caller as GenerationFailedError.
"""
from __future__ import annotations
from typing import Optional


class LayoutError(Exception):
    """Base class for layout engine errors."""


class ConfigurationError(LayoutError):
    def __init__(self, field: str, message: str, code: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.code = code

    def to_dict(self):
        return {'error': self.message, 'field': self.field, 'code': self.code}


class GenerationFailedError(LayoutError):
    def __init__(self, attempts: int, reseeds: int, last_seed: Optional[int] = None):
        super().__init__(
            f"could not generate a connected layout within {attempts} attempts ({reseeds} reseeds)"
        )
        self.attempts = attempts
        self.reseeds = reseeds
        self.last_seed = last_seed

    def to_dict(self):
        return {
            'error': str(self),
            'attempts': self.attempts,
            'reseeds': self.reseeds,
            'last_seed': self.last_seed,
        }


class LayoutInvariantError(LayoutError):
    def __init__(self, category: str, details):
        super().__init__(f"layout invariant violated: {category} ({details!r})")
        self.category = category
        self.details = details


__all__ = ["LayoutError", "ConfigurationError", "GenerationFailedError", "LayoutInvariantError"]
