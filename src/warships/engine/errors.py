"""Exceptions raised by the targeting engine.

All of them signal a programming error in the caller; none is retried.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for engine errors."""


class InvalidCoordinate(EngineError, ValueError):
    """A point or coordinate string lies outside the 10x10 grid."""


class IllegalPlacement(EngineError, RuntimeError):
    """A ship was placed where the board rules forbid it."""


class ExhaustedBoard(EngineError, RuntimeError):
    """A target was requested but no unknown cell is left."""
