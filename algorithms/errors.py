"""
errors.py — Engine Error Taxonomy
==================================
Raised BEFORE any Step is produced (fail fast).  Full / empty conditions
met while an operation is running are NOT errors: they come out of the
generator as ordinary REJECT steps.
"""


class EngineError(Exception):
    """Base class for everything the engine raises on purpose."""


class InvalidInputError(EngineError, ValueError):
    """Malformed or out-of-range input: non-integer tokens, pattern longer
    than text, duplicate initial BST key, list index out of bounds, …"""


class CapacityExceededError(EngineError):
    """Initial contents do not fit the structure's capacity."""


class EmptyStructureError(EngineError):
    """An operation that needs at least one element was planned on an empty structure."""


class PlaybackError(EngineError):
    """Illegal playback transition, e.g. loading a new run while one is still playing."""
