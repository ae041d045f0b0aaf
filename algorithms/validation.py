"""
validation.py — Input Parsing & Preconditions
==============================================
Turns raw caller input (form-field strings or already-decoded JSON) into
the primitive values the generators expect.  Everything here raises
InvalidInputError; nothing here yields Steps.
"""

import re
from typing import Any, List, Optional, Sequence, Tuple

from algorithms.errors import InvalidInputError


_TOKEN_SPLIT = re.compile(r"[ ,]+")
_SINGLE_INT  = re.compile(r"^-?\d+$")


def parse_int(raw: Any, what: str = "value") -> int:
    """Exactly one integer: an int, or a string like "-12"."""
    if isinstance(raw, bool):
        raise InvalidInputError(f"{what} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _SINGLE_INT.match(raw.strip()):
        return int(raw.strip())
    raise InvalidInputError(f"{what} must be a single integer, got {raw!r}")


def parse_int_sequence(raw: Any, max_length: Optional[int] = None) -> List[int]:
    """
    Accepts a list of ints or a string of integers separated by spaces
    and/or commas ("5, 3 8").  Rejects empty input and non-integer tokens.
    """
    if raw is None:
        raise InvalidInputError("values are required")
    if isinstance(raw, str):
        tokens = [t for t in _TOKEN_SPLIT.split(raw.strip()) if t]
    elif isinstance(raw, (list, tuple)):
        tokens = list(raw)
    else:
        raise InvalidInputError(f"values must be a list or a string, got {type(raw).__name__}")

    if not tokens:
        raise InvalidInputError("no values entered")
    values = [parse_int(t, "every value") for t in tokens]

    if max_length is not None and len(values) > max_length:
        raise InvalidInputError(f"at most {max_length} values are supported, got {len(values)}")
    return values


def parse_text_pattern(text: Any, pattern: Any) -> Tuple[str, str]:
    if not isinstance(text, str) or not isinstance(pattern, str):
        raise InvalidInputError("text and pattern must both be strings")
    if not text or not pattern:
        raise InvalidInputError("text and pattern must both be non-empty")
    if len(pattern) > len(text):
        raise InvalidInputError(
            f"pattern is longer than text ({len(pattern)} > {len(text)})"
        )
    return text, pattern


def parse_capacity(raw: Any, default: Optional[int], what: str = "capacity") -> Optional[int]:
    if raw is None:
        return default
    capacity = parse_int(raw, what)
    if capacity <= 0:
        raise InvalidInputError(f"{what} must be positive, got {capacity}")
    return capacity


def parse_commands(raw: Any) -> List[Tuple[str, Tuple[Any, ...]]]:
    """
    Commands arrive as ["enqueue", 5], ["dequeue"] or plain "dequeue".
    Returns [(name, args)] with names normalised to snake_case.
    """
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        raise InvalidInputError("commands must be a list")

    commands = []
    for entry in raw:
        if isinstance(entry, str):
            name, args = entry, ()
        elif isinstance(entry, (list, tuple)) and entry and isinstance(entry[0], str):
            name, args = entry[0], tuple(entry[1:])
        else:
            raise InvalidInputError(f"malformed command: {entry!r}")
        commands.append((name.strip().lower().replace("-", "_"), args))
    return commands


def check_unique(values: Sequence[int]) -> None:
    seen = set()
    for v in values:
        if v in seen:
            raise InvalidInputError(f"duplicate key: {v}")
        seen.add(v)
