"""
base.py — Structure Base Class
===============================
Every live data structure (stack, queues, linked lists, BST, buckets)
shares the same shape:

  1. A `snapshot()` dict that goes into every Step's `state`
  2. Operations written as generator methods that mutate the structure
     as they are consumed and yield Steps
  3. A command table so callers can drive it by name:
         structure.execute("enqueue", (5,))
  4. Serialisation round-trip (to_dict / from_dict / from_input)

Design decisions:
  - Operation arguments are always integers (values, indices, amounts),
    so `execute` parses every argument with the same validator.
  - Full / empty conditions come out as REJECT steps.  Only malformed
    commands and impossible indices raise.
"""

import copy
from typing import Any, Dict, Generator, List, Mapping, Sequence, Tuple

from algorithms.errors import InvalidInputError
from algorithms.step import Step, StepBuilder
from algorithms.validation import parse_int


class Structure:
    """
    Attributes:
        KIND        : Registry key, e.g. "circular_queue".
        LABEL       : Human label.
        COMMANDS    : {command_name: (min_args, max_args)}.
        PSEUDOCODE  : Lines for the side-panel; steps index into it.
    """

    KIND:       str                         = ""
    LABEL:      str                         = ""
    COMMANDS:   Dict[str, Tuple[int, int]]  = {}
    PSEUDOCODE: List[str]                   = []

    # ------------------------------------------------------------------
    # Command dispatch
    # ------------------------------------------------------------------
    def execute(self, command: str, args: Sequence[Any] = ()) -> Generator[Step, None, None]:
        """Validate a command and return its (not yet started) step generator."""
        if command not in self.COMMANDS:
            known = ", ".join(sorted(self.COMMANDS))
            raise InvalidInputError(f"unknown {self.KIND} command '{command}' (expected one of: {known})")
        lo, hi = self.COMMANDS[command]
        if not lo <= len(args) <= hi:
            expected = str(lo) if lo == hi else f"{lo}-{hi}"
            raise InvalidInputError(f"'{command}' takes {expected} argument(s), got {len(args)}")
        ints = tuple(parse_int(a, f"{command} argument") for a in args)
        return getattr(self, command)(*ints)

    def builder(self) -> StepBuilder:
        return StepBuilder(self.snapshot)

    def copy(self) -> "Structure":
        return copy.deepcopy(self)

    # ------------------------------------------------------------------
    # To be provided by each structure
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Structure":
        raise NotImplementedError

    @classmethod
    def from_input(cls, payload: Mapping[str, Any]) -> "Structure":
        """Build a fresh instance from caller input (capacity, initial values, …)."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.snapshot()})"
