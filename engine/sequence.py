"""
sequence.py — Replayable Step Sequence
=======================================
A StepSequence wraps a zero-argument factory that returns a fresh step
generator.  Every `iter()` calls the factory again, so the sequence can be
replayed from the start as often as needed without the caller keeping a
copy of the steps.

While iterating it:
  - renumbers steps 0, 1, 2, … (a command stream spans many operations)
  - looks one step ahead so the last step comes out with is_final=True

Not thread-shared: one consumer at a time.
"""

from dataclasses import replace
from typing import Callable, Iterator, List

from algorithms.step import Step


class StepSequence:
    """
    Attributes:
        algorithm : Registry key of the algorithm / structure that produced it.
        pseudocode: Lines the steps' `pseudocode_line` indexes into.
    """

    def __init__(
        self,
        factory: Callable[[], Iterator[Step]],
        algorithm: str = "",
        pseudocode: List[str] = None,
    ):
        self._factory   = factory
        self.algorithm  = algorithm
        self.pseudocode = list(pseudocode or [])

    def __iter__(self) -> Iterator[Step]:
        source = iter(self._factory())
        try:
            current = next(source)
        except StopIteration:
            return
        number = 0
        for upcoming in source:
            yield replace(current, step_number=number, is_final=False)
            number += 1
            current = upcoming
        yield replace(current, step_number=number, is_final=True)

    def to_list(self) -> List[Step]:
        return list(self)

    def kinds(self) -> List[str]:
        """Step kinds in order, as their string values."""
        return [s.kind.value for s in self]

    def __repr__(self) -> str:
        return f"StepSequence(algorithm={self.algorithm!r})"
