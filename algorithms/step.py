"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm and every structure operation is a generator that yields
Step objects.  A Step is one discrete, ordered unit of algorithmic progress
plus a frozen-in-time picture of the structure right after it happened:

    • What kind of thing happened   (compare, swap, move-pointer, …)
    • Which indices / values were involved
    • The resulting state of the array / queue / tree / bucket
    • Which line of pseudocode is executing right now
    • A plain-English status line ("Comparing index 2 and 3")

Design decisions:
  - Step is a plain dataclass (no methods that mutate anything).
    It is a SNAPSHOT. The generator is the only writer; the stepper and
    whatever renderer subscribes to it are pure readers.
  - `state` is a shallow dict built by the structure's own `snapshot()`
    so a renderer can redraw from a single step without replaying history.
  - `overlay` is a free-form dict so different algorithms can push
    whatever extra info they want (reject reason, pivot, sub-range, …).
  - Numbering and the `is_final` flag are stamped by StepSequence, so a
    command stream spanning several operations stays contiguous.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any, Tuple


# ---------------------------------------------------------------------------
# Step kinds — the vocabulary a renderer maps onto visual transitions
# ---------------------------------------------------------------------------
class StepKind(Enum):
    COMPARE      = "compare"
    SWAP         = "swap"
    MOVE_POINTER = "move-pointer"
    ACCEPT       = "accept"
    REJECT       = "reject"
    MARK_SORTED  = "mark-sorted"
    MARK_VISITED = "mark-visited"
    ENQUEUE      = "enqueue"
    DEQUEUE      = "dequeue"
    SPLIT        = "split"          # merge sort divide
    PLACE        = "place"          # merge sort accept-into-position
    SHIFT        = "reject-shift"   # string matching mismatch
    NOT_FOUND    = "not-found"
    INSERT       = "insert"
    REMOVE       = "remove"
    TRAVERSE     = "traverse"
    VISIT        = "visit"
    PUSH         = "push"
    POP          = "pop"
    REFILL       = "refill"


# Reasons attached to REJECT steps via overlay["reason"]
REASON_FULL         = "full"
REASON_EMPTY        = "empty"
REASON_DUPLICATE    = "duplicate"
REASON_RATE_LIMITED = "rate-limited"
REASON_NOT_FOUND    = "not-found"


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in its sequence.
        kind            : StepKind of the event.
        operands        : Indices or values involved, in a kind-specific order:
                            • compare       – (i, j) or (index, key)
                            • swap          – (i, j)
                            • move-pointer  – (pointer_name, new_position)
                            • accept        – (index,) or (amount,)
                            • reject        – (value,) or (amount,)
        state           : Snapshot of the structure AFTER this step.
        pseudocode_line : 0-based index of the pseudocode line executing now.
        explanation     : Human-readable status text for the caller.
        overlay         : Free-form dict for algo-specific extras:
                            • "reason"  – why a REJECT happened
                            • "pivot"   – quick sort pivot value
                            • "range"   – (low, high) sub-range being worked on
                            • "chars"   – (text_char, pattern_char) for string matching
        is_final        : True on the very last step of the sequence.
    """

    step_number:      int                          = 0
    kind:             StepKind                     = StepKind.COMPARE
    operands:         Tuple[Any, ...]              = ()
    state:            Dict[str, Any]               = field(default_factory=dict)
    pseudocode_line:  int                          = 0
    explanation:      str                          = ""
    overlay:          Dict[str, Any]               = field(default_factory=dict)
    is_final:         bool                         = False

    @property
    def reason(self) -> Optional[str]:
        return self.overlay.get("reason")

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form (enum → value, tuples → lists)."""
        return {
            "step_number":     self.step_number,
            "kind":            self.kind.value,
            "operands":        list(self.operands),
            "state":           self.state,
            "pseudocode_line": self.pseudocode_line,
            "explanation":     self.explanation,
            "overlay":         {k: list(v) if isinstance(v, tuple) else v for k, v in self.overlay.items()},
            "is_final":        self.is_final,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Step":
        return cls(
            step_number=data.get("step_number", 0),
            kind=StepKind(data["kind"]),
            operands=tuple(data.get("operands", ())),
            state=dict(data.get("state", {})),
            pseudocode_line=data.get("pseudocode_line", 0),
            explanation=data.get("explanation", ""),
            overlay=dict(data.get("overlay", {})),
            is_final=data.get("is_final", False),
        )


# ---------------------------------------------------------------------------
# Convenience builder so generators don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that generators use to construct Steps cleanly.

    The builder remembers a `snapshot` callable so every emitted Step carries
    the structure's state at the moment it was built.

    Usage inside an algorithm generator:
        sb = StepBuilder(lambda: {"array": list(arr)})
        sb.pseudocode_line = 4
        yield sb.build(StepKind.COMPARE, (j, j + 1), f"Comparing index {j} and {j + 1}")
    """

    def __init__(self, snapshot=None):
        self._snapshot = snapshot or dict
        self.reset()

    def reset(self):
        self.pseudocode_line:  int             = 0
        self.overlay:          Dict[str, Any]  = {}
        self.sorted_indices:   List[int]       = []

    # -- helpers --
    def mark_sorted(self, *indices: int):
        for idx in indices:
            if idx not in self.sorted_indices:
                self.sorted_indices.append(idx)

    def build(
        self,
        kind: StepKind,
        operands: Tuple[Any, ...] = (),
        explanation: str = "",
        pseudocode_line: Optional[int] = None,
        **overlay: Any,
    ) -> Step:
        if pseudocode_line is not None:
            self.pseudocode_line = pseudocode_line
        state = self._snapshot()
        if self.sorted_indices:
            state["sorted"] = sorted(self.sorted_indices)
        merged = dict(self.overlay)
        merged.update(overlay)
        return Step(
            kind=kind,
            operands=tuple(operands),
            state=state,
            pseudocode_line=self.pseudocode_line,
            explanation=explanation,
            overlay=merged,
        )

    def reject(self, operands: Tuple[Any, ...], reason: str, explanation: str,
               pseudocode_line: Optional[int] = None) -> Step:
        return self.build(StepKind.REJECT, operands, explanation, pseudocode_line, reason=reason)
