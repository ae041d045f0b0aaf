"""
session.py — Live Structure Session
====================================
One interactive structure (a circular queue the user keeps enqueueing
into, a BST they keep inserting into, …) plus the Stepper that plays back
the most recent operation.

    session = StructureSession.create("circular_queue", {"capacity": 8})
    session.perform("enqueue", 5)      # plans, commits, loads the stepper
    session.stepper.advance()

An operation is planned against a COPY of the live structure; only after
the whole operation validated is the resulting state committed.  A bad
index therefore never leaves the structure half-mutated.
"""

from typing import Any, Dict, Mapping, Optional

import structlog

from algorithms.errors import InvalidInputError, PlaybackError
from engine.planner import plan_operation
from engine.sequence import StepSequence
from engine.stepper import Stepper
from structures import Structure, get_structure

logger = structlog.get_logger()

# Commands kept for display; the session travels in a 4 KB cookie.
HISTORY_LIMIT = 20


class StructureSession:
    """
    Attributes:
        kind      : Structure registry key.
        initial   : Serialised construction state that reset() returns to.
        structure : The live structure instance.
        stepper   : Playback of the last performed operation.
        history   : The last HISTORY_LIMIT commands since the last reset, as [name, *args].
    """

    def __init__(self, structure: Structure, initial: Optional[Dict[str, Any]] = None):
        self.kind:      str           = structure.KIND
        self.structure: Structure     = structure
        self.initial:   Dict[str, Any] = initial if initial is not None else structure.to_dict()
        self.stepper:   Stepper       = Stepper()
        self.history:   list          = []

    @classmethod
    def create(cls, kind: str, payload: Optional[Mapping[str, Any]] = None) -> "StructureSession":
        structure_cls = get_structure(kind)
        if structure_cls is None:
            raise InvalidInputError(f"Unknown structure: {kind}")
        return cls(structure_cls.from_input(payload or {}))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def perform(self, command: str, *args: Any) -> StepSequence:
        """Run one operation.  Refused while the previous playback is unfinished."""
        if self.stepper.is_playing:
            raise PlaybackError("previous operation is still playing; finish it or reset first")

        sequence, after = plan_operation(self.structure, command, args)
        self.structure = after
        self.history.append([command, *args])
        del self.history[:-HISTORY_LIMIT]
        self.stepper.load(sequence)
        logger.info("operation_performed", kind=self.kind, command=command, args=list(args))
        return sequence

    def reset(self) -> None:
        """Back to the initial construction.  No-op when nothing happened."""
        if not self.history and self.stepper.sequence is None:
            return
        self.structure = type(self.structure).from_dict(self.initial)
        self.history = []
        self.stepper.reset()
        logger.info("session_reset", kind=self.kind)

    # ------------------------------------------------------------------
    # Serialisation (Flask session cookie)
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":      self.kind,
            "initial":   self.initial,
            "structure": self.structure.to_dict(),
            "history":   list(self.history),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StructureSession":
        structure_cls = get_structure(data["kind"])
        if structure_cls is None:
            raise InvalidInputError(f"Unknown structure: {data['kind']}")
        session = cls(structure_cls.from_dict(data["structure"]), dict(data["initial"]))
        session.history = [list(h) for h in data.get("history", [])][-HISTORY_LIMIT:]
        return session

    def __repr__(self) -> str:
        return f"StructureSession(kind={self.kind!r}, structure={self.structure!r})"
