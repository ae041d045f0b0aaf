"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete run (all Steps), then computes the metrics that
/api/plan returns with every run and /api/compare sets side by side.

Usage:
    rec = Recorder()
    rec.start("quick_sort", {"values": [5, 3, 8, 1]})
    rec.run_to_completion()          # exhausts the sequence
    metrics = rec.get_metrics()      # RunMetrics
    rec.export()                     # serialisable snapshot for save/replay

Comparison (/api/compare):
    The caller holds two Recorders (one per algorithm), runs both to
    completion on the SAME input, then calls compare(rec1, rec2).
"""

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import structlog

from algorithms import get_algorithm
from algorithms.errors import PlaybackError
from algorithms.step import Step, StepKind
from engine.stepper import Stepper

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# Metrics dataclass — the "metrics" block of /api/plan
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algorithm:     str   = ""
    input_size:    int   = 0
    comparisons:   int   = 0
    swaps:         int   = 0          # swaps + merge placements
    accepts:       int   = 0
    rejects:       int   = 0
    total_steps:   int   = 0          # number of Steps yielded
    wall_time_ms:  float = 0.0        # wall-clock time to run to completion
    found:         bool  = False      # searches / matching: ended on ACCEPT
    sorted:        bool  = False      # sorts: final state is non-decreasing


# ---------------------------------------------------------------------------
# ComparisonResult — the /api/compare response
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""
    winner_swaps:       str = ""
    winner_steps:       str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
        stepper : The underlying Stepper (if you want live step-by-step access).
    """

    def __init__(self):
        self.steps:    List[Step]           = []
        self.metrics:  Optional[RunMetrics] = None
        self.stepper:  Optional[Stepper]    = None

        self._algorithm: str            = ""
        self._payload:   Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algorithm: str, payload: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        """Plan the run and wrap it in a fresh Stepper.  Invalid input raises here."""
        self.stepper = Stepper()
        self.stepper.plan(algorithm, payload, **kwargs)
        self._algorithm = algorithm
        self._payload   = dict(payload or {})
        self.steps      = []
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the sequence, record every step, compute metrics."""
        if self.stepper is None:
            raise PlaybackError("Call start() first.")

        started = time.monotonic()
        self.stepper.jump_to_end()
        self.steps = list(self.stepper.steps)
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "run_recorded",
            algorithm=self._algorithm,
            total_steps=self.metrics.total_steps,
            comparisons=self.metrics.comparisons,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algorithm":  self._algorithm,
            "input":      self._payload,
            "pseudocode": list(self.stepper.sequence.pseudocode) if self.stepper and self.stepper.sequence else [],
            "metrics":    asdict(self.metrics) if self.metrics else {},
            "steps":      [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        counts: Dict[StepKind, int] = {}
        for s in self.steps:
            counts[s.kind] = counts.get(s.kind, 0) + 1

        last = self.steps[-1] if self.steps else None
        final_array = last.state.get("array") if last else None
        info = get_algorithm(self._algorithm)
        is_sorted = (
            info is not None and "sorting" in info.tags
            and isinstance(final_array, list)
            and all(final_array[i] <= final_array[i + 1] for i in range(len(final_array) - 1))
        )

        return RunMetrics(
            algorithm=self._algorithm,
            input_size=_input_size(self._payload),
            comparisons=counts.get(StepKind.COMPARE, 0),
            swaps=counts.get(StepKind.SWAP, 0) + counts.get(StepKind.PLACE, 0),
            accepts=counts.get(StepKind.ACCEPT, 0),
            rejects=counts.get(StepKind.REJECT, 0),
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            found=last is not None and last.kind is StepKind.ACCEPT,
            sorted=is_sorted,
        )


def _input_size(payload: Mapping[str, Any]) -> int:
    for key in ("values", "text", "commands"):
        raw = payload.get(key)
        if isinstance(raw, (list, tuple)):
            return len(raw)
        if isinstance(raw, str):
            return len(raw) if key == "text" else len([t for t in raw.replace(",", " ").split() if t])
    return 0


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algorithm, r.algorithm),
        winner_swaps      =winner(l.swaps, r.swaps, l.algorithm, r.algorithm),
        winner_steps      =winner(l.total_steps, r.total_steps, l.algorithm, r.algorithm),
    )
