"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the ONLY object a playback driver interacts with during a
run.  It owns the StepSequence's iterator, buffers every Step it has seen
(enabling rewind), and exposes a clean advance/prev/goto/replay API.

State machine:
    IDLE      →  plan() / load()  →  PLANNING  →  READY
    READY     →  advance()        →  PLAYING
    PLAYING   →  (sequence exhausted) → COMPLETED
    COMPLETED →  replay()         →  READY
    any       →  reset()          →  IDLE

Loading a new sequence while PLAYING raises PlaybackError; only reset()
may interrupt an unfinished run.

Timing:
  The Stepper never sleeps and never reads a clock.  A cooperative driver
  (browser timer, event loop, test) calls advance() at whatever cadence it
  likes; SPEED_PRESETS are hints for that driver.

Thread safety:
  This class is NOT thread-safe.  One driver, one thread.
"""

from enum import Enum
from typing import Any, Callable, Iterator, List, Mapping, Optional

import structlog

from algorithms.errors import PlaybackError
from algorithms.step import Step
from engine import planner
from engine.sequence import StepSequence

logger = structlog.get_logger()

StepCallback = Callable[[Step], None]


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE      = "idle"
    PLANNING  = "planning"
    READY     = "ready"
    PLAYING   = "playing"
    COMPLETED = "completed"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step), advisory for the caller's driver
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        sequence    : The loaded StepSequence (None while IDLE).
        steps       : List of all Steps pulled so far (buffer for rewind).
        current_idx : Index into `steps` that is currently displayed (-1 = none yet).
        speed       : Seconds between steps the driver should wait.
    """

    def __init__(self, on_step: Optional[StepCallback] = None):
        self.sequence:    Optional[StepSequence]  = None
        self._iterator:   Optional[Iterator[Step]] = None
        self.steps:       List[Step]               = []
        self.current_idx: int                      = -1
        self.state:       StepperState             = StepperState.IDLE
        self.speed:       float                    = SPEED_PRESETS["medium"]
        self._observers:  List[StepCallback]       = []
        if on_step is not None:
            self.subscribe(on_step)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def subscribe(self, callback: StepCallback) -> Callable[[], None]:
        """Register a step listener.  Returns a function that unsubscribes it."""
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def plan(self, algorithm: str, payload: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> StepSequence:
        """Plan a run and load it.  On invalid input the stepper falls back to IDLE."""
        self._guard_not_playing()
        self.state = StepperState.PLANNING
        try:
            sequence = planner.plan(algorithm, payload, **kwargs)
        except Exception:
            self._clear()
            raise
        self._load(sequence)
        return sequence

    def load(self, sequence: StepSequence) -> None:
        """Attach an already planned sequence."""
        self._guard_not_playing()
        self.state = StepperState.PLANNING
        self._load(sequence)

    def replay(self) -> None:
        """Start the same sequence again from the top (no re-planning)."""
        if self.sequence is None:
            raise PlaybackError("nothing to replay; plan or load a sequence first")
        self._guard_not_playing()
        self._load(self.sequence)

    def reset(self) -> None:
        """Back to IDLE from any state.  Safe to call repeatedly."""
        if self.state is not StepperState.IDLE:
            logger.debug("stepper_reset", algorithm=self.sequence.algorithm if self.sequence else "")
        self._clear()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def advance(self) -> Optional[Step]:
        """
        Show the next step and return it.  Returns None (and moves to
        COMPLETED) once the sequence is exhausted.
        """
        if self.state in (StepperState.IDLE, StepperState.PLANNING):
            raise PlaybackError("no sequence loaded")
        if self.state is StepperState.COMPLETED and self.current_idx >= len(self.steps) - 1:
            return None

        target = self.current_idx + 1
        if target >= len(self.steps) and not self._fetch_next():
            self._complete()
            return None

        self.state = StepperState.PLAYING
        self._goto(target)
        step = self.steps[target]
        if step.is_final:
            self._complete()
        return step

    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at end."""
        return self.advance() is not None

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index, pulling forward if needed."""
        while idx >= len(self.steps):
            if not self._fetch_next():
                break
        if 0 <= idx < len(self.steps):
            if self.state is StepperState.READY:
                self.state = StepperState.PLAYING
            self._goto(idx)
            if self.steps[idx].is_final:
                self._complete()
            return True
        return False

    def rewind(self) -> None:
        """Jump back to step 0."""
        if self.steps:
            self._goto(0)

    def jump_to_end(self) -> None:
        """Exhaust the sequence and jump to the final step."""
        while self._fetch_next():
            pass
        if self.steps:
            self._goto(len(self.steps) - 1)
        if self.sequence is not None:
            self._complete()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(0.02, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def total_steps_fetched(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state is StepperState.COMPLETED

    @property
    def is_playing(self) -> bool:
        return self.state is StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _guard_not_playing(self) -> None:
        if self.state is StepperState.PLAYING:
            raise PlaybackError("a run is still playing; finish it or reset() first")

    def _load(self, sequence: StepSequence) -> None:
        self.sequence    = sequence
        self._iterator   = iter(sequence)
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.READY
        logger.debug("stepper_loaded", algorithm=sequence.algorithm)

    def _clear(self) -> None:
        self.sequence    = None
        self._iterator   = None
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.IDLE

    def _complete(self) -> None:
        if self.state is not StepperState.COMPLETED:
            self.state = StepperState.COMPLETED
            logger.debug("stepper_completed", algorithm=self.sequence.algorithm, steps=len(self.steps))

    def _fetch_next(self) -> bool:
        """Pull one Step from the sequence into the buffer."""
        if self._iterator is None:
            return False
        try:
            self.steps.append(next(self._iterator))
            return True
        except StopIteration:
            self._iterator = None
            return False

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        self._notify(self.steps[idx])

    def _notify(self, step: Step) -> None:
        for callback in list(self._observers):
            callback(step)
