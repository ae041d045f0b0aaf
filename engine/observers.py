"""
observers.py — Step Subscribers
================================
Callables that can be handed to Stepper.subscribe().
"""

from typing import List

import structlog

from algorithms.step import Step


class LoggingObserver:
    """Logs every displayed step at debug level."""

    def __init__(self, algorithm: str = ""):
        self._log = structlog.get_logger().bind(algorithm=algorithm)

    def __call__(self, step: Step) -> None:
        self._log.debug(
            "step_displayed",
            step_number=step.step_number,
            kind=step.kind.value,
            operands=list(step.operands),
            reason=step.reason,
            is_final=step.is_final,
        )


class StepCollector:
    """Keeps every step it is shown, in display order (rewinds included)."""

    def __init__(self):
        self.steps: List[Step] = []

    def __call__(self, step: Step) -> None:
        self.steps.append(step)

    def kinds(self) -> List[str]:
        return [s.kind.value for s in self.steps]
