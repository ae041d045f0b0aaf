"""
engine/
-------
Planning, playback & recording layer.

    from engine import plan, Stepper, StructureSession, Recorder, compare
"""

from engine.sequence  import StepSequence
from engine.planner   import plan, plan_operation
from engine.stepper   import Stepper, StepperState, SPEED_PRESETS
from engine.session   import StructureSession
from engine.recorder  import Recorder, RunMetrics, ComparisonResult, compare
from engine.observers import LoggingObserver, StepCollector

__all__ = [
    "StepSequence",
    "plan",
    "plan_operation",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "StructureSession",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "LoggingObserver",
    "StepCollector",
]
