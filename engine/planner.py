"""
planner.py — plan(algorithm, input) → StepSequence
===================================================
The one entry point that turns "which algorithm" + "what input" into a
replayable StepSequence.

Two families:
  • Array / text algorithms (REGISTRY)  – input parsed by the AlgoInfo's
    parser, generator re-invoked on every replay.
  • Structures (STRUCTURES)             – a fresh instance is built from the
    input and the `commands` stream is run against it.  The stream is
    dry-run once on a throwaway copy so a bad index or unknown command is
    reported BEFORE any step is handed out.
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import structlog

from algorithms import get_algorithm
from algorithms.errors import InvalidInputError
from algorithms.step import Step
from algorithms.validation import parse_commands
from engine.sequence import StepSequence
from structures import Structure, get_structure

logger = structlog.get_logger()


def plan(
    algorithm: str,
    payload: Optional[Mapping[str, Any]] = None,
    enforce_limits: bool = False,
) -> StepSequence:
    """
    Args:
        algorithm      : Registry key ("quick_sort", "circular_queue", …).
        payload        : Input mapping (values / key / text / pattern /
                         capacity / commands, depending on the algorithm).
        enforce_limits : Apply the per-algorithm max input length.

    Raises:
        InvalidInputError, CapacityExceededError, EmptyStructureError –
        always before any step is produced.
    """
    payload = payload or {}

    info = get_algorithm(algorithm)
    if info is not None:
        kwargs = info.parse(payload, info.max_input if enforce_limits else None)
        logger.info("plan_created", algorithm=info.key, input_size=_input_size(kwargs))
        return StepSequence(lambda: info.fn(**kwargs), algorithm=info.key, pseudocode=info.pseudocode)

    cls = get_structure(algorithm)
    if cls is None:
        raise InvalidInputError(f"Unknown algorithm: {algorithm}")

    initial  = cls.from_input(payload)
    commands = parse_commands(payload.get("commands"))
    if not commands:
        raise InvalidInputError(f"{cls.KIND} needs at least one command")

    for _ in run_commands(initial.copy(), commands):
        pass

    logger.info("plan_created", algorithm=cls.KIND, commands=len(commands))
    return StepSequence(
        lambda: run_commands(initial.copy(), commands),
        algorithm=cls.KIND,
        pseudocode=cls.PSEUDOCODE,
    )


def plan_operation(
    structure: Structure,
    command: str,
    args: Sequence[Any] = (),
) -> Tuple[StepSequence, Structure]:
    """
    Plan ONE operation against a live structure without touching it.

    Returns:
        (sequence, after) – a replayable sequence that always starts from
        the structure's current state, and a new structure holding the
        state after the operation, for the caller to commit.
    """
    name = command.strip().lower().replace("-", "_")
    args = tuple(args)

    after = structure.copy()
    for _ in after.execute(name, args):
        pass

    before = structure.copy()
    sequence = StepSequence(
        lambda: before.copy().execute(name, args),
        algorithm=structure.KIND,
        pseudocode=structure.PSEUDOCODE,
    )
    return sequence, after


def run_commands(structure: Structure, commands: List[Tuple[str, Tuple[Any, ...]]]) -> Iterator[Step]:
    for name, args in commands:
        yield from structure.execute(name, args)


def _input_size(kwargs: Dict[str, Any]) -> int:
    if "values" in kwargs:
        return len(kwargs["values"])
    return len(kwargs.get("text", ""))
