from algorithms.step import Step, StepBuilder, StepKind, REASON_FULL
from engine.sequence import StepSequence


def _three_steps():
    sb = StepBuilder(lambda: {"n": 1})
    yield sb.build(StepKind.COMPARE, (0, 1), "a")
    yield sb.build(StepKind.SWAP, (0, 1), "b")
    yield sb.reject((5,), REASON_FULL, "c")


def test_builder_attaches_snapshot_and_overlay():
    sb = StepBuilder(lambda: {"array": [1, 2]})
    sb.overlay["pivot"] = 2
    step = sb.build(StepKind.COMPARE, (0, 1), "Comparing", pseudocode_line=3, mid=0)

    assert step.state == {"array": [1, 2]}
    assert step.overlay == {"pivot": 2, "mid": 0}
    assert step.pseudocode_line == 3


def test_builder_keeps_last_pseudocode_line():
    sb = StepBuilder()
    sb.build(StepKind.COMPARE, pseudocode_line=4)
    assert sb.build(StepKind.SWAP).pseudocode_line == 4


def test_mark_sorted_goes_into_state():
    sb = StepBuilder(lambda: {"array": [3, 1]})
    sb.mark_sorted(1, 0, 1)
    assert sb.build(StepKind.MARK_SORTED, (0,)).state["sorted"] == [0, 1]


def test_reject_carries_reason():
    step = StepBuilder().reject((9,), REASON_FULL, "Queue is full")
    assert step.kind is StepKind.REJECT
    assert step.reason == "full"


def test_to_dict_is_json_friendly():
    step = Step(kind=StepKind.MOVE_POINTER, operands=("low", 3), overlay={"range": (0, 4)})
    data = step.to_dict()

    assert data["kind"] == "move-pointer"
    assert data["operands"] == ["low", 3]
    assert data["overlay"]["range"] == [0, 4]
    assert Step.from_dict(data).kind is StepKind.MOVE_POINTER


def test_sequence_numbers_steps_and_marks_last_final():
    steps = StepSequence(_three_steps, algorithm="demo").to_list()

    assert [s.step_number for s in steps] == [0, 1, 2]
    assert [s.is_final for s in steps] == [False, False, True]


def test_sequence_is_replayable():
    seq = StepSequence(_three_steps)
    assert seq.kinds() == seq.kinds() == ["compare", "swap", "reject"]


def test_empty_sequence_yields_nothing():
    assert StepSequence(lambda: iter(())).to_list() == []
