import pytest

from algorithms.errors import InvalidInputError
from algorithms.step import StepKind
from engine import plan, plan_operation
from structures import CircularQueue, LinkedList


def test_unknown_algorithm():
    with pytest.raises(InvalidInputError, match="Unknown algorithm"):
        plan("bogo_sort", {"values": [1]})


def test_structure_plan_needs_commands():
    with pytest.raises(InvalidInputError, match="at least one command"):
        plan("queue", {"values": [1, 2]})


def test_bad_command_fails_before_any_step():
    with pytest.raises(InvalidInputError):
        plan("linked_list", {"values": [1, 2], "commands": [["insert_tail", 3], ["remove_at", 9]]})


def test_structure_plan_spans_commands_and_replays():
    seq = plan("queue", {"commands": [["enqueue", 1], ["enqueue", 2], "dequeue", "dequeue", "dequeue"]})
    steps = seq.to_list()

    assert seq.kinds() == ["enqueue", "enqueue", "dequeue", "dequeue", "reject"]
    assert [s.step_number for s in steps] == [0, 1, 2, 3, 4]
    assert steps[-1].is_final and not steps[-2].is_final
    assert seq.to_list() == steps


def test_plan_operation_leaves_the_live_structure_alone():
    q = CircularQueue(capacity=2, values=[1])
    seq, after = plan_operation(q, "enqueue", [2])

    assert q.snapshot()["slots"] == [1, None]
    assert after.snapshot()["slots"] == [1, 2]
    assert seq.kinds() == ["enqueue"]
    # replays start from the pre-operation state every time
    assert seq.kinds() == ["enqueue"]


def test_plan_operation_normalises_command_names():
    lst = LinkedList(values=[1, 2, 3])
    seq, after = plan_operation(lst, "Insert-At", ["1", "9"])

    assert after.values() == [1, 9, 2, 3]
    assert seq.to_list()[-1].kind is StepKind.INSERT


def test_plan_operation_rejects_bad_index_without_commit():
    lst = LinkedList(values=[1])
    with pytest.raises(InvalidInputError):
        plan_operation(lst, "remove_at", [4])
    assert lst.values() == [1]
