import pytest

from algorithms.errors import CapacityExceededError, InvalidInputError
from algorithms.step import StepKind
from engine import plan
from structures import CircularQueue, Deque, Queue, Stack


def run(structure, command, *args):
    return list(structure.execute(command, args))


# ---------------------------------------------------------------------------
# Circular queue
# ---------------------------------------------------------------------------
def test_ninth_enqueue_into_ring_of_eight_is_rejected():
    commands = [["enqueue", v] for v in range(1, 10)]
    steps = plan("circular_queue", {"capacity": 8, "commands": commands}).to_list()

    assert [s.kind for s in steps[:8]] == [StepKind.ENQUEUE] * 8
    assert steps[8].kind is StepKind.REJECT
    assert steps[8].reason == "full"
    assert steps[8].state["size"] == 8
    assert steps[8].state["slots"] == [1, 2, 3, 4, 5, 6, 7, 8]


def test_draining_the_ring_resets_pointers():
    q = CircularQueue(capacity=3, values=[1, 2, 3])
    for _ in range(3):
        (step,) = run(q, "dequeue")
        assert step.kind is StepKind.DEQUEUE

    assert (q.head, q.tail) == (-1, -1)
    assert step.state["head"] == -1 and step.state["tail"] == -1

    (step,) = run(q, "dequeue")
    assert step.kind is StepKind.REJECT
    assert step.reason == "empty"


def test_ring_pointers_wrap_around():
    q = CircularQueue(capacity=3, values=[1, 2, 3])
    run(q, "dequeue")
    (step,) = run(q, "enqueue", 4)

    assert step.operands == (4, 0)
    assert (q.head, q.tail) == (1, 0)
    assert q.size == 3 and q.is_full
    assert 0 <= q.head < q.capacity and 0 <= q.tail < q.capacity


def test_ring_round_trips_through_dict():
    q = CircularQueue(capacity=4, values=[7, 8])
    run(q, "dequeue")
    clone = CircularQueue.from_dict(q.to_dict())
    assert clone.snapshot() == q.snapshot()


def test_ring_initial_values_over_capacity():
    with pytest.raises(CapacityExceededError):
        CircularQueue.from_input({"capacity": 2, "values": "1 2 3"})


# ---------------------------------------------------------------------------
# Plain queue
# ---------------------------------------------------------------------------
def test_queue_is_fifo():
    q = Queue()
    run(q, "enqueue", 1)
    run(q, "enqueue", 2)
    (step,) = run(q, "dequeue")

    assert step.operands == (1, 0)
    assert step.state == {"items": [2], "front": 0, "rear": 0, "capacity": None}


def test_empty_queue_reports_reject():
    (step,) = run(Queue(), "peek")
    assert step.reason == "empty"
    assert step.state["front"] == -1


# ---------------------------------------------------------------------------
# Deque
# ---------------------------------------------------------------------------
def test_deque_both_ends():
    d = Deque()
    run(d, "insert_rear", 2)
    run(d, "insert_front", 1)
    run(d, "insert_rear", 3)
    assert list(d.items) == [1, 2, 3]

    (front,) = run(d, "remove_front")
    (rear,) = run(d, "remove_rear")
    assert front.operands == (1, 0) and front.overlay["end"] == "front"
    assert rear.operands == (3, 1) and rear.overlay["end"] == "rear"


def test_deque_pointers_clear_when_emptied():
    d = Deque(values=[5])
    (step,) = run(d, "remove_rear")
    assert step.state["front"] == -1 and step.state["rear"] == -1
    (step,) = run(d, "remove_front")
    assert step.reason == "empty"


def test_bounded_deque_rejects_when_full():
    d = Deque(capacity=1, values=[5])
    (step,) = run(d, "insert_front", 6)
    assert step.reason == "full"
    assert list(d.items) == [5]


# ---------------------------------------------------------------------------
# Stack
# ---------------------------------------------------------------------------
def test_stack_is_lifo():
    steps = plan("stack", {"commands": [["push", 1], ["push", 2], "pop", "peek"]}).to_list()

    assert [s.kind for s in steps] == [StepKind.PUSH, StepKind.PUSH, StepKind.POP, StepKind.VISIT]
    assert steps[2].operands == (2, 1)
    assert steps[3].operands == (1, 0)


def test_bounded_stack_overflow_and_underflow():
    s = Stack(capacity=1)
    run(s, "push", 1)
    (full,) = run(s, "push", 2)
    run(s, "pop")
    (empty,) = run(s, "pop")

    assert full.reason == "full"
    assert empty.reason == "empty"
    assert empty.state["top"] == -1


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------
def test_unknown_command_and_bad_arity():
    q = Queue()
    with pytest.raises(InvalidInputError, match="unknown queue command"):
        q.execute("push", (1,))
    with pytest.raises(InvalidInputError, match="takes 1 argument"):
        q.execute("enqueue", ())
    with pytest.raises(InvalidInputError):
        q.execute("enqueue", ("five",))
