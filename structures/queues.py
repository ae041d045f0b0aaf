"""
queues.py — FIFO Queue, Circular Queue & Deque
===============================================
Three queue flavours with explicit end pointers so a renderer can draw
"Front" / "Rear" arrows straight from the Step state.

  • Queue          – unbounded FIFO, front = 0, rear = size - 1
  • CircularQueue  – fixed-capacity ring buffer with modular head / tail
  • Deque          – insert / remove at either end

Pointer conventions:
  - An empty structure has both pointers at -1.
  - Ring-buffer pointers always satisfy 0 <= head, tail < capacity
    while the queue holds anything.
"""

from collections import deque
from typing import Any, Deque as DequeT, Dict, Generator, List, Mapping, Optional

from algorithms.errors import CapacityExceededError
from algorithms.step import Step, StepKind, REASON_EMPTY, REASON_FULL
from algorithms.validation import parse_capacity, parse_int_sequence
from structures.base import Structure


# ---------------------------------------------------------------------------
# Plain FIFO queue
# ---------------------------------------------------------------------------
class Queue(Structure):
    KIND  = "queue"
    LABEL = "Queue"
    COMMANDS = {"enqueue": (1, 1), "dequeue": (0, 0), "peek": (0, 0)}
    PSEUDOCODE = [
        "enqueue(x): if full: reject; items.append(x)",      # 0
        "dequeue():  if empty: reject; return items.popleft()",  # 1
        "peek():     if empty: reject; return items[0]",     # 2
    ]

    def __init__(self, capacity: Optional[int] = None, values: Optional[List[int]] = None):
        self.capacity: Optional[int] = capacity
        self.items:    DequeT[int]   = deque()
        values = values or []
        if capacity is not None and len(values) > capacity:
            raise CapacityExceededError(f"{len(values)} values do not fit a queue of capacity {capacity}")
        self.items.extend(values)

    @property
    def front(self) -> int:
        return 0 if self.items else -1

    @property
    def rear(self) -> int:
        return len(self.items) - 1

    def enqueue(self, value: int) -> Generator[Step, None, None]:
        sb = self.builder()
        if self.capacity is not None and len(self.items) >= self.capacity:
            yield sb.reject((value,), REASON_FULL, f"Queue is full ({self.capacity}). Cannot enqueue {value}.", 0)
            return
        self.items.append(value)
        yield sb.build(StepKind.ENQUEUE, (value, self.rear), f"Enqueued {value}. Size: {len(self.items)}", 0)

    def dequeue(self) -> Generator[Step, None, None]:
        sb = self.builder()
        if not self.items:
            yield sb.reject((), REASON_EMPTY, "Queue empty.", 1)
            return
        value = self.items.popleft()
        msg = "Queue empty." if not self.items else f"Dequeued {value}. Size: {len(self.items)}"
        yield sb.build(StepKind.DEQUEUE, (value, 0), msg, 1)

    def peek(self) -> Generator[Step, None, None]:
        sb = self.builder()
        if not self.items:
            yield sb.reject((), REASON_EMPTY, "Queue empty.", 2)
            return
        yield sb.build(StepKind.VISIT, (self.items[0], 0), f"Front of queue is {self.items[0]}.", 2)

    def snapshot(self) -> Dict[str, Any]:
        return {"items": list(self.items), "front": self.front, "rear": self.rear, "capacity": self.capacity}

    def to_dict(self) -> Dict[str, Any]:
        return {"capacity": self.capacity, "values": list(self.items)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Queue":
        return cls(capacity=data.get("capacity"), values=list(data.get("values", [])))

    @classmethod
    def from_input(cls, payload: Mapping[str, Any]) -> "Queue":
        values = payload.get("values")
        return cls(
            capacity=parse_capacity(payload.get("capacity"), None),
            values=parse_int_sequence(values) if values else [],
        )


# ---------------------------------------------------------------------------
# Circular queue (ring buffer)
# ---------------------------------------------------------------------------
class CircularQueue(Structure):
    """
    Attributes:
        capacity : Number of slots in the ring.
        slots    : [value | None] * capacity.
        head     : Index of the front element, -1 when empty.
        tail     : Index of the rear element, -1 when empty.
    """

    KIND  = "circular_queue"
    LABEL = "Circular Queue"
    DEFAULT_CAPACITY = 8
    COMMANDS = {"enqueue": (1, 1), "dequeue": (0, 0)}
    PSEUDOCODE = [
        "def enqueue(x):",                                  # 0
        "    if (tail + 1) % capacity == head: reject FULL",  # 1
        "    if head == -1: head ← 0",                      # 2
        "    tail ← (tail + 1) % capacity; slots[tail] ← x",  # 3
        "def dequeue():",                                   # 4
        "    if head == -1: reject EMPTY",                  # 5
        "    x ← slots[head]; slots[head] ← None",          # 6
        "    if head == tail: head, tail ← -1, -1",         # 7
        "    else: head ← (head + 1) % capacity",           # 8
    ]

    def __init__(self, capacity: int = DEFAULT_CAPACITY, values: Optional[List[int]] = None):
        self.capacity: int                 = capacity
        self.slots:    List[Optional[int]] = [None] * capacity
        self.head:     int                 = -1
        self.tail:     int                 = -1
        values = values or []
        if len(values) > capacity:
            raise CapacityExceededError(f"{len(values)} values do not fit a ring of capacity {capacity}")
        for v in values:
            self._put(v)

    @property
    def size(self) -> int:
        if self.head == -1:
            return 0
        return (self.tail - self.head) % self.capacity + 1

    @property
    def is_full(self) -> bool:
        return (self.tail + 1) % self.capacity == self.head

    def _put(self, value: int) -> None:
        if self.head == -1:
            self.head = 0
        self.tail = (self.tail + 1) % self.capacity
        self.slots[self.tail] = value

    def enqueue(self, value: int) -> Generator[Step, None, None]:
        sb = self.builder()
        if self.is_full:
            yield sb.reject(
                (value,), REASON_FULL,
                "Queue is Full! (Ring Buffer max capacity reached)", 1,
            )
            return
        self._put(value)
        yield sb.build(StepKind.ENQUEUE, (value, self.tail), f"Enqueued {value} at index {self.tail}.", 3)

    def dequeue(self) -> Generator[Step, None, None]:
        sb = self.builder()
        if self.head == -1:
            yield sb.reject((), REASON_EMPTY, "Queue is Empty!", 5)
            return

        removed = self.head
        value = self.slots[removed]
        self.slots[removed] = None
        if self.head == self.tail:
            self.head = self.tail = -1
            line = 7
        else:
            self.head = (self.head + 1) % self.capacity
            line = 8
        new_head = "None" if self.head == -1 else self.head
        yield sb.build(
            StepKind.DEQUEUE, (value, removed),
            f"Dequeued from index {removed}. New Head is {new_head}.",
            line,
        )

    def snapshot(self) -> Dict[str, Any]:
        return {
            "slots":    list(self.slots),
            "head":     self.head,
            "tail":     self.tail,
            "size":     self.size,
            "capacity": self.capacity,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {"capacity": self.capacity, "slots": list(self.slots), "head": self.head, "tail": self.tail}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CircularQueue":
        q = cls(capacity=data["capacity"])
        q.slots = list(data["slots"])
        q.head  = data["head"]
        q.tail  = data["tail"]
        return q

    @classmethod
    def from_input(cls, payload: Mapping[str, Any]) -> "CircularQueue":
        values = payload.get("values")
        return cls(
            capacity=parse_capacity(payload.get("capacity"), cls.DEFAULT_CAPACITY),
            values=parse_int_sequence(values) if values else [],
        )


# ---------------------------------------------------------------------------
# Double-ended queue
# ---------------------------------------------------------------------------
class Deque(Structure):
    """
    Front and rear pointers index into `items`.  Inserting into an empty
    deque initialises both pointers to the new element; removing the only
    element clears both back to -1.
    """

    KIND  = "deque"
    LABEL = "Deque"
    COMMANDS = {
        "insert_front": (1, 1),
        "insert_rear":  (1, 1),
        "remove_front": (0, 0),
        "remove_rear":  (0, 0),
    }
    PSEUDOCODE = [
        "insert_front(x): items.appendleft(x)",   # 0
        "insert_rear(x):  items.append(x)",       # 1
        "remove_front():  items.popleft()",       # 2
        "remove_rear():   items.pop()",           # 3
        "if empty: front, rear ← -1, -1",         # 4
    ]

    def __init__(self, capacity: Optional[int] = None, values: Optional[List[int]] = None):
        self.capacity: Optional[int] = capacity
        self.items:    DequeT[int]   = deque()
        values = values or []
        if capacity is not None and len(values) > capacity:
            raise CapacityExceededError(f"{len(values)} values do not fit a deque of capacity {capacity}")
        self.items.extend(values)

    @property
    def front(self) -> int:
        return 0 if self.items else -1

    @property
    def rear(self) -> int:
        return len(self.items) - 1

    def _full_step(self, sb, value: int, end: str, line: int) -> Step:
        return sb.reject((value,), REASON_FULL, f"Deque is full ({self.capacity}). Cannot insert {value} at {end}.", line)

    def insert_front(self, value: int) -> Generator[Step, None, None]:
        sb = self.builder()
        if self.capacity is not None and len(self.items) >= self.capacity:
            yield self._full_step(sb, value, "Front", 0)
            return
        self.items.appendleft(value)
        yield sb.build(StepKind.INSERT, (value, self.front), f"Inserted {value} at Front. Size: {len(self.items)}", 0, end="front")

    def insert_rear(self, value: int) -> Generator[Step, None, None]:
        sb = self.builder()
        if self.capacity is not None and len(self.items) >= self.capacity:
            yield self._full_step(sb, value, "Rear", 1)
            return
        self.items.append(value)
        yield sb.build(StepKind.INSERT, (value, self.rear), f"Inserted {value} at Rear. Size: {len(self.items)}", 1, end="rear")

    def remove_front(self) -> Generator[Step, None, None]:
        sb = self.builder()
        if not self.items:
            yield sb.reject((), REASON_EMPTY, "Deque empty.", 2)
            return
        value = self.items.popleft()
        msg = "Deque empty." if not self.items else f"Deleted {value} from Front. Size: {len(self.items)}"
        yield sb.build(StepKind.REMOVE, (value, 0), msg, 4 if not self.items else 2, end="front")

    def remove_rear(self) -> Generator[Step, None, None]:
        sb = self.builder()
        if not self.items:
            yield sb.reject((), REASON_EMPTY, "Deque empty.", 3)
            return
        value = self.items.pop()
        msg = "Deque empty." if not self.items else f"Deleted {value} from Rear. Size: {len(self.items)}"
        yield sb.build(StepKind.REMOVE, (value, len(self.items)), msg, 4 if not self.items else 3, end="rear")

    def snapshot(self) -> Dict[str, Any]:
        return {"items": list(self.items), "front": self.front, "rear": self.rear, "capacity": self.capacity}

    def to_dict(self) -> Dict[str, Any]:
        return {"capacity": self.capacity, "values": list(self.items)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Deque":
        return cls(capacity=data.get("capacity"), values=list(data.get("values", [])))

    @classmethod
    def from_input(cls, payload: Mapping[str, Any]) -> "Deque":
        values = payload.get("values")
        return cls(
            capacity=parse_capacity(payload.get("capacity"), None),
            values=parse_int_sequence(values) if values else [],
        )
