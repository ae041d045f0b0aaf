"""
stack.py — LIFO Stack
======================
push / pop / peek on the top of a list.  An optional capacity turns an
overflowing push into a REJECT ("full"); popping an empty stack is a
REJECT ("empty").
"""

from typing import Any, Dict, Generator, List, Mapping, Optional

from algorithms.errors import CapacityExceededError
from algorithms.step import Step, StepKind, REASON_EMPTY, REASON_FULL
from algorithms.validation import parse_capacity, parse_int_sequence
from structures.base import Structure


class Stack(Structure):
    KIND  = "stack"
    LABEL = "Stack"
    COMMANDS = {"push": (1, 1), "pop": (0, 0), "peek": (0, 0)}
    PSEUDOCODE = [
        "push(x): if full: reject; items.append(x)",   # 0
        "pop():   if empty: reject; return items.pop()",  # 1
        "peek():  if empty: reject; return items[-1]",    # 2
    ]

    def __init__(self, capacity: Optional[int] = None, values: Optional[List[int]] = None):
        self.capacity: Optional[int] = capacity
        self.items:    List[int]     = []
        for v in values or []:
            if self.is_full:
                raise CapacityExceededError(f"{len(values)} values do not fit a stack of capacity {capacity}")
            self.items.append(v)

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and len(self.items) >= self.capacity

    @property
    def top(self) -> int:
        return len(self.items) - 1

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def push(self, value: int) -> Generator[Step, None, None]:
        sb = self.builder()
        if self.is_full:
            yield sb.reject((value,), REASON_FULL, f"Stack is full ({self.capacity}). Cannot push {value}.", 0)
            return
        self.items.append(value)
        yield sb.build(StepKind.PUSH, (value, self.top), f"Pushed {value}. Stack size: {len(self.items)}", 0)

    def pop(self) -> Generator[Step, None, None]:
        sb = self.builder()
        if not self.items:
            yield sb.reject((), REASON_EMPTY, "Stack is empty.", 1)
            return
        value = self.items.pop()
        msg = "Stack is empty." if not self.items else f"Popped {value}. Stack size: {len(self.items)}"
        yield sb.build(StepKind.POP, (value, self.top + 1), msg, 1)

    def peek(self) -> Generator[Step, None, None]:
        sb = self.builder()
        if not self.items:
            yield sb.reject((), REASON_EMPTY, "Stack is empty.", 2)
            return
        yield sb.build(StepKind.VISIT, (self.items[-1], self.top), f"Top of stack is {self.items[-1]}.", 2)

    # ------------------------------------------------------------------
    # Snapshot & serialisation
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        return {"items": list(self.items), "top": self.top, "capacity": self.capacity}

    def to_dict(self) -> Dict[str, Any]:
        return {"capacity": self.capacity, "values": list(self.items)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Stack":
        return cls(capacity=data.get("capacity"), values=list(data.get("values", [])))

    @classmethod
    def from_input(cls, payload: Mapping[str, Any]) -> "Stack":
        values = payload.get("values")
        return cls(
            capacity=parse_capacity(payload.get("capacity"), None),
            values=parse_int_sequence(values) if values else [],
        )
