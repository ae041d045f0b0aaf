"""
buckets.py — Token Bucket & Leaky Bucket Rate Limiters
=======================================================
Both buckets are pure state machines.  Their background behaviour
(refilling tokens, leaking queued requests) is a `tick` command the caller
issues on its own timer, nominally every `interval_ms`; the bucket itself
never sleeps or reads a clock.

Token bucket:
  • tick()       → REFILL (tokens,) or REJECT "full" when already at capacity
  • request(k)   → ACCEPT (k,) consuming exactly k, or REJECT "rate-limited"
                   consuming nothing (no partial grants)

Leaky bucket:
  • receive(k)   → ENQUEUE (request_id, position) for each of the first
                   min(k, capacity - size) requests, then one REJECT
                   "rate-limited" carrying the dropped count
  • tick()       → DEQUEUE (request_id,) of the oldest request (FIFO), or
                   REJECT "empty" when nothing is waiting
"""

from collections import deque
from typing import Any, Deque as DequeT, Dict, Generator, List, Mapping, Optional

from algorithms.errors import CapacityExceededError, InvalidInputError
from algorithms.step import Step, StepKind, REASON_EMPTY, REASON_FULL, REASON_RATE_LIMITED
from algorithms.validation import parse_capacity, parse_int
from structures.base import Structure


DEFAULT_CAPACITY    = 10
DEFAULT_INTERVAL_MS = 1500


def _positive(amount: int, what: str) -> int:
    if amount <= 0:
        raise InvalidInputError(f"{what} must be at least 1, got {amount}")
    return amount


# ---------------------------------------------------------------------------
# Token bucket
# ---------------------------------------------------------------------------
class TokenBucket(Structure):
    KIND  = "token_bucket"
    LABEL = "Token Bucket"
    COMMANDS = {"request": (0, 1), "tick": (0, 1)}
    PSEUDOCODE = [
        "every interval: if tokens < capacity: tokens += 1",  # 0
        "request(k):",                                        # 1
        "    if k <= tokens: tokens -= k; ACCEPT",            # 2
        "    else: REJECT (rate limited)",                    # 3
    ]

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        tokens: Optional[int] = None,
        interval_ms: int = DEFAULT_INTERVAL_MS,
    ):
        self.capacity:    int = capacity
        self.tokens:      int = capacity if tokens is None else tokens
        self.interval_ms: int = interval_ms
        if self.tokens < 0:
            raise InvalidInputError(f"tokens cannot be negative, got {self.tokens}")
        if self.tokens > capacity:
            raise CapacityExceededError(f"{self.tokens} tokens do not fit a bucket of capacity {capacity}")

    def request(self, amount: int = 1) -> Generator[Step, None, None]:
        _positive(amount, "request size")
        sb = self.builder()
        if amount <= self.tokens:
            self.tokens -= amount
            yield sb.build(
                StepKind.ACCEPT, (amount,),
                f"Processing request ({amount} token(s) used). {self.tokens}/{self.capacity} left.",
                2,
            )
            return
        if self.tokens == 0:
            msg = f"Rate Limited! Need {amount} token(s) but bucket is empty."
        else:
            msg = f"Rate Limited! Need {amount} token(s) but only {self.tokens} available."
        yield sb.reject((amount,), REASON_RATE_LIMITED, msg, 3)

    def tick(self, times: int = 1) -> Generator[Step, None, None]:
        _positive(times, "tick count")
        sb = self.builder()
        for _ in range(times):
            if self.tokens >= self.capacity:
                yield sb.reject((1,), REASON_FULL, f"Bucket full ({self.capacity}/{self.capacity}). Refill skipped.", 0)
                continue
            self.tokens += 1
            yield sb.build(StepKind.REFILL, (self.tokens,), f"Refilled one token. {self.tokens}/{self.capacity}", 0)

    def snapshot(self) -> Dict[str, Any]:
        return {"tokens": self.tokens, "capacity": self.capacity, "interval_ms": self.interval_ms}

    def to_dict(self) -> Dict[str, Any]:
        return {"capacity": self.capacity, "tokens": self.tokens, "interval_ms": self.interval_ms}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TokenBucket":
        return cls(
            capacity=data.get("capacity", DEFAULT_CAPACITY),
            tokens=data.get("tokens"),
            interval_ms=data.get("interval_ms", DEFAULT_INTERVAL_MS),
        )

    @classmethod
    def from_input(cls, payload: Mapping[str, Any]) -> "TokenBucket":
        tokens = payload.get("tokens")
        return cls(
            capacity=parse_capacity(payload.get("capacity"), DEFAULT_CAPACITY),
            tokens=parse_int(tokens, "tokens") if tokens is not None else None,
            interval_ms=parse_capacity(payload.get("interval_ms"), DEFAULT_INTERVAL_MS, "interval_ms"),
        )


# ---------------------------------------------------------------------------
# Leaky bucket
# ---------------------------------------------------------------------------
class LeakyBucket(Structure):
    """
    Attributes:
        queue    : Pending request ids, oldest first.
        next_id  : Id handed to the next accepted request (1-based, never reused).
    """

    KIND  = "leaky_bucket"
    LABEL = "Leaky Bucket"
    COMMANDS = {"receive": (0, 1), "tick": (0, 1)}
    PSEUDOCODE = [
        "receive(k):",                                       # 0
        "    accept min(k, capacity - size) into the queue",  # 1
        "    drop the remainder",                            # 2
        "every interval: process queue.popleft()",           # 3
    ]

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        pending: Optional[List[int]] = None,
        next_id: int = 1,
        interval_ms: int = DEFAULT_INTERVAL_MS,
    ):
        self.capacity:    int          = capacity
        self.queue:       DequeT[int]  = deque(pending or [])
        self.next_id:     int          = next_id
        self.interval_ms: int          = interval_ms
        if len(self.queue) > capacity:
            raise CapacityExceededError(f"{len(self.queue)} pending requests do not fit a bucket of capacity {capacity}")

    @property
    def size(self) -> int:
        return len(self.queue)

    def receive(self, amount: int = 1) -> Generator[Step, None, None]:
        _positive(amount, "burst size")
        sb = self.builder()
        accepted = min(amount, self.capacity - self.size)
        rejected = amount - accepted

        for _ in range(accepted):
            request_id = self.next_id
            self.next_id += 1
            self.queue.append(request_id)
            yield sb.build(
                StepKind.ENQUEUE, (request_id, self.size - 1),
                f"Request #{request_id} queued. Queue: {self.size}/{self.capacity}",
                1,
            )

        if rejected:
            if accepted == 0:
                msg = f"Bucket Full! {rejected} request(s) dropped."
            else:
                msg = f"Partially Accepted: {accepted} queued, {rejected} dropped."
            yield sb.build(StepKind.REJECT, (rejected,), msg, 2, reason=REASON_RATE_LIMITED, accepted=accepted)

    def tick(self, times: int = 1) -> Generator[Step, None, None]:
        _positive(times, "tick count")
        sb = self.builder()
        for _ in range(times):
            if not self.queue:
                yield sb.reject((), REASON_EMPTY, "Nothing to leak.", 3)
                continue
            request_id = self.queue.popleft()
            yield sb.build(
                StepKind.DEQUEUE, (request_id,),
                f"Leaked request #{request_id}. Queue: {self.size}/{self.capacity}",
                3,
            )

    def snapshot(self) -> Dict[str, Any]:
        return {
            "queue":       list(self.queue),
            "size":        self.size,
            "capacity":    self.capacity,
            "interval_ms": self.interval_ms,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "capacity":    self.capacity,
            "pending":     list(self.queue),
            "next_id":     self.next_id,
            "interval_ms": self.interval_ms,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LeakyBucket":
        return cls(
            capacity=data.get("capacity", DEFAULT_CAPACITY),
            pending=list(data.get("pending", [])),
            next_id=data.get("next_id", 1),
            interval_ms=data.get("interval_ms", DEFAULT_INTERVAL_MS),
        )

    @classmethod
    def from_input(cls, payload: Mapping[str, Any]) -> "LeakyBucket":
        pending = payload.get("pending")
        count = parse_int(pending, "pending") if pending is not None else 0
        if count < 0:
            raise InvalidInputError(f"pending cannot be negative, got {count}")
        return cls(
            capacity=parse_capacity(payload.get("capacity"), DEFAULT_CAPACITY),
            pending=list(range(1, count + 1)),
            next_id=count + 1,
            interval_ms=parse_capacity(payload.get("interval_ms"), DEFAULT_INTERVAL_MS, "interval_ms"),
        )
