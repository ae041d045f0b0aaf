"""
linked_list.py — Singly & Doubly Linked Lists
==============================================
Real node chains (not Python lists in disguise) so the traversal steps
reflect the work a linked list actually has to do:

  • LinkedList        – walks from the head for every positional operation,
                        including remove_tail (no backward pointer)
  • DoublyLinkedList  – walks from whichever end is nearer to the index and
                        removes the tail in O(1)

Yields per positional operation:
  1. TRAVERSE (i,) for every node visited on the way, counted from the
     end the walk starts at (overlay["from"] = "head" | "tail")
  2. INSERT (index, value) or REMOVE (index, value)

Removing from an empty list is a REJECT ("empty"); an index outside the
list raises InvalidInputError.

`clear` unlinks from the head, one REMOVE (0, value) per node.
"""

from typing import Any, Dict, Generator, List, Mapping, Optional

from algorithms.errors import InvalidInputError
from algorithms.step import Step, StepKind, REASON_EMPTY
from algorithms.validation import parse_int_sequence
from structures.base import Structure


class ListNode:
    __slots__ = ("value", "next", "prev")

    def __init__(self, value: int):
        self.value: int                  = value
        self.next:  Optional["ListNode"] = None
        self.prev:  Optional["ListNode"] = None

    def __repr__(self) -> str:
        return f"ListNode({self.value})"


# ---------------------------------------------------------------------------
# Singly linked list
# ---------------------------------------------------------------------------
class LinkedList(Structure):
    KIND  = "linked_list"
    LABEL = "Linked List"
    COMMANDS = {
        "insert_head": (1, 1),
        "insert_tail": (1, 1),
        "insert_at":   (2, 2),     # (index, value)
        "remove_head": (0, 0),
        "remove_tail": (0, 0),
        "remove_at":   (1, 1),     # (index,)
        "clear":       (0, 0),
    }
    PSEUDOCODE = [
        "insert_at(idx, x):",                          # 0
        "    cur ← head; repeat idx-1 times: cur ← cur.next",  # 1
        "    node.next ← cur.next; cur.next ← node",   # 2
        "remove_at(idx):",                             # 3
        "    walk to node idx (temp)",                 # 4
        "    prev.next ← temp.next",                   # 5
        "insert_head(x): node.next ← head; head ← node",  # 6
        "insert_tail(x): tail.next ← node; tail ← node",  # 7
        "clear(): unlink head until head = null; tail ← null",  # 8
    ]

    def __init__(self, values: Optional[List[int]] = None):
        self.head: Optional[ListNode] = None
        self.tail: Optional[ListNode] = None
        self.size: int                = 0
        for v in values or []:
            self._append(v)

    # ------------------------------------------------------------------
    # Internal chain surgery (no steps)
    # ------------------------------------------------------------------
    def _append(self, value: int) -> ListNode:
        node = ListNode(value)
        if self.tail is None:
            self.head = self.tail = node
        else:
            self.tail.next = node
            self.tail = node
        self.size += 1
        return node

    def _prepend(self, value: int) -> ListNode:
        node = ListNode(value)
        node.next = self.head
        self.head = node
        if self.tail is None:
            self.tail = node
        self.size += 1
        return node

    def _node_at(self, index: int) -> ListNode:
        cur = self.head
        for _ in range(index):
            cur = cur.next
        return cur

    def _check_index(self, index: int, upper: int) -> None:
        if not 0 <= index <= upper:
            raise InvalidInputError(f"Invalid index {index}: must be between 0 and {upper}")

    def values(self) -> List[int]:
        out, cur = [], self.head
        while cur is not None:
            out.append(cur.value)
            cur = cur.next
        return out

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def insert_head(self, value: int) -> Generator[Step, None, None]:
        sb = self.builder()
        self._prepend(value)
        yield sb.build(StepKind.INSERT, (0, value), f"Inserted {value} at head.", 6)

    def insert_tail(self, value: int) -> Generator[Step, None, None]:
        sb = self.builder()
        self._append(value)
        yield sb.build(StepKind.INSERT, (self.size - 1, value), f"Inserted {value} at tail.", 7)

    def insert_at(self, index: int, value: int) -> Generator[Step, None, None]:
        self._check_index(index, self.size)
        if index == 0:
            yield from self.insert_head(value)
            return
        if index == self.size:
            yield from self.insert_tail(value)
            return

        sb = self.builder()
        for i in range(index):
            yield sb.build(StepKind.TRAVERSE, (i,), f"Inserting {value} at index {index}... visiting node {i}", 1, **{"from": "head"})
        prev = self._node_at(index - 1)
        node = ListNode(value)
        node.next = prev.next
        prev.next = node
        self.size += 1
        yield sb.build(StepKind.INSERT, (index, value), f"Inserted {value} at {index}.", 2)

    def remove_head(self) -> Generator[Step, None, None]:
        yield from self.remove_at(0)

    def remove_tail(self) -> Generator[Step, None, None]:
        yield from self.remove_at(self.size - 1)

    def remove_at(self, index: int) -> Generator[Step, None, None]:
        sb = self.builder()
        if self.size == 0:
            yield sb.reject((), REASON_EMPTY, "List is empty. Nothing to remove.", 3)
            return
        self._check_index(index, self.size - 1)

        for i in range(index + 1):
            yield sb.build(StepKind.TRAVERSE, (i,), f"Traversing to Node {index}... visiting node {i}", 4, **{"from": "head"})

        if index == 0:
            removed = self.head
            self.head = removed.next
            if self.head is None:
                self.tail = None
        else:
            prev = self._node_at(index - 1)
            removed = prev.next
            prev.next = removed.next
            if removed is self.tail:
                self.tail = prev
        removed.next = None
        self.size -= 1
        yield sb.build(StepKind.REMOVE, (index, removed.value), f"Removed {removed.value} from index {index}.", 5)

    def clear(self) -> Generator[Step, None, None]:
        """Unlink every node from the head; one REMOVE (0, value) per node."""
        sb = self.builder()
        if self.size == 0:
            yield sb.reject((), REASON_EMPTY, "List is already empty.", 8)
            return
        while self.head is not None:
            removed = self.head
            self.head = removed.next
            if self.head is None:
                self.tail = None
            else:
                self.head.prev = None
            removed.next = removed.prev = None
            self.size -= 1
            message = "List cleared." if self.head is None else f"Removed {removed.value} from head."
            yield sb.build(StepKind.REMOVE, (0, removed.value), message, 8)

    # ------------------------------------------------------------------
    # Snapshot & serialisation
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        return {
            "values": self.values(),
            "head":   0 if self.head is not None else -1,
            "tail":   self.size - 1,
            "size":   self.size,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {"values": self.values()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LinkedList":
        return cls(values=list(data.get("values", [])))

    @classmethod
    def from_input(cls, payload: Mapping[str, Any]) -> "LinkedList":
        values = payload.get("values")
        return cls(values=parse_int_sequence(values) if values else [])


# ---------------------------------------------------------------------------
# Doubly linked list
# ---------------------------------------------------------------------------
class DoublyLinkedList(LinkedList):
    """
    Same command table as LinkedList.  Every mutation keeps
    `node.next.prev is node` and `node.prev.next is node`; see
    `check_links()`.
    """

    KIND  = "doubly_linked_list"
    LABEL = "Doubly Linked List"
    PSEUDOCODE = [
        "insert_at(idx, x):",                                      # 0
        "    walk from the nearer end to the neighbours of idx",   # 1
        "    node.prev ← before; node.next ← after",               # 2
        "    before.next ← node; after.prev ← node",               # 3
        "remove_at(idx):",                                         # 4
        "    walk from the nearer end to node idx (temp)",         # 5
        "    temp.prev.next ← temp.next; temp.next.prev ← temp.prev",  # 6
        "insert_head(x) / insert_tail(x): relink the end pointer",  # 7
        "clear(): unlink head until head = null; tail ← null",     # 8
    ]

    def _append(self, value: int) -> ListNode:
        node = ListNode(value)
        if self.tail is None:
            self.head = self.tail = node
        else:
            node.prev = self.tail
            self.tail.next = node
            self.tail = node
        self.size += 1
        return node

    def _prepend(self, value: int) -> ListNode:
        node = ListNode(value)
        if self.head is None:
            self.head = self.tail = node
        else:
            node.next = self.head
            self.head.prev = node
            self.head = node
        self.size += 1
        return node

    def _walk(self, sb, index: int, message: str, line: int) -> Generator[Step, None, ListNode]:
        """Visit nodes from the nearer end up to and including `index`."""
        if index <= (self.size - 1) // 2:
            cur = self.head
            for i in range(index + 1):
                yield sb.build(StepKind.TRAVERSE, (i,), f"{message} visiting node {i}", line, **{"from": "head"})
                if i < index:
                    cur = cur.next
        else:
            cur = self.tail
            for i in range(self.size - 1, index - 1, -1):
                yield sb.build(StepKind.TRAVERSE, (i,), f"{message} visiting node {i}", line, **{"from": "tail"})
                if i > index:
                    cur = cur.prev
        return cur

    def insert_head(self, value: int) -> Generator[Step, None, None]:
        sb = self.builder()
        self._prepend(value)
        yield sb.build(StepKind.INSERT, (0, value), f"Inserted {value} at head.", 7)

    def insert_tail(self, value: int) -> Generator[Step, None, None]:
        sb = self.builder()
        self._append(value)
        yield sb.build(StepKind.INSERT, (self.size - 1, value), f"Inserted {value} at tail.", 7)

    def insert_at(self, index: int, value: int) -> Generator[Step, None, None]:
        self._check_index(index, self.size)
        if index == 0:
            yield from self.insert_head(value)
            return
        if index == self.size:
            yield from self.insert_tail(value)
            return

        sb = self.builder()
        # the node currently at `index` becomes the new node's successor
        after = yield from self._walk(sb, index, f"Inserting {value} at index {index}...", 1)
        before = after.prev
        node = ListNode(value)
        node.prev, node.next = before, after
        before.next = node
        after.prev = node
        self.size += 1
        yield sb.build(StepKind.INSERT, (index, value), f"Inserted {value} at {index}.", 3)

    def remove_tail(self) -> Generator[Step, None, None]:
        sb = self.builder()
        if self.size == 0:
            yield sb.reject((), REASON_EMPTY, "List is empty. Nothing to remove.", 4)
            return
        removed = self.tail
        self.tail = removed.prev
        if self.tail is None:
            self.head = None
        else:
            self.tail.next = None
        removed.prev = None
        self.size -= 1
        yield sb.build(StepKind.REMOVE, (self.size, removed.value), f"Removed {removed.value} from tail.", 6)

    def remove_at(self, index: int) -> Generator[Step, None, None]:
        sb = self.builder()
        if self.size == 0:
            yield sb.reject((), REASON_EMPTY, "List is empty. Nothing to remove.", 4)
            return
        self._check_index(index, self.size - 1)

        temp = yield from self._walk(sb, index, f"Traversing to Node {index}...", 5)
        if temp.prev is None:
            self.head = temp.next
        else:
            temp.prev.next = temp.next
        if temp.next is None:
            self.tail = temp.prev
        else:
            temp.next.prev = temp.prev
        temp.prev = temp.next = None
        self.size -= 1
        yield sb.build(StepKind.REMOVE, (index, temp.value), f"Removed {temp.value} from index {index}.", 6)

    def check_links(self) -> bool:
        """True when forward and backward chains agree end to end."""
        count, prev, cur = 0, None, self.head
        while cur is not None:
            if cur.prev is not prev:
                return False
            prev, cur = cur, cur.next
            count += 1
        return prev is self.tail and count == self.size

    def snapshot(self) -> Dict[str, Any]:
        state = super().snapshot()
        backwards, cur = [], self.tail
        while cur is not None:
            backwards.append(cur.value)
            cur = cur.prev
        state["backward"] = backwards
        return state
