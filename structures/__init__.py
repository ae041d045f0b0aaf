"""
structures/
-----------
Live data structures whose operations yield Steps.  Public API:

    from structures import STRUCTURES, get_structure
    from structures import CircularQueue, TokenBucket, …
"""

from typing import Dict, Optional, Type

from structures.base        import Structure
from structures.stack       import Stack
from structures.queues      import Queue, CircularQueue, Deque
from structures.linked_list import LinkedList, DoublyLinkedList, ListNode
from structures.bst         import BinarySearchTree, TreeNode
from structures.buckets     import TokenBucket, LeakyBucket


STRUCTURES: Dict[str, Type[Structure]] = {
    cls.KIND: cls
    for cls in (
        Stack,
        Queue,
        CircularQueue,
        Deque,
        LinkedList,
        DoublyLinkedList,
        BinarySearchTree,
        TokenBucket,
        LeakyBucket,
    )
}


def get_structure(kind: str) -> Optional[Type[Structure]]:
    """Return the Structure class registered under `kind`, or None."""
    return STRUCTURES.get(kind)


__all__ = [
    "Structure",
    "Stack",
    "Queue",          "CircularQueue",     "Deque",
    "LinkedList",     "DoublyLinkedList",  "ListNode",
    "BinarySearchTree", "TreeNode",
    "TokenBucket",    "LeakyBucket",
    "STRUCTURES",
    "get_structure",
]
