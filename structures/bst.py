"""
bst.py — Binary Search Tree
============================
Unique integer keys.  Insert descends from the root; traversals walk the
tree without changing it.

Insert yields:
  1. COMPARE (node_key, key) at every node on the way down
  2. REJECT (key,) with reason "duplicate" if the key is already present
  3. MOVE_POINTER ("left" | "right", child_key | None) for each descent
  4. INSERT (key, parent_key, side) at the first empty child slot
     (INSERT (key, None, "root") on an empty tree)

Traversals yield VISIT (key,) in traversal order.  BFS exposes the queue
in overlay["queue"]; DFS (pre-order) emits MARK_VISITED (key,) once both
subtrees of a node are finished.  In-order and post-order visits are
available too.  Traversing an empty tree raises EmptyStructureError.
"""

from collections import deque
from typing import Any, Dict, Generator, List, Mapping, Optional

from algorithms.errors import EmptyStructureError
from algorithms.step import Step, StepKind, REASON_DUPLICATE
from algorithms.validation import check_unique, parse_int_sequence
from structures.base import Structure


class TreeNode:
    __slots__ = ("key", "left", "right")

    def __init__(self, key: int):
        self.key:   int                  = key
        self.left:  Optional["TreeNode"] = None
        self.right: Optional["TreeNode"] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":   self.key,
            "left":  self.left.to_dict() if self.left else None,
            "right": self.right.to_dict() if self.right else None,
        }


class BinarySearchTree(Structure):
    KIND  = "bst"
    LABEL = "Binary Search Tree"
    COMMANDS = {
        "insert":    (1, 1),
        "bfs":       (0, 0),
        "dfs":       (0, 0),
        "inorder":   (0, 0),
        "postorder": (0, 0),
    }
    PSEUDOCODE = [
        "insert(key):",                                      # 0
        "    cur ← root",                                    # 1
        "    if key == cur.key: reject DUPLICATE",           # 2
        "    go left if key < cur.key else right",           # 3
        "    attach new node at the empty slot",             # 4
        "bfs(): queue ← [root]; visit in queue order",       # 5
        "dfs(node): visit(node); dfs(left); dfs(right)",     # 6
        "    mark node visited",                             # 7
        "inorder(node): left; visit(node); right",           # 8
        "postorder(node): left; right; visit(node)",         # 9
    ]

    def __init__(self, keys: Optional[List[int]] = None):
        self.root: Optional[TreeNode] = None
        self.size: int                = 0
        keys = keys or []
        check_unique(keys)
        for k in keys:
            self._attach(k)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _attach(self, key: int) -> bool:
        """Silent insert used for construction; False on duplicate."""
        if self.root is None:
            self.root = TreeNode(key)
            self.size += 1
            return True
        cur = self.root
        while True:
            if key == cur.key:
                return False
            side = "left" if key < cur.key else "right"
            child = getattr(cur, side)
            if child is None:
                setattr(cur, side, TreeNode(key))
                self.size += 1
                return True
            cur = child

    def _require_nodes(self, name: str) -> None:
        if self.root is None:
            raise EmptyStructureError(f"cannot run {name} traversal on an empty tree")

    def keys_preorder(self) -> List[int]:
        out: List[int] = []
        stack = [self.root] if self.root else []
        while stack:
            node = stack.pop()
            out.append(node.key)
            if node.right:
                stack.append(node.right)
            if node.left:
                stack.append(node.left)
        return out

    def levels(self) -> List[List[int]]:
        """Keys grouped by depth, left to right."""
        if self.root is None:
            return []
        result, queue = [], [self.root]
        while queue:
            result.append([n.key for n in queue])
            queue = [c for n in queue for c in (n.left, n.right) if c]
        return result

    def __contains__(self, key: int) -> bool:
        cur = self.root
        while cur is not None:
            if key == cur.key:
                return True
            cur = cur.left if key < cur.key else cur.right
        return False

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def insert(self, key: int) -> Generator[Step, None, None]:
        sb = self.builder()
        if self.root is None:
            self.root = TreeNode(key)
            self.size += 1
            yield sb.build(StepKind.INSERT, (key, None, "root"), f"Inserted {key} as the root.", 4)
            return

        cur = self.root
        while True:
            yield sb.build(StepKind.COMPARE, (cur.key, key), f"Comparing {key} with node {cur.key}.", 2)
            if key == cur.key:
                yield sb.reject((key,), REASON_DUPLICATE, f"Value {key} already exists in the tree!", 2)
                return

            side = "left" if key < cur.key else "right"
            child = getattr(cur, side)
            yield sb.build(
                StepKind.MOVE_POINTER, (side, child.key if child else None),
                f"{key} {'<' if side == 'left' else '>'} {cur.key}: go {side}.",
                3,
            )
            if child is None:
                setattr(cur, side, TreeNode(key))
                self.size += 1
                yield sb.build(StepKind.INSERT, (key, cur.key, side), f"Inserted {key} as the {side} child of {cur.key}.", 4)
                return
            cur = child

    def bfs(self) -> Generator[Step, None, None]:
        self._require_nodes("BFS")
        sb = self.builder()
        order: List[int] = []
        queue = deque([self.root])
        while queue:
            node = queue.popleft()
            if node.left:
                queue.append(node.left)
            if node.right:
                queue.append(node.right)
            order.append(node.key)
            yield sb.build(
                StepKind.VISIT, (node.key,),
                f"BFS visits {node.key}.", 5,
                queue=[n.key for n in queue], order=list(order),
            )

    def dfs(self) -> Generator[Step, None, None]:
        """Pre-order; explicit stack of (node, children_done) frames."""
        self._require_nodes("DFS")
        sb = self.builder()
        order: List[int] = []
        stack = [(self.root, False)]
        while stack:
            node, done = stack.pop()
            path = [n.key for n, _ in stack]
            if done:
                yield sb.build(
                    StepKind.MARK_VISITED, (node.key,),
                    f"Both subtrees of {node.key} are done.", 7,
                    stack=path, order=list(order),
                )
                continue
            order.append(node.key)
            yield sb.build(StepKind.VISIT, (node.key,), f"DFS visits {node.key}.", 6, stack=path + [node.key], order=list(order))
            stack.append((node, True))
            if node.right:
                stack.append((node.right, False))
            if node.left:
                stack.append((node.left, False))

    def inorder(self) -> Generator[Step, None, None]:
        self._require_nodes("in-order")
        sb = self.builder()
        order: List[int] = []
        stack: List[TreeNode] = []
        cur = self.root
        while stack or cur:
            while cur:
                stack.append(cur)
                cur = cur.left
            cur = stack.pop()
            order.append(cur.key)
            yield sb.build(StepKind.VISIT, (cur.key,), f"In-order visits {cur.key}.", 8, order=list(order))
            cur = cur.right

    def postorder(self) -> Generator[Step, None, None]:
        self._require_nodes("post-order")
        sb = self.builder()
        order: List[int] = []
        stack = [(self.root, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                order.append(node.key)
                yield sb.build(StepKind.VISIT, (node.key,), f"Post-order visits {node.key}.", 9, order=list(order))
                continue
            stack.append((node, True))
            if node.right:
                stack.append((node.right, False))
            if node.left:
                stack.append((node.left, False))

    # ------------------------------------------------------------------
    # Snapshot & serialisation
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        return {
            "root":   self.root.to_dict() if self.root else None,
            "levels": self.levels(),
            "size":   self.size,
        }

    def to_dict(self) -> Dict[str, Any]:
        # re-inserting pre-order keys rebuilds the exact same shape
        return {"keys": self.keys_preorder()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BinarySearchTree":
        return cls(keys=list(data.get("keys", [])))

    @classmethod
    def from_input(cls, payload: Mapping[str, Any]) -> "BinarySearchTree":
        keys = payload.get("keys")
        return cls(keys=parse_int_sequence(keys) if keys else [])
