import pytest

from algorithms.errors import EmptyStructureError, InvalidInputError
from algorithms.step import StepKind
from engine import plan
from structures import BinarySearchTree

KEYS = [5, 3, 8, 1, 4]


def visited(steps):
    return [s.operands[0] for s in steps if s.kind is StepKind.VISIT]


def test_bfs_visits_level_by_level():
    steps = plan("bst", {"keys": KEYS, "commands": ["bfs"]}).to_list()
    assert visited(steps) == [5, 3, 8, 1, 4]
    assert steps[-1].overlay["order"] == [5, 3, 8, 1, 4]


def test_depth_first_orders():
    tree = BinarySearchTree(KEYS)
    assert visited(tree.dfs()) == [5, 3, 1, 4, 8]
    assert visited(BinarySearchTree(KEYS).inorder()) == [1, 3, 4, 5, 8]
    assert visited(BinarySearchTree(KEYS).postorder()) == [1, 4, 3, 8, 5]


def test_dfs_marks_each_node_after_its_subtrees():
    steps = list(BinarySearchTree([2, 1]).dfs())
    assert [(s.kind.value, s.operands[0]) for s in steps] == [
        ("visit", 2), ("visit", 1), ("mark-visited", 1), ("mark-visited", 2),
    ]


def test_duplicate_insert_is_rejected():
    tree = BinarySearchTree([5, 3])
    steps = list(tree.insert(3))

    assert [s.kind for s in steps] == [
        StepKind.COMPARE, StepKind.MOVE_POINTER, StepKind.COMPARE, StepKind.REJECT,
    ]
    assert steps[-1].reason == "duplicate"
    assert tree.size == 2


def test_insert_descends_and_attaches():
    tree = BinarySearchTree([5, 3])
    steps = list(tree.insert(4))

    assert steps[-1].kind is StepKind.INSERT
    assert steps[-1].operands == (4, 3, "right")
    assert 4 in tree
    assert tree.levels() == [[5], [3], [4]]


def test_insert_into_empty_tree_makes_root():
    (step,) = list(BinarySearchTree().insert(7))
    assert step.operands == (7, None, "root")
    assert step.state["size"] == 1


def test_duplicate_initial_keys_are_invalid():
    with pytest.raises(InvalidInputError, match="duplicate key: 3"):
        BinarySearchTree.from_input({"keys": "5 3 3"})


def test_traversing_an_empty_tree_fails_fast():
    with pytest.raises(EmptyStructureError):
        plan("bst", {"commands": ["bfs"]})


def test_round_trip_keeps_shape():
    tree = BinarySearchTree([8, 3, 10, 1, 6, 14, 4])
    clone = BinarySearchTree.from_dict(tree.to_dict())
    assert clone.snapshot() == tree.snapshot()
