import math

import pytest

from algorithms.binary_search import binary_search
from algorithms.step import StepKind
from algorithms.string_matching import brute_force
from engine import plan


def _terminal(steps):
    return [s for s in steps if s.kind in (StepKind.ACCEPT, StepKind.REJECT, StepKind.NOT_FOUND)]


# ---------------------------------------------------------------------------
# Binary search
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("values, key", [
    ([1, 3, 5, 7, 9, 11, 13], 7),
    ([1, 3, 5, 7, 9, 11, 13], 13),
    ([1, 3, 5, 7, 9, 11, 13], 4),
    (list(range(0, 40, 2)), 38),
    (list(range(0, 40, 2)), -1),
    ([5], 5),
    ([5], 6),
])
def test_compare_count_is_logarithmic(values, key):
    steps = list(binary_search(values, key))
    compares = [s for s in steps if s.kind is StepKind.COMPARE]
    assert len(compares) <= math.floor(math.log2(len(values))) + 1


def test_found_ends_in_single_accept():
    steps = plan("binary_search", {"values": "9 1 7 3 5", "key": 7}).to_list()

    assert _terminal(steps) == [steps[-1]]
    assert steps[-1].kind is StepKind.ACCEPT
    assert steps[-1].state["array"] == [1, 3, 5, 7, 9]
    assert steps[-1].operands == (3,)
    assert steps[-1].is_final


def test_missing_key_ends_in_single_not_found_reject():
    steps = plan("binary_search", {"values": [1, 3, 5], "key": 4}).to_list()

    assert _terminal(steps) == [steps[-1]]
    assert steps[-1].kind is StepKind.REJECT
    assert steps[-1].reason == "not-found"


def test_pointer_moves_follow_comparisons():
    steps = list(binary_search([10, 20, 30, 40, 50], 40))
    kinds = [s.kind for s in steps]

    assert kinds == [StepKind.COMPARE, StepKind.MOVE_POINTER, StepKind.COMPARE, StepKind.ACCEPT]
    assert steps[1].operands == ("low", 3)


def test_binary_search_requires_a_key():
    from algorithms.errors import InvalidInputError

    with pytest.raises(InvalidInputError):
        plan("binary_search", {"values": [1, 2, 3]})


# ---------------------------------------------------------------------------
# Brute-force string matching
# ---------------------------------------------------------------------------
def test_abab_found_at_zero():
    steps = list(brute_force("ABABCABAB", "ABAB"))

    accepts = [s for s in steps if s.kind is StepKind.ACCEPT]
    assert len(accepts) == 1
    assert accepts[0].operands == (0,)
    assert steps[-1] is accepts[0]


def test_mismatch_shifts_pattern_by_one():
    steps = list(brute_force("AAB", "AB"))
    kinds = [s.kind for s in steps]

    assert kinds == [
        StepKind.COMPARE, StepKind.COMPARE, StepKind.SHIFT,
        StepKind.COMPARE, StepKind.COMPARE, StepKind.ACCEPT,
    ]
    assert steps[2].operands == (0, 1)
    assert steps[1].overlay["chars"] == ("A", "B")
    assert steps[-1].operands == (1,)


def test_pattern_not_found():
    steps = list(brute_force("AAAA", "B"))

    assert steps[-1].kind is StepKind.NOT_FOUND
    assert sum(s.kind is StepKind.SHIFT for s in steps) == 4


def test_pattern_longer_than_text_is_rejected_before_any_step():
    from algorithms.errors import InvalidInputError

    with pytest.raises(InvalidInputError):
        plan("brute_force", {"text": "AB", "pattern": "ABC"})
