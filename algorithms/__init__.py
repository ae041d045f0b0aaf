"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every array / text algorithm the engine knows
about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, fn, pseudocode, parse, tags, max_input, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The planner and the HTTP layer both
consume it, so adding a new algorithm is literally: write the generator,
write (or reuse) an input parser, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from algorithms.errors import InvalidInputError
from algorithms.validation import parse_int, parse_int_sequence, parse_text_pattern

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.binary_search   import binary_search  as _binary_search,  PSEUDOCODE as _bs_pc
from algorithms.bubble_sort     import bubble_sort    as _bubble_sort,    PSEUDOCODE as _bub_pc
from algorithms.selection_sort  import selection_sort as _selection_sort, PSEUDOCODE as _sel_pc
from algorithms.merge_sort      import merge_sort     as _merge_sort,     PSEUDOCODE as _mer_pc
from algorithms.quick_sort      import quick_sort     as _quick_sort,     PSEUDOCODE as _qs_pc
from algorithms.string_matching import brute_force    as _brute_force,    PSEUDOCODE as _bf_pc


# ---------------------------------------------------------------------------
# Input parsers — payload mapping → generator kwargs
# ---------------------------------------------------------------------------
def _sort_input(payload: Mapping[str, Any], max_input: Optional[int]) -> Dict[str, Any]:
    return {"values": parse_int_sequence(payload.get("values"), max_input)}


def _search_input(payload: Mapping[str, Any], max_input: Optional[int]) -> Dict[str, Any]:
    return {
        "values": parse_int_sequence(payload.get("values"), max_input),
        "key":    parse_int(payload.get("key"), "key"),
    }


def _match_input(payload: Mapping[str, Any], max_input: Optional[int]) -> Dict[str, Any]:
    text, pattern = parse_text_pattern(payload.get("text"), payload.get("pattern"))
    if max_input is not None and len(text) > max_input:
        raise InvalidInputError(f"text is limited to {max_input} characters, got {len(text)}")
    return {"text": text, "pattern": pattern}


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "quick_sort"
    label:             str                    # human label, e.g. "Quick Sort"
    fn:                Callable               # the generator function
    pseudocode:        List[str]              # lines for the side-panel
    parse:             Callable               # (payload, max_input) -> kwargs for fn
    tags:              List[str] = field(default_factory=list)   # e.g. ["sorting", "in-place"]
    max_input:         Optional[int] = None   # caller-enforced input length cap
    stable:            bool     = False       # sorting only: equal keys keep their order?
    complexity_time:   str      = ""          # e.g. "O(n log n)"
    complexity_space:  str      = ""          # e.g. "O(n)"
    description:       str      = ""          # one-liner for the registry card


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", fn=_binary_search, pseudocode=_bs_pc,
        parse=_search_input,
        tags=["searching", "divide-and-conquer"],
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Sorts the input, then halves the search window around the middle element.",
    ),

    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=_bubble_sort, pseudocode=_bub_pc,
        parse=_sort_input,
        tags=["sorting", "in-place", "comparison"],
        max_input=20, stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Bubbles the largest remaining value to the end on every pass. Stops early once sorted.",
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", fn=_selection_sort, pseudocode=_sel_pc,
        parse=_sort_input,
        tags=["sorting", "in-place", "comparison"],
        max_input=20,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Selects the minimum of the unsorted suffix and swaps it into place. At most n-1 swaps.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", fn=_merge_sort, pseudocode=_mer_pc,
        parse=_sort_input,
        tags=["sorting", "divide-and-conquer", "comparison"],
        max_input=8, stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits down to single elements, then merges sorted runs back up.",
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", fn=_quick_sort, pseudocode=_qs_pc,
        parse=_sort_input,
        tags=["sorting", "in-place", "divide-and-conquer", "comparison"],
        max_input=12,
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Lomuto partition around the last element, then sorts each side.",
    ),

    "brute_force": AlgoInfo(
        key="brute_force", label="Brute-Force String Matching", fn=_brute_force, pseudocode=_bf_pc,
        parse=_match_input,
        tags=["strings", "searching"],
        complexity_time="O(n · m)", complexity_space="O(1)",
        description="Tries every alignment of the pattern and reports the first full match.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
]
