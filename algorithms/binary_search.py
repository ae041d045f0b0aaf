"""
binary_search.py — Binary Search
=================================
Generator-based binary search over the ascending-sorted input.

Yields a Step at every meaningful event:
  1. Probe the middle element        →  COMPARE (mid, key)
  2. Key found                       →  ACCEPT (mid)         – terminates
  3. Middle too small / too large    →  MOVE_POINTER (low|high, new position)
  4. Window empty                    →  REJECT (key)

Because each probe halves the window, a run never makes more than
ceil(log2(n)) + 1 comparisons.
"""

from typing import Generator, List

from algorithms.step import Step, StepBuilder, StepKind, REASON_NOT_FOUND


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def binary_search(arr, key):",              # 0
    "    sort(arr)",                             # 1
    "    low, high ← 0, len(arr) - 1",           # 2
    "    while low <= high:",                    # 3
    "        mid ← low + (high - low) // 2",     # 4
    "        if arr[mid] == key: return mid",    # 5
    "        elif arr[mid] < key: low ← mid + 1",  # 6
    "        else: high ← mid - 1",              # 7
    "    return NOT FOUND",                      # 8
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def binary_search(values: List[int], key: int) -> Generator[Step, None, None]:
    """
    Args:
        values : Input integers (any order – sorted ascending first).
        key    : The value to look for.

    Yields:
        Step – one per probe, pointer move, and the final accept / reject.
    """
    arr  = sorted(values)
    low  = 0
    high = len(arr) - 1
    sb   = StepBuilder(lambda: {"array": list(arr), "low": low, "high": high, "key": key})

    while low <= high:
        mid = low + (high - low) // 2

        yield sb.build(
            StepKind.COMPARE, (mid, key),
            f"Mid is index {mid}. Comparing {arr[mid]} with key {key}.",
            pseudocode_line=4, mid=mid,
        )

        if arr[mid] == key:
            yield sb.build(
                StepKind.ACCEPT, (mid,),
                f"Key {key} found at index {mid}!",
                pseudocode_line=5, mid=mid,
            )
            return

        if arr[mid] < key:
            low = mid + 1
            yield sb.build(
                StepKind.MOVE_POINTER, ("low", low),
                f"{arr[mid]} < {key}. Ignoring left half, low moves to {low}.",
                pseudocode_line=6, mid=mid,
            )
        else:
            high = mid - 1
            yield sb.build(
                StepKind.MOVE_POINTER, ("high", high),
                f"{arr[mid]} > {key}. Ignoring right half, high moves to {high}.",
                pseudocode_line=7, mid=mid,
            )

    yield sb.reject((key,), REASON_NOT_FOUND, f"Key {key} not found in the array.", pseudocode_line=8)
