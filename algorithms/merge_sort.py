"""
merge_sort.py — Merge Sort
===========================
Top-down merge sort.  Recursion depth is log2(n) and inputs are small,
so the recursive halves are plain `yield from` calls.

Yields:
  1. SPLIT (start, mid, end) when a range is divided at mid = (start+end)//2
  2. COMPARE (left_idx, right_idx) while both runs have elements
  3. PLACE (value, k) every time a value is written back at position k;
     ties take the LEFT value so the sort is stable
  4. A final MARK_SORTED over every index
"""

from typing import Generator, List

from algorithms.step import Step, StepBuilder, StepKind


PSEUDOCODE: List[str] = [
    "def merge_sort(arr, start, end):",                   # 0
    "    if start >= end: return",                        # 1
    "    mid ← (start + end) // 2",                       # 2
    "    merge_sort(arr, start, mid)",                    # 3
    "    merge_sort(arr, mid + 1, end)",                  # 4
    "    merge(arr, start, mid, end)",                    # 5
    "def merge(arr, start, mid, end):",                   # 6
    "    while left and right:",                          # 7
    "        if left[i] <= right[j]: arr[k] ← left[i]",   # 8
    "        else: arr[k] ← right[j]",                    # 9
    "    copy leftovers into arr[k..end]",                # 10
]


def merge_sort(values: List[int]) -> Generator[Step, None, None]:
    arr = list(values)
    sb  = StepBuilder(lambda: {"array": list(arr)})

    yield from _sort(arr, 0, len(arr) - 1, 0, sb)
    sb.overlay.pop("depth", None)

    everything = tuple(range(len(arr)))
    sb.mark_sorted(*everything)
    yield sb.build(StepKind.MARK_SORTED, everything, "Sort complete.", pseudocode_line=0)


def _sort(arr: List[int], start: int, end: int, depth: int, sb: StepBuilder) -> Generator[Step, None, None]:
    if start >= end:
        return
    mid = (start + end) // 2
    sb.overlay["depth"] = depth
    yield sb.build(
        StepKind.SPLIT, (start, mid, end),
        f"Level {depth}: dividing [{start}..{end}] into [{start}..{mid}] and [{mid + 1}..{end}].",
        pseudocode_line=2,
    )
    yield from _sort(arr, start, mid, depth + 1, sb)
    yield from _sort(arr, mid + 1, end, depth + 1, sb)
    yield from _merge(arr, start, mid, end, depth, sb)


def _merge(arr: List[int], start: int, mid: int, end: int, depth: int, sb: StepBuilder) -> Generator[Step, None, None]:
    left  = arr[start:mid + 1]
    right = arr[mid + 1:end + 1]
    i = j = 0
    k = start
    sb.overlay["depth"] = depth
    sb.overlay["range"] = (start, end)

    while i < len(left) and j < len(right):
        yield sb.build(
            StepKind.COMPARE, (start + i, mid + 1 + j),
            f"Level {depth}: comparing {left[i]} (left) with {right[j]} (right).",
            pseudocode_line=7,
        )
        if left[i] <= right[j]:
            arr[k] = left[i]
            i += 1
            line = 8
        else:
            arr[k] = right[j]
            j += 1
            line = 9
        yield sb.build(StepKind.PLACE, (arr[k], k), f"Place {arr[k]} at position {k}.", pseudocode_line=line)
        k += 1

    for value in left[i:] + right[j:]:
        arr[k] = value
        yield sb.build(StepKind.PLACE, (value, k), f"Copy leftover {value} to position {k}.", pseudocode_line=10)
        k += 1

    sb.overlay.pop("range", None)
