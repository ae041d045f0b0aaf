"""
selection_sort.py — Selection Sort
===================================
For each position, scan the unsorted suffix for the minimum.

Yields:
  1. COMPARE (min_idx, j) for every candidate j
  2. MOVE_POINTER ("min", j) whenever the running minimum changes
  3. SWAP (i, min_idx) once per outer iteration, only if min_idx != i
  4. MARK_SORTED (i) per completed position, and for the last index
"""

from typing import Generator, List

from algorithms.step import Step, StepBuilder, StepKind


PSEUDOCODE: List[str] = [
    "def selection_sort(arr):",                  # 0
    "    for i in 0 .. n-2:",                    # 1
    "        min_idx ← i",                       # 2
    "        for j in i+1 .. n-1:",              # 3
    "            if arr[j] < arr[min_idx]:",     # 4
    "                min_idx ← j",               # 5
    "        if min_idx != i:",                  # 6
    "            swap(arr[i], arr[min_idx])",    # 7
    "        mark arr[i] sorted",                # 8
]


def selection_sort(values: List[int]) -> Generator[Step, None, None]:
    arr = list(values)
    n   = len(arr)
    sb  = StepBuilder(lambda: {"array": list(arr)})

    for i in range(n - 1):
        min_idx = i
        sb.overlay["phase"] = i + 1
        for j in range(i + 1, n):
            yield sb.build(StepKind.COMPARE, (min_idx, j), f"Comparing index {min_idx} and {j}...", pseudocode_line=4)
            if arr[j] < arr[min_idx]:
                min_idx = j
                yield sb.build(
                    StepKind.MOVE_POINTER, ("min", j),
                    f"New minimum {arr[j]} at index {j}.",
                    pseudocode_line=5,
                )

        if min_idx != i:
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
            yield sb.build(
                StepKind.SWAP, (i, min_idx),
                f"Found min {arr[i]} at index {min_idx}. Swapping with index {i}.",
                pseudocode_line=7,
            )

        sb.mark_sorted(i)
        yield sb.build(StepKind.MARK_SORTED, (i,), f"Index {i} holds {arr[i]} and is sorted.", pseudocode_line=8)

    sb.overlay.pop("phase", None)
    sb.mark_sorted(n - 1)
    yield sb.build(StepKind.MARK_SORTED, (n - 1,), "The last element is sorted by elimination.", pseudocode_line=8)
