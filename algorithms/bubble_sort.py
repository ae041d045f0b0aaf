"""
bubble_sort.py — Bubble Sort
=============================
Adjacent-pair passes with early exit.

Yields:
  1. COMPARE (j, j+1) for every adjacent pair in the unsorted prefix
  2. SWAP (j, j+1) when the left value is larger
  3. MARK_SORTED (n-i-1) once a pass has bubbled its maximum into place
  4. On a pass with no swap every remaining index is MARK_SORTED and the
     sort stops early.
"""

from typing import Generator, List

from algorithms.step import Step, StepBuilder, StepKind


PSEUDOCODE: List[str] = [
    "def bubble_sort(arr):",                            # 0
    "    for i in 0 .. n-1:",                           # 1
    "        swapped ← False",                          # 2
    "        for j in 0 .. n-i-2:",                     # 3
    "            if arr[j] > arr[j+1]:",                # 4
    "                swap(arr[j], arr[j+1])",           # 5
    "                swapped ← True",                   # 6
    "        mark arr[n-i-1] sorted",                   # 7
    "        if not swapped: mark rest sorted; break",  # 8
]


def bubble_sort(values: List[int]) -> Generator[Step, None, None]:
    arr = list(values)
    n   = len(arr)
    sb  = StepBuilder(lambda: {"array": list(arr)})

    for i in range(n):
        swapped = False
        for j in range(n - i - 1):
            yield sb.build(StepKind.COMPARE, (j, j + 1), f"Comparing index {j} and {j + 1}", pseudocode_line=4)
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swapped = True
                yield sb.build(
                    StepKind.SWAP, (j, j + 1),
                    f"Swapping {arr[j + 1]} ↔ {arr[j]}",
                    pseudocode_line=5,
                )

        last = n - i - 1
        sb.mark_sorted(last)
        yield sb.build(StepKind.MARK_SORTED, (last,), f"Index {last} is in its final place.", pseudocode_line=7)

        if not swapped:
            rest = tuple(range(last))
            if rest:
                sb.mark_sorted(*rest)
                yield sb.build(
                    StepKind.MARK_SORTED, rest,
                    "No swaps in this pass, so the remaining elements are already sorted.",
                    pseudocode_line=8,
                )
            return
