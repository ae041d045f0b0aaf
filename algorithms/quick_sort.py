"""
quick_sort.py — Quick Sort (Lomuto partition)
==============================================
Pivot = last element of the range.  A boundary index `i` starts at low-1;
every element smaller than the pivot is swapped just past the boundary.

Yields, per partition of [low, high]:
  1. COMPARE (j, high) for j in low .. high-1
  2. SWAP (i, j) after growing the boundary, for every arr[j] < pivot
  3. SWAP (i+1, high) to drop the pivot into its final slot
  4. MARK_SORTED (i+1) with overlay["range"] = (low, high)

Single-element ranges are marked sorted directly.  Recursion goes left
range first, then right range, through an explicit work stack so a
degenerate (already sorted) input never grows the Python call stack.
"""

from typing import Generator, List, Tuple

from algorithms.step import Step, StepBuilder, StepKind


PSEUDOCODE: List[str] = [
    "def quick_sort(arr, low, high):",              # 0
    "    if low < high:",                           # 1
    "        p ← partition(arr, low, high)",        # 2
    "        quick_sort(arr, low, p - 1)",          # 3
    "        quick_sort(arr, p + 1, high)",         # 4
    "def partition(arr, low, high):",               # 5
    "    pivot ← arr[high]; i ← low - 1",           # 6
    "    for j in low .. high-1:",                  # 7
    "        if arr[j] < pivot:",                   # 8
    "            i ← i + 1; swap(arr[i], arr[j])",  # 9
    "    swap(arr[i+1], arr[high])",                # 10
    "    return i + 1",                             # 11
]


def quick_sort(values: List[int]) -> Generator[Step, None, None]:
    arr = list(values)
    sb  = StepBuilder(lambda: {"array": list(arr)})

    # pending sub-ranges; popped LIFO so pushing (right, left) visits left first
    pending: List[Tuple[int, int]] = [(0, len(arr) - 1)]
    while pending:
        low, high = pending.pop()
        if low > high:
            continue
        if low == high:
            sb.mark_sorted(low)
            yield sb.build(
                StepKind.MARK_SORTED, (low,),
                f"Single element {arr[low]} at index {low} is sorted.",
                pseudocode_line=1, range=(low, high),
            )
            continue

        p = yield from _partition(arr, low, high, sb)
        pending.append((p + 1, high))
        pending.append((low, p - 1))


def _partition(arr: List[int], low: int, high: int, sb: StepBuilder) -> Generator[Step, None, int]:
    pivot = arr[high]
    i = low - 1
    sb.overlay["pivot"] = pivot
    sb.overlay["range"] = (low, high)

    for j in range(low, high):
        yield sb.build(
            StepKind.COMPARE, (j, high),
            f"Partitioning [{low}-{high}] | Pivot: {pivot}. Comparing {arr[j]} with pivot.",
            pseudocode_line=8,
        )
        if arr[j] < pivot:
            i += 1
            arr[i], arr[j] = arr[j], arr[i]
            yield sb.build(
                StepKind.SWAP, (i, j),
                f"{arr[i]} < {pivot}: grow boundary to {i} and swap index {i} with {j}.",
                pseudocode_line=9,
            )

    arr[i + 1], arr[high] = arr[high], arr[i + 1]
    yield sb.build(
        StepKind.SWAP, (i + 1, high),
        f"Move pivot {pivot} into its final slot at index {i + 1}.",
        pseudocode_line=10,
    )
    sb.mark_sorted(i + 1)
    yield sb.build(StepKind.MARK_SORTED, (i + 1,), f"Pivot {pivot} is sorted at index {i + 1}.", pseudocode_line=11)

    sb.overlay.pop("pivot", None)
    sb.overlay.pop("range", None)
    return i + 1
