"""
bubble_sort.py — Bubble Sort
=============================
Coroutine-based bubble sort.  Emits a Step at every meaningful event:
  1. Compare neighbours   →  COMPARE(j, j+1)
  2. Out of order         →  SWAP(j, j+1) then SWAPPED
  3. End of pass i        →  SORTED(n-i-1)

After pass k the k largest values occupy the tail in order, so the
last index a pass touched is final.  Every pass runs, including the
empty last one, so the Sorted-Set always ends as the full index range.
"""

from typing import List, Optional

from algorithms.step import EmitFn, SortRun, WaitFn


PSEUDOCODE: List[str] = [
    "def BubbleSort(array):",                     # 0
    "    n ← length(array)",                      # 1
    "    for i from 0 to n-1:",                   # 2
    "        for j from 0 to n-i-2:",             # 3
    "            if array[j] > array[j+1]:",      # 4
    "                swap(array[j], array[j+1])", # 5
    "        mark n-i-1 as sorted",               # 6
    "    return array",                           # 7
]


async def bubble_sort(
    array: List[int],
    emit: EmitFn,
    *,
    wait: Optional[WaitFn] = None,
    cancel=None,
) -> List[int]:
    """Sorts `array` in place; same contract as selection_sort."""

    run = SortRun(array, emit, wait=wait, cancel=cancel)
    n   = run.n

    for i in range(n):
        for j in range(n - i - 1):
            await run.compare(
                j, j + 1, line=4,
                explanation=f"Compare neighbours {array[j]} (index {j}) and {array[j + 1]} (index {j + 1}).",
            )
            if array[j] > array[j + 1]:
                await run.swap(
                    j, j + 1, line=5,
                    explanation=f"{array[j]} > {array[j + 1]} — out of order, bubble it right.",
                )

        last = n - i - 1
        await run.mark_sorted(
            last, line=6,
            explanation=f"Pass {i} done: index {last} holds {array[last]}, its final value.",
        )

    return array
