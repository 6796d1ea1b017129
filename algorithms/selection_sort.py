"""
selection_sort.py — Selection Sort
===================================
Coroutine-based selection sort.  Emits a Step at every meaningful event:
  1. Start of a pass          →  position i becomes the CANDIDATE
  2. Compare candidate with j →  COMPARE(minIndex, j)
  3. Smaller value found      →  j becomes the new CANDIDATE
  4. Minimum not at i         →  SWAP(i, minIndex) then SWAPPED
  5. End of pass              →  SORTED(i)
  6. After the last pass      →  SORTED(n-1), it is trivially in place

Ties keep the earlier index (strict less-than), so the leftmost
minimum is always the one moved forward.

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the engine so the UI can highlight them live.
"""

from typing import List, Optional

from algorithms.step import EmitFn, HighlightRole, SortRun, WaitFn


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def SelectionSort(array):",                  # 0
    "    n ← length(array)",                      # 1
    "    for i from 0 to n-2:",                   # 2
    "        minIndex ← i",                       # 3
    "        for j from i+1 to n-1:",             # 4
    "            if array[j] < array[minIndex]:", # 5
    "                minIndex ← j",               # 6
    "        if minIndex ≠ i:",                   # 7
    "            swap(array[i], array[minIndex])",# 8
    "        mark i as sorted",                   # 9
    "    mark n-1 as sorted",                     # 10
    "    return array",                           # 11
]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
async def selection_sort(
    array: List[int],
    emit: EmitFn,
    *,
    wait: Optional[WaitFn] = None,
    cancel=None,
) -> List[int]:
    """
    Sorts `array` in place, emitting Steps as it goes.

    Args:
        array  : Non-empty list of ints.  Mutated and returned.
        emit   : Called with every Step; awaited if it returns an awaitable.
        wait   : Delay strategy, awaited after compares and swaps.
        cancel : Optional CancelToken, checked after every suspension point.

    Returns:
        The same list object, ascending.

    Raises:
        InvalidInput : array is empty or holds non-integers.
        Cancelled    : cancel was requested mid-run.
    """

    run = SortRun(array, emit, wait=wait, cancel=cancel)
    n   = run.n

    for i in range(n - 1):
        min_index = i
        await run.candidate(
            i, line=3,
            explanation=f"Pass {i}: assume index {i} (value {array[i]}) is the minimum of the unsorted tail.",
        )

        for j in range(i + 1, n):
            await run.compare(
                min_index, j,
                roles=(HighlightRole.CANDIDATE, HighlightRole.COMPARED),
                line=5,
                explanation=(
                    f"Compare current minimum {array[min_index]} (index {min_index}) "
                    f"with {array[j]} (index {j})."
                ),
            )
            if array[j] < array[min_index]:
                min_index = j
                await run.candidate(
                    j, line=6,
                    explanation=f"{array[j]} is smaller — index {j} is the new minimum.",
                )

        if min_index != i:
            await run.swap(
                i, min_index, line=8,
                explanation=(
                    f"Minimum {array[min_index]} sits at index {min_index}; "
                    f"swap it into position {i}."
                ),
            )

        await run.mark_sorted(
            i, line=9,
            explanation=f"Index {i} now holds {array[i]}, its final value.",
        )

    await run.mark_sorted(
        n - 1, line=10,
        explanation=f"Only index {n - 1} is left, so it is already in place.",
    )
    return array
