"""
Recorder metrics, export and side-by-side comparison.
"""

from __future__ import annotations

import json

import pytest

from algorithms import InvalidInput, StepKind
from engine import CancelToken, Recorder, compare


def recorded(algo_key, array):
    rec = Recorder()
    rec.start(algo_key, array)
    rec.run_to_completion()
    return rec


def test_selection_sort_metrics():
    a = [5, 3, 4, 1, 2]
    rec = recorded("selection_sort", a)
    m = rec.get_metrics()

    assert a == [5, 3, 4, 1, 2], "Recorder sorts its own copy"
    assert rec.result == [1, 2, 3, 4, 5]
    assert m.algo_label == "Selection Sort"
    assert m.array_size == 5
    assert m.comparisons == 10
    assert m.swaps == 4
    assert m.sorted_marks == 5
    assert m.total_steps == len(rec.steps)
    assert m.is_sorted
    assert not m.cancelled


def test_bubble_sort_metrics_count_inversions():
    m = recorded("bubble_sort", [5, 3, 4, 1, 2]).get_metrics()
    assert m.comparisons == 10
    assert m.swaps == 8
    assert m.candidate_marks == 0


def test_on_step_hook_sees_every_step():
    seen = []
    rec = Recorder(on_step=seen.append)
    rec.start("bubble_sort", [2, 1])
    rec.run_to_completion()
    assert seen == rec.steps


def test_cancelled_run_is_reported_not_raised():
    token = CancelToken()
    token.cancel()
    rec = Recorder()
    rec.start("selection_sort", [3, 2, 1])
    m = rec.run_to_completion(cancel=token)

    assert m.cancelled
    assert m.total_steps == 1
    assert sorted(rec.result) == [1, 2, 3]


def test_run_requires_start():
    with pytest.raises(RuntimeError):
        Recorder().run_to_completion()


def test_start_validates_input():
    with pytest.raises(InvalidInput):
        Recorder().start("bubble_sort", [])
    with pytest.raises(InvalidInput):
        Recorder().start("shell_sort", [1])


def test_export_is_json_serialisable():
    rec = recorded("selection_sort", [2, 1])
    data = rec.export()
    json.dumps(data)

    assert data["algo_key"] == "selection_sort"
    assert data["input"] == [2, 1]
    assert data["result"] == [1, 2]
    assert data["metrics"]["swaps"] == 1
    assert data["steps"][0]["kind"] == StepKind.CANDIDATE.value


def test_compare_picks_winners():
    a = [5, 3, 4, 1, 2]
    left, right = recorded("selection_sort", a), recorded("bubble_sort", a)
    comp = compare(left, right)

    assert comp.winner_comparisons == "tie"
    assert comp.winner_swaps == "Selection Sort"
    assert comp.left.algo_key == "selection_sort"
    assert comp.right.algo_key == "bubble_sort"
