"""
Flask host routes, via the test client.
"""

from __future__ import annotations

import pytest

from main import MAX_SIZE, app, random_array
from algorithms import InvalidInput


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_index_renders(client):
    res = client.get("/")
    assert res.status_code == 200
    body = res.get_data(as_text=True)
    assert "Sorting Algorithm Visualizer" in body
    assert body.count('class="bar"') == 50


def test_algorithms_listing(client):
    data = client.get("/api/algorithms").get_json()
    assert [a["key"] for a in data] == ["selection_sort", "bubble_sort"]
    assert data[0]["pseudocode"]


def test_generate_array(client):
    res = client.post("/api/array/generate", json={"size": 6, "low": 1, "high": 9, "seed": 3})
    data = res.get_json()
    assert res.status_code == 200
    assert len(data["array"]) == 6
    assert all(1 <= v <= 9 for v in data["array"])
    assert data["array"] == random_array(6, 1, 9, seed=3)


@pytest.mark.parametrize("payload", [{"size": 0}, {"size": 5, "low": 10, "high": 1}, {"size": "many"}])
def test_generate_array_rejects_bad_parameters(client, payload):
    res = client.post("/api/array/generate", json=payload)
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_run_returns_one_frame_per_step(client):
    client.post("/api/array/generate", json={"size": 4, "seed": 1})
    res = client.post("/api/run", json={"algo_key": "bubble_sort", "speed": "fast"})
    data = res.get_json()

    assert res.status_code == 200
    assert data["svg"].startswith("<svg")
    assert data["colors"]["default"] == "#af52de"
    assert data["total_steps"] == len(data["frames"])
    assert data["result"] == sorted(data["result"])

    first = data["frames"][0]
    assert first["kind"] == "compare"
    assert first["indices"] == [0, 1]
    assert first["roles"] == {"0": "compared", "1": "compared"}
    assert first["delay_ms"] == 20
    assert "svg" not in first
    for frame in data["frames"]:
        if frame["kind"] in ("swap", "swapped"):
            assert frame["delay_ms"] == 40
        if frame["kind"] == "sorted":
            assert frame["delay_ms"] == 0
            assert frame["roles"] == {str(frame["indices"][0]): "sorted"}
        assert ("arrow" in frame) == (frame["kind"] == "swap")


def test_run_frames_stay_small_at_max_size(client):
    client.post("/api/array/generate", json={"size": MAX_SIZE, "seed": 7})
    res = client.post("/api/run", json={"algo_key": "bubble_sort", "speed": "turbo"})
    data = res.get_json()

    assert res.status_code == 200
    assert data["total_steps"] == len(data["frames"])
    assert data["total_steps"] > MAX_SIZE * (MAX_SIZE - 1) // 2
    assert len(res.get_data()) < 4_000_000
    assert all(len(frame) <= 7 for frame in data["frames"])


def test_generate_rejects_size_above_max(client):
    res = client.post("/api/array/generate", json={"size": MAX_SIZE + 1})
    assert res.status_code == 400


def test_run_unknown_algorithm(client):
    res = client.post("/api/run", json={"algo_key": "bogo_sort"})
    assert res.status_code == 400


def test_run_unknown_speed(client):
    res = client.post("/api/run", json={"algo_key": "bubble_sort", "speed": "warp"})
    assert res.status_code == 400


@pytest.mark.parametrize("payload", [
    {"algo_key": ["bubble_sort"]},
    {"algo_key": {"name": "bubble_sort"}},
    {"algo_key": 7},
    {"algo_key": "bubble_sort", "speed": ["fast"]},
    {"algo_key": "bubble_sort", "speed": {"name": "fast"}},
])
def test_run_rejects_non_string_fields(client, payload):
    res = client.post("/api/run", json=payload)
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_compare(client):
    client.post("/api/array/generate", json={"size": 8, "seed": 2})
    data = client.post("/api/compare").get_json()
    assert "Selection Sort vs Bubble Sort" in data["comparison"]


def test_random_array_validation():
    with pytest.raises(InvalidInput):
        random_array(size=500)
    assert random_array(3, seed=9) == random_array(3, seed=9)
