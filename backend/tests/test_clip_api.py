"""
Tests for the stateless clipping and rendering endpoints.

These tests use FastAPI's TestClient to simulate requests against the
application without running a real server.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from clipview.main import app  # type: ignore


WINDOW = {"left": 0, "top": 10, "right": 10, "bottom": 0}


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_clip_json(client: TestClient) -> None:
    body = {
        "window": WINDOW,
        "segments": [
            {"x1": -5, "y1": 5, "x2": 5, "y2": 5},
            {"x1": -5, "y1": -5, "x2": -1, "y2": -1},
            {"x1": 5, "y1": -3, "x2": 5, "y2": 15},
        ],
    }
    resp = client.post("/api/clip", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["acceptedCount"] == 2
    assert data["rejectedCount"] == 1
    assert [r["accepted"] for r in data["results"]] == [True, False, True]
    assert data["results"][1]["segment"] is None
    assert data["clipped"] == [
        {"x1": 0.0, "y1": 5.0, "x2": 5.0, "y2": 5.0},
        {"x1": 5.0, "y1": 0.0, "x2": 5.0, "y2": 10.0},
    ]


def test_clip_json_rejects_inverted_window(client: TestClient) -> None:
    body = {"window": {"left": 10, "top": 10, "right": 0, "bottom": 0}, "segments": []}
    resp = client.post("/api/clip", json=body)
    assert resp.status_code == 422


def test_clip_json_rejects_missing_coordinate(client: TestClient) -> None:
    body = {"window": WINDOW, "segments": [{"x1": 0, "y1": 0, "x2": 1}]}
    resp = client.post("/api/clip", json=body)
    assert resp.status_code == 422


def test_clip_text(client: TestClient) -> None:
    text = "0 10 10 0\n2\n2 2 8 8\n-5 5 5 5\n"
    resp = client.post("/api/clip/text", content=text, headers={"Content-Type": "text/plain"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["window"] == {"left": 0.0, "top": 10.0, "right": 10.0, "bottom": 0.0}
    assert data["clipped"][0] == {"x1": 2.0, "y1": 2.0, "x2": 8.0, "y2": 8.0}
    assert data["clipped"][1] == {"x1": 0.0, "y1": 5.0, "x2": 5.0, "y2": 5.0}


def test_clip_text_parse_error(client: TestClient) -> None:
    resp = client.post("/api/clip/text", content="0 10 10 0 1 1 oops 2 2")
    assert resp.status_code == 400
    assert "segment 1 y1" in resp.json()["detail"]


def test_render_returns_svg(client: TestClient) -> None:
    body = {"window": WINDOW, "segments": [{"x1": -5, "y1": 5, "x2": 5, "y2": 5}]}
    resp = client.post("/api/render?width=110&height=110", json=body)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("image/svg+xml")
    assert '<line x1="0" y1="60" x2="50" y2="60"' in resp.text


def test_render_rejects_bad_canvas(client: TestClient) -> None:
    body = {"window": WINDOW, "segments": []}
    resp = client.post("/api/render?width=0", json=body)
    assert resp.status_code == 422
