import re

import pytest

import app as app_module
from config import CFG


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(CFG, "CUTS_OUT", str(tmp_path / "cuts.txt"))
    monkeypatch.setattr(CFG, "LAYOUT_HTML", str(tmp_path / "layout_view.html"))
    monkeypatch.setattr(CFG, "WORKERS", 1)
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as c:
        yield c


def test_index_serves_the_form(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b'name="ncaches"' in resp.data


def test_api_solve_returns_best_split(client):
    resp = client.post("/api/solve", json={"width": 100, "height": 100, "ncaches": 1})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["ok"] is True
    assert data["cost"] == 740_050
    assert data["horizontal"] == [50]
    assert data["vertical"] == []
    assert data["costs"] == {"0": 740_050}


def test_api_solve_rejects_taller_grid(client):
    resp = client.post("/api/solve", json={"width": 50, "height": 100, "ncaches": 1})
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["ok"] is False
    assert "taller" in data["message"]


def test_form_solve_writes_artifacts(client, tmp_path):
    resp = client.post("/solve", data={"width": "100", "height": "50", "ncaches": "4"})
    assert resp.status_code == 200
    assert b"<svg" in resp.data
    assert (tmp_path / "cuts.txt").exists()
    assert (tmp_path / "layout_view.html").exists()
    assert app_module.LAST_RESULT["ok"] is True
    assert app_module.LAST_RESULT["costs"]["1"] == 164_053

    latest = client.get("/result/latest")
    assert latest.status_code == 200
    assert str(app_module.LAST_RESULT["cost"]).encode() in latest.data


def test_form_solve_reports_bad_input(client):
    resp = client.post("/solve", data={"width": "x", "height": "5"})
    assert resp.status_code == 400
    assert b"Bad request" in resp.data
    assert app_module.LAST_RESULT["ok"] is False


def test_api_cost_evaluates_a_partition(client):
    resp = client.post("/api/cost", json={"widths": [36, 73, 100], "heights": [59, 100]})
    assert resp.status_code == 200
    assert resp.get_json()["cost"] == 537_857

    resp = client.post("/api/cost", data={"widths": "25, 50, 75, 100", "heights": "40"})
    assert resp.get_json()["cost"] == 126_075


def test_api_cost_rejects_short_width_axis(client):
    resp = client.post("/api/cost", json={"widths": [100], "heights": [50, 100]})
    assert resp.status_code == 400
    assert resp.get_json()["ok"] is False


def test_progress_endpoint_is_not_cached(client):
    client.post("/api/solve", json={"width": 100, "height": 100, "ncaches": 1})
    resp = client.get("/progress3")
    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "no-store, max-age=0"
    snap = resp.get_json()
    assert snap["done"] is True
    assert snap["best_cost"] == 740_050


@pytest.mark.parametrize("value", ["inf", "nan", "1e400"])
def test_api_solve_rejects_non_finite_numbers(client, value):
    resp = client.post("/api/solve", json={"width": value, "height": 5, "ncaches": 1})
    assert resp.status_code == 400
    assert resp.get_json()["ok"] is False


def test_api_solve_rejects_more_caches_than_the_grid_holds(client):
    resp = client.post("/api/solve", json={"width": 10, "height": 5, "ncaches": 10**9})
    assert resp.status_code == 400
    assert "no room" in resp.get_json()["message"]


def test_api_cost_rejects_decreasing_axis(client):
    resp = client.post("/api/cost", json={"widths": [73, 36, 100], "heights": [59, 100]})
    assert resp.status_code == 400
    assert "must not decrease" in resp.get_json()["message"]


def test_elapsed_time_uses_the_progress_format(client):
    data = client.post("/api/solve", json={"width": 100, "height": 100, "ncaches": 1}).get_json()
    assert re.fullmatch(r"\d+s", data["elapsed_str"])
