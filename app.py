# app.py — web front-end: form, JSON API and progress polling
from __future__ import annotations
import os
import time
from typing import Any, Dict, Optional, Tuple

from flask import Flask, request, render_template, send_from_directory, jsonify, url_for

from gridsearch.cost import total_grid_cost
from gridsearch.orchestrator import solve_orchestrator
from grid_params import parse_grid_request, parse_axis
from config import CFG
from io_files import write_cuts, write_layout_view_html
from render import render_result
from models import SweepResult

from progress import (
    reset as progress_reset,
    as_json as progress_json,
    start_timer as progress_start,
    fmt_elapsed,
    set_status, set_message, set_done, set_result_url,
)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _resolve_output_paths(configured: str, fallback: str) -> Tuple[str, str, str]:
    name = (configured or "").strip() or fallback
    if os.path.isabs(name):
        full_path = name
    else:
        full_path = os.path.abspath(os.path.join(BASE_DIR, name))
    directory = os.path.dirname(full_path) or BASE_DIR
    filename = os.path.basename(full_path) or fallback
    return full_path, directory, filename


_CUTS_FULL_PATH, CUTS_DIR, CUTS_FILENAME = _resolve_output_paths(CFG.CUTS_OUT, "cuts.txt")
_LAYOUT_FULL_PATH, LAYOUT_DIR, LAYOUT_FILENAME = _resolve_output_paths(
    CFG.LAYOUT_HTML, "layout_view.html"
)

_EMPTY_RESULT: Dict[str, Any] = {
    "ok": False,
    "message": "No run yet.",
    "width": 0,
    "height": 0,
    "ncaches": 0,
    "cost": None,
    "horizontal": [],
    "vertical": [],
    "nvert": 0,
    "costs": {},
    "elapsed_str": "0s",
    "svg": "",
    "legend": "",
    "cuts_filename": CUTS_FILENAME,
    "layout_filename": LAYOUT_FILENAME,
}

LAST_RESULT: Dict[str, Any] = dict(_EMPTY_RESULT)

app = Flask(__name__, template_folder="templates")


@app.after_request
def _no_cache_progress(resp):
    if request.path == "/progress3":
        resp.headers["Cache-Control"] = "no-store, max-age=0"
        resp.headers["Pragma"] = "no-cache"
        resp.headers["Expires"] = "0"
    return resp


def _merge_like_mapping() -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        merged.update(payload)

    for k, v in request.form.to_dict(flat=False).items():
        merged.setdefault(k, v)
    for k, v in request.args.to_dict(flat=False).items():
        merged.setdefault(k, v)

    return merged


def _result_payload(result: SweepResult, elapsed: float) -> Dict[str, Any]:
    best = result.best
    return {
        "ok": True,
        "message": "",
        "width": result.grid.width,
        "height": result.grid.height,
        "ncaches": result.ncuts,
        "cost": best.cost,
        "horizontal": list(best.horizontal_caches),
        "vertical": list(best.vertical_caches),
        "nvert": result.nvert,
        "costs": {str(nv): cost for nv, cost in result.costs.items()},
        "elapsed_str": fmt_elapsed(elapsed),
    }


def _run_solver(like: Dict[str, Any]) -> Tuple[int, Dict[str, Any], Optional[SweepResult]]:
    """Parse, solve and record progress; returns (http_status, payload, result)."""
    progress_reset()
    progress_start()
    set_status("Solving")
    t0 = time.time()

    params, err = parse_grid_request(like)
    if err or params is None:
        reason = f"Bad request: {err}"
        set_done(False, message=reason)
        return 400, {"ok": False, "message": reason}, None

    try:
        result = solve_orchestrator(params.width, params.height, params.ncaches)
    except ValueError as e:
        reason = str(e)
        set_done(False, message=reason)
        return 400, {"ok": False, "message": reason}, None

    set_message(f"cost {result.best.cost}")
    set_done(True)
    return 200, _result_payload(result, time.time() - t0), result


@app.route("/")
def index():
    return render_template("index.html", max_side=CFG.MAX_SIDE)


@app.route("/solve", methods=["POST"])
def solve():
    status, payload, result = _run_solver(_merge_like_mapping())

    LAST_RESULT.clear()
    LAST_RESULT.update(_EMPTY_RESULT)
    LAST_RESULT.update(payload)

    if result is not None:
        svg, legend = render_result(result.best, result.grid.width, result.grid.height)
        cuts_path = write_cuts(result, BASE_DIR)
        layout_path = write_layout_view_html(svg, legend, BASE_DIR, grid_label=result.grid.label())
        LAST_RESULT.update({
            "svg": svg,
            "legend": legend,
            "cuts_filename": os.path.basename(cuts_path) or CUTS_FILENAME,
            "layout_filename": os.path.basename(layout_path) or LAYOUT_FILENAME,
        })

    set_result_url(url_for("result_latest"))
    return render_template("result.html", **LAST_RESULT), status


@app.route("/api/solve", methods=["POST"])
def api_solve():
    status, payload, _result = _run_solver(_merge_like_mapping())
    return jsonify(payload), status


@app.route("/api/cost", methods=["POST"])
def api_cost():
    like = _merge_like_mapping()
    widths = parse_axis(like.get("widths"))
    heights = parse_axis(like.get("heights"))
    if widths is None or heights is None:
        return jsonify({"ok": False, "message": "widths and heights must be lists of whole numbers"}), 400
    try:
        cost = total_grid_cost(widths, heights)
    except ValueError as e:
        return jsonify({"ok": False, "message": str(e)}), 400
    return jsonify({"ok": True, "cost": cost, "widths": widths, "heights": heights})


@app.route("/result/latest")
def result_latest():
    return render_template("result.html", **LAST_RESULT)


@app.route("/download/cuts")
def download_cuts():
    return send_from_directory(CUTS_DIR, CUTS_FILENAME, as_attachment=True)


@app.route("/download/html")
def download_html():
    return send_from_directory(LAYOUT_DIR, LAYOUT_FILENAME, as_attachment=True)


@app.route("/progress3")
def progress3():
    return jsonify(progress_json())


if __name__ == "__main__":
    app.run(debug=False)
