# progress.py — run state shared by the sweep, the web UI and the attempt log
from __future__ import annotations

import json
import logging
import os
import threading
import time
from pathlib import Path
from typing import Any, Dict, Optional

from config import CFG

PROGRESS_LOCK = threading.Lock()
BASE_DIR = Path(__file__).resolve().parent

STATE_FILE = Path(
    os.environ.get("PROGRESS_STATE_FILE") or BASE_DIR / "logs" / "progress_state.json"
)
STATE_FILE_TMP = STATE_FILE.with_name(STATE_FILE.name + ".tmp")
_LAST_STATE_MTIME: float = 0.0


def _init_logger() -> logging.Logger:
    logger = logging.getLogger("gridcache.attempt_log")
    if logger.handlers:
        return logger

    log_path = Path(CFG.LOG_FILE)
    if not log_path.is_absolute():
        log_path = BASE_DIR / log_path
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        # no writable log location: events are dropped
        return logger
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


ATTEMPT_LOGGER = _init_logger()

# Single source of truth for /progress3
PROGRESS: Dict[str, Any] = {
    "status": "Idle",          # Idle | Solving | Solved | Error
    "phase": "",               # e.g. sweep
    "phase_total": "",         # number of splits in the sweep
    "attempt": "",             # e.g. "nh=3 nv=1"
    "grid": "",                # e.g. "100 × 50"
    "percent": 0.0,            # 0..100 float
    "best_cost": None,         # cheapest cost seen so far
    "best_split": "",          # split that produced it
    "elapsed_start": None,     # t0 (float) when solving started
    "elapsed": 0.0,            # seconds snapshot
    "message": "",             # optional note
    "done": False,             # run completed
    "ok": None,                # success flag if known
    "result_url": "",          # optional navigation target
    "run_id": 0,               # monotonically increasing identifier
}

_DEFAULTS: Dict[str, Any] = {k: v for k, v in PROGRESS.items() if k != "run_id"}


def _emit_locked(event: str, **fields: Any) -> None:
    if not ATTEMPT_LOGGER.handlers:
        return
    fields.setdefault("phase", PROGRESS["phase"])
    fields.setdefault("attempt", PROGRESS["attempt"])
    extras = " ".join(f"{k}={v}" for k, v in fields.items() if v not in (None, ""))
    if extras:
        ATTEMPT_LOGGER.info("%s | %s", event, extras)
    else:
        ATTEMPT_LOGGER.info("%s", event)


def log_attempt_detail(event: str, **fields: Any) -> None:
    """Record a free-form solver event tagged with the current phase/attempt."""
    with PROGRESS_LOCK:
        _emit_locked(event, **fields)


def _persist_locked() -> None:
    global _LAST_STATE_MTIME
    try:
        STATE_FILE.parent.mkdir(parents=True, exist_ok=True)
        with STATE_FILE_TMP.open("w", encoding="utf-8") as fh:
            json.dump(PROGRESS, fh, ensure_ascii=False, separators=(",", ":"))
        STATE_FILE_TMP.replace(STATE_FILE)
        _LAST_STATE_MTIME = STATE_FILE.stat().st_mtime
    except OSError:
        pass


def _load_persisted_locked(force: bool = False) -> None:
    """Pick up state written by another process (pool worker, second app)."""
    global _LAST_STATE_MTIME
    try:
        mtime = STATE_FILE.stat().st_mtime
        if not force and mtime <= _LAST_STATE_MTIME:
            return
        with STATE_FILE.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError):
        return
    if isinstance(data, dict):
        PROGRESS.update({k: data[k] for k in PROGRESS if k in data})
        _LAST_STATE_MTIME = mtime


def _touch_elapsed_locked() -> None:
    t0 = PROGRESS.get("elapsed_start")
    if t0 is not None:
        PROGRESS["elapsed"] = time.time() - float(t0)


def _update(**changes: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS.update(changes)
        _persist_locked()


def _text(v: Any) -> str:
    return "" if v is None else str(v)


def fmt_elapsed(seconds: float) -> str:
    seconds = max(0.0, float(seconds))
    if seconds < 60:
        return f"{int(seconds)}s"
    m, s = divmod(int(seconds), 60)
    if m < 60:
        return f"{m}m {s}s"
    h, m = divmod(m, 60)
    return f"{h}h {m}m"


# ------------------------------
# Run lifecycle
# ------------------------------

def reset() -> None:
    with PROGRESS_LOCK:
        run_id = int(PROGRESS.get("run_id") or 0) + 1
        PROGRESS.update(_DEFAULTS)
        PROGRESS["run_id"] = run_id
        _emit_locked("Progress reset", run=run_id)
        _persist_locked()


def start_timer() -> None:
    _update(elapsed_start=time.time(), elapsed=0.0)


def set_done(ok: Optional[bool] = None, *, message: Any = None) -> None:
    """Mark the run complete.

    ``ok`` decides the final status when given; otherwise a run that never
    left ``Idle`` is reported as ``Solved``.
    """
    with PROGRESS_LOCK:
        _touch_elapsed_locked()
        if ok is not None:
            PROGRESS["status"] = "Solved" if ok else "Error"
            PROGRESS["ok"] = bool(ok)
        elif PROGRESS.get("status") in ("", "Idle", None):
            PROGRESS["status"] = "Solved"
            PROGRESS["ok"] = True
        if message is not None:
            PROGRESS["message"] = str(message)
        PROGRESS["percent"] = 100.0
        PROGRESS["done"] = True
        _emit_locked(
            "Run finished",
            status=PROGRESS["status"],
            elapsed=fmt_elapsed(PROGRESS["elapsed"]),
            best_cost=PROGRESS["best_cost"],
            best_split=PROGRESS["best_split"],
            message=PROGRESS["message"],
        )
        _persist_locked()


# ------------------------------
# Setters
# ------------------------------

def set_status(v: Any) -> None:
    _update(status=str(v))


def set_phase(v: Any) -> None:
    with PROGRESS_LOCK:
        phase = _text(v)
        if phase != PROGRESS["phase"]:
            PROGRESS["phase"] = phase
            PROGRESS["attempt"] = ""
            if phase:
                _emit_locked("Phase started")
        _persist_locked()


def set_phase_total(v: Any) -> None:
    _update(phase_total=_text(v))


def set_attempt(v: Any) -> None:
    with PROGRESS_LOCK:
        attempt = _text(v)
        if attempt != PROGRESS["attempt"]:
            PROGRESS["attempt"] = attempt
            if attempt:
                _emit_locked("Attempt started", grid=PROGRESS["grid"])
        _persist_locked()


def set_grid(v: Any) -> None:
    _update(grid=_text(v))


def set_progress_pct(pct: Any) -> None:
    try:
        f = float(pct)
    except (TypeError, ValueError):
        f = 0.0
    with PROGRESS_LOCK:
        PROGRESS["percent"] = max(0.0, min(100.0, f))
        _touch_elapsed_locked()
        _persist_locked()


def set_best_cost(cost: Any, split: Any = None) -> None:
    _update(best_cost=None if cost is None else int(cost), best_split=_text(split))


def set_message(msg: Any) -> None:
    _update(message=_text(msg))


def set_result_url(url: Any) -> None:
    _update(result_url=_text(url))


# ------------------------------
# Snapshots for the UI
# ------------------------------

def snapshot() -> Dict[str, Any]:
    with PROGRESS_LOCK:
        _load_persisted_locked()
        _touch_elapsed_locked()
        snap = {k: v for k, v in PROGRESS.items() if k != "elapsed_start"}
        snap["elapsed_str"] = fmt_elapsed(PROGRESS["elapsed"])
        return snap


def as_json() -> Dict[str, Any]:
    # Alias used by /progress3
    return snapshot()


with PROGRESS_LOCK:
    _load_persisted_locked(force=True)
