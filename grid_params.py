# grid_params.py — tolerant request parser for the grid form / JSON body
from __future__ import annotations
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from config import CFG

# Accept "100x50", "100 × 50", "100X50" for a combined grid field.
_GRID_RE = re.compile(r"(?P<w>\d+)\s*[xX×]\s*(?P<h>\d+)")

_WIDTH_KEYS = ("width", "w", "grid_w")
_HEIGHT_KEYS = ("height", "h", "grid_h")
_CUTS_KEYS = ("ncaches", "ncuts", "caches", "n")


@dataclass(frozen=True)
class GridParams:
    width: int
    height: int
    ncaches: int


def _to_int(x: Any) -> Optional[int]:
    try:
        f = float(str(x).strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f) or f != int(f):
        return None
    return int(f)


def _as_listish(val: Any) -> List[Any]:
    if val is None:
        return []
    if isinstance(val, (list, tuple)):
        return list(val)
    return [val]


def _first(container: Dict[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        for v in _as_listish(container.get(key)):
            if v is not None and str(v).strip() != "":
                return v
    return None


def parse_grid_request(form_like: Any) -> Tuple[Optional[GridParams], Optional[str]]:
    """
    Return (params, error_message_or_None).
    ``form_like`` is a mapping whose values may be scalars or lists, as built
    by app._merge_like_mapping().
    """
    if not isinstance(form_like, dict):
        return None, "expected a mapping of request fields"

    raw_w = _first(form_like, _WIDTH_KEYS)
    raw_h = _first(form_like, _HEIGHT_KEYS)
    if raw_w is None or raw_h is None:
        combined = _first(form_like, ("grid",))
        m = _GRID_RE.search(str(combined or ""))
        if m:
            raw_w, raw_h = m.group("w"), m.group("h")

    width = _to_int(raw_w)
    height = _to_int(raw_h)
    if width is None or height is None:
        return None, "width and height must be whole numbers"
    if width < 1 or height < 1:
        return None, "width and height must be at least 1"
    if max(width, height) > CFG.MAX_SIDE:
        return None, f"grid sides are limited to {CFG.MAX_SIDE}"
    if width < height:
        return None, "Grid cannot be taller than wider."

    raw_n = _first(form_like, _CUTS_KEYS)
    ncaches = 0 if raw_n is None else _to_int(raw_n)
    if ncaches is None or ncaches < 0:
        return None, "number of caches must be a non-negative whole number"
    if ncaches >= width + height:
        return None, f"a {width} × {height} grid has no room for {ncaches} caches"

    return GridParams(width, height, ncaches), None


def parse_axis(text: Any) -> Optional[List[int]]:
    """Parse "36, 73, 100" (or a JSON list) into a list of ints."""
    if isinstance(text, (list, tuple)):
        if len(text) == 1 and isinstance(text[0], str):
            text = text[0]
        else:
            out = [_to_int(v) for v in text]
            if not out or any(v is None or v < 0 for v in out):
                return None
            return out  # type: ignore[return-value]
    tokens = [t for t in re.split(r"[\s,;]+", str(text or "").strip("[] ")) if t]
    out = [_to_int(t) for t in tokens]
    if not out or any(v is None or v < 0 for v in out):
        return None
    return out  # type: ignore[return-value]


__all__ = ["GridParams", "parse_grid_request", "parse_axis"]
