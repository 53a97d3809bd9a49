"""Helpers for writing solver outputs to disk."""

from __future__ import annotations

import os
from typing import Optional

from config import CFG
from models import SweepResult


def _resolve_output_path(base_dir: str, configured_name: str, fallback: str) -> str:
    """Return the absolute path where an output artifact should be written."""

    name = (configured_name or "").strip() or fallback
    if os.path.isabs(name):
        return name
    return os.path.join(base_dir, name)


def write_cuts(result: Optional[SweepResult], base_dir: str) -> str:
    """Write the best cut placement to the configured text file."""

    path = _resolve_output_path(base_dir, CFG.CUTS_OUT, "cuts.txt")
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        if result is None:
            f.write("No solution\n")
        else:
            grid = result.grid
            f.write(f"grid {grid.width} x {grid.height}, {result.ncuts} caches\n")
            f.write(f"cost {result.best.cost}\n")
            f.write(f"horizontal {' '.join(str(x) for x in result.best.horizontal_caches)}\n")
            f.write(f"vertical {' '.join(str(y) for y in result.best.vertical_caches)}\n")
            for nv, cost in result.costs.items():
                f.write(f"split nh={result.ncuts - nv} nv={nv} cost={cost}\n")
    return path


def write_layout_view_html(svg: str, legend_html: str, base_dir: str, grid_label: Optional[str] = None) -> str:
    """Write the rendered SVG/legend preview to the configured HTML file."""

    path = _resolve_output_path(base_dir, CFG.LAYOUT_HTML, "layout_view.html")
    os.makedirs(os.path.dirname(path), exist_ok=True)
    heading = f"Layout View — {grid_label}" if grid_label else "Layout View"

    with open(path, "w", encoding="utf-8") as vf:
        vf.write(
            f"""<!doctype html>
<html><head><meta charset='utf-8'><title>Layout View</title></head>
<body class='container'>
<h1>{heading}</h1>
<section class='card'><div class='gridwrap'>{svg}</div></section>
<section class='card'><h3>Legend</h3><ul>{legend_html}</ul></section>
</body></html>"""
        )
    return path


__all__ = ["write_cuts", "write_layout_view_html"]
