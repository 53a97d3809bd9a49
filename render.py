import random
from typing import List, Tuple

from config import CFG
from models import Solution


def _color(name: str) -> str:
    rng = random.Random(sum(ord(c) * (i + 1) for i, c in enumerate(name)))
    r = rng.randint(40, 200)
    g = rng.randint(40, 200)
    b = rng.randint(40, 200)
    return f"rgb({r},{g},{b})"


def _scale(width: int, height: int) -> float:
    longest = max(width, height, 1)
    return min(float(CFG.SVG_SCALE), CFG.SVG_MAX_PX / longest)


def render_result(sol: Solution, width: int, height: int) -> Tuple[str, str]:
    """Return (svg, legend_html) drawing the cuts of ``sol`` over the grid."""
    scale = _scale(width, height)
    svg_w = int(width * scale) + 2
    svg_h = int(height * scale) + 2
    h_color = _color("horizontal")
    v_color = _color("vertical")

    lines: List[str] = []
    for x in sol.horizontal_caches:
        px = int(x * scale) + 1
        lines.append(
            f'<line x1="{px}" y1="1" x2="{px}" y2="{svg_h - 1}" stroke="{h_color}" stroke-width="2"/>'
            f'<text x="{px + 3}" y="14" font-size="11" fill="{h_color}">{x}</text>'
        )
    for y in sol.vertical_caches:
        py = int(y * scale) + 1
        lines.append(
            f'<line x1="1" y1="{py}" x2="{svg_w - 1}" y2="{py}" stroke="{v_color}" stroke-width="2"/>'
            f'<text x="4" y="{py - 3}" font-size="11" fill="{v_color}">{y}</text>'
        )
    grid = f'<rect x="1" y="1" width="{svg_w-2}" height="{svg_h-2}" fill="none" stroke="black" stroke-width="2"/>'
    svg = (
        f'<svg class="layout-svg" xmlns="http://www.w3.org/2000/svg" '
        f'width="{svg_w}" height="{svg_h}" '
        f'viewBox="0 0 {svg_w} {svg_h}" preserveAspectRatio="xMinYMin meet">'
        f'{grid}{"".join(lines)}</svg>'
    )

    legend = "".join(
        f"<li><span class='swatch' style='background:{c}'></span>{label} ({n})</li>"
        for label, c, n in (
            ("horizontal caches", h_color, len(sol.horizontal_caches)),
            ("vertical caches", v_color, len(sol.vertical_caches)),
        )
    )
    return svg, legend
