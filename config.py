# config.py
import os

# ======= Worker caps =======
WORKERS = int(os.getenv("GC_WORKERS", "1"))

# ======= Web front-end guards =======
# Largest grid side the form accepts.  The search recomputes the full cost on
# every trial move, so very large grids are better run from the CLI.
MAX_SIDE = int(os.getenv("GC_MAX_SIDE", "2000"))

# ======= Rendering =======
SVG_SCALE = float(os.getenv("GC_SVG_SCALE", "6"))   # pixels per grid unit (cap)
SVG_MAX_PX = int(os.getenv("GC_SVG_MAX_PX", "720"))

# ======= Output names =======
CUTS_OUT    = os.getenv("GC_CUTS_OUT", "cuts.txt")
LAYOUT_HTML = os.getenv("GC_LAYOUT_HTML", "layout_view.html")
LOG_FILE    = os.getenv("GC_LOG_FILE", os.path.join("logs", "solver_attempts.log"))

class CFG:
    WORKERS = WORKERS

    MAX_SIDE = MAX_SIDE

    SVG_SCALE  = SVG_SCALE
    SVG_MAX_PX = SVG_MAX_PX

    CUTS_OUT    = CUTS_OUT
    LAYOUT_HTML = LAYOUT_HTML
    LOG_FILE    = LOG_FILE

__all__ = ["CFG"]
