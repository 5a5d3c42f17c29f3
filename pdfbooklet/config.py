"""
Centralized configuration and constants for the booklet maker.

Paper sizes, rendering defaults and tolerances live here so the CLI, the
option model and the services agree on one set of values.
"""

from typing import Dict, Tuple


# Paper sizes in points (72 points per inch) - (width, height) in portrait.
# Each side of a sheet is split into a top half and a bottom half.
PAGE_SIZES: Dict[str, Tuple[float, float]] = {
    'letter': (8.5 * 72, 11 * 72),       # 8.5x11" (612 x 792 pt)
    'legal': (8.5 * 72, 14 * 72),        # 8.5x14" (612 x 1008 pt)
    'tabloid': (11 * 72, 17 * 72),       # 11x17" (792 x 1224 pt)
    'a3': (841.8898, 1190.5512),         # A3 (297 x 420 mm)
    'a4': (595.2756, 841.8898),          # A4 (210 x 297 mm)
    'a5': (419.5276, 595.2756),          # A5 (148 x 210 mm)
}

DEFAULT_PAGE_SIZE = 'letter'

# Rasterization
DEFAULT_DPI = 300
MAX_RECOMMENDED_DPI = 600       # Above this output files grow very large
POINTS_PER_INCH = 72

# Signatures
DEFAULT_SHEETS_PER_SIGNATURE = 1
PAGES_PER_SHEET = 4             # Two halves on each of two sides
MAX_RECOMMENDED_SHEETS_PER_SIGNATURE = 8

# Absolute tolerance (points) used when comparing fitted sizes to viewports
GEOMETRY_TOLERANCE = 1e-6

# Default location of the persisted options
CONFIG_FILENAME = 'pdf_booklet.json'
