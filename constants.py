# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They hold the
confetti geometry, the timing of the fall and burst phases, the colour
styles, and the defaults used when config.json leaves a value out.
"""

# --- Effect defaults ---
DEFAULT_PIECE_COUNT = 50
DEFAULT_FALL_DURATION = 3.0  # seconds
# Non-positive durations are clamped to this to keep the progress division safe.
MIN_FALL_DURATION = 0.05
DEFAULT_STYLE = "mixed"

# --- Particle geometry ---
SEED_STEP = 0.1
START_X_FACTOR = 97
DRIFT_FACTOR = 31
DRIFT_SPREAD = 120.0
START_Y = -20.0
END_Y_MARGIN = 50.0

BASE_SIZE = 4
SIZE_BUCKETS = 6
RIBBON_ASPECT = 1.5
RIBBON_CORNER_RADIUS = 3.0

SHAPE_RIBBON = "ribbon"
SHAPE_ROUND = "round"

# --- Timing ---
DELAY_BUCKETS = 10
DELAY_STEP = 0.08  # seconds between stagger buckets

# --- Burst-from-all-sides mode ---
EDGE_TOP, EDGE_RIGHT, EDGE_BOTTOM, EDGE_LEFT = 0, 1, 2, 3
EDGE_OFFSET = 24.0
BURST_INSET_X = 0.18  # left edge lands at 18% of width, right at 82%
BURST_INSET_Y = 0.12  # top edge lands at 12% of height, bottom at 88%
PAPER_DRIFT_FACTOR = 47
BURST_DURATION = 0.18
BURST_STAGGER_BUCKETS = 25
BURST_STAGGER_STEP = 0.008
FALL_PHASE_OFFSET = 0.22  # fall starts this long after activation
BURST_FALL_SCALE = 0.65
BURST_FALL_MAX = 2.8
BURST_DELAY_SCALE = 0.7
SPIN_BUCKETS = 180
SPIN_FACTOR = 7

# --- Easing (CSS cubic-bezier control points) ---
EASE_IN = (0.42, 0.0, 1.0, 1.0)
EASE_OUT = (0.0, 0.0, 0.58, 1.0)

# --- Colour styles ---
# Each style is an ordered palette of exactly five RGB colours.
STYLES = {
    "mixed": (
        (233, 30, 140),   # Hot Pink
        (255, 217, 61),   # Sunflower
        (107, 203, 119),  # Leaf Green
        (77, 150, 255),   # Sky Blue
        (255, 107, 107),  # Coral
    ),
    "green": (
        (16, 185, 129),   # Emerald
        (34, 197, 94),    # Green
        (74, 222, 128),   # Light Green
        (52, 211, 153),   # Mint
        (110, 231, 183),  # Pale Mint
    ),
    "pink": (
        (244, 63, 94),    # Rose
        (233, 30, 140),   # Hot Pink
        (183, 110, 121),  # Rose Gold
        (251, 113, 133),  # Light Rose
        (244, 114, 182),  # Orchid
    ),
}
DEFAULT_PALETTE = STYLES[DEFAULT_STYLE]

# --- Visualization settings ---
DEFAULT_WINDOW_WIDTH = 540
DEFAULT_WINDOW_HEIGHT = 960
FPS = 60
BACKGROUND_COLOR = (24, 24, 24)  # Dark Gray
