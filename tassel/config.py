"""Style constants and per-render settings for the tassel mockup."""

from dataclasses import dataclass

# Canvas
CANVAS_SIZE = 900

# Segmentation: a pixel is background when R, G and B all exceed this
WHITE_THRESHOLD = 245

# Dilation
MAX_PAD_STEPS = 60

# Backing fabric noise
BACKING_BASE = 235
BACKING_NOISE = 8

# Stitch line
STITCH_MARGIN = 1
STITCH_STEP = 6
STITCH_RADIUS = 1.2
STITCH_COLOR = (90, 64, 40)
STITCH_OPACITY = 0.9
STITCH_FILL_ALPHA = 0.95

# Fringe
FRINGE_MARGIN = 2
FRINGE_COLOR = (160, 140, 110)
FRINGE_OPACITY = 0.55
FRINGE_JITTER = 0.9  # (U - 0.5) * 0.9 -> [-0.45, 0.45)
FRINGE_LENGTH_MIN = 0.4
FRINGE_LENGTH_SPAN = 0.9

# Short strokes thickening the fringe base
BASE_RATIO = 0.25
BASE_COLOR = (110, 90, 70)
BASE_OPACITY = 0.22
BASE_LENGTH_MIN = 0.15
BASE_LENGTH_SPAN = 0.15

# Defaults for the command line
DEFAULT_PAD = 12
DEFAULT_FRINGE = 18
DEFAULT_DENSITY = 2500


@dataclass(frozen=True)
class RenderConfig:
    """Values the user picks for a single render."""

    pad: int = DEFAULT_PAD
    fringe_length: int = DEFAULT_FRINGE
    density: int = DEFAULT_DENSITY

    def __post_init__(self):
        for name in ("pad", "fringe_length", "density"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
