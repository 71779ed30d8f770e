"""Alpha blended drawing primitives on an RGBA canvas.

The canvas is an opaque ``uint8`` array of shape ``(height, width, 4)``.
Colours are composited source-over, so every touched pixel stays opaque.
"""

from typing import Sequence, Tuple

import numpy as np
from skimage.draw import disk, line_aa


def _round(v: float) -> int:
    """Round half up, like the browser canvas does."""
    return int(np.floor(v + 0.5))


def blend(canvas: np.ndarray, rr, cc, color: Sequence[int], alpha) -> None:
    """Composite ``color`` over the pixels ``(rr, cc)`` with ``alpha`` coverage."""

    if len(rr) == 0:
        return
    a = np.asarray(alpha, dtype=np.float64)
    if a.ndim:
        a = a[:, None]
    src = np.asarray(color[:3], dtype=np.float64)
    dst = canvas[rr, cc, :3].astype(np.float64)
    out = src * a + dst * (1.0 - a)
    canvas[rr, cc, :3] = np.clip(np.floor(out + 0.5), 0, 255).astype(np.uint8)
    canvas[rr, cc, 3] = 255


def draw_line(
    canvas: np.ndarray,
    start: Tuple[float, float],
    end: Tuple[float, float],
    color: Sequence[int],
    opacity: float,
) -> None:
    """Draw a one pixel anti-aliased segment between two ``(x, y)`` points.

    Parts of the segment outside the canvas are clipped.
    """

    h, w = canvas.shape[:2]
    rr, cc, val = line_aa(
        _round(start[1]), _round(start[0]), _round(end[1]), _round(end[0])
    )
    keep = (rr >= 0) & (rr < h) & (cc >= 0) & (cc < w)
    blend(canvas, rr[keep], cc[keep], color, val[keep] * opacity)


def draw_dot(
    canvas: np.ndarray,
    center: Tuple[float, float],
    radius: float,
    color: Sequence[int],
    opacity: float,
) -> None:
    """Fill a small disk centred on an ``(x, y)`` point."""

    rr, cc = disk((center[1], center[0]), radius, shape=canvas.shape[:2])
    blend(canvas, rr, cc, color, opacity)
