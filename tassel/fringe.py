"""Random fringe hairlines radiating outward from the padded edge."""

from __future__ import annotations

import logging
import math
from typing import Tuple

import numpy as np

from . import raster
from .config import (
    BASE_COLOR,
    BASE_LENGTH_MIN,
    BASE_LENGTH_SPAN,
    BASE_OPACITY,
    BASE_RATIO,
    FRINGE_COLOR,
    FRINGE_JITTER,
    FRINGE_LENGTH_MIN,
    FRINGE_LENGTH_SPAN,
    FRINGE_MARGIN,
    FRINGE_OPACITY,
)
from .mask import edge_points

logger = logging.getLogger(__name__)


def _normalize(dx: float, dy: float) -> Tuple[float, float]:
    # a zero vector keeps length 1 so it stays (0, 0) instead of NaN
    length = math.hypot(dx, dy) or 1.0
    return dx / length, dy / length


def outward_direction(padded: np.ndarray, x: int, y: int) -> Tuple[float, float]:
    """Unit vector pointing away from the padded shape at ``(x, y)``.

    The direction is the negated central difference of the mask.  Flat
    neighbourhoods yield ``(0, 0)``.
    """

    gx = int(padded[y, x + 1]) - int(padded[y, x - 1])
    gy = int(padded[y + 1, x]) - int(padded[y - 1, x])
    return _normalize(-gx, -gy)


def _pick(points: np.ndarray, rng: np.random.Generator) -> Tuple[int, int]:
    i = int(rng.random() * len(points))
    x, y = points[i]
    return int(x), int(y)


def draw_fringe(
    canvas: np.ndarray,
    edge: np.ndarray,
    padded: np.ndarray,
    length: float,
    density: int,
    rng: np.random.Generator,
) -> Tuple[int, int]:
    """Draw the fringe strokes onto ``canvas``.

    ``density`` long strokes follow the outward normal with some jitter, then
    ``floor(density * 0.25)`` short strokes in random directions thicken the
    base.  Edge points are sampled with replacement.

    Returns
    -------
    Tuple[int, int]
        Number of strokes drawn in the main and in the thickening pass.
    """

    pts = edge_points(edge, FRINGE_MARGIN)
    if len(pts) == 0:
        logger.debug("no edge points, skipping fringe")
        return 0, 0

    main = 0
    for _ in range(density):
        x, y = _pick(pts, rng)
        dx, dy = outward_direction(padded, x, y)
        dx += (rng.random() - 0.5) * FRINGE_JITTER
        dy += (rng.random() - 0.5) * FRINGE_JITTER
        dx, dy = _normalize(dx, dy)
        stroke = length * (FRINGE_LENGTH_MIN + rng.random() * FRINGE_LENGTH_SPAN)
        raster.draw_line(
            canvas, (x, y), (x + dx * stroke, y + dy * stroke), FRINGE_COLOR, FRINGE_OPACITY
        )
        main += 1

    base = 0
    for _ in range(int(math.floor(density * BASE_RATIO))):
        x, y = _pick(pts, rng)
        angle = rng.random() * math.pi * 2
        stroke = length * (BASE_LENGTH_MIN + rng.random() * BASE_LENGTH_SPAN)
        raster.draw_line(
            canvas,
            (x, y),
            (x + math.cos(angle) * stroke, y + math.sin(angle) * stroke),
            BASE_COLOR,
            BASE_OPACITY,
        )
        base += 1

    logger.debug("drew %d fringe and %d base strokes from %d points", main, base, len(pts))
    return main, base
