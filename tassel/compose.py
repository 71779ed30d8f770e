"""Layered rendering of the tassel mockup.

The layers are painted in a fixed order onto a fresh canvas: white paper,
noisy fabric backing under the padded shape, the original subject pixels,
a dotted stitch line along the padded edge and finally the fringe.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from . import raster
from .config import (
    BACKING_BASE,
    BACKING_NOISE,
    STITCH_COLOR,
    STITCH_FILL_ALPHA,
    STITCH_MARGIN,
    STITCH_OPACITY,
    STITCH_RADIUS,
    STITCH_STEP,
    RenderConfig,
)
from .fringe import draw_fringe
from .mask import dilate_mask, edge_points, find_edge, segment_subject

logger = logging.getLogger(__name__)


def build_masks(source: np.ndarray, pad: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return the subject mask, the padded mask and the padded edge."""

    mask = segment_subject(source)
    padded = dilate_mask(mask, pad)
    edge = find_edge(padded)
    return mask, padded, edge


def blank_canvas(height: int, width: int) -> np.ndarray:
    """Opaque white RGBA canvas."""
    return np.full((height, width, 4), 255, dtype=np.uint8)


def draw_backing(canvas: np.ndarray, padded: np.ndarray, rng: np.random.Generator) -> None:
    """Paint light grey fabric with per pixel noise wherever ``padded`` is set."""

    ys, xs = np.nonzero(padded)
    noise = rng.random(len(ys)) * (2 * BACKING_NOISE) - BACKING_NOISE
    grey = np.clip(np.floor(BACKING_BASE + noise + 0.5), 0, 255).astype(np.uint8)
    canvas[ys, xs, 0] = grey
    canvas[ys, xs, 1] = grey
    canvas[ys, xs, 2] = grey
    canvas[ys, xs, 3] = 255


def draw_subject(canvas: np.ndarray, source: np.ndarray, mask: np.ndarray) -> None:
    """Copy the subject colours from ``source``, forcing them opaque."""

    sel = mask.astype(bool)
    canvas[sel, :3] = source[sel, :3]
    canvas[sel, 3] = 255


def draw_stitch(canvas: np.ndarray, edge: np.ndarray) -> int:
    """Dot every sixth edge point to imitate a stitched border.

    Returns the number of dots drawn.
    """

    pts = edge_points(edge, STITCH_MARGIN)
    opacity = STITCH_OPACITY * STITCH_FILL_ALPHA
    for x, y in pts[::STITCH_STEP]:
        raster.draw_dot(canvas, (x, y), STITCH_RADIUS, STITCH_COLOR, opacity)
    return len(pts[::STITCH_STEP])


def render(
    source: np.ndarray,
    config: RenderConfig,
    rng: Optional[np.random.Generator] = None,
    masks: Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]] = None,
) -> np.ndarray:
    """Render the mockup for ``source`` and return a new RGBA image.

    Parameters
    ----------
    source:
        Centred RGBA (or RGB) image, usually the output of
        :func:`tassel.io.fit_to_canvas`.  It is not modified.
    config:
        Padding, fringe length and fringe density for this render.
    rng:
        Random source for the backing noise and the fringe.  A fresh unseeded
        generator is used when omitted, so repeated renders differ.
    masks:
        Output of :func:`build_masks` for the same source and padding, when
        the caller already has it.
    """

    if source.ndim != 3 or source.shape[2] not in (3, 4) or source.dtype != np.uint8:
        raise ValueError("source must be a uint8 RGB or RGBA image")
    if rng is None:
        rng = np.random.default_rng()

    h, w = source.shape[:2]
    if masks is None:
        masks = build_masks(source, config.pad)
    mask, padded, edge = masks

    canvas = blank_canvas(h, w)
    draw_backing(canvas, padded, rng)
    draw_subject(canvas, source, mask)
    dots = draw_stitch(canvas, edge)
    main, base = draw_fringe(canvas, edge, padded, config.fringe_length, config.density, rng)

    logger.debug(
        "rendered %dx%d: %d padded px, %d stitch dots, %d+%d fringe strokes",
        w, h, int(padded.sum()), dots, main, base,
    )
    return canvas
