"""Subject masks: segmentation, padding and edge extraction.

Masks are ``uint8`` arrays of shape ``(height, width)`` holding ``1`` for
subject pixels and ``0`` for background.  The outermost row and column of the
image are never touched by :func:`dilate_mask` or :func:`find_edge`, so a
dilated or edge mask always has a zero border.
"""

from __future__ import annotations

import logging

import numpy as np

from .config import MAX_PAD_STEPS, WHITE_THRESHOLD

logger = logging.getLogger(__name__)


def segment_subject(image: np.ndarray, threshold: int = WHITE_THRESHOLD) -> np.ndarray:
    """Return a mask separating the subject from a near-white background.

    Parameters
    ----------
    image:
        RGB or RGBA image of shape ``(height, width, 3|4)``.  Alpha is ignored.
    threshold:
        A pixel counts as background only when all three colour channels are
        strictly greater than this value.
    """

    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError("expected an RGB or RGBA image")

    rgb = image[:, :, :3]
    background = np.all(rgb > threshold, axis=2)
    mask = (~background).astype(np.uint8)
    logger.debug("segmented %d subject pixels", int(mask.sum()))
    return mask


def dilate_mask(mask: np.ndarray, radius: int) -> np.ndarray:
    """Grow ``mask`` outward by ``radius`` pixels.

    Each step is a one pixel 8-neighbourhood dilation applied to the output
    of the previous step.  At most :data:`MAX_PAD_STEPS` steps are run.  A
    radius of ``0`` returns a copy of ``mask``.
    """

    if radius <= 0:
        return mask.copy()

    steps = min(int(radius), MAX_PAD_STEPS)
    cur = mask.copy()
    for _ in range(steps):
        out = np.zeros_like(cur)
        out[1:-1, 1:-1] = (
            cur[1:-1, 1:-1]
            | cur[1:-1, :-2] | cur[1:-1, 2:]
            | cur[:-2, 1:-1] | cur[2:, 1:-1]
            | cur[:-2, :-2] | cur[:-2, 2:]
            | cur[2:, :-2] | cur[2:, 2:]
        )
        cur = out
    logger.debug("dilated mask by %d steps", steps)
    return cur


def find_edge(padded: np.ndarray) -> np.ndarray:
    """Return the one pixel wide boundary of ``padded``.

    A pixel is on the edge when it is set and at least one of its left,
    right, upper or lower neighbours is not.
    """

    edge = np.zeros_like(padded)
    inner = padded[1:-1, 1:-1]
    open_side = (
        (padded[1:-1, :-2] == 0)
        | (padded[1:-1, 2:] == 0)
        | (padded[:-2, 1:-1] == 0)
        | (padded[2:, 1:-1] == 0)
    )
    edge[1:-1, 1:-1] = ((inner == 1) & open_side).astype(padded.dtype)
    return edge


def edge_points(edge: np.ndarray, margin: int) -> np.ndarray:
    """List edge pixels at least ``margin`` pixels away from the image border.

    Returns an ``(N, 2)`` array of ``(x, y)`` pairs in row-major order.
    """

    h, w = edge.shape[:2]
    region = edge[margin:h - margin, margin:w - margin]
    ys, xs = np.nonzero(region)
    return np.column_stack((xs + margin, ys + margin))
