"""Tassel mockup renderer: padded backing, stitch line and fringe."""

from .config import RenderConfig
from .io import ImageLoadError, load_image, fit_to_canvas, save_png
from .mask import segment_subject, dilate_mask, find_edge, edge_points
from .fringe import draw_fringe
from .compose import render

__all__ = [
    "RenderConfig",
    "ImageLoadError",
    "load_image",
    "fit_to_canvas",
    "save_png",
    "segment_subject",
    "dilate_mask",
    "find_edge",
    "edge_points",
    "draw_fringe",
    "render",
]
