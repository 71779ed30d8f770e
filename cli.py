"""Command-line interface for the tassel mockup renderer."""

import argparse
import logging
import os
from typing import Optional

import numpy as np

from tassel import config, io
from tassel.compose import build_masks, render


def _save_debug_masks(masks, debug_dir: str) -> None:
    os.makedirs(debug_dir, exist_ok=True)
    mask, padded, edge = masks
    for name, m in (("mask", mask), ("padded", padded), ("edge", edge)):
        rgba = np.repeat((m * 255)[:, :, None], 4, axis=2)
        rgba[:, :, 3] = 255
        io.save_png(rgba, os.path.join(debug_dir, f"{name}.png"))


def run_pipeline(image_path: str, output: Optional[str] = None,
                 pad: int = config.DEFAULT_PAD,
                 fringe: int = config.DEFAULT_FRINGE,
                 density: int = config.DEFAULT_DENSITY,
                 seed: Optional[int] = None,
                 debug_dir: Optional[str] = None) -> str:
    try:
        img = io.load_image(image_path)
    except io.ImageLoadError:
        raise SystemExit("Failed to load image, try a cleaner photo on a white background")

    source = io.fit_to_canvas(img)
    cfg = config.RenderConfig(pad=pad, fringe_length=fringe, density=density)

    masks = build_masks(source, cfg.pad)
    if debug_dir:
        _save_debug_masks(masks, debug_dir)

    result = render(source, cfg, np.random.default_rng(seed), masks=masks)
    out_path = output or io.default_output_name()
    io.save_png(result, out_path)

    print(f"pad: {cfg.pad}px")
    print(f"fringe: {cfg.fringe_length}px")
    print(f"density: {cfg.density}")
    print(f"Saved mockup to {out_path} (sizes are approximate)")
    return out_path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render a tassel/embroidery mockup")
    parser.add_argument("image", help="Input image path (subject on a white background)")
    parser.add_argument("--output", default=None, help="PNG path, defaults to tassel-mockup-<ms>.png")
    parser.add_argument("--pad", type=int, default=config.DEFAULT_PAD, help="Backing padding in pixels")
    parser.add_argument("--fringe", type=int, default=config.DEFAULT_FRINGE, help="Fringe length in pixels")
    parser.add_argument("--density", type=int, default=config.DEFAULT_DENSITY, help="Number of fringe strokes")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible render")
    parser.add_argument("--debug-dir", help="Directory to save mask, padded and edge images")
    parser.add_argument("--verbose", action="store_true", help="Log pipeline details")
    args = parser.parse_args(argv)

    for name in ("pad", "fringe", "density"):
        if getattr(args, name) < 0:
            parser.error(f"--{name} must be non-negative")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    run_pipeline(args.image, args.output, args.pad, args.fringe, args.density,
                 args.seed, args.debug_dir)


if __name__ == "__main__":
    main()
