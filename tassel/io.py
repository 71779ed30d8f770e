"""Image I/O: loading with optional HEIC support, centring and PNG export."""

import os
import time

import cv2
import numpy as np
from PIL import Image

from .config import CANVAS_SIZE

try:  # pragma: no cover - optional dependency
    import pillow_heif
except ImportError:  # pragma: no cover
    pillow_heif = None


class ImageLoadError(RuntimeError):
    """Raised when an input file cannot be decoded as an image."""


def _to_rgba(img: np.ndarray) -> np.ndarray:
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)


def load_image(path: str) -> np.ndarray:
    """Load ``path`` as an RGBA ``uint8`` array.

    Supports regular formats via OpenCV and HEIC images via ``pillow_heif``.
    """
    ext = os.path.splitext(path)[-1].lower()
    if ext == ".heic":
        if pillow_heif is None:
            raise ImportError("pillow_heif is required to load HEIC images")
        try:
            heif_file = pillow_heif.read_heif(path)
            img = Image.frombytes(heif_file.mode, heif_file.size, heif_file.data, "raw")
        except (ValueError, OSError) as exc:
            raise ImageLoadError(f"Failed to read image: {path}") from exc
        return np.array(img.convert("RGBA"))

    img = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ImageLoadError(f"Failed to read image: {path}")
    if img.ndim == 2 or img.shape[2] != 4:
        # IMREAD_COLOR applies the EXIF orientation, IMREAD_UNCHANGED does not
        img = cv2.imread(path)
    return _to_rgba(img)


def fit_to_canvas(image: np.ndarray, size: int = CANVAS_SIZE) -> np.ndarray:
    """Scale ``image`` to fit a ``size`` x ``size`` square and centre it.

    Images are only ever shrunk.  The uncovered margin is left fully
    transparent black.
    """

    if image.shape[2] == 3:
        image = cv2.cvtColor(image, cv2.COLOR_RGB2RGBA)
    h, w = image.shape[:2]
    scale = min(size / w, size / h, 1.0)
    nw = max(1, int(np.floor(w * scale + 0.5)))
    nh = max(1, int(np.floor(h * scale + 0.5)))
    if (nw, nh) != (w, h):
        image = cv2.resize(image, (nw, nh), interpolation=cv2.INTER_AREA)

    canvas = np.zeros((size, size, 4), dtype=np.uint8)
    ox = int(np.floor((size - nw) / 2 + 0.5))
    oy = int(np.floor((size - nh) / 2 + 0.5))
    canvas[oy:oy + nh, ox:ox + nw] = image
    return canvas


def save_png(image: np.ndarray, path: str) -> str:
    """Write an RGBA ``image`` to ``path`` as PNG and return the path."""

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    if not cv2.imwrite(path, cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA)):
        raise OSError(f"Failed to write image: {path}")
    return path


def default_output_name() -> str:
    """File name used when no output path is given."""
    return f"tassel-mockup-{int(time.time() * 1000)}.png"
