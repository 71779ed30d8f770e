import cv2
import numpy as np
import pytest

from tassel.compose import (
    blank_canvas,
    build_masks,
    draw_backing,
    draw_stitch,
    draw_subject,
    render,
)
from tassel.config import RenderConfig
from tassel.mask import dilate_mask, find_edge


def create_test_image(size=120):
    """Dark red disc with a blue dot on a white background."""
    img = np.full((size, size, 4), 255, dtype=np.uint8)
    c = size // 2
    cv2.circle(img, (c, c), size // 5, (180, 20, 30, 255), -1)
    cv2.circle(img, (c, c), 3, (10, 40, 200, 255), -1)
    return img


def test_white_image_renders_blank():
    img = np.full((10, 10, 4), 255, dtype=np.uint8)

    mask, padded, edge = build_masks(img, 5)
    out = render(img, RenderConfig(pad=5, fringe_length=20, density=300), np.random.default_rng(0))

    assert not mask.any() and not padded.any() and not edge.any()
    assert (out == 255).all()


def test_backing_noise_range():
    mask = np.zeros((40, 40), dtype=np.uint8)
    mask[15:25, 15:25] = 1
    padded = dilate_mask(mask, 6)
    canvas = blank_canvas(40, 40)

    draw_backing(canvas, padded, np.random.default_rng(5))

    grey = canvas[padded == 1]
    assert grey[:, 0].min() >= 227 and grey[:, 0].max() <= 243
    assert np.array_equal(grey[:, 0], grey[:, 1])
    assert np.array_equal(grey[:, 0], grey[:, 2])
    assert (grey[:, 3] == 255).all()
    assert len(np.unique(grey[:, 0])) > 1
    assert (canvas[padded == 0] == 255).all()


def test_subject_keeps_colours_and_forces_alpha():
    src = create_test_image()
    src[:, :, 3] = 7
    mask = np.zeros(src.shape[:2], dtype=np.uint8)
    mask[60, 60] = 1
    canvas = blank_canvas(*src.shape[:2])

    draw_subject(canvas, src, mask)

    assert canvas[60, 60].tolist() == [10, 40, 200, 255]
    assert (canvas[mask == 0] == 255).all()


def test_stitch_dots_every_sixth_point():
    padded = np.zeros((30, 30), dtype=np.uint8)
    padded[8:22, 8:22] = 1
    edge = find_edge(padded)
    canvas = blank_canvas(30, 30)

    dots = draw_stitch(canvas, edge)

    assert dots == -(-int(edge.sum()) // 6)
    # first edge point in scan order is the top-left corner
    assert (canvas[8, 8, :3] < 255).all()
    assert (canvas[:, :, 3] == 255).all()


def test_render_layers():
    src = create_test_image()
    cfg = RenderConfig(pad=10, fringe_length=6, density=0)

    mask, _, _ = build_masks(src, cfg.pad)
    out = render(src, cfg, np.random.default_rng(1))

    assert np.array_equal(out[mask == 1, :3], src[mask == 1, :3])
    # backing ring away from the stitched edge
    ring = (dilate_mask(mask, 7) == 1) & (mask == 0)
    assert ring.any()
    grey = out[ring]
    assert grey[:, 0].min() >= 227 and grey[:, 0].max() <= 243
    assert np.array_equal(grey[:, 0], grey[:, 2])
    assert (out[dilate_mask(mask, 12) == 0] == 255).all()
    assert (out[:, :, 3] == 255).all()


def test_render_is_reproducible_with_seed():
    src = create_test_image()
    before = src.copy()
    cfg = RenderConfig(pad=8, fringe_length=15, density=400)

    a = render(src, cfg, np.random.default_rng(42))
    b = render(src, cfg, np.random.default_rng(42))
    c = render(src, cfg, np.random.default_rng(43))

    assert np.array_equal(a, b)
    assert not np.array_equal(a, c)
    assert np.array_equal(src, before)
    assert (a[:, :, 3] == 255).all()


def test_render_without_rng():
    out = render(create_test_image(40), RenderConfig(pad=2, fringe_length=5, density=10))
    assert out.shape == (40, 40, 4)


def test_render_rejects_bad_source():
    with pytest.raises(ValueError):
        render(np.zeros((10, 10), dtype=np.uint8), RenderConfig())
    with pytest.raises(ValueError):
        render(np.zeros((10, 10, 4), dtype=np.float32), RenderConfig())


def test_config_rejects_negative_values():
    with pytest.raises(ValueError):
        RenderConfig(pad=-1)
    with pytest.raises(ValueError):
        RenderConfig(density=-5)


def test_render_with_precomputed_masks_matches():
    src = create_test_image()
    cfg = RenderConfig(pad=6, fringe_length=10, density=150)

    a = render(src, cfg, np.random.default_rng(11))
    b = render(src, cfg, np.random.default_rng(11), masks=build_masks(src, cfg.pad))

    assert np.array_equal(a, b)
