# tests/test_aspect.py
import numpy as np
import pytest

from synthetic import with_blocks
from features.aspect import arspread, aspect_ratio, aspect_ratios, rotate, silhouette, sweep_angles, trim
from features.image import WHITE, GrayscaleImage


def test_sweep_angles_default():
    angles = sweep_angles({})
    assert len(angles) == 37
    assert angles[0] == 0 and angles[-1] == 180


def test_sweep_angles_rejects_bad_step():
    with pytest.raises(ValueError):
        sweep_angles({"angle_step": 0})


def test_rotate_zero_is_identity(bar_image):
    out = rotate(bar_image, 0)
    assert np.array_equal(out.pixels, bar_image.pixels)
    assert out is not bar_image


def test_rotate_90_swaps_canvas():
    img = GrayscaleImage(np.zeros((2, 6), np.uint16))
    out = rotate(img, 90)
    assert (out.width, out.height) == (2, 6)
    assert (out.pixels == 0).all()


def test_rotate_grows_canvas_with_white():
    img = GrayscaleImage(np.zeros((20, 20), np.uint16))
    out = rotate(img, 45)
    assert out.width > 20 and out.height > 20
    assert out.pixels[0, 0] == WHITE


def test_trim_to_content():
    px = np.full((10, 10), WHITE, np.uint16)
    px[2, 3] = 0
    px[5, 7] = 100
    out = trim(GrayscaleImage(px))
    assert (out.width, out.height) == (5, 4)


def test_trim_blank_collapses_to_single_pixel():
    out = trim(GrayscaleImage(np.full((8, 3), WHITE, np.uint16)))
    assert (out.width, out.height) == (1, 1)


def test_bar_rotated_90_and_trimmed():
    img = with_blocks(40, 40, [(18, 10, 4, 20)])
    at0 = trim(rotate(img, 0))
    at90 = trim(rotate(img, 90))
    assert (at0.width, at0.height) == (20, 4)
    assert (at90.width, at90.height) == (4, 20)


def test_aspect_ratio_truncates():
    wide = GrayscaleImage(np.zeros((10, 30), np.uint16))
    tall = GrayscaleImage(np.zeros((30, 10), np.uint16))
    odd = GrayscaleImage(np.zeros((10, 25), np.uint16))
    assert aspect_ratio(wide) == 3
    assert aspect_ratio(tall) == 0
    assert aspect_ratio(odd) == 2
    assert aspect_ratio(tall, integer_division=False) == pytest.approx(1 / 3)


def test_silhouette_keeps_only_darkest():
    img = GrayscaleImage.from_values([0, 30000, 40000, 65535], width=4, height=1)
    # mean 33883.75: 40000 and 65535 whitened; then 30000 >= mean/2 whitened
    assert silhouette(img).pixels.tolist() == [[0, WHITE, WHITE, WHITE]]


def test_arspread_zero_for_uniform_image():
    img = GrayscaleImage(np.full((12, 9), 5000, np.uint16))
    assert aspect_ratios(img) == [1] * 37
    assert arspread(img) == 0.0


def test_arspread_positive_for_elongated_shape(bar_image):
    ratios = aspect_ratios(bar_image)
    assert ratios[0] == 3
    assert ratios[18] == 0
    assert arspread(bar_image) > 0.0
    assert all(isinstance(r, int) for r in ratios)


def test_arspread_float_division_opt_in(bar_image):
    cfg = {"integer_division": False}
    ratios = aspect_ratios(bar_image, cfg)
    assert ratios[0] == pytest.approx(3.0)
    assert ratios[18] == pytest.approx(1 / 3)
    assert arspread(bar_image, cfg) != arspread(bar_image)


def test_arspread_non_negative_random():
    rng = np.random.default_rng(2)
    for _ in range(3):
        img = GrayscaleImage(rng.integers(0, 65536, size=(25, 15)))
        assert arspread(img) >= 0.0
