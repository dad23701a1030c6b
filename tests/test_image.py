# tests/test_image.py
import numpy as np
import pytest

from features.errors import InvalidImageError
from features.image import GrayscaleImage, fingerprint


def test_from_values_is_row_major():
    img = GrayscaleImage.from_values([1, 2, 3, 4, 5, 6], width=3, height=2)
    assert (img.width, img.height, img.size) == (3, 2, 6)
    assert img.pixels[1, 0] == 4
    assert img.pixels.dtype == np.uint16


@pytest.mark.parametrize("shape", [(0, 5), (5, 0), (0, 0)])
def test_empty_dimensions_rejected(shape):
    with pytest.raises(InvalidImageError):
        GrayscaleImage(np.zeros(shape, np.uint16))


def test_non_2d_rejected():
    with pytest.raises(InvalidImageError):
        GrayscaleImage(np.zeros((4, 4, 3), np.uint16))


@pytest.mark.parametrize("bad", [-1, 65536, 70000])
def test_out_of_range_rejected(bad):
    with pytest.raises(InvalidImageError):
        GrayscaleImage(np.array([[0, bad]], dtype=np.int64))


def test_from_values_length_mismatch():
    with pytest.raises(InvalidImageError):
        GrayscaleImage.from_values([0, 1, 2], width=2, height=2)


def test_pixels_are_read_only_copy():
    src = np.zeros((3, 3), np.uint16)
    img = GrayscaleImage(src)
    src[0, 0] = 500
    assert img.pixels[0, 0] == 0
    with pytest.raises(ValueError):
        img.pixels[0, 0] = 1


def test_fingerprint_stable_and_sensitive():
    px = np.arange(100, dtype=np.uint16).reshape(10, 10)
    a, b = GrayscaleImage(px), GrayscaleImage(px.copy())
    assert fingerprint(a) == fingerprint(b)
    assert len(fingerprint(a)) == 32

    changed = px.copy()
    changed[9, 9] += 1
    assert fingerprint(GrayscaleImage(changed)) != fingerprint(a)
