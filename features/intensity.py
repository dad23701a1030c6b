# features/intensity.py
import numpy as np

from features.image import BLACK, WHITE, GrayscaleImage

"""
Intensity statistics and threshold transforms.

Thresholds follow the inclusive comparisons used throughout the feature set:
    white_threshold: intensity >= level -> 65535
    black_threshold: intensity <= level -> 0
Each threshold only touches one side of the level, so chaining them at
different levels (as arspread does) keeps a band of original mid-range
intensities. whiteness chains them at the same level.

ImageMagick's -white-threshold and -black-threshold compare strictly
(> and <), so there an all-black image keeps its pixels through the black
threshold at its own mean and scores whiteness 0. With the inclusive
comparisons here the same image is pushed to white and scores 1.0.
"""


def mean(image: GrayscaleImage) -> float:
    return float(image.pixels.mean(dtype=np.float64))


def remap_intensity(intensity):
    """
    Invert intensity into a foreground score: 65535 -> 0.0, 0 -> 1.0.

    Works on scalars and numpy arrays alike.
    """
    if np.isscalar(intensity):
        return 1.0 - float(intensity) / float(WHITE)
    return 1.0 - np.asarray(intensity, dtype=np.float64) / float(WHITE)


def white_threshold(image: GrayscaleImage, level: float) -> GrayscaleImage:
    px = image.pixels
    out = np.where(px >= level, np.uint16(WHITE), px).astype(np.uint16)
    return image.with_pixels(out)


def black_threshold(image: GrayscaleImage, level: float) -> GrayscaleImage:
    px = image.pixels
    out = np.where(px <= level, np.uint16(BLACK), px).astype(np.uint16)
    return image.with_pixels(out)


def n_pixels(image: GrayscaleImage, cfg=None) -> int:
    """Number of pixels that are not pure white."""
    return int(np.count_nonzero(remap_intensity(image.pixels) > 0))


def whiteness(image: GrayscaleImage, cfg=None) -> float:
    """Mean of the white/black thresholded image, scaled to [0, 1]."""
    m = mean(image)
    processed = black_threshold(white_threshold(image, m), m)
    return mean(processed) / WHITE
