# features/components.py
import cv2
import numpy as np

from features.image import BLACK, WHITE, GrayscaleImage
from features.intensity import mean

"""
Count of distinct constituents (connected regions) in the organism image.

Pipeline:
    1) invert intensities so the dark organism becomes bright,
    2) mark pixels strictly brighter than the inverted mean as foreground,
    3) dilate the foreground with a square all-on kernel (3x3 by default),
    4) label connected foreground regions (8-connectivity by default),
    5) count pixels per label, background included as label 0,
    6) keep labels with more than `min_region_pixels` pixels and subtract one
       for the background label.

The result is 0 or negative when no foreground region survives the size
filter (or when the background itself is too small to survive); that is a
regular value, not an error.
"""


def invert(image: GrayscaleImage) -> GrayscaleImage:
    return image.with_pixels(WHITE - image.pixels)


def binarize_above(image: GrayscaleImage, level: float) -> GrayscaleImage:
    """Pixels strictly above `level` become white, the rest black."""
    out = np.where(image.pixels > level, WHITE, BLACK).astype(np.uint16)
    return image.with_pixels(out)


def dilate(image: GrayscaleImage, kernel_size: int = 3) -> GrayscaleImage:
    if kernel_size < 1:
        raise ValueError(f"kernel_size must be >= 1, got {kernel_size}")
    kernel = np.ones((kernel_size, kernel_size), np.uint8)
    return image.with_pixels(cv2.dilate(image.pixels.copy(), kernel, iterations=1))


def label_regions(image: GrayscaleImage, connectivity: int = 8):
    """
    Label connected non-black regions.

    Returns:
        (np.ndarray, int): int32 HxW label map with background = 0, and the
        number of labels including the background.
    """
    if connectivity not in (4, 8):
        raise ValueError(f"connectivity must be 4 or 8, got {connectivity}")
    mask = (image.pixels > BLACK).astype(np.uint8)
    n_labels, labels = cv2.connectedComponents(mask, connectivity=connectivity, ltype=cv2.CV_32S)
    return labels, int(n_labels)


def region_sizes(labels: np.ndarray) -> np.ndarray:
    """Pixel count per label id; index 0 is the background."""
    return np.bincount(labels.ravel())


def segment(image: GrayscaleImage, cfg=None):
    cfg = cfg or {}
    inverted = invert(image)
    foreground = binarize_above(inverted, mean(inverted))
    grown = dilate(foreground, int(cfg.get("kernel_size", 3)))
    return label_regions(grown, int(cfg.get("connectivity", 8)))


def n_constituents(image: GrayscaleImage, cfg=None) -> int:
    cfg = cfg or {}
    min_region_pixels = int(cfg.get("min_region_pixels", 100))
    labels, _ = segment(image, cfg)
    counts = region_sizes(labels)
    return int(np.count_nonzero(counts > min_region_pixels)) - 1
