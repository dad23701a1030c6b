# features/aspect.py
import cv2
import numpy as np

from features.image import WHITE, GrayscaleImage
from features.intensity import mean, white_threshold

"""
Aspect-ratio spread of the organism silhouette under rotation.

The silhouette is the image whitened twice: at the mean intensity and then at
half the mean, which leaves only the darkest pixels non-white. It is rotated
through a sweep of angles on an expanded white canvas, trimmed to the bounding
box of its non-white content, and the width/height ratio is recorded for every
angle. The feature is the sample standard deviation of those ratios.

Note:
    The ratio uses truncating integer division by default, so any shape
    taller than it is wide scores 0 and sub-unit differences are lost. Set
    `integer_division: false` in the arspread config to use true division.
"""


def rotate(image: GrayscaleImage, angle: float, background: int = WHITE) -> GrayscaleImage:
    """
    Rotate clockwise by `angle` degrees, growing the canvas so no content is
    clipped. Uncovered corners are filled with `background`.
    """
    if angle % 360 == 0:
        return image.with_pixels(image.pixels)
    h, w = image.height, image.width
    theta = np.deg2rad(angle)
    cos, sin = abs(np.cos(theta)), abs(np.sin(theta))
    new_w = max(int(round(w * cos + h * sin)), 1)
    new_h = max(int(round(h * cos + w * sin)), 1)

    M = cv2.getRotationMatrix2D(((w - 1) / 2.0, (h - 1) / 2.0), -angle, 1.0)
    M[0, 2] += (new_w - 1) / 2.0 - (w - 1) / 2.0
    M[1, 2] += (new_h - 1) / 2.0 - (h - 1) / 2.0
    out = cv2.warpAffine(image.pixels.copy(), M, (new_w, new_h),
                         flags=cv2.INTER_NEAREST,
                         borderMode=cv2.BORDER_CONSTANT,
                         borderValue=int(background))
    return image.with_pixels(out)


def trim(image: GrayscaleImage, background: int = WHITE) -> GrayscaleImage:
    """Crop to the bounding box of pixels that differ from `background`.

    An image with no content collapses to a single background pixel.
    """
    content = image.pixels != background
    if not content.any():
        return image.with_pixels(np.full((1, 1), background, dtype=np.uint16))
    rows = np.flatnonzero(content.any(axis=1))
    cols = np.flatnonzero(content.any(axis=0))
    return image.with_pixels(image.pixels[rows[0]:rows[-1] + 1, cols[0]:cols[-1] + 1])


def aspect_ratio(image: GrayscaleImage, integer_division: bool = True):
    if integer_division:
        return image.width // image.height
    return image.width / image.height


def silhouette(image: GrayscaleImage) -> GrayscaleImage:
    m = mean(image)
    return white_threshold(white_threshold(image, m), m / 2)


def sweep_angles(cfg) -> list:
    step = int(cfg.get("angle_step", 5))
    stop = int(cfg.get("angle_max", 180))
    if step <= 0:
        raise ValueError(f"angle_step must be positive, got {step}")
    return list(range(0, stop + 1, step))


def aspect_ratios(image: GrayscaleImage, cfg=None) -> list:
    cfg = cfg or {}
    integer_division = bool(cfg.get("integer_division", True))
    shape = silhouette(image)
    return [aspect_ratio(trim(rotate(shape, angle)), integer_division)
            for angle in sweep_angles(cfg)]


def arspread(image: GrayscaleImage, cfg=None) -> float:
    """Sample standard deviation (ddof=1) of the swept aspect ratios."""
    ratios = np.asarray(aspect_ratios(image, cfg), dtype=np.float64)
    if ratios.size < 2:
        return 0.0
    return float(np.std(ratios, ddof=1))
