# features/centroid.py
import numpy as np

from features.image import GrayscaleImage
from features.intensity import mean, remap_intensity, white_threshold

"""
Offset of the foreground centroid from the image center.

Foreground is every pixel left non-white after whitening all pixels at or
above the mean intensity. Each foreground pixel counts once (positions are not
intensity-weighted). The centroid is normalized by (width, height) and the
result is its Euclidean distance from (0.5, 0.5), so it lies in
[0, sqrt(0.5)].
"""

CENTER = np.array([0.5, 0.5])


def centroid(image: GrayscaleImage, cfg=None) -> float:
    """
    Args:
        image (GrayscaleImage): primary image.
        cfg (dict): unused; accepted for the feature-table signature.

    Returns:
        float: distance of the normalized centroid from the center, or 0.0
        when no pixel survives the threshold.
    """
    processed = white_threshold(image, mean(image))
    rows, cols = np.nonzero(remap_intensity(processed.pixels) > 0)
    if rows.size == 0:
        return 0.0
    cx = cols.mean() / image.width
    cy = rows.mean() / image.height
    return float(np.linalg.norm(np.array([cx, cy]) - CENTER))
