# features/image.py
import hashlib
from dataclasses import dataclass, field

import numpy as np

from features.errors import InvalidImageError

"""
Immutable grayscale image value used by every feature algorithm.

Pixels are stored as a read-only HxW uint16 array (row-major), with 0 = black
and 65535 = white. Transforms never write into an existing image; they build
a new GrayscaleImage from a fresh array.
"""

WHITE = 65535
BLACK = 0


def _as_pixels(data) -> np.ndarray:
    arr = np.asarray(data)
    if arr.ndim != 2:
        raise InvalidImageError(f"Expected a 2D grayscale buffer, got shape {arr.shape}")
    h, w = arr.shape
    if h == 0 or w == 0:
        raise InvalidImageError(f"Bad image shape: {arr.shape}")
    if arr.dtype != np.uint16:
        if arr.dtype == bool or not np.issubdtype(arr.dtype, np.number):
            raise InvalidImageError(f"Unsupported pixel dtype: {arr.dtype}")
        if np.issubdtype(arr.dtype, np.floating):
            if np.isnan(arr).any():
                raise InvalidImageError("Pixel buffer contains NaN")
            arr = np.rint(arr)
        lo, hi = float(arr.min()), float(arr.max())
        if lo < BLACK or hi > WHITE:
            raise InvalidImageError(f"Intensities out of range [0, 65535]: min={lo}, max={hi}")
        arr = arr.astype(np.uint16)
    pixels = np.array(arr, dtype=np.uint16, order="C", copy=True)
    pixels.setflags(write=False)
    return pixels


def _digest(pixels: np.ndarray) -> str:
    return hashlib.md5(pixels.astype("<u2", copy=False).tobytes()).hexdigest()


@dataclass(frozen=True, eq=False)
class GrayscaleImage:
    pixels: np.ndarray
    digest: str = field(init=False, repr=False)

    def __post_init__(self):
        pixels = _as_pixels(self.pixels)
        object.__setattr__(self, "pixels", pixels)
        object.__setattr__(self, "digest", _digest(pixels))

    @classmethod
    def from_values(cls, values, width: int, height: int) -> "GrayscaleImage":
        """Build an image from a flat row-major sequence of intensities."""
        if width < 1 or height < 1:
            raise InvalidImageError(f"Bad image size: {width}x{height}")
        flat = np.asarray(values)
        if flat.size != width * height:
            raise InvalidImageError(
                f"Expected {width * height} intensities for {width}x{height}, got {flat.size}"
            )
        return cls(flat.reshape(height, width))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> int:
        return self.width * self.height

    def with_pixels(self, pixels: np.ndarray) -> "GrayscaleImage":
        return GrayscaleImage(pixels)

    def __repr__(self):
        return f"GrayscaleImage({self.width}x{self.height}, digest={self.digest[:8]})"


def fingerprint(image: GrayscaleImage) -> str:
    """MD5 hex digest of the image's pixel buffer (little-endian uint16)."""
    return image.digest
