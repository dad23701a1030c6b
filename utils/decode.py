# utils/decode.py
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from features.errors import DecodeError, InvalidImageError
from features.image import GrayscaleImage

"""
Decoders that turn an image file into a GrayscaleImage.

Two decodes of the same file are used by feature extraction:
    decode_primary   : 8-bit grayscale (256 gray levels), rescaled to 16 bit.
                       Feeds the intensity and geometry features.
    decode_secondary : file read unchanged, colour collapsed to gray, bit
                       depth preserved. Feeds region counting.
8-bit values v are rescaled as v * 257 so 255 maps exactly to 65535.
"""

U8_TO_U16 = 257


def _to_u16(arr: np.ndarray, source) -> np.ndarray:
    if arr.dtype == np.uint8:
        return arr.astype(np.uint16) * U8_TO_U16
    if arr.dtype == np.uint16:
        return arr
    raise InvalidImageError(f"Unsupported bit depth {arr.dtype} in {source}")


def _check_readable(path: Path):
    if not path.is_file():
        raise DecodeError(f"Could not read image: {path}")


def decode_primary(source: Union[str, Path]) -> GrayscaleImage:
    path = Path(source)
    _check_readable(path)
    img = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
    if img is None:
        raise DecodeError(f"Could not decode image: {path}")
    return GrayscaleImage(_to_u16(img, path))


def decode_secondary(source: Union[str, Path]) -> GrayscaleImage:
    path = Path(source)
    _check_readable(path)
    raw = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if raw is None:
        raise DecodeError(f"Could not decode image: {path}")
    if raw.ndim == 3:
        if raw.shape[2] == 4:
            raw = cv2.cvtColor(raw, cv2.COLOR_BGRA2GRAY)
        elif raw.shape[2] == 3:
            raw = cv2.cvtColor(raw, cv2.COLOR_BGR2GRAY)
        else:
            raw = raw[..., 0]
    return GrayscaleImage(_to_u16(raw, path))


def decode_pair(source: Union[str, Path]):
    """Both decodes of one file, as (primary, secondary)."""
    return decode_primary(source), decode_secondary(source)
