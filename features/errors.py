# features/errors.py
"""
Errors raised while turning a source image into a feature vector.

Image-level errors (DecodeError, InvalidImageError) are fatal for one image
only; batch callers catch them, report the identity and move on.
"""


class PlanktonFeatureError(Exception):
    """Base class for every error raised by this package."""


class DecodeError(PlanktonFeatureError, IOError):
    """The source image could not be read or decoded."""


class InvalidImageError(PlanktonFeatureError, ValueError):
    """The decoded image has an unusable shape or out-of-range intensities."""


class ConfigurationMismatchError(PlanktonFeatureError, ValueError):
    """Per-class feature collections do not line up with the class table."""
