# features/extractor.py
from dataclasses import asdict, astuple, dataclass, fields
from typing import Any, Dict, Optional

from features.config import DEFAULT_CONFIG
from features.image import GrayscaleImage, fingerprint
from features.registry import FEATURE_NAMES, ImagePair, extract_all

"""
Public entry points: one decoded image (plus an optional segmentation decode
of the same source) in, one FeatureVector out.

Extraction is a pure function of its inputs. Nothing here logs, touches the
filesystem or keeps state between calls, so callers may run it from many
threads at once.

Features (in table order):
    - size           : width * height
    - n_pixels       : pixels that are not pure white
    - whiteness      : mean of the mean-thresholded image, in [0, 1]
    - centroid       : distance of the foreground centroid from the center
    - arspread       : std of the silhouette aspect ratio over a rotation sweep
    - n_constituents : connected regions above the size filter, minus background
"""


@dataclass(frozen=True)
class Identity:
    name: str
    superclass_name: str = ""
    source: str = ""


@dataclass(frozen=True)
class FeatureVector:
    size: int
    n_pixels: int
    whiteness: float
    centroid: float
    arspread: float
    n_constituents: int

    @classmethod
    def names(cls):
        return tuple(f.name for f in fields(cls))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def as_tuple(self) -> tuple:
        return astuple(self)


@dataclass(frozen=True)
class FeatureRecord:
    identity: Identity
    fingerprint: str
    features: FeatureVector

    def as_row(self) -> Dict[str, Any]:
        row = {
            "class": self.identity.name,
            "superclass": self.identity.superclass_name,
            "source": self.identity.source,
            "fingerprint": self.fingerprint,
        }
        row.update(self.features.as_dict())
        return row


def _pair(primary: GrayscaleImage, secondary: Optional[GrayscaleImage]) -> ImagePair:
    return ImagePair(primary=primary, secondary=primary if secondary is None else secondary)


def extract_features(primary: GrayscaleImage,
                     secondary: Optional[GrayscaleImage] = None,
                     identity: Optional[Identity] = None,
                     config: Optional[Dict[str, Any]] = None) -> FeatureVector:
    """
    Compute the six features of one image.

    Args:
        primary: intensity/geometry decode of the source.
        secondary: segmentation decode used by n_constituents; defaults to
            `primary` when the caller decodes once.
        identity: carried for symmetry with extract_record; not interpreted.
        config: full config dict (see features.config); defaults apply to
            any missing feature block.

    Returns:
        FeatureVector
    """
    values = extract_all(_pair(primary, secondary), config or DEFAULT_CONFIG)
    return FeatureVector(**values)


def extract_record(primary: GrayscaleImage,
                   secondary: Optional[GrayscaleImage] = None,
                   identity: Optional[Identity] = None,
                   config: Optional[Dict[str, Any]] = None) -> FeatureRecord:
    identity = identity or Identity(name="")
    features = extract_features(primary, secondary, identity, config)
    return FeatureRecord(identity=identity, fingerprint=fingerprint(primary), features=features)


def feature_report(primary: GrayscaleImage,
                   secondary: Optional[GrayscaleImage] = None,
                   config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Feature values keyed by name, plus image size and fingerprint."""
    report = {"width": primary.width, "height": primary.height,
              "fingerprint": fingerprint(primary)}
    report.update(extract_features(primary, secondary, config=config).as_dict())
    return report
