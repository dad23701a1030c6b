# features/registry.py
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from features.aspect import arspread
from features.centroid import centroid
from features.components import n_constituents
from features.config import feature_config
from features.image import GrayscaleImage
from features.intensity import n_pixels, whiteness

PRIMARY = "primary"
SECONDARY = "secondary"


@dataclass(frozen=True)
class ImagePair:
    """The two decodes of one source: geometry/intensity and segmentation."""
    primary: GrayscaleImage
    secondary: GrayscaleImage

    def pick(self, source: str) -> GrayscaleImage:
        if source == SECONDARY:
            return self.secondary
        return self.primary


@dataclass(frozen=True)
class FeatureSpec:
    name: str
    compute: Callable[[GrayscaleImage, Dict[str, Any]], Any]
    source: str
    kind: type

    def extract(self, images: ImagePair, config: Dict[str, Any]):
        value = self.compute(images.pick(self.source), feature_config(config, self.name))
        return self.kind(value)


def image_size(image: GrayscaleImage, cfg=None) -> int:
    return image.size


# Order is the column order of every feature table.
FEATURE_TABLE: Tuple[FeatureSpec, ...] = (
    FeatureSpec(name="size", compute=image_size, source=PRIMARY, kind=int),
    FeatureSpec(name="n_pixels", compute=n_pixels, source=PRIMARY, kind=int),
    FeatureSpec(name="whiteness", compute=whiteness, source=PRIMARY, kind=float),
    FeatureSpec(name="centroid", compute=centroid, source=PRIMARY, kind=float),
    FeatureSpec(name="arspread", compute=arspread, source=PRIMARY, kind=float),
    FeatureSpec(name="n_constituents", compute=n_constituents, source=SECONDARY, kind=int),
)

FEATURE_NAMES: Tuple[str, ...] = tuple(spec.name for spec in FEATURE_TABLE)


def extract_all(images: ImagePair, config: Dict[str, Any]) -> Dict[str, Any]:
    return {spec.name: spec.extract(images, config) for spec in FEATURE_TABLE}
