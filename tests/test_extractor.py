# tests/test_extractor.py
import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from synthetic import with_blocks
from features.config import load_config
from features.extractor import FeatureVector, Identity, extract_features, extract_record, feature_report
from features.image import GrayscaleImage, fingerprint
from features.registry import FEATURE_NAMES, FEATURE_TABLE, SECONDARY

EXPECTED_ORDER = ("size", "n_pixels", "whiteness", "centroid", "arspread", "n_constituents")


def test_feature_order_is_fixed():
    assert FEATURE_NAMES == EXPECTED_ORDER
    assert FeatureVector.names() == EXPECTED_ORDER
    assert [s.name for s in FEATURE_TABLE if s.source == SECONDARY] == ["n_constituents"]


def test_checker_scenario(checker_2x2):
    fv = extract_features(checker_2x2)
    assert fv.size == 4
    assert fv.n_pixels == 2
    assert fv.whiteness == pytest.approx(0.5)
    assert fv.centroid == pytest.approx(math.hypot(0.5, 0.25))
    assert fv.arspread >= 0.0
    assert fv.n_constituents == -1


def test_all_black_scenario():
    # mean is 0, so the inclusive white threshold whitens every pixel
    img = GrayscaleImage(np.zeros((3, 3), np.uint16))
    fv = extract_features(img)
    assert fv.size == 9
    assert fv.n_pixels == 9
    assert fv.whiteness == 1.0
    assert fv.centroid == 0.0
    assert fv.arspread == 0.0
    assert fv.n_constituents == -1


def test_all_white_image():
    img = GrayscaleImage(np.full((4, 5), 65535, np.uint16))
    fv = extract_features(img)
    assert fv.n_pixels == 0
    assert fv.whiteness == 0.0
    assert fv.centroid == 0.0


def test_bar_scenario(bar_image):
    fv = extract_features(bar_image)
    assert fv.size == 64 * 64
    assert fv.n_pixels == 300
    assert fv.whiteness == pytest.approx(3796 / 4096)
    assert fv.arspread > 0.0
    assert fv.n_constituents == 1


def test_types(bar_image):
    fv = extract_features(bar_image)
    assert isinstance(fv.size, int) and isinstance(fv.n_pixels, int)
    assert isinstance(fv.n_constituents, int)
    assert all(isinstance(v, float) for v in (fv.whiteness, fv.centroid, fv.arspread))


def test_secondary_drives_region_count():
    primary = GrayscaleImage(np.full((80, 80), 65535, np.uint16))
    secondary = with_blocks(80, 80, [(10, 10, 12, 12), (50, 50, 12, 12)])
    assert extract_features(primary).n_constituents == 0
    assert extract_features(primary, secondary).n_constituents == 2
    assert extract_features(primary, secondary).n_pixels == 0


def test_config_passed_through(bar_image):
    cfg = load_config(overrides={"features": {"n_constituents": {"min_region_pixels": 5000}}})
    assert extract_features(bar_image, config=cfg).n_constituents == -1


def test_determinism(bar_image):
    a = extract_features(bar_image)
    b = extract_features(GrayscaleImage(bar_image.pixels.copy()))
    assert a == b
    assert a.as_tuple() == b.as_tuple()


def test_concurrent_extraction_matches_sequential():
    rng = np.random.default_rng(3)
    images = [GrayscaleImage(rng.integers(0, 65536, size=(30, 40))) for _ in range(6)]
    expected = [extract_features(img) for img in images]
    with ThreadPoolExecutor(max_workers=4) as ex:
        got = list(ex.map(extract_features, images))
    assert got == expected


def test_properties_on_random_images():
    rng = np.random.default_rng(4)
    for h, w in [(1, 1), (1, 9), (9, 1), (13, 21)]:
        img = GrayscaleImage(rng.integers(0, 65536, size=(h, w)))
        fv = extract_features(img)
        assert fv.size == h * w
        assert 0.0 <= fv.whiteness <= 1.0
        assert fv.arspread >= 0.0
        assert 0.0 <= fv.centroid <= math.sqrt(0.5)


def test_record_carries_identity_and_fingerprint(bar_image):
    ident = Identity(name="protist_noctiluca", superclass_name="protist", source="a.png")
    rec = extract_record(bar_image, identity=ident)
    assert rec.identity == ident
    assert rec.fingerprint == fingerprint(bar_image)
    row = rec.as_row()
    assert list(row)[:4] == ["class", "superclass", "source", "fingerprint"]
    assert tuple(list(row)[4:]) == EXPECTED_ORDER


def test_feature_report(checker_2x2):
    rep = feature_report(checker_2x2)
    assert rep["width"] == 2 and rep["height"] == 2
    assert rep["size"] == 4
    assert rep["fingerprint"] == fingerprint(checker_2x2)
