# tests/conftest.py
# Ensure project root is importable as a module during pytest runs
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from features.image import GrayscaleImage  # noqa: E402
from synthetic import with_blocks  # noqa: E402


@pytest.fixture
def bar_image():
    # 64x64 white, black 10-row x 30-col bar spanning rows 27..36, cols 17..46
    return with_blocks(64, 64, [(27, 17, 10, 30)])


@pytest.fixture
def checker_2x2():
    return GrayscaleImage.from_values([0, 65535, 0, 65535], width=2, height=2)
