"""
Shared fixtures
"""

import numpy as np
import pytest


@pytest.fixture
def rgb_image():
    """Deterministic 1280x640 RGB frame"""
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(640, 1280, 3), dtype=np.uint8)
