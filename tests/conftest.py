# -*- coding: utf-8 -*-
"""
Shared Test Fixtures - Synthetic scalar fields and raster files.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-06

Modified
--------
2026-10-14
"""

import numpy as np
import pytest

from mvil.types.field import ScalarField


@pytest.fixture
def flat_field():
    """8x8 field with every pixel at 50."""
    return ScalarField.from_array(np.full((8, 8), 50.0))


@pytest.fixture
def random_field():
    """40x32 field of seeded random 8-bit levels."""
    rng = np.random.default_rng(42)
    return ScalarField.from_array(rng.integers(0, 256, (32, 40)).astype(np.float32))


@pytest.fixture
def step_field():
    """16x16 field, 0 on the left half and 200 on the right half."""
    arr = np.zeros((16, 16), dtype=np.float32)
    arr[:, 8:] = 200.0
    return ScalarField.from_array(arr)


@pytest.fixture
def ramp_edge_field():
    """12x10 field with a soft vertical edge peaking in gradient at x=4.

    Columns hold 0, 0, 0, 10, 100, 200, 200, ... so the Sobel response
    ``4 * (v[x+1] - v[x-1])`` is 40, 400, 760, 400 at x = 2..5.
    """
    row = np.array([0, 0, 0, 10, 100, 200, 200, 200, 200, 200, 200, 200],
                   dtype=np.float32)
    return ScalarField.from_array(np.tile(row, (10, 1)))


@pytest.fixture
def two_basins_field():
    """32x16 relief with two Gaussian depressions of different depth."""
    y, x = np.mgrid[0:16, 0:32].astype(np.float64)
    d1 = (x - 8) ** 2 + (y - 8) ** 2
    d2 = (x - 24) ** 2 + (y - 8) ** 2
    relief = (200.0
              - 150.0 * np.exp(-d1 / (2 * 3.0 ** 2))
              - 100.0 * np.exp(-d2 / (2 * 3.0 ** 2)))
    return ScalarField.from_array(relief)


@pytest.fixture
def gradient_image_path(tmp_path):
    """64x64 8-bit grayscale PNG at 150 dpi with a dark disk on a ramp."""
    from PIL import Image

    y, x = np.mgrid[0:64, 0:64]
    data = (2 * x + y).astype(np.float64)
    data[(x - 32) ** 2 + (y - 32) ** 2 < 100] *= 0.3
    path = tmp_path / "input.png"
    Image.fromarray(data.astype(np.uint8)).save(path, dpi=(150, 150))
    return path
