# -*- coding: utf-8 -*-
"""
Intensity Transform Tests - Auto-contrast, auto-gamma and inversion.

Dependencies
------------
pytest

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-08

Modified
--------
2026-10-14
"""

import numpy as np
import pytest

from mvil.exceptions import DegenerateRangeError, ValidationError
from mvil.image_processing.intensity import (
    AutoContrast,
    AutoGamma,
    Invert,
    auto_contrast,
    auto_gamma,
    contrast_limits,
    gamma_for_mean,
    invert,
    level_count,
)
from mvil.types import Histogram, ScalarField
from mvil.vocabulary import ProcessorCategory


@pytest.fixture
def level_ramp():
    """100x101 field; column x holds level 50 + x (100 pixels per level)."""
    return ScalarField.from_array(np.tile(np.arange(50, 151, dtype=np.float32), (100, 1)))


@pytest.fixture
def spiked():
    """Half the pixels on a spike at level 10, the rest spread over 20..119."""
    arr = np.full(10000, 10.0, dtype=np.float32)
    arr[5000:] = 20 + np.arange(5000) // 50
    return ScalarField.from_array(arr.reshape(100, 100))


# ---------------------------------------------------------------------------
# auto_contrast
# ---------------------------------------------------------------------------

class TestAutoContrast:
    """Test histogram clip and linear stretch."""

    def test_level_count(self):
        assert level_count(8) == 255
        assert level_count(1) == 1
        assert level_count(16) == 65535

    def test_invalid_depth_raises(self, level_ramp):
        with pytest.raises(ValidationError, match="depth"):
            auto_contrast(level_ramp, 0)

    def test_limits_of_populated_range(self, level_ramp):
        assert contrast_limits(Histogram(level_ramp, 255)) == (50, 150)

    def test_stretch(self, level_ramp):
        out = auto_contrast(level_ramp, 8).to_array()
        factor = 255.0 / 101.0
        np.testing.assert_allclose(out[0], np.arange(101) * factor, rtol=1e-5)
        assert out.min() == 0.0

    def test_spike_is_ignored(self, spiked):
        assert contrast_limits(Histogram(spiked, 255)) == (20, 119)
        out = auto_contrast(spiked, 8).to_array()
        # Spike pixels sit below the clip range and clamp to zero.
        assert out[0, 0] == 0.0
        assert out.max() == pytest.approx(99 * 2.55, rel=1e-5)

    def test_output_clamped_to_range(self, random_field):
        out = auto_contrast(random_field, 8).to_array()
        assert out.min() >= 0.0
        assert out.max() <= 255.0

    def test_constant_field_raises(self, flat_field):
        with pytest.raises(DegenerateRangeError, match="clip range is empty"):
            auto_contrast(flat_field, 8)

    def test_black_field_raises(self):
        with pytest.raises(DegenerateRangeError, match="no populated"):
            auto_contrast(ScalarField(8, 8), 8)

    def test_transform_multi_plane(self, level_ramp):
        out = AutoContrast().apply([level_ramp, level_ramp])
        assert len(out) == 2
        np.testing.assert_array_equal(out[0].to_array(),
                                      auto_contrast(level_ramp, 8).to_array())

    def test_transform_depth_range(self):
        with pytest.raises(ValidationError, match="below minimum"):
            AutoContrast(depth=0)

    def test_transform_metadata(self):
        assert AutoContrast.__processor_version__ == '1.0.0'
        assert AutoContrast.__processor_tags__['category'] is ProcessorCategory.ENHANCE


# ---------------------------------------------------------------------------
# auto_gamma
# ---------------------------------------------------------------------------

class TestAutoGamma:
    """Test power-law normalization."""

    def test_gamma_for_quarter_mean(self):
        assert gamma_for_mean(63.75, 255) == pytest.approx(0.5)

    def test_quarter_mean_maps_to_mid_scale(self):
        field = ScalarField.from_array(np.full((4, 4), 63.75))
        out = auto_gamma(field, 8).to_array()
        np.testing.assert_allclose(out, 127.5, rtol=1e-6)

    def test_preserves_endpoints(self):
        field = ScalarField.from_array(np.array([[0.0, 255.0, 30.0, 10.0]]))
        out = auto_gamma(field, 8).to_array()
        assert out[0, 0] == 0.0
        assert out[0, 1] == pytest.approx(255.0)

    def test_output_in_range(self, random_field):
        out = auto_gamma(random_field, 8).to_array()
        assert out.min() >= 0.0
        assert out.max() <= 255.0

    def test_zero_mean_raises(self):
        with pytest.raises(DegenerateRangeError, match="mean"):
            auto_gamma(ScalarField(4, 4), 8)

    def test_full_scale_mean_raises(self):
        with pytest.raises(DegenerateRangeError, match="full scale"):
            auto_gamma(ScalarField.from_array(np.full((4, 4), 255.0)), 8)

    def test_transform(self):
        field = ScalarField.from_array(np.full((4, 4), 63.75))
        out = AutoGamma(depth=8).apply(field).to_array()
        np.testing.assert_allclose(out, 127.5, rtol=1e-6)


# ---------------------------------------------------------------------------
# invert
# ---------------------------------------------------------------------------

class TestInvert:
    """Test intensity inversion."""

    def test_default_maximum(self):
        field = ScalarField.from_array(np.array([[0.0, 55.0, 255.0]]))
        np.testing.assert_array_equal(invert(field).to_array(), [[255, 200, 0]])

    def test_custom_maximum(self):
        field = ScalarField.from_array(np.array([[1.0, 3.0]]))
        np.testing.assert_array_equal(invert(field, 4).to_array(), [[3, 1]])

    def test_double_inversion_is_identity(self, random_field):
        op = Invert()
        twice = op.apply(op.apply(random_field))
        np.testing.assert_array_equal(twice.to_array(), random_field.to_array())
