# -*- coding: utf-8 -*-
"""
Edge Detector Tests - Sobel gradient, sector quantization, NMS, hysteresis.

Dependencies
------------
pytest

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
2026-10-07

Modified
--------
2026-10-19
"""

import numpy as np
import pytest

from mvil.exceptions import ValidationError
from mvil.image_processing.edges import (
    CannyEdgeDetector,
    Gradient,
    canny,
    hysteresis,
    non_max_suppression,
    orientation_sector,
    sobel,
)
from mvil.types import ScalarField
from mvil.vocabulary import GradientNorm


def _field(rows):
    return ScalarField.from_array(np.array(rows, dtype=np.float32))


# ---------------------------------------------------------------------------
# Gradient
# ---------------------------------------------------------------------------

class TestSobel:
    """Test gradient magnitude and orientation."""

    def test_vertical_step(self, step_field):
        g = sobel(step_field)
        mag = g.magnitude.to_array()
        np.testing.assert_array_equal(mag[1:-1, 7], 800.0)
        np.testing.assert_array_equal(mag[1:-1, 8], 800.0)
        np.testing.assert_array_equal(mag[1:-1, 2:6], 0.0)
        np.testing.assert_array_equal(g.vertical.to_array(), 0.0)
        np.testing.assert_array_equal(g.orientation.to_array()[1:-1, 7], 0.0)

    def test_border_is_zero(self, step_field):
        mag = sobel(step_field).magnitude.to_array()
        assert not mag[0, :].any()
        assert not mag[-1, :].any()
        assert not mag[:, 0].any()
        assert not mag[:, -1].any()

    def test_l1_and_l2_on_diagonal_ramp(self):
        y, x = np.mgrid[0:6, 0:6]
        field = ScalarField.from_array((x + y).astype(np.float32))
        l1 = sobel(field).magnitude.to_array()
        l2 = sobel(field, norm='l2').magnitude.to_array()
        orient = sobel(field).orientation.to_array()
        np.testing.assert_allclose(l1[1:-1, 1:-1], 16.0)
        np.testing.assert_allclose(l2[1:-1, 1:-1], np.sqrt(128.0), rtol=1e-6)
        np.testing.assert_allclose(orient[1:-1, 1:-1], 45.0, rtol=1e-6)

    def test_gradient_norm_enum_accepted(self, step_field):
        g = sobel(step_field, norm=GradientNorm.L2)
        assert g.magnitude.max() == pytest.approx(800.0)

    def test_center_weight(self, step_field):
        g = sobel(step_field, center_weight=1.0)
        assert g.magnitude.max() == pytest.approx(600.0)

    def test_orientation_points_downhill_to_uphill(self):
        arr = np.zeros((8, 8), dtype=np.float32)
        arr[4:, :] = 100.0
        orient = sobel(ScalarField.from_array(arr)).orientation.to_array()
        assert orient[3, 3] == pytest.approx(90.0)

    def test_tiny_field_is_all_zero(self):
        g = sobel(_field([[1, 2], [3, 4]]))
        np.testing.assert_array_equal(g.magnitude.to_array(), 0.0)

    def test_unknown_norm_raises(self, step_field):
        with pytest.raises(ValidationError, match="norm"):
            sobel(step_field, norm='linf')


# ---------------------------------------------------------------------------
# Sector quantization
# ---------------------------------------------------------------------------

class TestOrientationSector:
    """Test half-open sector boundaries."""

    def test_boundaries(self):
        angles = np.array([0.0, 22.4, 22.5, 67.4, 67.5, 112.5, 157.4, 157.5,
                           179.9, 180.0])
        expected = [0, 0, 45, 45, 90, 135, 135, 0, 0, 0]
        np.testing.assert_array_equal(orientation_sector(angles), expected)

    def test_negative_angles_fold(self):
        angles = np.array([-45.0, -90.0, -135.0, -180.0, -10.0])
        expected = [135, 90, 45, 0, 0]
        np.testing.assert_array_equal(orientation_sector(angles), expected)


# ---------------------------------------------------------------------------
# Non-maximum suppression
# ---------------------------------------------------------------------------

class TestNonMaxSuppression:
    """Test thinning along the gradient direction."""

    def test_keeps_single_ridge(self, ramp_edge_field):
        thin = non_max_suppression(sobel(ramp_edge_field)).to_array()
        np.testing.assert_array_equal(thin[1:-1, 4], 760.0)
        thin[:, 4] = 0.0
        assert not thin.any()

    def test_equal_neighbors_are_suppressed(self, step_field):
        thin = non_max_suppression(sobel(step_field)).to_array()
        assert not thin.any()

    @pytest.mark.parametrize("norm", ['l1', 'l2'])
    def test_never_increases_magnitude(self, norm):
        rng = np.random.default_rng(3)
        field = ScalarField.from_array(rng.uniform(0, 255, (50, 50)))
        gradient = sobel(field, norm=norm)
        thin = non_max_suppression(gradient).to_array()
        mag = gradient.magnitude.to_array()
        assert (thin <= mag).all()
        assert ((thin == 0) | (thin == mag)).all()

    def test_diagonal_sector(self):
        # A single peak whose gradient points along 45 degrees.
        m = np.zeros((5, 5), dtype=np.float32)
        m[1, 1], m[2, 2], m[3, 3] = 5.0, 9.0, 5.0
        m[1, 3], m[3, 1] = 20.0, 20.0
        orient = np.full((5, 5), 45.0, dtype=np.float32)
        g = Gradient(
            magnitude=ScalarField.from_array(m),
            orientation=ScalarField.from_array(orient),
            horizontal=ScalarField(5, 5),
            vertical=ScalarField(5, 5),
        )
        thin = non_max_suppression(g).to_array()
        assert thin[2, 2] == 9.0


# ---------------------------------------------------------------------------
# Hysteresis
# ---------------------------------------------------------------------------

class TestHysteresis:
    """Test strong/weak edge linking."""

    def test_weak_connected_to_strong_is_kept(self):
        out = hysteresis(_field([[0, 30, 80, 30, 0, 30, 0]]), 20, 60)
        np.testing.assert_array_equal(out.to_array(), [[0, 255, 255, 255, 0, 0, 0]])

    def test_diagonal_connectivity(self):
        out = hysteresis(_field([[70, 0, 0], [0, 30, 0], [0, 0, 30]]), 20, 60)
        np.testing.assert_array_equal(out.to_array(),
                                      [[255, 0, 0], [0, 255, 0], [0, 0, 255]])

    def test_transitive_chain(self):
        chain = np.zeros((1, 200), dtype=np.float32)
        chain[0, :] = 25.0
        chain[0, 0] = 100.0
        out = hysteresis(ScalarField.from_array(chain), 20, 60, strong_value=1.0)
        np.testing.assert_array_equal(out.to_array(), 1.0)

    def test_thresholds_are_inclusive(self):
        out = hysteresis(_field([[60, 20, 19]]), 20, 60)
        np.testing.assert_array_equal(out.to_array(), [[255, 255, 0]])

    def test_low_above_high_raises(self):
        with pytest.raises(ValidationError, match="must not exceed"):
            hysteresis(ScalarField(3, 3), 50, 10)


# ---------------------------------------------------------------------------
# canny and CannyEdgeDetector
# ---------------------------------------------------------------------------

class TestCanny:
    """Test the composed edge pipeline."""

    def test_linked_edges(self, ramp_edge_field):
        edges = canny(ramp_edge_field, 100.0, 500.0).to_array()
        np.testing.assert_array_equal(edges[1:-1, 4], 255.0)
        edges[:, 4] = 0.0
        assert not edges.any()

    def test_without_thresholds_returns_thinned_magnitude(self, ramp_edge_field):
        thin = canny(ramp_edge_field).to_array()
        assert thin.max() == 760.0

    def test_single_threshold_raises(self, ramp_edge_field):
        with pytest.raises(ValidationError, match="together"):
            canny(ramp_edge_field, low=10.0)

    def test_blur_changes_response(self, ramp_edge_field):
        plain = canny(ramp_edge_field).to_array()
        blurred = canny(ramp_edge_field, sigma=1.0).to_array()
        assert not np.array_equal(plain, blurred)

    def test_detector_binary_output(self, random_field):
        out = CannyEdgeDetector().apply(random_field).to_array()
        assert set(np.unique(out)) <= {0.0, 255.0}

    def test_detector_link_override(self, ramp_edge_field):
        detector = CannyEdgeDetector(sigma=0.0)
        thin = detector.apply(ramp_edge_field, link=False).to_array()
        assert thin.max() == 760.0

    def test_detector_low_above_high_raises(self):
        with pytest.raises(ValidationError, match="must not exceed"):
            CannyEdgeDetector(low=80.0, high=40.0)

    def test_detector_invalid_norm_raises(self):
        with pytest.raises(ValidationError, match="not one of"):
            CannyEdgeDetector(norm='l3')

    def test_detector_multi_plane(self, ramp_edge_field):
        out = CannyEdgeDetector(sigma=0.0, low=100.0, high=500.0).apply(
            [ramp_edge_field, ramp_edge_field])
        assert len(out) == 2
        np.testing.assert_array_equal(out[0].to_array(), out[1].to_array())
