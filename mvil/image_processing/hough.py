# -*- coding: utf-8 -*-
"""
Hough Circles - Fixed-radius circle center accumulator.

Every nonzero pixel of an edge map votes for the centers of circles of
the given radius that could pass through it: for each angle
``theta = 0, increment, 2 * increment, ... < 360`` degrees the candidate
center is ``(x - r cos(theta), y - r sin(theta))``, truncated toward zero.
Only centers strictly inside ``(0, width) x (0, height)`` receive a vote.
Accumulator cells with fewer than ``360 / increment * threshold / 100``
votes, i.e. less than ``threshold`` percent of a full circle, are zeroed.

Dependencies
------------
numpy

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
2026-10-11

Modified
--------
2026-10-11
"""

# Standard library
import logging
from typing import Annotated, Any

# Third-party
import numpy as np

# MVIL internal
from mvil.exceptions import ValidationError
from mvil.image_processing.base import ImageTransform, PlanewiseTransformMixin
from mvil.image_processing.params import Desc, Range
from mvil.image_processing.versioning import processor_tags, processor_version
from mvil.types.field import ScalarField
from mvil.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)


def hough_circles(
    field: ScalarField,
    radius: int,
    increment: int = 5,
    threshold: float = 30.0,
) -> ScalarField:
    """Vote for circle centers of radius ``radius``.

    Parameters
    ----------
    field : ScalarField
        Edge map; nonzero pixels vote.
    radius : int
        Circle radius in pixels.
    increment : int
        Angular step in degrees, 1..360. Default 5.
    threshold : float
        Minimum vote share in percent of the ``360 / increment`` possible
        votes. Default 30.

    Returns
    -------
    ScalarField
        Vote counts with weak cells zeroed.

    Raises
    ------
    ValidationError
        If ``increment`` is outside ``[1, 360]`` or ``radius`` is negative.
    """
    if not 1 <= increment <= 360:
        raise ValidationError(f"increment must be in [1, 360], got {increment}")
    if radius < 0:
        raise ValidationError(f"radius must be >= 0, got {radius}")

    height, width = field.shape
    accumulator = np.zeros((height, width), dtype=np.float32)
    ys, xs = np.nonzero(field.to_array(copy=False))

    theta = np.deg2rad(np.arange(0, 360, increment, dtype=np.float64))
    dx = radius * np.cos(theta)
    dy = radius * np.sin(theta)

    if xs.size:
        a = np.trunc(xs[:, None] - dx[None, :]).astype(np.int64).ravel()
        b = np.trunc(ys[:, None] - dy[None, :]).astype(np.int64).ravel()
        inside = (a > 0) & (a < width) & (b > 0) & (b < height)
        np.add.at(accumulator, (b[inside], a[inside]), 1.0)

    minimum_votes = 360.0 / increment * threshold / 100.0
    accumulator[accumulator < minimum_votes] = 0.0
    logger.debug("hough_circles: %d voters, peak %.0f votes",
                 xs.size, float(accumulator.max()) if accumulator.size else 0.0)
    return ScalarField.from_array(accumulator, copy=False)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FIND_FEATURES,
                description='Fixed-radius Hough circle accumulator')
class HoughCircles(PlanewiseTransformMixin, ImageTransform):
    """Hough circle center accumulator.

    Parameters
    ----------
    radius : int
        Circle radius in pixels.
    increment : int
        Angular step in degrees. Default 5.
    threshold : float
        Minimum vote share in percent. Default 30.
    """

    radius: Annotated[int, Range(min=0), Desc('Circle radius')]
    increment: Annotated[int, Range(min=1, max=360), Desc('Angular step')] = 5
    threshold: Annotated[float, Range(min=0.0, max=100.0),
                         Desc('Minimum vote share (percent)')] = 30.0

    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        params = self._resolve_params(kwargs)
        return hough_circles(source, params['radius'],
                             params['increment'], params['threshold'])
