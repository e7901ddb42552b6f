# -*- coding: utf-8 -*-
"""
Intensity Transforms - Histogram contrast stretch, gamma normalization, inversion.

Global, per-plane intensity remapping onto the level range of a bit depth
``d`` (``size = 2**d - 1``):

- ``auto_contrast``: clip to the populated histogram range with spike
  rejection, then stretch linearly onto ``[0, size]``.
- ``auto_gamma``: power-law remap that moves the plane mean to mid-scale.
- ``invert``: ``maximum - value``.

Each has an ``ImageTransform`` wrapper (``AutoContrast``, ``AutoGamma``,
``Invert``). Zero denominators raise ``DegenerateRangeError``.

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
2026-10-08

Modified
--------
2026-10-14
"""

# Standard library
import logging
import math
from typing import Annotated, Any, Tuple

# Third-party
import numpy as np

# MVIL internal
from mvil.exceptions import DegenerateRangeError, ValidationError
from mvil.image_processing.base import ImageTransform, PlanewiseTransformMixin
from mvil.image_processing.params import Desc, Range
from mvil.image_processing.versioning import processor_tags, processor_version
from mvil.types.field import ScalarField
from mvil.types.histogram import Histogram
from mvil.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)

#: Fraction of the pixel count above which a level is a spike and ignored.
SPIKE_FRACTION = 100

#: Fraction of the pixel count a level must exceed to bound the clip range.
FLOOR_FRACTION = 500000


def level_count(depth: int) -> int:
    """Highest level of a ``depth``-bit plane, ``2**depth - 1``."""
    if not isinstance(depth, (int, np.integer)) or isinstance(depth, bool) or depth < 1:
        raise ValidationError(f"depth must be a positive integer, got {depth!r}")
    return (1 << int(depth)) - 1


def contrast_limits(histogram: Histogram) -> Tuple[int, int]:
    """Clip bounds for ``auto_contrast``.

    Walks upward from ``histogram.min`` and downward from
    ``histogram.max``. A level holding more than ``total // 100`` pixels
    is a spike and counts as empty; the walk stops at the first level
    holding more than ``total // 500000`` pixels.

    Returns
    -------
    Tuple[int, int]
        ``(low, high)`` levels. ``low`` may exceed ``high`` when no level
        qualifies.

    Raises
    ------
    DegenerateRangeError
        If the histogram has no populated nonzero level.
    """
    if histogram.is_empty:
        raise DegenerateRangeError("Histogram has no populated nonzero level")

    size = histogram.max_level
    limit = histogram.total // SPIKE_FRACTION
    threshold = histogram.total // FLOOR_FRACTION

    def qualifies(level: int) -> bool:
        count = histogram[level]
        if count > limit:
            count = 0
        return count > threshold

    low = histogram.min
    while low < size and not qualifies(low):
        low += 1

    high = histogram.max
    while high > 0 and not qualifies(high):
        high -= 1

    return low, high


def auto_contrast(field: ScalarField, depth: int) -> ScalarField:
    """Histogram clip and linear stretch onto ``[0, 2**depth - 1]``.

    ``scale = size / (high + 1 - low)`` and each pixel becomes
    ``clamp((value - low) * scale, 0, size)``.

    Parameters
    ----------
    field : ScalarField
        Input plane.
    depth : int
        Bit depth of the plane.

    Raises
    ------
    DegenerateRangeError
        If the histogram is empty or the clip walk leaves an empty range,
        as happens for a constant plane whose single level is a spike.
    """
    size = level_count(depth)
    histogram = Histogram(field, size)
    low, high = contrast_limits(histogram)
    span = high + 1 - low
    if span <= 0:
        raise DegenerateRangeError(
            f"Contrast clip range is empty (low={low}, high={high})"
        )
    factor = size / span
    logger.debug("auto_contrast: clip [%d, %d], scale %.4f", low, high, factor)

    data = field.to_array(copy=False).astype(np.float64)
    out = np.clip((data - low) * factor, 0.0, size)
    return ScalarField.from_array(out, copy=False)


def gamma_for_mean(mean: float, size: int) -> float:
    """Exponent mapping ``mean`` onto mid-scale: ``ln(1/2) / ln(mean/size)``.

    Raises
    ------
    DegenerateRangeError
        If ``mean <= 0`` or ``mean == size``.
    """
    if mean <= 0:
        raise DegenerateRangeError(f"Gamma undefined for mean {mean}")
    if mean == size:
        raise DegenerateRangeError(
            f"Gamma undefined when the mean equals the full scale ({size})"
        )
    return math.log((size / 2.0) / size) / math.log(mean / size)


def auto_gamma(field: ScalarField, depth: int) -> ScalarField:
    """Power-law normalization toward a mid-scale mean.

    Each pixel becomes ``clamp(size * (value / size) ** gamma, 0, size)``
    with ``gamma = gamma_for_mean(field.mean(), size)``. Negative inputs
    are treated as 0.
    """
    size = level_count(depth)
    gamma = gamma_for_mean(field.mean(), size)
    logger.debug("auto_gamma: gamma %.4f", gamma)

    data = np.maximum(field.to_array(copy=False).astype(np.float64), 0.0)
    with np.errstate(divide='ignore', over='ignore'):
        out = size * np.power(data / size, gamma)
    return ScalarField.from_array(np.clip(out, 0.0, size), copy=False)


def invert(field: ScalarField, maximum: float = 255.0) -> ScalarField:
    """``maximum - value`` for every pixel."""
    data = field.to_array(copy=False)
    return ScalarField.from_array(np.float32(maximum) - data, copy=False)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Histogram clip with spike rejection and linear stretch')
class AutoContrast(PlanewiseTransformMixin, ImageTransform):
    """Automatic contrast stretch.

    Parameters
    ----------
    depth : int
        Bit depth of the plane. Default 8.

    Examples
    --------
    >>> stretched = AutoContrast(depth=8).apply(plane)
    """

    depth: Annotated[int, Range(min=1, max=16), Desc('Bit depth')] = 8

    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        params = self._resolve_params(kwargs)
        return auto_contrast(source, params['depth'])


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Gamma normalization to a mid-scale mean')
class AutoGamma(PlanewiseTransformMixin, ImageTransform):
    """Automatic gamma correction.

    Parameters
    ----------
    depth : int
        Bit depth of the plane. Default 8.
    """

    depth: Annotated[int, Range(min=1, max=16), Desc('Bit depth')] = 8

    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        params = self._resolve_params(kwargs)
        return auto_gamma(source, params['depth'])


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.MATH, description='Intensity inversion')
class Invert(PlanewiseTransformMixin, ImageTransform):
    """Invert intensities about ``maximum``."""

    maximum: Annotated[float, Desc('Value that maps to 0')] = 255.0

    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        params = self._resolve_params(kwargs)
        return invert(source, params['maximum'])
