# -*- coding: utf-8 -*-
"""
Phansalkar Local Threshold - Adaptive binarization for low-contrast images.

Computes a per-pixel threshold from the local mean and standard deviation
of intensities normalized to ``[0, 1]``::

    t = mean * (1 + p * exp(-q * mean) + k * (std / r - 1))

and outputs ``max_value`` where the normalized pixel exceeds ``t``,
``0`` elsewhere. The square window of side ``2 * radius + 1`` is clamped
at the image border: only in-bounds taps contribute to the sums and the
count, so border windows are smaller rather than zero-padded. Statistics
are the population (biased) mean and standard deviation of the window.

Window sums come from summed-area tables; each output row is computed
independently and the rows are fanned out through
``mvil.parallel.dispatch``.

Reference: Phansalkar N. et al. (2011), "Adaptive local thresholding for
detection of nuclei in diversity stained cytology images", ICCSP 2011.

Dependencies
------------
numpy

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
2026-10-08

Modified
--------
2026-10-13
"""

# Standard library
import logging
from typing import Annotated, Any, Optional

# Third-party
import numpy as np

# MVIL internal
from mvil.exceptions import ValidationError
from mvil.image_processing.base import ImageTransform, PlanewiseTransformMixin
from mvil.image_processing.params import Desc, Range
from mvil.image_processing.versioning import processor_tags, processor_version
from mvil.parallel import dispatch
from mvil.types.field import ScalarField
from mvil.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)

#: Default exponential weight.
PHANSALKAR_P = 2.5

#: Default exponential decay.
PHANSALKAR_Q = 10.0

#: Default deviation weight.
PHANSALKAR_K = 0.15

#: Default dynamic range of the standard deviation.
PHANSALKAR_R = 0.4


def _summed_area(values: np.ndarray) -> np.ndarray:
    """Zero-bordered summed-area table, shape ``(rows + 1, cols + 1)``."""
    table = np.zeros((values.shape[0] + 1, values.shape[1] + 1), dtype=np.float64)
    np.cumsum(np.cumsum(values, axis=0), axis=1, out=table[1:, 1:])
    return table


def phansalkar(
    field: ScalarField,
    radius: int,
    p: float = PHANSALKAR_P,
    q: float = PHANSALKAR_Q,
    k: float = PHANSALKAR_K,
    r: float = PHANSALKAR_R,
    max_value: float = 255.0,
    max_workers: Optional[int] = None,
) -> ScalarField:
    """Phansalkar adaptive binarization.

    Parameters
    ----------
    field : ScalarField
        Input plane with intensities in ``[0, max_value]``.
    radius : int
        Window half-size. Must be >= 0.
    p, q, k, r : float
        Phansalkar constants.
    max_value : float
        Normalization divisor and foreground output value. Default 255.
    max_workers : int, optional
        Thread limit forwarded to ``dispatch``.

    Returns
    -------
    ScalarField
        Binary plane holding ``max_value`` or ``0``.

    Raises
    ------
    ValidationError
        If ``radius`` is negative, or ``r`` or ``max_value`` is not positive.
    """
    if radius < 0:
        raise ValidationError(f"radius must be >= 0, got {radius}")
    if r <= 0:
        raise ValidationError(f"r must be > 0, got {r}")
    if max_value <= 0:
        raise ValidationError(f"max_value must be > 0, got {max_value}")

    height, width = field.shape
    normalized = field.to_array(copy=False).astype(np.float64) / max_value
    sums = _summed_area(normalized)
    squares = _summed_area(normalized * normalized)
    out = np.zeros((height, width), dtype=np.float32)

    cols = np.arange(width)
    x0 = np.maximum(cols - radius, 0)
    x1 = np.minimum(cols + radius, width - 1) + 1
    col_span = x1 - x0

    def threshold_row(y: int) -> None:
        y0 = max(y - radius, 0)
        y1 = min(y + radius, height - 1) + 1
        count = (y1 - y0) * col_span

        total = sums[y1, x1] - sums[y0, x1] - sums[y1, x0] + sums[y0, x0]
        total_sq = (squares[y1, x1] - squares[y0, x1]
                    - squares[y1, x0] + squares[y0, x0])

        mean = total / count
        deviation = np.sqrt(np.maximum(total_sq / count - mean * mean, 0.0))
        threshold = mean * (1.0 + p * np.exp(-q * mean) + k * (deviation / r - 1.0))

        out[y] = np.where(normalized[y] > threshold, max_value, 0.0)

    dispatch(height, threshold_row, max_workers=max_workers)
    logger.debug("phansalkar: %dx%d plane, radius %d", width, height, radius)
    return ScalarField.from_array(out, copy=False)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.THRESHOLD,
                description='Phansalkar local adaptive binarization')
class PhansalkarThreshold(PlanewiseTransformMixin, ImageTransform):
    """Phansalkar local adaptive threshold.

    Parameters
    ----------
    radius : int
        Window half-size. Default 15.
    p : float
        Exponential weight. Default 2.5.
    q : float
        Exponential decay. Default 10.
    k : float
        Deviation weight. Default 0.15.
    r : float
        Dynamic range of the standard deviation. Default 0.4.
    max_value : float
        Normalization divisor and foreground value. Default 255.
    max_workers : int
        Thread limit for row dispatch; 0 uses the CPU count. Default 0.

    Examples
    --------
    >>> binary = PhansalkarThreshold(radius=15).apply(plane)
    """

    radius: Annotated[int, Range(min=0, max=500), Desc('Window half-size')] = 15
    p: Annotated[float, Desc('Exponential weight')] = PHANSALKAR_P
    q: Annotated[float, Desc('Exponential decay')] = PHANSALKAR_Q
    k: Annotated[float, Desc('Deviation weight')] = PHANSALKAR_K
    r: Annotated[float, Range(min=1e-6), Desc('Deviation dynamic range')] = PHANSALKAR_R
    max_value: Annotated[float, Range(min=1e-6),
                         Desc('Normalization divisor and foreground value')] = 255.0
    max_workers: Annotated[int, Range(min=0),
                           Desc('Row dispatch thread limit, 0 for CPU count')] = 0

    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        params = self._resolve_params(kwargs)
        result = phansalkar(
            source,
            params['radius'],
            p=params['p'],
            q=params['q'],
            k=params['k'],
            r=params['r'],
            max_value=params['max_value'],
            max_workers=params['max_workers'] or None,
        )
        self._report_progress(kwargs, 1.0)
        return result
