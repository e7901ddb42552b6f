# -*- coding: utf-8 -*-
"""
Edge Detection - Sobel gradient, non-maximum suppression and hysteresis.

Implements a Canny-style edge detector in three stages:

1. ``sobel``: 3x3 Sobel gradient over interior pixels (border pixels
   carry zero gradient). The magnitude norm is L1 (``|gx| + |gy|``) by
   default, L2 (``sqrt(gx^2 + gy^2)``) on request. Orientation is
   ``atan2(gy, gx)`` in degrees on ``[-180, 180]`` with ``y`` growing
   downward.
2. ``non_max_suppression``: thins ridges of the magnitude to one pixel.
   Orientation is folded into ``[0, 180)`` and quantized into four
   half-open sectors::

       [0, 22.5) and [157.5, 180)  ->   0 deg, compare (x-1, y), (x+1, y)
       [22.5, 67.5)                ->  45 deg, compare (x-1, y-1), (x+1, y+1)
       [67.5, 112.5)               ->  90 deg, compare (x, y-1), (x, y+1)
       [112.5, 157.5)              -> 135 deg, compare (x+1, y-1), (x-1, y+1)

   A pixel keeps its magnitude only when it is strictly greater than both
   neighbors along its sector; everything else, the border included, is
   zeroed. Output never exceeds input.
3. ``hysteresis``: keeps pixels at or above ``high`` and every pixel at or
   above ``low`` that is 8-connected to one of them. Propagation uses an
   explicit worklist, so arbitrarily large connected edges cannot exhaust
   the call stack.

``canny`` chains an optional Gaussian pre-blur with the three stages;
``CannyEdgeDetector`` is the ``ImageTransform`` wrapper.

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
2026-10-07

Modified
--------
2026-10-14
"""

# Standard library
import logging
from dataclasses import dataclass
from typing import Annotated, Any, Optional, Union

# Third-party
import numpy as np

# MVIL internal
from mvil.exceptions import ValidationError
from mvil.image_processing.base import ImageTransform, PlanewiseTransformMixin
from mvil.image_processing.kernels import convolve, gaussian_kernel
from mvil.image_processing.params import Desc, Options, Range
from mvil.image_processing.versioning import processor_tags, processor_version
from mvil.types.field import ScalarField
from mvil.vocabulary import GradientNorm, ProcessorCategory

logger = logging.getLogger(__name__)

_NEIGHBORS_8 = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if dx or dy
)


@dataclass
class Gradient:
    """Per-pixel Sobel gradient of a field.

    Attributes
    ----------
    magnitude : ScalarField
        Gradient magnitude under the chosen norm.
    orientation : ScalarField
        ``atan2(gy, gx)`` in degrees, ``[-180, 180]``.
    horizontal : ScalarField
        ``gx``, right column minus left column.
    vertical : ScalarField
        ``gy``, bottom row minus top row.
    """

    magnitude: ScalarField
    orientation: ScalarField
    horizontal: ScalarField
    vertical: ScalarField


def _as_norm(norm: Union[str, GradientNorm]) -> GradientNorm:
    try:
        return GradientNorm(norm.value if isinstance(norm, GradientNorm) else norm)
    except ValueError:
        raise ValidationError(
            f"norm must be one of {[n.value for n in GradientNorm]}, got {norm!r}"
        ) from None


def sobel(
    field: ScalarField,
    edge_weight: float = 1.0,
    center_weight: float = 2.0,
    norm: Union[str, GradientNorm] = GradientNorm.L1,
) -> Gradient:
    """Sobel gradient by inline accumulation over interior pixels.

    Parameters
    ----------
    field : ScalarField
        Input plane.
    edge_weight : float
        Weight of the corner taps. Default 1.
    center_weight : float
        Weight of the axis taps. Default 2 (Sobel); 1 gives Prewitt.
    norm : str or GradientNorm
        ``'l1'`` (default) or ``'l2'``.

    Returns
    -------
    Gradient
        All four fields have the size of ``field``; border pixels are 0.
    """
    norm = _as_norm(norm)
    d = field.to_array(copy=False).astype(np.float64)
    rows, cols = d.shape
    gx = np.zeros_like(d)
    gy = np.zeros_like(d)

    if rows >= 3 and cols >= 3:
        e, c = edge_weight, center_weight
        tl, tc, tr = d[:-2, :-2], d[:-2, 1:-1], d[:-2, 2:]
        ml, mr = d[1:-1, :-2], d[1:-1, 2:]
        bl, bc, br = d[2:, :-2], d[2:, 1:-1], d[2:, 2:]
        gx[1:-1, 1:-1] = (tr * e + mr * c + br * e) - (tl * e + ml * c + bl * e)
        gy[1:-1, 1:-1] = (bl * e + bc * c + br * e) - (tl * e + tc * c + tr * e)

    if norm is GradientNorm.L1:
        magnitude = np.abs(gx) + np.abs(gy)
    else:
        magnitude = np.hypot(gx, gy)
    orientation = np.degrees(np.arctan2(gy, gx))

    return Gradient(
        magnitude=ScalarField.from_array(magnitude, copy=False),
        orientation=ScalarField.from_array(orientation, copy=False),
        horizontal=ScalarField.from_array(gx, copy=False),
        vertical=ScalarField.from_array(gy, copy=False),
    )


def orientation_sector(angle: np.ndarray) -> np.ndarray:
    """Quantize orientations (degrees) to sectors 0, 45, 90 or 135.

    Angles are folded into ``[0, 180)`` first; sector intervals are
    closed below and open above.
    """
    folded = np.mod(np.asarray(angle, dtype=np.float64), 180.0)
    sector = np.zeros(folded.shape, dtype=np.int16)
    sector[(folded >= 22.5) & (folded < 67.5)] = 45
    sector[(folded >= 67.5) & (folded < 112.5)] = 90
    sector[(folded >= 112.5) & (folded < 157.5)] = 135
    return sector


def non_max_suppression(gradient: Gradient) -> ScalarField:
    """Zero every pixel that is not a strict local maximum along its gradient.

    Parameters
    ----------
    gradient : Gradient
        Output of ``sobel``.

    Returns
    -------
    ScalarField
        Thinned magnitude; border pixels are 0.
    """
    m = gradient.magnitude.to_array(copy=False)
    rows, cols = m.shape
    out = np.zeros_like(m)
    if rows < 3 or cols < 3:
        return ScalarField.from_array(out, copy=False)

    center = m[1:-1, 1:-1]
    sector = orientation_sector(gradient.orientation.to_array(copy=False)[1:-1, 1:-1])
    pairs = {
        0: (m[1:-1, :-2], m[1:-1, 2:]),
        45: (m[:-2, :-2], m[2:, 2:]),
        90: (m[:-2, 1:-1], m[2:, 1:-1]),
        135: (m[:-2, 2:], m[2:, :-2]),
    }
    keep = np.zeros(center.shape, dtype=bool)
    for value, (a, b) in pairs.items():
        keep |= (sector == value) & (center > a) & (center > b)
    out[1:-1, 1:-1] = np.where(keep, center, 0.0)
    return ScalarField.from_array(out, copy=False)


def hysteresis(
    field: ScalarField,
    low: float,
    high: float,
    strong_value: float = 255.0,
) -> ScalarField:
    """Two-threshold edge linking.

    Pixels ``>= high`` are strong. Strong status spreads to every
    8-connected neighbor ``>= low``, transitively, until no further
    neighbor qualifies.

    Parameters
    ----------
    field : ScalarField
        Edge strength, typically the output of ``non_max_suppression``.
    low : float
        Weak threshold.
    high : float
        Strong threshold. Must be >= ``low``.
    strong_value : float
        Value written at retained pixels. Default 255.

    Returns
    -------
    ScalarField
        ``strong_value`` at retained pixels, 0 elsewhere.

    Raises
    ------
    ValidationError
        If ``low > high``.
    """
    if low > high:
        raise ValidationError(f"low ({low}) must not exceed high ({high})")

    data = field.to_array(copy=False)
    rows, cols = data.shape
    weak = data >= low
    strong = data >= high

    worklist = list(np.flatnonzero(strong))
    while worklist:
        y, x = divmod(int(worklist.pop()), cols)
        for dx, dy in _NEIGHBORS_8:
            nx, ny = x + dx, y + dy
            if 0 <= nx < cols and 0 <= ny < rows and weak[ny, nx] and not strong[ny, nx]:
                strong[ny, nx] = True
                worklist.append(ny * cols + nx)

    out = np.where(strong, np.float32(strong_value), np.float32(0.0))
    return ScalarField.from_array(out, copy=False)


def canny(
    field: ScalarField,
    low: Optional[float] = None,
    high: Optional[float] = None,
    sigma: Optional[float] = None,
    blur_size: int = 5,
    norm: Union[str, GradientNorm] = GradientNorm.L1,
    strong_value: float = 255.0,
) -> ScalarField:
    """Canny-style edge map of ``field``.

    Parameters
    ----------
    field : ScalarField
        Input plane.
    low, high : float, optional
        Hysteresis thresholds. Supply both to link edges, or neither to
        return the thinned magnitude.
    sigma : float, optional
        When given, smooth with ``gaussian_kernel(sigma, blur_size)``
        before the gradient.
    blur_size : int
        Gaussian kernel size. Default 5.
    norm : str or GradientNorm
        Gradient magnitude norm. Default L1.
    strong_value : float
        Value of retained pixels after hysteresis. Default 255.

    Raises
    ------
    ValidationError
        If only one of ``low``/``high`` is given.
    """
    if (low is None) != (high is None):
        raise ValidationError("low and high must be given together")

    source = field
    if sigma is not None:
        source = convolve(field, gaussian_kernel(sigma, blur_size))
    thinned = non_max_suppression(sobel(source, norm=norm))
    if low is None:
        return thinned
    edges = hysteresis(thinned, low, high, strong_value)
    logger.debug("canny: %d edge pixels retained",
                 int(np.count_nonzero(edges.to_array(copy=False))))
    return edges


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.EDGES,
                description='Sobel gradient, non-maximum suppression, hysteresis')
class CannyEdgeDetector(PlanewiseTransformMixin, ImageTransform):
    """Canny-style edge detector.

    Parameters
    ----------
    low : float
        Weak hysteresis threshold. Default 20.
    high : float
        Strong hysteresis threshold. Default 60.
    link : bool
        Run hysteresis. When False the thinned magnitude is returned.
        Default True.
    sigma : float
        Gaussian pre-blur sigma; ``0`` disables the blur. Default 0.6.
    blur_size : int
        Gaussian kernel size. Default 5.
    norm : str
        ``'l1'`` or ``'l2'``. Default ``'l1'``.

    Examples
    --------
    >>> detector = CannyEdgeDetector(low=10.0, high=40.0)
    >>> edges = detector.apply(plane)
    >>> magnitude = detector.apply(plane, link=False)
    """

    low: Annotated[float, Range(min=0.0), Desc('Weak edge threshold')] = 20.0
    high: Annotated[float, Range(min=0.0), Desc('Strong edge threshold')] = 60.0
    link: Annotated[bool, Desc('Link edges with hysteresis')] = True
    sigma: Annotated[float, Range(min=0.0, max=100.0),
                     Desc('Gaussian pre-blur sigma (0 disables)')] = 0.6
    blur_size: Annotated[int, Range(min=1, max=201),
                         Desc('Gaussian kernel size')] = 5
    norm: Annotated[str, Options('l1', 'l2'), Desc('Gradient norm')] = 'l1'

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise ValidationError(
                f"low ({self.low}) must not exceed high ({self.high})"
            )

    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        params = self._resolve_params(kwargs)
        sigma = params['sigma'] or None
        if params['link']:
            return canny(source, params['low'], params['high'], sigma,
                         params['blur_size'], params['norm'])
        return canny(source, sigma=sigma, blur_size=params['blur_size'],
                     norm=params['norm'])
