# -*- coding: utf-8 -*-
"""
Kernel Engine - Convolution kernels and their application to scalar fields.

Builds the kernels used across MVIL (Gaussian, Mexican hat, Sobel, sharpen)
and applies them with a *clamped sum* boundary policy: for each output
pixel, taps that fall outside the field are skipped and the remaining
products are summed without renormalization. Near the border a normalized
kernel therefore yields a smaller value than in the interior. This is
numerically identical to correlating against a zero-padded field, which is
how ``convolve`` evaluates it (``scipy.ndimage.correlate`` with
``mode='constant'``, ``cval=0``).

Kernel orientation: ``kernel[ky, kx]`` multiplies ``field[y + ky - hh,
x + kx - hw]``, i.e. the kernel is applied unflipped (cross-correlation),
matching how the fixed gradient kernels are written.

- ``convolve``: clamped-sum kernel application
- ``gaussian_kernel``: normalized 2D Gaussian
- ``mexican_hat_kernel``: unnormalized Laplacian-of-Gaussian
- ``scale``: min/max linear rescale
- ``Convolution``, ``GaussianBlur``, ``LinearScale``: ``ImageTransform``
  wrappers

Dependencies
------------
scipy

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

# Standard library
import logging
from typing import Annotated, Any, Union

# Third-party
import numpy as np
from scipy.ndimage import correlate

# MVIL internal
from mvil.exceptions import DegenerateRangeError, ValidationError
from mvil.image_processing.base import ImageTransform, PlanewiseTransformMixin
from mvil.image_processing.params import Desc, Range
from mvil.image_processing.versioning import processor_tags, processor_version
from mvil.types.field import ScalarField
from mvil.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)

KernelLike = Union[ScalarField, np.ndarray]

#: Horizontal Sobel kernel (right column minus left column).
SOBEL_X = np.array([[-1, 0, 1],
                    [-2, 0, 2],
                    [-1, 0, 1]], dtype=np.float32)

#: Vertical Sobel kernel (bottom row minus top row).
SOBEL_Y = np.array([[-1, -2, -1],
                    [0, 0, 0],
                    [1, 2, 1]], dtype=np.float32)


def _kernel_array(kernel: KernelLike) -> np.ndarray:
    if isinstance(kernel, ScalarField):
        arr = kernel.to_array(copy=False)
    else:
        arr = np.asarray(kernel, dtype=np.float32)
    if arr.ndim != 2:
        raise ValidationError(f"Kernel must be 2D, got shape {arr.shape}")
    rows, cols = arr.shape
    if rows % 2 == 0 or cols % 2 == 0:
        raise ValidationError(
            f"Kernel dimensions must be odd, got {cols}x{rows}"
        )
    return arr


def _validate_size(size: int) -> None:
    if not isinstance(size, (int, np.integer)) or isinstance(size, bool):
        raise ValidationError(f"size must be an integer, got {type(size).__name__}")
    if size < 1:
        raise ValidationError(f"size must be >= 1, got {size}")


def _validate_sigma(sigma: float) -> None:
    if not sigma > 0:
        raise ValidationError(f"sigma must be > 0, got {sigma}")


def convolve(field: ScalarField, kernel: KernelLike) -> ScalarField:
    """Apply ``kernel`` to every pixel of ``field`` with clamped sums.

    For each output position ``(x, y)``::

        out[x, y] = sum(field[x + kx, y + ky] * kernel[kx + hw, ky + hh])

    over the kernel footprint, skipping taps outside the field.

    Parameters
    ----------
    field : ScalarField
        Input plane.
    kernel : ScalarField or np.ndarray
        2D kernel with odd width and height.

    Returns
    -------
    ScalarField
        Same size as ``field``.

    Raises
    ------
    ValidationError
        If the kernel is not 2D or has an even dimension.
    """
    k = _kernel_array(kernel)
    out = correlate(
        field.to_array(copy=False).astype(np.float64),
        k.astype(np.float64),
        mode='constant',
        cval=0.0,
    )
    return ScalarField.from_array(out, copy=False)


def gaussian_kernel(sigma: float, size: int) -> ScalarField:
    """Normalized 2D Gaussian kernel.

    The kernel spans ``2 * (size // 2) + 1`` pixels per side; an even
    ``size`` is rounded up to the next odd footprint.

    Parameters
    ----------
    sigma : float
        Standard deviation in pixels. Must be > 0.
    size : int
        Nominal kernel side length. Must be >= 1.

    Returns
    -------
    ScalarField
        Kernel whose values sum to 1.
    """
    _validate_sigma(sigma)
    _validate_size(size)
    radius = size // 2
    y, x = np.mgrid[-radius:radius + 1, -radius:radius + 1].astype(np.float64)
    two_s2 = 2.0 * sigma * sigma
    density = np.exp(-(x * x + y * y) / two_s2) / (np.pi * two_s2)
    return ScalarField.from_array(density / density.sum(), copy=False)


def mexican_hat_kernel(sigma: float, size: int) -> ScalarField:
    """Laplacian-of-Gaussian ("Mexican hat") kernel, unnormalized.

    ``1 / (pi * s^2) * (1 - d^2 / (2 s^2)) * exp(-d^2 / (2 s^2))`` sampled
    on a ``2 * (size // 2) + 1`` square footprint.
    """
    _validate_sigma(sigma)
    _validate_size(size)
    radius = size // 2
    y, x = np.mgrid[-radius:radius + 1, -radius:radius + 1].astype(np.float64)
    s2 = sigma * sigma
    d = (x * x + y * y) / (2.0 * s2)
    values = (1.0 / (np.pi * s2)) * (1.0 - d) * np.exp(-d)
    return ScalarField.from_array(values, copy=False)


def sharpen_kernel() -> ScalarField:
    """Fixed 3x3 kernel: 1 at the center, 1/9 on the ring."""
    k = np.full((3, 3), 1.0 / 9.0, dtype=np.float32)
    k[1, 1] = 1.0
    return ScalarField.from_array(k, copy=False)


def scale(field: ScalarField, minimum: float, maximum: float) -> ScalarField:
    """Linearly map the observed value range of ``field`` onto ``[minimum, maximum]``.

    Raises
    ------
    DegenerateRangeError
        If every value of ``field`` is equal, so the observed range is zero.
    """
    lo = field.min()
    hi = field.max()
    if hi == lo:
        raise DegenerateRangeError(
            f"Cannot rescale a field whose values are all {lo}"
        )
    data = field.to_array(copy=False).astype(np.float64)
    out = (maximum - minimum) * (data - lo) / (hi - lo) + minimum
    return ScalarField.from_array(out, copy=False)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS,
                description='Clamped-sum application of a fixed kernel')
class Convolution(PlanewiseTransformMixin, ImageTransform):
    """Apply a fixed kernel with the clamped-sum boundary policy.

    Parameters
    ----------
    kernel : ScalarField or np.ndarray
        Odd-sized 2D kernel.
    """

    def __init__(self, kernel: KernelLike) -> None:
        self.kernel = ScalarField.from_array(_kernel_array(kernel))

    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        return convolve(source, self.kernel)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS,
                description='Gaussian smoothing')
class GaussianBlur(PlanewiseTransformMixin, ImageTransform):
    """Gaussian smoothing through ``gaussian_kernel`` and ``convolve``.

    Parameters
    ----------
    sigma : float
        Gaussian standard deviation in pixels. Default 0.6.
    size : int
        Kernel side length. Default 5.

    Examples
    --------
    >>> blur = GaussianBlur(sigma=1.5, size=7)
    >>> smoothed = blur.apply(plane)
    """

    sigma: Annotated[float, Range(min=0.01, max=100.0),
                     Desc('Gaussian standard deviation')] = 0.6
    size: Annotated[int, Range(min=1, max=201), Desc('Kernel side length')] = 5

    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        params = self._resolve_params(kwargs)
        return convolve(source, gaussian_kernel(params['sigma'], params['size']))


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Min/max linear rescale')
class LinearScale(PlanewiseTransformMixin, ImageTransform):
    """Rescale the observed range of a plane onto ``[minimum, maximum]``."""

    minimum: Annotated[float, Desc('Output minimum')] = 0.0
    maximum: Annotated[float, Desc('Output maximum')] = 255.0

    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        params = self._resolve_params(kwargs)
        return scale(source, params['minimum'], params['maximum'])
