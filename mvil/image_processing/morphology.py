# -*- coding: utf-8 -*-
"""
Morphology - Grayscale dilation and erosion with a disk structuring element.

The structuring element of diameter ``size`` has radius
``(size - 1) // 2`` and contains every offset whose Euclidean norm is
*strictly* less than that radius. Taps falling outside the field are
skipped.

- ``dilate``: maximum over the footprint, accumulator starting at 0.
- ``erode``: minimum over the footprint, accumulator starting at the
  ceiling (255 for 8-bit data).
- ``closing``: dilate then erode. Fills small dark holes.
- ``opening``: erode then dilate. Removes small bright specks.

When no offset qualifies (``radius <= 0``, i.e. ``size`` of 1 or 2) the
output is all zeros. ``size <= 0`` raises
``InvalidStructuringElementError``.

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
2026-10-09

Modified
--------
2026-10-12
"""

# Standard library
import logging
from typing import Annotated, Any, Optional

# Third-party
import numpy as np
from scipy.ndimage import maximum_filter, minimum_filter

# MVIL internal
from mvil.exceptions import InvalidStructuringElementError
from mvil.image_processing.base import ImageTransform, PlanewiseTransformMixin
from mvil.image_processing.params import Desc, Options, Range
from mvil.image_processing.versioning import processor_tags, processor_version
from mvil.types.field import ScalarField
from mvil.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)

MORPHOLOGY_OPERATIONS = ('erode', 'dilate', 'open', 'close')

#: Erosion accumulator start for 8-bit data.
DEFAULT_CEILING = 255.0


def disk_footprint(size: int) -> Optional[np.ndarray]:
    """Boolean disk of diameter ``size``.

    Returns
    -------
    np.ndarray or None
        ``(2r+1, 2r+1)`` mask of offsets with norm ``< r`` where
        ``r = (size - 1) // 2``; ``None`` when the mask would be empty.

    Raises
    ------
    InvalidStructuringElementError
        If ``size`` is not a positive integer.
    """
    if not isinstance(size, (int, np.integer)) or isinstance(size, bool) or size <= 0:
        raise InvalidStructuringElementError(
            f"Structuring element size must be a positive integer, got {size!r}"
        )
    radius = (int(size) - 1) // 2
    if radius <= 0:
        return None
    y, x = np.ogrid[-radius:radius + 1, -radius:radius + 1]
    return np.sqrt(x * x + y * y) < radius


def dilate(field: ScalarField, size: int) -> ScalarField:
    """Grayscale dilation with a disk of diameter ``size``."""
    footprint = disk_footprint(size)
    if footprint is None:
        return ScalarField(field.width, field.height)
    data = field.to_array(copy=False).astype(np.float64)
    out = maximum_filter(data, footprint=footprint, mode='constant', cval=-np.inf)
    return ScalarField.from_array(np.maximum(out, 0.0), copy=False)


def erode(field: ScalarField, size: int, ceiling: float = DEFAULT_CEILING) -> ScalarField:
    """Grayscale erosion with a disk of diameter ``size``.

    Values above ``ceiling`` are clipped to it.
    """
    footprint = disk_footprint(size)
    if footprint is None:
        return ScalarField(field.width, field.height)
    data = field.to_array(copy=False).astype(np.float64)
    out = minimum_filter(data, footprint=footprint, mode='constant', cval=np.inf)
    return ScalarField.from_array(np.minimum(out, ceiling), copy=False)


def closing(field: ScalarField, size: int, ceiling: float = DEFAULT_CEILING) -> ScalarField:
    """Dilation followed by erosion."""
    return erode(dilate(field, size), size, ceiling)


def opening(field: ScalarField, size: int, ceiling: float = DEFAULT_CEILING) -> ScalarField:
    """Erosion followed by dilation."""
    return dilate(erode(field, size, ceiling), size)


_OPERATIONS = {
    'erode': lambda f, s, c: erode(f, s, c),
    'dilate': lambda f, s, c: dilate(f, s),
    'open': opening,
    'close': closing,
}


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.BINARY,
                description='Disk dilation, erosion, opening and closing')
class MorphologicalFilter(PlanewiseTransformMixin, ImageTransform):
    """Disk-element morphological operation.

    Parameters
    ----------
    operation : str
        ``'erode'``, ``'dilate'``, ``'open'`` or ``'close'``. Default
        ``'close'``.
    size : int
        Structuring element diameter. Default 3.
    ceiling : float
        Erosion accumulator start. Default 255.

    Examples
    --------
    Fill pinholes in a binarized mask:

    >>> closer = MorphologicalFilter(operation='close', size=6)
    >>> mask = closer.apply(binary)
    """

    operation: Annotated[str, Options(*MORPHOLOGY_OPERATIONS),
                         Desc('Morphological operation')] = 'close'
    size: Annotated[int, Range(min=1), Desc('Structuring element diameter')] = 3
    ceiling: Annotated[float, Desc('Erosion accumulator start')] = DEFAULT_CEILING

    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        params = self._resolve_params(kwargs)
        logger.debug("MorphologicalFilter: %s, size %d",
                     params['operation'], params['size'])
        op = _OPERATIONS[params['operation']]
        return op(source, params['size'], params['ceiling'])
