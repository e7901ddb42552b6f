# -*- coding: utf-8 -*-
"""
Watershed - Immersion segmentation of a scalar field into labeled basins.

Priority-flood watershed after Vincent & Soille (1991). Intensities are
truncated to integer levels and processed from the lowest level upward.
At each level:

1. Every pixel of the level is marked ``MASK``. Pixels with an
   8-neighbor that already holds a region id or ``WATERSHED`` are queued
   at flood distance 1.
2. The queue is drained breadth-first, one distance ring at a time
   (rings are separated by a sentinel entry). A dequeued pixel inherits
   the region id of a labeled neighbor whose distance does not exceed the
   current ring; meeting a second, different id turns it into
   ``WATERSHED``. Unvisited ``MASK`` neighbors are stamped with the next
   distance and queued. A ``WATERSHED`` neighbor never relabels a
   ``MASK`` pixel.
3. Pixels still ``MASK`` are new minima. Each seeds a fresh region id
   that is flooded through the connected ``MASK`` pixels.

Working state lives in flat per-pixel arrays indexed by the linear index
``y * width + x`` and is discarded after the call. Within a level pixels
are visited in linear-index (row-major) order; this order is deliberate,
and a column-major visit would place plateau divides differently.

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
2026-10-10

Modified
--------
2026-10-19
"""

# Standard library
import logging
from collections import deque
from dataclasses import dataclass
from typing import Annotated, Any, Iterator, List

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

#: Label of a pixel not yet reached.
INIT = -1

#: Label of a pixel queued at the current level.
MASK = -2

#: Label of a divide pixel. Terminal.
WATERSHED = 0

#: Queue entry separating flood distance rings.
_RING_END = -1


@dataclass
class WatershedResult:
    """Output of ``watershed``.

    Attributes
    ----------
    boundary : ScalarField
        ``color`` at divide pixels, 0 elsewhere.
    labels : np.ndarray
        ``int32`` array of shape ``(height, width)``; positive region ids,
        ``WATERSHED`` (0) on divides.
    region_count : int
        Number of region ids assigned.
    """

    boundary: ScalarField
    labels: np.ndarray
    region_count: int


def _neighbours(index: int, width: int, height: int) -> Iterator[int]:
    """In-bounds 8-neighbors of a linear pixel index."""
    y, x = divmod(index, width)
    for dy in (-1, 0, 1):
        ny = y + dy
        if ny < 0 or ny >= height:
            continue
        row = ny * width
        for dx in (-1, 0, 1):
            nx = x + dx
            if (dx or dy) and 0 <= nx < width:
                yield row + nx


def _level_groups(levels: np.ndarray) -> List[List[int]]:
    """Linear indices grouped by level, lowest level first.

    Each group is in ascending linear-index order.
    """
    order = np.argsort(levels, kind='stable')
    sorted_levels = levels[order]
    starts = np.flatnonzero(np.diff(sorted_levels)) + 1
    return [chunk.tolist() for chunk in np.split(order, starts)]


def watershed(field: ScalarField, color: float = 255.0) -> WatershedResult:
    """Segment ``field`` into basins separated by watershed lines.

    Parameters
    ----------
    field : ScalarField
        Relief to flood, typically a gradient magnitude. Values must be
        finite and non-negative.
    color : float
        Value written to divide pixels in the boundary field.

    Returns
    -------
    WatershedResult

    Raises
    ------
    ValidationError
        If ``field`` holds a negative or non-finite value.

    Examples
    --------
    >>> result = watershed(gradient.magnitude)
    >>> result.region_count
    12
    """
    data = field.to_array(copy=False)
    height, width = data.shape
    if not np.all(np.isfinite(data)):
        raise ValidationError("Watershed input must be finite")
    if data.size and data.min() < 0:
        raise ValidationError(
            f"Watershed input must be non-negative, got minimum {data.min()}"
        )

    n = data.size
    labels = [INIT] * n
    distance = [0] * n
    region = 0
    queue: deque = deque()

    if n:
        levels = np.trunc(data).astype(np.int64).ravel()
        groups = _level_groups(levels)
    else:
        groups = []

    for pixels in groups:
        for p in pixels:
            labels[p] = MASK
            for q in _neighbours(p, width, height):
                if labels[q] >= WATERSHED:
                    distance[p] = 1
                    queue.append(p)
                    break

        ring = 1
        queue.append(_RING_END)
        while True:
            p = queue.popleft()
            if p == _RING_END:
                if not queue:
                    break
                queue.append(_RING_END)
                ring += 1
                p = queue.popleft()

            for q in _neighbours(p, width, height):
                label = labels[q]
                if distance[q] <= ring and label >= WATERSHED:
                    if label > WATERSHED:
                        if labels[p] == MASK:
                            labels[p] = label
                        elif labels[p] != label:
                            labels[p] = WATERSHED
                elif label == MASK and distance[q] == 0:
                    distance[q] = ring + 1
                    queue.append(q)

        for p in pixels:
            distance[p] = 0
            if labels[p] != MASK:
                continue
            region += 1
            labels[p] = region
            queue.append(p)
            while queue:
                s = queue.popleft()
                for q in _neighbours(s, width, height):
                    if labels[q] == MASK:
                        labels[q] = region
                        queue.append(q)

    label_array = np.asarray(labels, dtype=np.int32).reshape(height, width)
    boundary = np.where(label_array == WATERSHED, np.float32(color), np.float32(0.0))
    logger.debug("watershed: %d regions, %d divide pixels",
                 region, int(np.count_nonzero(label_array == WATERSHED)))
    return WatershedResult(
        boundary=ScalarField.from_array(boundary, copy=False),
        labels=label_array,
        region_count=region,
    )


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.SEGMENTATION,
                description='Immersion watershed boundary extraction')
class Watershed(PlanewiseTransformMixin, ImageTransform):
    """Watershed segmentation returning the divide-line field.

    Use ``watershed`` directly to also obtain the region labels.

    Parameters
    ----------
    color : float
        Value of divide pixels. Default 255.
    """

    color: Annotated[float, Range(min=0.0), Desc('Divide pixel value')] = 255.0

    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        params = self._resolve_params(kwargs)
        return watershed(source, params['color']).boundary
