# -*- coding: utf-8 -*-
"""
Histogram - Frequency table over quantized intensity levels.

Counts how many pixels of a ``ScalarField`` fall on each integer level
``0..max_level``. Values are truncated toward zero and clamped into
``[0, min(255, max_level)]`` before counting, so the table is an 8-bit
histogram even when ``max_level`` describes a deeper bit depth.

``min`` and ``max`` record the lowest and highest *nonzero* level seen.
They start at sentinel extremes and only move when a nonzero level is
counted; an image with no nonzero pixel leaves both at their sentinels
(see ``is_empty``).

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
2026-10-05

Modified
--------
2026-10-05
"""

# Third-party
import numpy as np

# MVIL internal
from mvil.exceptions import ValidationError
from mvil.types.field import ScalarField

#: Highest level a pixel is clamped to before counting.
BYTE_MAX = 255

#: Sentinel for ``Histogram.min`` before any nonzero level is counted.
MIN_SENTINEL = np.iinfo(np.int64).max

#: Sentinel for ``Histogram.max`` before any nonzero level is counted.
MAX_SENTINEL = np.iinfo(np.int64).min


class Histogram:
    """Per-level pixel counts of a scalar field.

    Parameters
    ----------
    field : ScalarField
        Source plane.
    max_level : int
        Highest level index ``N``; the table has ``N + 1`` bins. For a bit
        depth ``d`` this is ``2**d - 1``.

    Attributes
    ----------
    counts : np.ndarray
        ``int64`` array of length ``max_level + 1``.
    min : int
        Lowest populated nonzero level, or ``MIN_SENTINEL``.
    max : int
        Highest populated nonzero level, or ``MAX_SENTINEL``.

    Examples
    --------
    >>> import numpy as np
    >>> from mvil.types import Histogram, ScalarField
    >>> h = Histogram(ScalarField.from_array(np.array([[0, 3], [3, 9]])), 255)
    >>> h[3], h.min, h.max
    (2, 3, 9)
    """

    def __init__(self, field: ScalarField, max_level: int) -> None:
        if max_level < 0:
            raise ValidationError(f"max_level must be >= 0, got {max_level}")
        self.max_level = int(max_level)
        ceiling = min(BYTE_MAX, self.max_level)

        values = np.trunc(field.to_array(copy=False))
        levels = np.clip(values, 0, ceiling).astype(np.int64).ravel()
        self.counts = np.bincount(levels, minlength=self.max_level + 1)

        populated = np.flatnonzero(self.counts[1:]) + 1
        if populated.size:
            self.min = int(populated[0])
            self.max = int(populated[-1])
        else:
            self.min = MIN_SENTINEL
            self.max = MAX_SENTINEL

    def __getitem__(self, level: int) -> int:
        return int(self.counts[level])

    def __len__(self) -> int:
        return len(self.counts)

    @property
    def total(self) -> int:
        """Number of pixels counted."""
        return int(self.counts.sum())

    @property
    def is_empty(self) -> bool:
        """True when no nonzero level was counted."""
        return self.min == MIN_SENTINEL

    def __repr__(self) -> str:
        return (
            f"Histogram(levels={len(self)}, total={self.total}, "
            f"min={None if self.is_empty else self.min}, "
            f"max={None if self.is_empty else self.max})"
        )
