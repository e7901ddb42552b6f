# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for MVIL processors and codecs.

Single source of truth for controlled vocabularies: processor categories
used by ``@processor_tags`` and the raster output formats understood by the
image codec adapter.

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
2026-10-05

Modified
--------
2026-10-05
"""

from enum import Enum


class ProcessorCategory(Enum):
    """Processing categories for processor tagging.

    Each value corresponds to a functional grouping of scalar field
    operations.
    """

    FILTERS = "filters"
    ENHANCE = "enhance"
    EDGES = "edges"
    THRESHOLD = "threshold"
    BINARY = "binary"
    SEGMENTATION = "segmentation"
    FIND_FEATURES = "find_features"
    MATH = "math"


class GradientNorm(Enum):
    """Norm used to combine horizontal and vertical gradients."""

    L1 = "l1"
    L2 = "l2"


class OutputFormat(Enum):
    """Raster encodings supported by :mod:`mvil.IO.raster`.

    Values are the Pillow format identifiers.
    """

    BMP = "BMP"
    PNG = "PNG"
    JPEG = "JPEG"
    TIFF = "TIFF"

    @property
    def extension(self) -> str:
        """Canonical file extension, including the leading dot."""
        return _EXTENSIONS[self]


_EXTENSIONS = {
    OutputFormat.BMP: '.bmp',
    OutputFormat.PNG: '.png',
    OutputFormat.JPEG: '.jpg',
    OutputFormat.TIFF: '.tif',
}
