# -*- coding: utf-8 -*-
"""
MVIL - Machine Vision Inspection Library.

Edge extraction, adaptive binarization, morphological cleanup and
watershed segmentation of single- or multi-plane scalar image fields.

Sub-packages
------------
types
    ``ScalarField`` and ``Histogram``.
image_processing
    Kernels, edge detection, intensity transforms, local thresholding,
    morphology, watershed and Hough accumulation, with the
    ``ImageTransform`` processor framework and ``Pipeline``.
IO
    Pillow raster codec.
parallel
    Row dispatch over a thread pool.
cli
    ``mvil`` console entry point.

Dependencies
------------
numpy
scipy
Pillow

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
2026-10-14
"""

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from mvil.exceptions import (
    MvilError,
    ValidationError,
    DimensionMismatchError,
    InvalidStructuringElementError,
    DegenerateRangeError,
    ProcessorError,
    DependencyError,
)
from mvil.vocabulary import (
    ProcessorCategory,
    GradientNorm,
    OutputFormat,
)
from mvil.types import ScalarField, Histogram

__all__ = [
    'MvilError',
    'ValidationError',
    'DimensionMismatchError',
    'InvalidStructuringElementError',
    'DegenerateRangeError',
    'ProcessorError',
    'DependencyError',
    'ProcessorCategory',
    'GradientNorm',
    'OutputFormat',
    'ScalarField',
    'Histogram',
]
