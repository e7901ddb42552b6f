# -*- coding: utf-8 -*-
"""
Image Processing Module - Kernels, edges, thresholds, morphology, segmentation.

Provides the numeric algorithms of MVIL as plain functions operating on
``ScalarField`` planes, each paired with an ``ImageTransform`` wrapper
carrying tunable parameters, a version and a category tag. Transforms
accept either one plane or a sequence of planes and compose through
``Pipeline``.

Sub-modules
-----------
kernels.py
    Clamped-sum ``convolve``, Gaussian, Mexican hat and sharpen kernels,
    min/max ``scale``.
edges.py
    Sobel gradient, non-maximum suppression, hysteresis and ``canny``.
intensity.py
    ``auto_contrast``, ``auto_gamma``, ``invert``.
threshold.py
    Phansalkar local adaptive binarization.
morphology.py
    Disk dilation, erosion, opening and closing.
watershed.py
    Immersion watershed segmentation.
hough.py
    Fixed-radius Hough circle accumulator.
pipeline.py
    Sequential composition of ``ImageTransform`` steps.
versioning.py
    ``@processor_version`` and ``@processor_tags`` decorators.
params.py
    ``Range``, ``Options``, ``Desc`` constraint markers for tunable
    parameters via ``Annotated`` type hints.

Usage
-----
Binarize a low-contrast plane and fill pinholes:

    >>> from mvil.image_processing import (
    ...     AutoContrast, MorphologicalFilter, Pipeline, PhansalkarThreshold)
    >>> pipe = Pipeline([
    ...     AutoContrast(depth=8),
    ...     PhansalkarThreshold(radius=15),
    ...     MorphologicalFilter(operation='close', size=6),
    ... ])
    >>> mask = pipe.apply(plane)

Segment the gradient of a plane:

    >>> from mvil.image_processing import sobel, watershed
    >>> result = watershed(sobel(plane).magnitude)
    >>> result.region_count

Dependencies
------------
numpy
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
2026-10-05

Modified
--------
2026-10-14
"""

from mvil.image_processing.base import (
    ImageProcessor,
    ImageTransform,
    PlanewiseTransformMixin,
)
from mvil.image_processing.kernels import (
    SOBEL_X,
    SOBEL_Y,
    convolve,
    gaussian_kernel,
    mexican_hat_kernel,
    sharpen_kernel,
    scale,
    Convolution,
    GaussianBlur,
    LinearScale,
)
from mvil.image_processing.edges import (
    Gradient,
    sobel,
    orientation_sector,
    non_max_suppression,
    hysteresis,
    canny,
    CannyEdgeDetector,
)
from mvil.image_processing.intensity import (
    auto_contrast,
    auto_gamma,
    invert,
    AutoContrast,
    AutoGamma,
    Invert,
)
from mvil.image_processing.threshold import phansalkar, PhansalkarThreshold
from mvil.image_processing.morphology import (
    disk_footprint,
    dilate,
    erode,
    closing,
    opening,
    MorphologicalFilter,
)
from mvil.image_processing.watershed import (
    WatershedResult,
    watershed,
    Watershed,
)
from mvil.image_processing.hough import hough_circles, HoughCircles
from mvil.image_processing.pipeline import Pipeline
from mvil.image_processing.versioning import processor_version, processor_tags
from mvil.image_processing.params import Range, Options, Desc, ParamSpec
from mvil.vocabulary import ProcessorCategory, GradientNorm

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'PlanewiseTransformMixin',
    'SOBEL_X',
    'SOBEL_Y',
    'convolve',
    'gaussian_kernel',
    'mexican_hat_kernel',
    'sharpen_kernel',
    'scale',
    'Convolution',
    'GaussianBlur',
    'LinearScale',
    'Gradient',
    'sobel',
    'orientation_sector',
    'non_max_suppression',
    'hysteresis',
    'canny',
    'CannyEdgeDetector',
    'auto_contrast',
    'auto_gamma',
    'invert',
    'AutoContrast',
    'AutoGamma',
    'Invert',
    'phansalkar',
    'PhansalkarThreshold',
    'disk_footprint',
    'dilate',
    'erode',
    'closing',
    'opening',
    'MorphologicalFilter',
    'WatershedResult',
    'watershed',
    'Watershed',
    'hough_circles',
    'HoughCircles',
    'Pipeline',
    'processor_version',
    'processor_tags',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
    'ProcessorCategory',
    'GradientNorm',
]
