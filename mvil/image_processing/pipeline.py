# -*- coding: utf-8 -*-
"""
Pipeline - Composable sequence of field transforms.

Chains ``ImageTransform`` instances into one transform; the output of
each step is the input of the next. Progress reported by the steps is
rescaled onto the whole chain.

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
2026-10-06

Modified
--------
2026-10-15
"""

# Standard library
import logging
from typing import Any, List, Sequence

# MVIL internal
from mvil.exceptions import ProcessorError
from mvil.image_processing.base import ImageTransform
from mvil.types.field import ScalarField

logger = logging.getLogger(__name__)


class Pipeline(ImageTransform):
    """Sequential chain of field transforms.

    Parameters
    ----------
    steps : Sequence[ImageTransform]
        Transforms applied in order. At least one is required.

    Examples
    --------
    The binarization chain used by the ``mvil binarize`` command:

    >>> from mvil.image_processing import (
    ...     AutoContrast, MorphologicalFilter, Pipeline, PhansalkarThreshold)
    >>> pipe = Pipeline([
    ...     AutoContrast(depth=8),
    ...     PhansalkarThreshold(radius=15),
    ...     MorphologicalFilter(operation='close', size=6),
    ... ])
    >>> mask = pipe.apply(plane)
    """

    __processor_version__ = '1.0.0'

    def __init__(self, steps: Sequence[ImageTransform]) -> None:
        if not steps:
            raise ValueError("Pipeline requires at least one transform")
        for i, step in enumerate(steps):
            if not isinstance(step, ImageTransform):
                raise TypeError(
                    f"Step {i} is not an ImageTransform: {type(step).__name__}"
                )
        self._steps: List[ImageTransform] = list(steps)

    @property
    def steps(self) -> List[ImageTransform]:
        """Shallow copy of the step list."""
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"Pipeline({[type(s).__name__ for s in self._steps]})"

    def apply(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        """Run every step in order.

        ``progress_callback`` is intercepted; each step reports its share
        of the overall progress. Other keyword arguments are forwarded to
        every step unchanged.

        Raises
        ------
        ProcessorError
            If a step returns something other than a ``ScalarField``.
        """
        n = len(self._steps)
        outer_cb = kwargs.pop('progress_callback', None)

        result = source
        for i, step in enumerate(self._steps):
            logger.debug("Pipeline step %d/%d: %s", i + 1, n,
                         type(step).__qualname__)
            step_kwargs = dict(kwargs)
            if outer_cb is not None:
                step_kwargs['progress_callback'] = (
                    lambda f, _b=i / n, _s=1.0 / n: outer_cb(_b + f * _s)
                )
            result = step.apply(result, **step_kwargs)
            if not isinstance(result, ScalarField):
                raise ProcessorError(
                    f"Step {i} ({type(step).__name__}) returned "
                    f"{type(result).__name__}, expected ScalarField"
                )
            if outer_cb is not None:
                outer_cb((i + 1) / n)
        return result
