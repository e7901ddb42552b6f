# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for field processors.

``ImageProcessor`` is the common base of every MVIL processor. It provides
version checking at first instantiation, ``typing.Annotated`` tunable
parameter collection with automatic ``__init__`` generation, runtime
parameter resolution through ``**kwargs`` and optional progress reporting.

``ImageTransform`` is the ABC for dense transforms that map one
``ScalarField`` to another. ``PlanewiseTransformMixin`` lets a transform
accept a multi-plane image (a sequence of fields) by applying the
single-plane implementation to each plane independently.

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
2026-10-12
"""

# Standard library
import logging
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence, Tuple, Union

# MVIL internal
from mvil.image_processing.params import ParamSpec, collect_param_specs, make_init
from mvil.types.field import ScalarField

logger = logging.getLogger(__name__)

Planes = Union[ScalarField, Sequence[ScalarField]]


class ImageProcessor(ABC):
    """Common base class for all field processors.

    **Version checking**: concrete subclasses that do not declare a
    version via ``@processor_version('x.y.z')`` trigger a ``UserWarning``
    the first time they are instantiated. The check lives in ``__new__``
    so that class decorators have already run.

    **Tunable parameters**: subclasses declare parameters as
    ``Annotated`` class fields using markers from
    :mod:`mvil.image_processing.params`. ``__init_subclass__`` collects
    them into ``__param_specs__`` and generates an ``__init__`` unless the
    subclass defines its own. ``_resolve_params(kwargs)`` merges instance
    values with per-call overrides and validates them.
    """

    _version_warned_classes: set = set()

    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = make_init(cls.__param_specs__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance parameter values with runtime overrides.

        Keys in ``kwargs`` that are not declared parameters (for example
        ``progress_callback``) are ignored.

        Raises
        ------
        ValidationError
            If a resolved value violates its declaration.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            value = kwargs[spec.name] if spec.name in kwargs else getattr(self, spec.name)
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(self, kwargs: Dict[str, Any], fraction: float) -> None:
        """Call ``kwargs['progress_callback'](fraction)`` when supplied."""
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


class ImageTransform(ImageProcessor):
    """Abstract base class for dense field-to-field transforms."""

    @abstractmethod
    def apply(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        """Apply the transform to ``source`` and return a new field.

        Parameters
        ----------
        source : ScalarField
            Input plane. Never modified.
        **kwargs
            Per-call overrides of tunable parameters and an optional
            ``progress_callback``.
        """
        ...


class PlanewiseTransformMixin:
    """Apply a single-plane transform to every plane of a multi-plane image.

    Subclasses implement ``_apply_plane``. ``apply`` accepts either one
    ``ScalarField`` (returning one field) or a sequence of fields
    (returning a list, one output per plane)::

        class MyFilter(PlanewiseTransformMixin, ImageTransform):
            def _apply_plane(self, source, **kwargs):
                ...
    """

    def apply(self, source: Planes, **kwargs: Any) -> Union[ScalarField, List[ScalarField]]:
        if isinstance(source, ScalarField):
            return self._apply_plane(source, **kwargs)
        return [self._apply_plane(plane, **kwargs) for plane in source]

    @abstractmethod
    def _apply_plane(self, source: ScalarField, **kwargs: Any) -> ScalarField:
        ...
