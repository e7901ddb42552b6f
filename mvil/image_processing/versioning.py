# -*- coding: utf-8 -*-
"""
Processor Versioning - Version and capability metadata decorators.

``@processor_version`` stamps ``__processor_version__`` on a processor
class; ``@processor_tags`` stamps ``__processor_tags__`` with its
category and a short description. ``ImageProcessor`` warns once per class
when a concrete processor is instantiated without a version.

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

# Standard library
import importlib.metadata
from typing import Optional, Type, TypeVar

# MVIL internal
from mvil.vocabulary import ProcessorCategory

T = TypeVar('T')


def processor_version(version: Optional[str] = None):
    """Class decorator that records the algorithm version of a processor.

    Parameters
    ----------
    version : str, optional
        Semantic version string such as ``'1.0.0'``. When omitted the
        installed ``mvil`` distribution version is used, or ``'unknown'``
        when the package is not installed.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class Identity(ImageTransform):
    ...     def apply(self, source, **kwargs):
    ...         return source
    >>> Identity.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('mvil')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = 'unknown'
        return cls
    return decorator


def processor_tags(
    category: Optional[ProcessorCategory] = None,
    description: Optional[str] = None,
):
    """Class decorator for processor capability metadata.

    Parameters
    ----------
    category : ProcessorCategory, optional
        Functional grouping of the processor.
    description : str, optional
        Short human-readable purpose.

    Raises
    ------
    TypeError
        If ``category`` is not a ``ProcessorCategory`` member. Checked at
        decoration time so that typos fail on import.
    """
    if category is not None and not isinstance(category, ProcessorCategory):
        raise TypeError(
            f"category must be a ProcessorCategory member, got {category!r}"
        )

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {
            'category': category,
            'description': description,
        }
        return cls
    return decorator
