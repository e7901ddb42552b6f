# -*- coding: utf-8 -*-
"""
MVIL Exception Hierarchy - Typed failures for scalar field processing.

Every MVIL exception subclasses ``MvilError`` and the closest built-in
exception, so callers may catch either the library-specific type or the
familiar builtin (``ValueError``, ``ArithmeticError``, ...).

Dimension and parameter problems are detected before any computation
runs. Numeric degeneracies (zero denominators in rescale, gamma or
division) are reported as ``DegenerateRangeError`` instead of letting
NaN or infinity leak into a result field.

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
2026-10-14
"""


class MvilError(Exception):
    """Base exception for all MVIL errors."""


class ValidationError(MvilError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for out-of-range parameters, invalid option names, even
    kernel dimensions and other input validation failures.
    """


class DimensionMismatchError(ValidationError):
    """Binary field operation on operands of different width or height."""


class InvalidStructuringElementError(ValidationError):
    """Morphology structuring element with a non-positive size."""


class DegenerateRangeError(MvilError, ArithmeticError):
    """A rescale, gamma or division would divide by zero.

    Raised when the observed value range collapses (``min == max``), when a
    contrast clip range is empty, when a field mean makes the gamma
    exponent undefined, or when a divisor is zero.
    """


class ProcessorError(MvilError, RuntimeError):
    """Algorithm failure during ``apply()``.

    Raised when a processor encounters a non-recoverable error that is
    not an input validation issue.
    """


class DependencyError(MvilError, ImportError):
    """Missing optional dependency required for a specific module."""
