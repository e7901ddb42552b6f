# -*- coding: utf-8 -*-
"""
Scalar Field - Dense 2D single-precision grid for one image plane.

``ScalarField`` is the value type every MVIL component consumes and
produces. It wraps a C-contiguous ``float32`` numpy array of shape
``(height, width)``. Pixels are addressed by ``(x, y)`` (column, row) or by
the linear index ``y * width + x``.

Arithmetic operators never mutate their operands; each returns a new
field. Binary field operations require identical width and height and raise
``DimensionMismatchError`` otherwise. Conversions to and from numpy arrays
are explicit (``from_array`` / ``to_array``) so that copy cost is visible
at component boundaries.

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
2026-10-19
"""

# Standard library
from numbers import Real
from typing import Tuple, Union

# Third-party
import numpy as np

# MVIL internal
from mvil.exceptions import (
    DegenerateRangeError,
    DimensionMismatchError,
    ValidationError,
)

Index = Union[int, Tuple[int, int]]


class ScalarField:
    """Dense 2D grid of ``float32`` intensity values.

    Parameters
    ----------
    width : int
        Number of columns. Must be >= 0.
    height : int
        Number of rows. Must be >= 0.

    Notes
    -----
    The field is zero-filled at construction. Width and height are fixed
    for the lifetime of the field; pixel values are mutable through
    item assignment.

    Examples
    --------
    >>> from mvil.types import ScalarField
    >>> f = ScalarField(4, 3)
    >>> f[1, 2] = 7.0
    >>> f[f.index(1, 2)]
    7.0
    """

    __slots__ = ('_data',)

    def __init__(self, width: int, height: int) -> None:
        for name, value in (('width', width), ('height', height)):
            if not isinstance(value, (int, np.integer)) or isinstance(value, bool):
                raise ValidationError(
                    f"{name} must be an integer, got {type(value).__name__}"
                )
            if value < 0:
                raise ValidationError(f"{name} must be >= 0, got {value}")
        self._data = np.zeros((int(height), int(width)), dtype=np.float32)

    # -----------------------------------------------------------------
    # Explicit conversions
    # -----------------------------------------------------------------
    @classmethod
    def from_array(cls, array: np.ndarray, copy: bool = True) -> 'ScalarField':
        """Build a field from a 2D ``(rows, cols)`` array.

        Parameters
        ----------
        array : np.ndarray
            2D array of real values. Converted to ``float32``.
        copy : bool
            If False and ``array`` is already a contiguous ``float32``
            array, the field shares its memory. Default True.

        Returns
        -------
        ScalarField

        Raises
        ------
        ValidationError
            If ``array`` is not 2D or is complex-valued.
        """
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise ValidationError(
                f"Expected 2D (rows, cols) array, got shape {arr.shape}"
            )
        if np.iscomplexobj(arr):
            raise ValidationError("Complex-valued arrays are not supported")
        field = cls.__new__(cls)
        if copy:
            field._data = np.array(arr, dtype=np.float32, order='C')
        else:
            field._data = np.ascontiguousarray(arr, dtype=np.float32)
        return field

    def to_array(self, copy: bool = True) -> np.ndarray:
        """Return the backing store as a ``(height, width)`` array.

        Parameters
        ----------
        copy : bool
            Return an independent copy (default). With ``copy=False`` the
            returned array aliases the field.
        """
        return self._data.copy() if copy else self._data

    def copy(self) -> 'ScalarField':
        """Return an independent copy of this field."""
        return ScalarField.from_array(self._data, copy=True)

    # -----------------------------------------------------------------
    # Geometry and addressing
    # -----------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """``(height, width)``, matching numpy's ``(rows, cols)``."""
        return self._data.shape

    def __len__(self) -> int:
        return self._data.size

    def index(self, x: int, y: int) -> int:
        """Linear index of pixel ``(x, y)``: ``y * width + x``."""
        return y * self.width + x

    def __getitem__(self, key: Index) -> float:
        if isinstance(key, tuple):
            x, y = key
            return float(self._data[y, x])
        return float(self._data.reshape(-1)[key])

    def __setitem__(self, key: Index, value: float) -> None:
        if isinstance(key, tuple):
            x, y = key
            self._data[y, x] = value
        else:
            self._data.reshape(-1)[key] = value

    def __repr__(self) -> str:
        return f"ScalarField(width={self.width}, height={self.height})"

    # -----------------------------------------------------------------
    # Arithmetic
    # -----------------------------------------------------------------
    def _check_same_shape(self, other: 'ScalarField') -> None:
        if self.shape != other.shape:
            raise DimensionMismatchError(
                f"Field dimensions differ: {self.width}x{self.height} "
                f"vs {other.width}x{other.height}"
            )

    def _binary(self, other, op) -> 'ScalarField':
        if isinstance(other, ScalarField):
            self._check_same_shape(other)
            return ScalarField.from_array(op(self._data, other._data), copy=False)
        if isinstance(other, Real):
            return ScalarField.from_array(
                op(self._data, np.float32(other)), copy=False
            )
        return NotImplemented

    def __add__(self, other):
        return self._binary(other, np.add)

    __radd__ = __add__

    def __sub__(self, other):
        return self._binary(other, np.subtract)

    def __rsub__(self, other):
        return self._binary(other, lambda a, b: np.subtract(b, a))

    def __mul__(self, other):
        return self._binary(other, np.multiply)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, ScalarField):
            self._check_same_shape(other)
            if np.any(other._data == 0):
                raise DegenerateRangeError("Division by a field containing zeros")
        elif isinstance(other, Real) and other == 0:
            raise DegenerateRangeError("Division of a field by zero")
        return self._binary(other, np.divide)

    def __rtruediv__(self, other):
        if not isinstance(other, Real):
            return NotImplemented
        if np.any(self._data == 0):
            raise DegenerateRangeError("Division by a field containing zeros")
        return self._binary(other, lambda a, b: np.divide(b, a))

    def __neg__(self) -> 'ScalarField':
        return ScalarField.from_array(-self._data, copy=False)

    def __abs__(self) -> 'ScalarField':
        return self.abs()

    def __pow__(self, exponent: float) -> 'ScalarField':
        return self.power(exponent)

    def sqrt(self) -> 'ScalarField':
        """Elementwise square root. Negative values raise ``ValidationError``."""
        if np.any(self._data < 0):
            raise ValidationError("sqrt of a field with negative values")
        return ScalarField.from_array(np.sqrt(self._data), copy=False)

    def abs(self) -> 'ScalarField':
        return ScalarField.from_array(np.abs(self._data), copy=False)

    def power(self, exponent: float) -> 'ScalarField':
        """Elementwise ``value ** exponent`` (computed in double precision)."""
        out = np.power(self._data.astype(np.float64), float(exponent))
        return ScalarField.from_array(out, copy=False)

    # -----------------------------------------------------------------
    # Reductions
    # -----------------------------------------------------------------
    def _require_values(self, what: str) -> None:
        if self._data.size == 0:
            raise DegenerateRangeError(f"{what} of an empty field")

    def mean(self) -> float:
        """Arithmetic mean, ``sum / count``."""
        self._require_values('mean')
        return float(self._data.sum(dtype=np.float64) / self._data.size)

    def variance(self) -> float:
        """Mean squared deviation from the mean (population variance)."""
        mean = self.mean()
        dev = self._data.astype(np.float64) - mean
        return float(np.sum(dev * dev) / self._data.size)

    def standard_deviation(self) -> float:
        return float(np.sqrt(self.variance()))

    def min(self) -> float:
        self._require_values('min')
        return float(self._data.min())

    def max(self) -> float:
        self._require_values('max')
        return float(self._data.max())

    # -----------------------------------------------------------------
    # Plane helpers
    # -----------------------------------------------------------------
    def crop(self, x: int, y: int, width: int, height: int) -> 'ScalarField':
        """Copy the ``width`` x ``height`` window whose top-left is ``(x, y)``.

        Raises
        ------
        ValidationError
            If the window is empty or extends past the field bounds.
        """
        if width <= 0 or height <= 0:
            raise ValidationError(
                f"Crop size must be positive, got {width}x{height}"
            )
        if x < 0 or y < 0 or x + width > self.width or y + height > self.height:
            raise ValidationError(
                f"Crop window ({x}, {y}, {width}, {height}) exceeds field "
                f"bounds {self.width}x{self.height}"
            )
        return ScalarField.from_array(self._data[y:y + height, x:x + width])

    def overlay(self, other: 'ScalarField') -> 'ScalarField':
        """Pixelwise average of two equally sized fields."""
        return (self + other) / 2.0
