# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dense float vector with 1-based public indexing
"""

from typing import Callable, Iterable, Iterator

import numpy as np

from .errors import DimensionMismatchError
from .utils import as_float_array, check_count, check_index


class Vector:
    """
    Ordered, mutable sequence of float64 values.

    Indices are 1-based at the public boundary (``get(1)`` is the first
    element) while storage is a plain 0-based ndarray. The length only
    changes through :meth:`append`.

    A Vector may wrap a view into a larger array (see ``Matrix.row``); in
    that case every in-place operation is visible through the owner, except
    :meth:`append`, which reallocates and detaches the vector.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[float] = ()):
        self._values = as_float_array(list(values), ndim=1)

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> "Vector":
        # no copy, the caller hands over (or shares) the buffer
        v = cls.__new__(cls)
        v._values = arr
        return v

    @classmethod
    def zeros(cls, n: int) -> "Vector":
        n = check_count(n)
        return cls._wrap(np.zeros(n, dtype=np.float64))

    @classmethod
    def constant(cls, n: int, value: float) -> "Vector":
        n = check_count(n)
        return cls._wrap(np.full(n, value, dtype=np.float64))

    @classmethod
    def load(cls, source, row: str = ":", col: str = ":") -> "Vector":
        """Load a single column of a CSV file, see ``loader.load_vector``."""
        from .loader import load_vector

        return load_vector(source, row, col)

    # ------------------------------------------------------------------
    # size / element access
    # ------------------------------------------------------------------
    @property
    def length(self) -> int:
        return self._values.shape[0]

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._values)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._values.tolist()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.length == other.length and bool(
            np.array_equal(self._values, other._values)
        )

    __hash__ = None  # mutable

    # unchecked: index must already be in 1..length, 0 or a negative index
    # would silently wrap around to the end
    def _get(self, index: int) -> float:
        return float(self._values[index - 1])

    def _set(self, index: int, value: float) -> None:
        self._values[index - 1] = value

    def get(self, index: int) -> float:
        """Return element `index` (1-based)."""
        return float(self._values[check_index(index, self.length)])

    def set(self, index: int, value: float) -> None:
        """Overwrite element `index` (1-based)."""
        self._values[check_index(index, self.length)] = value

    def set_values(self, values: Iterable[float]) -> "Vector":
        """Replace every element, the new values must keep the length."""
        arr = as_float_array(list(values), ndim=1)
        if arr.shape[0] != self.length:
            raise DimensionMismatchError(
                f"expected {self.length} values, got {arr.shape[0]}"
            )
        self._values[:] = arr
        return self

    def append(self, value: float) -> "Vector":
        self._values = np.append(self._values, np.float64(value))
        return self

    def copy(self) -> "Vector":
        return Vector._wrap(self._values.copy())

    def to_numpy(self) -> np.ndarray:
        return self._values.copy()

    # ------------------------------------------------------------------
    # elementwise transforms (in place)
    # ------------------------------------------------------------------
    def apply(self, op: Callable[[float], float]) -> "Vector":
        """Apply a scalar function to every element in place."""
        for i in range(self.length):
            self._values[i] = op(float(self._values[i]))
        return self

    def add_scalar(self, n: float) -> "Vector":
        self._values += n
        return self

    def multiply_scalar(self, n: float) -> "Vector":
        self._values *= n
        return self

    def power(self, n: float) -> "Vector":
        """Raise every element to the power `n` (3 ** 2 == 9)."""
        np.power(self._values, n, out=self._values)
        return self

    def log(self) -> "Vector":
        """Natural logarithm"""
        np.log(self._values, out=self._values)
        return self

    def log10(self) -> "Vector":
        """Decadic logarithm"""
        np.log10(self._values, out=self._values)
        return self

    def _check_same_length(self, other: "Vector") -> None:
        if self.length != other.length:
            raise DimensionMismatchError(
                f"Dimensions of both vectors don't agree: {self.length} != {other.length}"
            )

    def add_vector(self, other: "Vector") -> "Vector":
        self._check_same_length(other)
        self._values += other._values
        return self

    def multiply_vector(self, other: "Vector") -> "Vector":
        """Elementwise (Hadamard) product, in place."""
        self._check_same_length(other)
        self._values *= other._values
        return self

    def _dot(self, other: "Vector") -> float:
        return float(self._values @ other._values)

    def dot(self, other: "Vector") -> float:
        """
        Scalar product v[1]*w[1] + ... + v[n]*w[n].

        Raises
        ------
        DimensionMismatchError : if the lengths differ
        """
        self._check_same_length(other)
        return self._dot(other)
