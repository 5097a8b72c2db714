# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .errors import (
    DimensionMismatchError,
    DomainError,
    EmptyMatrixError,
    MalformedInputError,
)
from .utils import BIAS_VALUE, as_float_array, check_count, check_index
from .vector import Vector

logger = logging.getLogger(__name__)


def validate_matrix_input(rows: Sequence[Sequence[float]]) -> None:
    """
    Check that a 2D literal is non-empty and rectangular.

    Raises
    ------
    EmptyMatrixError    : no rows, or an empty first row
    MalformedInputError : a row whose length differs from the first row
    """
    if len(rows) == 0:
        raise EmptyMatrixError("Input matrix should not be empty")
    num_col = len(rows[0])
    if num_col == 0:
        raise EmptyMatrixError("Empty row vector detected")
    for i, row in enumerate(rows[1:], start=2):
        if len(row) != num_col:
            raise MalformedInputError(
                f"Number of columns does not agree: row {i} has {len(row)}, expected {num_col}"
            )


class Matrix:
    """
    Dense R x C matrix of float64 values.

    Rows and columns are addressed 1-based. Storage is a single
    row-major ndarray, so every row always has the same length and
    enumeration order of rows / columns is simply ascending index.

    Mutating methods work in place and return ``self``; ``multiply``,
    ``transpose`` and ``with_bias`` return new matrices.
    """

    __slots__ = ("_data",)

    def __init__(self, rows: Sequence[Sequence[float]]):
        rows = [list(r) for r in rows]
        validate_matrix_input(rows)
        self._data = as_float_array(rows, ndim=2)

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> "Matrix":
        m = cls.__new__(cls)
        m._data = arr
        return m

    @classmethod
    def empty(cls) -> "Matrix":
        """A matrix without rows. Fails ``validate`` until a row is appended."""
        return cls._wrap(np.zeros((0, 0), dtype=np.float64))

    @classmethod
    def zeros(cls, num_row: int, num_col: int) -> "Matrix":
        num_row, num_col = check_count(num_row, "num_row"), check_count(num_col, "num_col")
        return cls._wrap(np.zeros((num_row, num_col), dtype=np.float64))

    @classmethod
    def constant(cls, num_row: int, num_col: int, value: float) -> "Matrix":
        num_row, num_col = check_count(num_row, "num_row"), check_count(num_col, "num_col")
        return cls._wrap(np.full((num_row, num_col), value, dtype=np.float64))

    @classmethod
    def from_numpy(cls, A: np.ndarray) -> "Matrix":
        A = as_float_array(A, ndim=2)
        if A.shape[0] == 0 or A.shape[1] == 0:
            raise EmptyMatrixError(f"Input matrix should not be empty, got {A.shape}")
        return cls._wrap(A)

    @classmethod
    def feature_matrix(cls, v1: Vector, v2: Vector, degree: int) -> "Matrix":
        """
        Polynomial feature expansion of two source vectors.

        For degree = 2 every row becomes::

            1, x1, x2, x1^2, x1*x2, x2^2

        i.e. a leading ones column followed, for i = 1..degree and
        j = 0..i, by the column v1^(i-j) * v2^j. degree = 0 yields the
        ones column only. The source vectors are not modified.

        Raises
        ------
        DimensionMismatchError : if v1 and v2 differ in length
        DomainError            : if degree is negative
        """
        if v1.length != v2.length:
            raise DimensionMismatchError(
                f"Length of both input vectors are not the same: {v1.length} != {v2.length}"
            )
        if degree < 0:
            raise DomainError(f"degree must be non-negative, got {degree}")

        m = cls.constant(v1.length, 1, 1.0)
        for i in range(1, degree + 1):
            for j in range(i + 1):
                # fresh copies, power() works in place
                col = v1.copy().power(i - j).multiply_vector(v2.copy().power(j))
                m._append_column(col)
        logger.debug(
            "feature_matrix: degree %d over %d samples -> %d columns",
            degree,
            m.row_count,
            m.column_count,
        )
        return m

    @classmethod
    def load(cls, source, row: str = ":", col: str = ":") -> "Matrix":
        """Load a CSV file into a matrix, see ``loader.load_matrix``."""
        from .loader import load_matrix

        return load_matrix(source, row, col)

    # ------------------------------------------------------------------
    # shape / validation
    # ------------------------------------------------------------------
    @property
    def row_count(self) -> int:
        return self._data.shape[0]

    @property
    def column_count(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    def validate(self) -> None:
        """
        A valid matrix has at least one row and at least one column.

        Raises
        ------
        EmptyMatrixError
        """
        if self.row_count == 0:
            raise EmptyMatrixError("Matrix is empty")
        if self.column_count == 0:
            raise EmptyMatrixError("First row element is empty")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data.tolist()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def copy(self) -> "Matrix":
        return Matrix._wrap(self._data.copy())

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    # ------------------------------------------------------------------
    # get / set
    # ------------------------------------------------------------------
    # unchecked: row and col must already be in 1..row_count, 1..column_count,
    # 0 or a negative value would silently wrap around to the end
    def _get(self, row: int, col: int) -> float:
        return float(self._data[row - 1, col - 1])

    def _set(self, row: int, col: int, value: float) -> None:
        self._data[row - 1, col - 1] = value

    def get(self, row: int, col: int) -> float:
        """Value at (row, col), e.g. ``get(5, 1)`` is row 5, column 1."""
        r = check_index(row, self.row_count, "row")
        c = check_index(col, self.column_count, "column")
        return float(self._data[r, c])

    def set(self, row: int, col: int, value: float) -> None:
        r = check_index(row, self.row_count, "row")
        c = check_index(col, self.column_count, "column")
        self._data[r, c] = value

    def _row(self, row: int) -> Vector:
        return Vector._wrap(self._data[row - 1])

    def _column(self, col: int) -> Vector:
        return Vector._wrap(self._data[:, col - 1].copy())

    def row(self, row: int) -> Vector:
        """Row `row` as a Vector sharing storage with this matrix."""
        check_index(row, self.row_count, "row")
        return self._row(row)

    def column(self, col: int) -> Vector:
        """Column `col` as a freshly allocated Vector."""
        check_index(col, self.column_count, "column")
        return self._column(col)

    def rows(self) -> List[Vector]:
        return [self._row(i) for i in range(1, self.row_count + 1)]

    def columns(self) -> List[Vector]:
        return [self._column(j) for j in range(1, self.column_count + 1)]

    # ------------------------------------------------------------------
    # arithmetic
    # ------------------------------------------------------------------
    def add_scalar(self, x: float) -> "Matrix":
        self._data += x
        return self

    def multiply_scalar(self, x: float) -> "Matrix":
        self._data *= x
        return self

    def add_matrix(self, other: "Matrix") -> "Matrix":
        """Elementwise sum, in place. Both shapes must agree."""
        self.validate()
        other.validate()
        if self.row_count != other.row_count:
            raise DimensionMismatchError(
                f"Row number does not agree: {self.row_count} != {other.row_count}"
            )
        if self.column_count != other.column_count:
            raise DimensionMismatchError(
                f"Column number does not agree: {self.column_count} != {other.column_count}"
            )
        self._data += other._data
        return self

    def multiply(self, other: "Matrix") -> "Matrix":
        """
        Matrix product self @ other, the order matters.

        result[i][j] = dot(row_i(self), col_j(other))

        Returns
        -------
        Matrix of shape (self.row_count, other.column_count)

        Raises
        ------
        DimensionMismatchError : if self.column_count != other.row_count
        """
        self.validate()
        other.validate()
        if self.column_count != other.row_count:
            raise DimensionMismatchError(
                "First column and second row dimensions don't agree: "
                f"{self.column_count} != {other.row_count}"
            )
        return Matrix._wrap(self._data @ other._data)

    def transpose(self) -> "Matrix":
        self.validate()
        return Matrix._wrap(self._data.T.copy())

    # ------------------------------------------------------------------
    # growing the matrix
    # ------------------------------------------------------------------
    def append_row(self, v: Vector) -> "Matrix":
        """
        Add `v` as the new last row.

        An empty matrix takes its column count from the first appended row.
        """
        if self.row_count == 0:
            if v.length == 0:
                raise EmptyMatrixError("Empty row vector detected")
            self._data = v.to_numpy()[None, :]
            return self
        if v.length != self.column_count:
            raise DimensionMismatchError(
                f"Vector length must be the same as number of columns: {v.length} != {self.column_count}"
            )
        self._data = np.vstack([self._data, v.to_numpy()])
        return self

    def _append_column(self, v: Vector) -> None:
        self._data = np.column_stack([self._data, v.to_numpy()])

    def append_column(self, v: Vector) -> "Matrix":
        """Add `v` as the new last column, element i goes to row i."""
        self.validate()
        if v.length != self.row_count:
            raise DimensionMismatchError(
                f"Vector length must be the same as number of rows: {v.length} != {self.row_count}"
            )
        self._append_column(v)
        return self

    def prepend_column(self, value: float = BIAS_VALUE) -> "Matrix":
        """Shift every column right and fill the new first column with `value`."""
        self.validate()
        ones = np.full((self.row_count, 1), value, dtype=np.float64)
        self._data = np.hstack([ones, self._data])
        return self

    def with_bias(self, value: float = BIAS_VALUE) -> "Matrix":
        """Copy of this matrix with a constant first column, self is unchanged."""
        return self.copy().prepend_column(value)
