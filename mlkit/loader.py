# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dataset loading and slicing.

A CSV file is read into a table of strings, every cell is parsed to a
float, and a sub-table is selected with two range selectors, one for
rows and one for columns:

- ``":"``   every row / column
- ``"N"``   the single 1-based index N
- ``"N:M"`` the inclusive 1-based range N..M (N < M)

Rows are filtered before columns. Nothing here mutates its input and no
partial result is ever returned.
"""

import logging
from typing import List, NamedTuple, Optional, Sequence

import numpy as np
import pandas as pd

from .errors import (
    DimensionMismatchError,
    MalformedInputError,
    OutOfRangeError,
)
from .matrix import Matrix, validate_matrix_input
from .vector import Vector

logger = logging.getLogger(__name__)

ALL = ":"


class Selector(NamedTuple):
    """Parsed range selector, both bounds 1-based and inclusive (None = all)."""

    lo: Optional[int] = None
    hi: Optional[int] = None

    @property
    def is_all(self) -> bool:
        return self.lo is None

    @property
    def is_single(self) -> bool:
        return self.lo is not None and self.lo == self.hi


def _parse_bound(text: str, selector: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise MalformedInputError(
            f"Invalid selector {selector!r}: {text!r} is not an integer"
        ) from exc
    if value < 1:
        raise OutOfRangeError(f"Invalid selector {selector!r}: indices start at 1")
    return value


def parse_selector(text: str) -> Selector:
    """
    Parse a row / column selector.

    Raises
    ------
    MalformedInputError : non-integer bound, lo >= hi or more than two parts
    OutOfRangeError     : a bound smaller than 1
    """
    if not isinstance(text, str):
        raise MalformedInputError(f"selector must be a string, got {text!r}")
    if text == ALL:
        return Selector()

    parts = text.split(":")
    if len(parts) == 1:
        n = _parse_bound(parts[0], text)
        return Selector(n, n)
    if len(parts) == 2:
        lo, hi = (_parse_bound(p, text) for p in parts)
        if lo >= hi:
            raise MalformedInputError(
                f"Invalid selector {text!r}: upper limit should be greater than lower"
            )
        return Selector(lo, hi)
    raise MalformedInputError(f"Invalid selector syntax {text!r}")


def _slice(sel: Selector, bound: int, what: str) -> slice:
    if sel.is_all:
        return slice(None)
    if sel.is_single:
        if sel.lo > bound:
            raise OutOfRangeError(f"{what} {sel.lo} out of range 1..{bound}")
        return slice(sel.lo - 1, sel.lo)
    if sel.lo > bound:
        raise OutOfRangeError(
            f"{what} range {sel.lo}:{sel.hi} selects nothing from 1..{bound}"
        )
    # ranges past the end are clipped
    return slice(sel.lo - 1, min(sel.hi, bound))


def parse_records(records: Sequence[Sequence[str]]) -> np.ndarray:
    """
    Convert a 2D table of strings into a float64 array.

    Every cell has to parse as a float, otherwise the whole conversion fails.

    Raises
    ------
    EmptyMatrixError    : empty table or empty first record
    MalformedInputError : ragged table or a non-numeric cell
    """
    validate_matrix_input(records)
    out = np.empty((len(records), len(records[0])), dtype=np.float64)
    for i, record in enumerate(records):
        for j, cell in enumerate(record):
            try:
                out[i, j] = float(cell)
            except (TypeError, ValueError) as exc:
                raise MalformedInputError(
                    f"cell ({i + 1}, {j + 1}) is not numeric: {cell!r}"
                ) from exc
    return out


def select(table: np.ndarray, row: str = ALL, col: str = ALL) -> np.ndarray:
    """
    Select the sub-table given by the `row` and `col` selectors.

    Returns
    -------
    A new (r, c) float64 array, `table` is left untouched.
    """
    if table.ndim != 2 or table.shape[0] == 0 or table.shape[1] == 0:
        raise MalformedInputError(f"expected a non-empty 2-D table, got {table.shape}")

    rows_sel = parse_selector(row)
    cols_sel = parse_selector(col)

    picked = table[_slice(rows_sel, table.shape[0], "row")]
    picked = picked[:, _slice(cols_sel, picked.shape[1], "column")]
    logger.debug("select rows=%r cols=%r -> %s", row, col, picked.shape)
    return picked.copy()


def read_records(source) -> List[List[str]]:
    """
    Read a comma separated file (path or file-like) into a table of strings.

    Every record is kept verbatim, there is no header line.
    """
    try:
        # short records are padded with empty cells, which come back as NaN
        df = pd.read_csv(
            source, header=None, dtype=str, keep_default_na=False, na_values=[""]
        )
    except pd.errors.EmptyDataError as exc:
        raise MalformedInputError(f"no data in {source!r}") from exc
    except pd.errors.ParserError as exc:
        raise MalformedInputError(f"could not parse {source!r}: {exc}") from exc
    missing = df.isna().to_numpy()
    if missing.any():
        row = int(missing.any(axis=1).argmax()) + 1
        raise MalformedInputError(
            f"record {row} in {source!r} is shorter than the others or has an empty cell"
        )
    return df.values.tolist()


def table_to_matrix(records, row: str = ALL, col: str = ALL) -> Matrix:
    return Matrix.from_numpy(select(parse_records(records), row, col))


def table_to_vector(records, row: str = ALL, col: str = ALL) -> Vector:
    """Like ``table_to_matrix`` but the selection must be a single column."""
    picked = select(parse_records(records), row, col)
    if picked.shape[1] != 1:
        raise DimensionMismatchError(
            f"Vector should have exactly 1 column, got {picked.shape[1]}"
        )
    return Vector._wrap(picked[:, 0].copy())


def load_table(source, row: str = ALL, col: str = ALL) -> np.ndarray:
    return select(parse_records(read_records(source)), row, col)


def load_matrix(source, row: str = ALL, col: str = ALL) -> Matrix:
    """
    Load the selected part of a CSV file as a Matrix.

    >>> X = load_matrix("data1.csv", "1:80", "1:2")  # doctest: +SKIP
    """
    return table_to_matrix(read_records(source), row, col)


def load_vector(source, row: str = ALL, col: str = ALL) -> Vector:
    """
    Load one column of a CSV file as a Vector.

    >>> y = load_vector("data1.csv", "1:80", "3")  # doctest: +SKIP
    """
    return table_to_vector(read_records(source), row, col)
