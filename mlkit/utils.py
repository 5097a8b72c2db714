# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numbers

import numpy as np

from .errors import DomainError, MalformedInputError, OutOfRangeError

BIAS_VALUE: float = 1.0
DEFAULT_THRESHOLD: float = 0.5

# bool, signed int, unsigned int, float
NUMERIC_KINDS = "biuf"


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def as_float_array(values, ndim: int) -> np.ndarray:
    """
    Copy `values` into a float64 array of rank `ndim`.

    Strings are rejected even when they spell a number, text only becomes
    numeric through the loader.

    Raises
    ------
    MalformedInputError : if a value is not numeric or the rank is wrong
    """
    try:
        raw = np.asarray(values)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"input is not numeric: {exc}") from exc
    if raw.size and raw.dtype.kind not in NUMERIC_KINDS:
        raise MalformedInputError(f"input is not numeric: dtype {raw.dtype}")
    try:
        arr = np.array(raw, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"input is not numeric: {exc}") from exc
    if arr.ndim != ndim:
        raise MalformedInputError(f"expected a {ndim}-D input, got {arr.ndim}-D")
    return arr


def check_count(n, what: str = "length") -> int:
    """
    Validate a size argument.

    Raises
    ------
    DomainError : if n is not a non-negative integer
    """
    if not _is_int(n) or n < 0:
        raise DomainError(f"{what} should be a non-negative integer, got {n!r}")
    return int(n)


def check_index(index: int, bound: int, what: str = "index") -> int:
    """
    Translate a public 1-based index into a 0-based storage offset.

    Raises
    ------
    OutOfRangeError : if index is not an integer in 1..bound
    """
    if not _is_int(index) or not 1 <= index <= bound:
        raise OutOfRangeError(f"{what} {index!r} out of range 1..{bound}")
    return int(index) - 1
