# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised by mlkit.

Each error also derives from the builtin a caller would naturally catch,
so ``except ValueError`` keeps working for dimension and input problems.
"""


class MLError(Exception):
    """Base class for every error raised by this package."""


class DimensionMismatchError(MLError, ValueError):
    """Operands disagree in length, row count or column count."""


class OutOfRangeError(MLError, IndexError):
    """A 1-based index exceeds the current bound."""


class MalformedInputError(MLError, ValueError):
    """Non-numeric cell, bad range selector or ragged literal."""


class EmptyMatrixError(MalformedInputError):
    """Matrix has no rows or its first row is empty."""


class DomainError(MLError, ValueError):
    """A model parameter violates its domain (alpha <= 0, label not in {0, 1})."""
