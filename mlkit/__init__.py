# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
mlkit
=====

A small linear-algebra and regression toolkit: dense vectors and matrices
with 1-based indexing, a CSV loader / slicer, and batch gradient-descent
regression models with optional L2 regularization.

Public API
~~~~~~~~~~
- Data structures
    - `Vector`, `Matrix`
- Loading
    - `load_matrix`, `load_vector`, `parse_selector`
- Models
    - `RegressionModel`, `LinearRegression`, `LogisticRegression`,
      `GradientDescent`
- Hypotheses
    - `LINEAR`, `LOGISTIC`, `get_hypothesis`, `sigmoid`
- Errors
    - `MLError` and its subclasses

Example
-------
>>> import mlkit as ml
>>> X = ml.Matrix([[1, 2, 3], [2, 3, 4], [3, 3, 3]])
>>> y = ml.Vector([1, 0, 0])
>>> model = ml.LogisticRegression(X, y, ml.Vector.zeros(4), alpha=1.0)
>>> round(model.cost_function(), 4)
0.6931
"""

from importlib.metadata import version as _pkg_version

from .errors import (
    DimensionMismatchError,
    DomainError,
    EmptyMatrixError,
    MalformedInputError,
    MLError,
    OutOfRangeError,
)
from .hypothesis import LINEAR, LOGISTIC, Hypothesis, get_hypothesis, sigmoid
from .loader import load_matrix, load_vector, parse_selector
from .matrix import Matrix
from .model import (
    GradientDescent,
    LinearRegression,
    LogisticRegression,
    RegressionModel,
)
from .vector import Vector

__all__ = [
    "Vector",
    "Matrix",
    "load_matrix",
    "load_vector",
    "parse_selector",
    "RegressionModel",
    "LinearRegression",
    "LogisticRegression",
    "GradientDescent",
    "Hypothesis",
    "LINEAR",
    "LOGISTIC",
    "get_hypothesis",
    "sigmoid",
    "MLError",
    "DimensionMismatchError",
    "OutOfRangeError",
    "MalformedInputError",
    "EmptyMatrixError",
    "DomainError",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show mlkit”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Library code stays silent unless the application configures logging.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
