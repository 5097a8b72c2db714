# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Batch gradient-descent regression with optional L2 regularization.
"""

import logging
from typing import Union

import numpy as np

from .errors import DimensionMismatchError, DomainError
from .hypothesis import LINEAR, LOGISTIC, Hypothesis, get_hypothesis
from .matrix import Matrix
from .utils import BIAS_VALUE, DEFAULT_THRESHOLD
from .vector import Vector

logger = logging.getLogger(__name__)


class RegressionModel:
    """
    Regression model trained by batch gradient descent.

    With m samples and n parameters (bias included):

        J(theta) = 1/(s m) sum_i cost(h(x_i), y_i) + lam/(2m) sum_{j>=2} theta_j^2

        dJ/dtheta_j = 1/m sum_i (h(x_i) - y_i) x_ij  [+ lam/m theta_j, j >= 2]

    where h and cost come from the hypothesis and s is its cost scale
    (2 for least squares, 1 for log-loss). theta_1 is the bias weight and
    is never regularized.

    Parameters
    ----------
    X : Matrix        (m, n - 1)
        Raw features. The model keeps its own copy with a bias column
        prepended, the caller's matrix is left untouched.
    y : Vector        (m,)
        Targets, copied.
    theta : Vector    (n,)
        Initial parameters. Held by reference and updated in place by
        ``update_gradient``; pass ``theta.copy()`` to keep the original.
    alpha : float
        Learning rate, must be > 0.
    hypothesis : Hypothesis | str
        ``LINEAR`` / ``"linear"`` or ``LOGISTIC`` / ``"logistic"``.

    Raises
    ------
    EmptyMatrixError       : X has no rows or columns
    DimensionMismatchError : rows(X) != len(y) or columns(X) + 1 != len(theta)
    DomainError            : alpha <= 0 or a target not allowed by the hypothesis
    """

    def __init__(
        self,
        X: Matrix,
        y: Vector,
        theta: Vector,
        alpha: float,
        hypothesis: Union[Hypothesis, str] = LINEAR,
    ):
        if isinstance(hypothesis, str):
            hypothesis = get_hypothesis(hypothesis)

        X.validate()
        if X.row_count != y.length:
            raise DimensionMismatchError(
                f"X and y row number are not the same: {X.row_count} != {y.length}"
            )
        if X.column_count + 1 != theta.length:
            raise DimensionMismatchError(
                "Number of X and theta features are not the same: "
                f"{X.column_count} + 1 != {theta.length}"
            )
        self._X = X.with_bias(BIAS_VALUE)

        if not alpha > 0:
            raise DomainError(f"Learning rate alpha should be greater than 0, got {alpha}")

        self._y = y.to_numpy()
        hypothesis.check_targets(self._y)

        self._theta = theta
        self._alpha = float(alpha)
        self._lam = 0.0
        self._hypothesis = hypothesis

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(m={self.sample_count}, n={self.parameter_count}, "
            f"alpha={self._alpha}, lam={self._lam}, hypothesis={self._hypothesis.name!r})"
        )

    # ------------------------------------------------------------------
    # read-only state
    # ------------------------------------------------------------------
    @property
    def X(self) -> Matrix:
        """Design matrix, bias column included."""
        return self._X

    @property
    def y(self) -> Vector:
        return Vector(self._y)

    @property
    def theta(self) -> Vector:
        return self._theta

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def lam(self) -> float:
        return self._lam

    @property
    def hypothesis(self) -> Hypothesis:
        return self._hypothesis

    @property
    def sample_count(self) -> int:
        return self._X.row_count

    @property
    def parameter_count(self) -> int:
        return self._theta.length

    # ------------------------------------------------------------------
    # configuration
    # ------------------------------------------------------------------
    def add_regularization_factor(self, lam: float) -> None:
        """
        Set the L2 penalty lambda.

        May be changed between ``update_gradient`` calls; the new value is
        used from the next gradient on.
        """
        if lam < 0:
            raise DomainError(f"Regularization factor should not be negative, got {lam}")
        self._lam = float(lam)

    # ------------------------------------------------------------------
    # core algorithm
    # ------------------------------------------------------------------
    def _h(self, A: np.ndarray) -> np.ndarray:
        """Hypothesis for every row of a bias-augmented array."""
        # theta is shared with the caller and may have been resized since __init__
        if A.shape[1] != self._theta.length:
            raise DimensionMismatchError(
                f"theta has {self._theta.length} parameters, the design matrix "
                f"has {A.shape[1]} columns"
            )
        return self._hypothesis.link(A @ self._theta.to_numpy())

    def _reg_mask(self) -> np.ndarray:
        # bias weight (index 1) is not penalized
        mask = np.ones(self.parameter_count)
        mask[0] = 0.0
        return mask

    def cost_function(self) -> float:
        """Value of J(theta) on the training data."""
        A = self._X.to_numpy()
        m = self.sample_count
        theta = self._theta.to_numpy()

        cost = self._hypothesis.cost(self._h(A), self._y)
        data_term = float(cost.sum()) / (self._hypothesis.cost_scale * m)
        reg_term = self._lam / (2.0 * m) * float(((theta * self._reg_mask()) ** 2).sum())
        return data_term + reg_term

    def calculate_gradient(self) -> Vector:
        """
        Gradient of J at the current theta, as a new Vector.

        theta itself is not modified.
        """
        A = self._X.to_numpy()
        m = self.sample_count
        theta = self._theta.to_numpy()

        err = self._h(A) - self._y
        grad = (A.T @ err + self._lam * self._reg_mask() * theta) / m
        return Vector._wrap(grad)

    def _step(self) -> None:
        grad = self.calculate_gradient()
        grad.multiply_scalar(-self._alpha)
        self._theta.add_vector(grad)

    def update_gradient(self, iterations: int = 1) -> None:
        """
        Run `iterations` gradient-descent steps theta := theta - alpha * grad.

        There is no convergence check, training can be resumed by calling
        this again.
        """
        if iterations < 0:
            raise DomainError(f"iterations should not be negative, got {iterations}")

        debug = logger.isEnabledFor(logging.DEBUG)
        for i in range(iterations):
            self._step()
            if debug:
                logger.debug("iteration %d: cost %.6f", i + 1, self.cost_function())

    # ------------------------------------------------------------------
    # prediction
    # ------------------------------------------------------------------
    def _design(self, X: Matrix) -> np.ndarray:
        X.validate()
        A = X.with_bias(BIAS_VALUE)
        if A.column_count != self.parameter_count:
            raise DimensionMismatchError(
                f"Input vector dimension({A.column_count}) does not agree "
                f"with theta({self.parameter_count})"
            )
        return A.to_numpy()

    def calculate_result(self, X: Matrix) -> Vector:
        """
        Hypothesis for every row of raw features `X`.

        A bias column is added to a copy of `X`; `X` itself is not modified.
        """
        return Vector._wrap(self._h(self._design(X)))


class LinearRegression(RegressionModel):
    def __init__(self, X: Matrix, y: Vector, theta: Vector, alpha: float):
        super().__init__(X, y, theta, alpha, hypothesis=LINEAR)


class GradientDescent(RegressionModel):
    """Plain least-squares gradient descent, same hypothesis as LinearRegression."""

    def __init__(self, X: Matrix, y: Vector, theta: Vector, alpha: float):
        super().__init__(X, y, theta, alpha, hypothesis=LINEAR)


class LogisticRegression(RegressionModel):
    """
    Binary logistic regression. Targets must be 0 or 1.

    ``calculate_result`` / ``predict_proba`` return probabilities,
    ``predict_label`` returns thresholded 0/1 labels.
    """

    def __init__(self, X: Matrix, y: Vector, theta: Vector, alpha: float):
        super().__init__(X, y, theta, alpha, hypothesis=LOGISTIC)

    def predict_proba(self, X: Matrix) -> Vector:
        return self.calculate_result(X)

    def predict_label(self, X: Matrix, threshold: float = DEFAULT_THRESHOLD) -> Vector:
        p = self._h(self._design(X))
        return Vector._wrap((p >= threshold).astype(np.float64))
