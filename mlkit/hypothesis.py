# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Hypothesis functions for the regression models.

A hypothesis bundles everything that differs between model variants:
- the link applied to the linear score  z = theta . x
- the per-sample cost term
- the normaliser of the summed cost (2m for least squares, m for log-loss)
- the admissible target values

Currently implemented:
- LINEAR:   h = z,           cost = (h - y)^2
- LOGISTIC: h = sigmoid(z),  cost = -log(h) if y == 1, -log(1 - h) if y == 0
"""

import logging

import numpy as np

from .errors import DomainError

logger = logging.getLogger(__name__)


def sigmoid(z):
    """
    Logistic function g(z) = 1 / (1 + e^(-z)).

    Evaluated as e^z / (1 + e^z) for negative z so large |z| never
    overflows. Accepts scalars or arrays.
    """
    z = np.asarray(z, dtype=np.float64)
    out = np.empty_like(z)
    pos = z >= 0
    neg = ~pos
    out[pos] = 1.0 / (1.0 + np.exp(-z[pos]))
    expz = np.exp(z[neg])
    out[neg] = expz / (1.0 + expz)
    return out if out.ndim else float(out)


class Hypothesis:
    """Linear hypothesis, the base every other variant refines."""

    name = "linear"
    # J = sum(cost_i) / (cost_scale * m)
    cost_scale = 2.0

    def link(self, z: np.ndarray) -> np.ndarray:
        return z

    def cost(self, h: np.ndarray, y: np.ndarray) -> np.ndarray:
        return (h - y) ** 2

    def check_targets(self, y: np.ndarray) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r}>"


class LogisticHypothesis(Hypothesis):
    name = "logistic"
    cost_scale = 1.0

    def link(self, z: np.ndarray) -> np.ndarray:
        return sigmoid(z)

    def cost(self, h: np.ndarray, y: np.ndarray) -> np.ndarray:
        with np.errstate(divide="ignore"):
            c = np.where(y == 1.0, -np.log(h), np.where(y == 0.0, -np.log1p(-h), 0.0))
        if not np.all(np.isfinite(c)):
            logger.warning("log-loss saturated: a prediction reached exactly 0 or 1")
        return c

    def check_targets(self, y: np.ndarray) -> None:
        bad = ~np.isin(y, (0.0, 1.0))
        if bad.any():
            first = int(np.argmax(bad)) + 1
            raise DomainError(
                f"Value of y should be either 0 or 1, y[{first}] = {y[first - 1]}"
            )


LINEAR = Hypothesis()
LOGISTIC = LogisticHypothesis()

# Registry for lookup by name
HYPOTHESES = {
    LINEAR.name: LINEAR,
    LOGISTIC.name: LOGISTIC,
}


def get_hypothesis(name: str) -> Hypothesis:
    """
    Get a hypothesis by name.

    Args:
        name: One of 'linear', 'logistic'.

    Raises:
        KeyError: If the name is not recognized.
    """
    if name not in HYPOTHESES:
        raise KeyError(f"Unknown hypothesis: {name}. Available: {list(HYPOTHESES.keys())}")
    return HYPOTHESES[name]
