# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import math

import numpy as np
import pytest

from mlkit.errors import (
    DimensionMismatchError,
    DomainError,
    MalformedInputError,
    OutOfRangeError,
)
from mlkit.vector import Vector


def test_zero_and_constant_vectors():
    v = Vector.zeros(5)
    assert len(v) == 5
    assert list(v) == [0.0] * 5

    c = Vector.constant(3, 2.5)
    assert list(c) == [2.5, 2.5, 2.5]


def test_get_and_set_are_one_based():
    v = Vector([1, 2, 3])
    assert v.get(1) == 1.0
    assert v.get(3) == 3.0

    v.set(2, 10)
    assert list(v) == [1.0, 10.0, 3.0]

    with pytest.raises(OutOfRangeError):
        v.get(4)
    with pytest.raises(OutOfRangeError):
        v.get(0)
    with pytest.raises(OutOfRangeError):
        v.set(4, 1.0)


def test_set_values_keeps_length():
    v = Vector([1, 2, 3])
    v.set_values([4, 5, 6])
    assert v == Vector([4, 5, 6])

    with pytest.raises(DimensionMismatchError):
        v.set_values([1, 2])


def test_non_numeric_literal_rejected():
    with pytest.raises(MalformedInputError):
        Vector(["a", "b"])


@pytest.mark.parametrize("values", [["3"], [1, "2.5"], [b"1"]])
def test_numeric_strings_rejected(values):
    with pytest.raises(MalformedInputError):
        Vector(values)

    v = Vector([1])
    with pytest.raises(MalformedInputError):
        v.set_values(values)


@pytest.mark.parametrize("n", [-1, 2.5, "3", True])
def test_invalid_sizes(n):
    with pytest.raises(DomainError):
        Vector.zeros(n)
    with pytest.raises(DomainError):
        Vector.constant(n, 1.0)


def test_size_accepts_numpy_integers():
    assert len(Vector.zeros(np.int64(3))) == 3
    assert Vector.constant(0, 4.0).length == 0


@pytest.mark.parametrize("index", [1.5, 1.0, "1", None, True])
def test_non_integer_index_rejected(index):
    v = Vector([1, 2, 3])
    with pytest.raises(OutOfRangeError):
        v.get(index)
    with pytest.raises(OutOfRangeError):
        v.set(index, 0.0)


def test_append():
    v = Vector([1, 2])
    v.append(3)
    assert len(v) == 3
    assert v.get(3) == 3.0


def test_scalar_transforms():
    v = Vector([1, 2, 3])
    v.add_scalar(2)
    assert list(v) == [3.0, 4.0, 5.0]

    v.multiply_scalar(2)
    assert list(v) == [6.0, 8.0, 10.0]

    v = Vector([3, 2])
    v.power(2)
    assert list(v) == [9.0, 4.0]


def test_logarithms():
    v = Vector([10, 100, 1000])
    v.log10()
    np.testing.assert_allclose(v.to_numpy(), [1.0, 2.0, 3.0])

    v = Vector([1, math.e])
    v.log()
    np.testing.assert_allclose(v.to_numpy(), [0.0, 1.0])


def test_apply_custom_function():
    v = Vector([1, 4, 9])
    v.apply(math.sqrt)
    assert list(v) == [1.0, 2.0, 3.0]


def test_add_and_multiply_vector():
    v = Vector([1, 2, 3])
    v.add_vector(Vector([1, 1, 1]))
    assert list(v) == [2.0, 3.0, 4.0]

    v.multiply_vector(Vector([2, 0, 1]))
    assert list(v) == [4.0, 0.0, 4.0]

    with pytest.raises(DimensionMismatchError):
        v.add_vector(Vector([1, 2]))
    with pytest.raises(DimensionMismatchError):
        v.multiply_vector(Vector([1, 2, 3, 4]))


def test_dot_product():
    assert Vector([1, 2, 3]).dot(Vector([4, 5, 6])) == 32.0

    with pytest.raises(DimensionMismatchError):
        Vector([1, 2, 3]).dot(Vector([1, 2]))


def test_dot_is_symmetric_and_add_inverts():
    rng = np.random.default_rng(0)
    for n in (1, 2, 7, 50):
        a, b = rng.normal(size=n), rng.normal(size=n)
        u, v = Vector(a), Vector(b)
        assert math.isclose(u.dot(v), v.dot(u), rel_tol=1e-12, abs_tol=1e-12)

        w = u.copy().add_vector(v)
        w.add_vector(v.copy().multiply_scalar(-1))
        np.testing.assert_allclose(w.to_numpy(), a, atol=1e-12)


def test_copy_is_independent():
    v = Vector([1, 2, 3])
    w = v.copy()
    w.set(1, 100)
    assert v.get(1) == 1.0
