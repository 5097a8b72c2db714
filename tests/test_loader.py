# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import io

import numpy as np
import pytest

from mlkit.errors import (
    DimensionMismatchError,
    EmptyMatrixError,
    MalformedInputError,
    OutOfRangeError,
)
from mlkit.loader import (
    Selector,
    load_matrix,
    load_table,
    load_vector,
    parse_records,
    parse_selector,
    read_records,
    select,
    table_to_matrix,
    table_to_vector,
)
from mlkit.matrix import Matrix
from mlkit.vector import Vector

RECORDS = [
    ["1", "10", "100"],
    ["2", "20", "200"],
    ["3", "30", "300"],
    ["4", "40", "400"],
    ["5", "50", "500"],
]

CSV = "\n".join(",".join(r) for r in RECORDS) + "\n"


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text(CSV)
    return path


def test_parse_selector_forms():
    assert parse_selector(":") == Selector()
    assert parse_selector(":").is_all
    assert parse_selector("10") == Selector(10, 10)
    assert parse_selector("10").is_single
    assert parse_selector("1:5") == Selector(1, 5)


@pytest.mark.parametrize("text", ["a", "1:a", "1:3:5", "", "3:3", "5:1", "1.5"])
def test_parse_selector_malformed(text):
    with pytest.raises(MalformedInputError):
        parse_selector(text)


@pytest.mark.parametrize("text", [3, None, 1.5, [":"]])
def test_parse_selector_requires_string(text):
    with pytest.raises(MalformedInputError):
        parse_selector(text)


@pytest.mark.parametrize("text", ["0", "-1", "0:3"])
def test_parse_selector_below_one(text):
    with pytest.raises(OutOfRangeError):
        parse_selector(text)


def test_parse_records():
    res = parse_records(
        [
            ["34.62365962451697", "78.0246928153624", "0"],
            ["30.28671076822607", "43.89499752400101", "0"],
        ]
    )
    assert res.shape == (2, 3)
    assert f"{res[1, 0]:.2f}" == "30.29"

    with pytest.raises(MalformedInputError, match=r"\(1, 1\)"):
        parse_records([["a", "1"]])
    with pytest.raises(EmptyMatrixError):
        parse_records([])
    with pytest.raises(MalformedInputError):
        parse_records([["1", "2"], ["3"]])


def test_select_rows_then_columns():
    table = parse_records(RECORDS)

    np.testing.assert_array_equal(select(table, "1:3", ":")[:, 0], [1, 2, 3])
    np.testing.assert_array_equal(select(table, "2", "3"), [[200]])
    np.testing.assert_array_equal(select(table, "4:5", "2:3"), [[40, 400], [50, 500]])
    np.testing.assert_array_equal(select(table, ":", ":"), table)


def test_select_out_of_range():
    table = parse_records(RECORDS)
    with pytest.raises(OutOfRangeError):
        select(table, "6", ":")
    with pytest.raises(OutOfRangeError):
        select(table, ":", "4")
    with pytest.raises(OutOfRangeError):
        select(table, "6:9", ":")


def test_select_clips_ranges_past_the_end():
    table = parse_records(RECORDS)
    assert select(table, "4:9", ":").shape == (2, 3)


def test_select_does_not_mutate_input():
    table = parse_records(RECORDS)
    before = table.copy()
    picked = select(table, "1:2", ":")
    picked[:] = -1
    np.testing.assert_array_equal(table, before)


def test_table_to_vector_requires_single_column():
    v = table_to_vector(RECORDS, "1:3", "2")
    assert v == Vector([10, 20, 30])

    with pytest.raises(DimensionMismatchError):
        table_to_vector(RECORDS, ":", "1:2")


def test_table_to_matrix():
    m = table_to_matrix(RECORDS, "2:3", "1:2")
    assert m == Matrix([[2, 20], [3, 30]])


def test_read_records_from_file_like():
    assert read_records(io.StringIO(CSV)) == RECORDS


@pytest.mark.parametrize(
    "text",
    [
        "1,2,3\n4,5\n",
        "1,2,3\n4,5\n6,7,8\n",
        "1,2,3\n4\n",
        "1,2\n3,4,5\n",
        "1,2,3\n4,,6\n",
    ],
)
def test_read_records_rejects_ragged_file(text):
    with pytest.raises(MalformedInputError):
        read_records(io.StringIO(text))


def test_read_records_names_the_short_record():
    with pytest.raises(MalformedInputError, match="record 2"):
        read_records(io.StringIO("1,2,3\n4,5\n6,7,8\n"))


def test_read_records_keeps_nan_text():
    assert read_records(io.StringIO("1,nan\n2,NA\n")) == [["1", "nan"], ["2", "NA"]]


def test_load_matrix_and_vector(csv_file):
    X = load_matrix(csv_file, "1:3", "1:2")
    assert X == Matrix([[1, 10], [2, 20], [3, 30]])

    y = load_vector(csv_file, "1:3", "3")
    assert y == Vector([100, 200, 300])

    assert Matrix.load(csv_file, "5", ":") == Matrix([[5, 50, 500]])
    assert Vector.load(csv_file, ":", "1") == Vector([1, 2, 3, 4, 5])

    assert load_table(csv_file).shape == (5, 3)


def test_load_non_numeric_file(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("1,2\n3,x\n")
    with pytest.raises(MalformedInputError):
        load_matrix(path)
