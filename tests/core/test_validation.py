"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object rejection
    - check_finite: NaN/Inf detection
    - check_2d: dimensionality
    - check_positive / check_index / check_range: integer bounds
    - check_length / check_same_shape / check_square: extents
"""

import numpy as np
import pytest

from pyndarray.core.exceptions import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidArgumentError,
)
from pyndarray.core.validation import (
    check_2d,
    check_array,
    check_finite,
    check_index,
    check_length,
    check_positive,
    check_range,
    check_same_shape,
    check_square,
)
from pyndarray.linear import DENSE_DOUBLE


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "values")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_requested_dtype(self):
        result = check_array([1, 2, 3], "values", dtype=np.float32)
        assert result.dtype == np.float32

    def test_float_array_passthrough(self):
        arr = np.array([1.0, 2.0])
        assert check_array(arr, "values") is arr

    def test_bool_accepted(self):
        np.testing.assert_array_equal(check_array([True, False], "values"), [1.0, 0.0])

    def test_object_rejected(self):
        with pytest.raises(InvalidArgumentError, match="object dtype"):
            check_array(np.array([1, "a", None], dtype=object), "values")

    def test_strings_rejected(self):
        with pytest.raises(InvalidArgumentError, match="values"):
            check_array(["a", "b"], "values")


# ═══════════════════════════════════════════════════════════════════════
# check_finite / check_2d
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, -2.0]), "A")

    def test_nan_and_inf_counted(self):
        with pytest.raises(InvalidArgumentError, match="1 NaN, 2 Inf"):
            check_finite(np.array([np.nan, np.inf, -np.inf, 0.0]), "A")


class TestCheck2D:

    def test_2d_passes(self):
        check_2d(np.zeros((2, 3)), "A")

    def test_1d_rejected(self):
        with pytest.raises(DimensionMismatchError, match="expected 2D"):
            check_2d(np.zeros(3), "A")


# ═══════════════════════════════════════════════════════════════════════
# Integer bounds
# ═══════════════════════════════════════════════════════════════════════


class TestCheckPositive:

    def test_returns_int(self):
        assert check_positive(np.int64(3), "rows") == 3

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_rejected(self, value):
        with pytest.raises(InvalidArgumentError, match="must be positive"):
            check_positive(value, "rows")

    @pytest.mark.parametrize("value", [2.0, True, "3"])
    def test_non_integer_rejected(self, value):
        with pytest.raises(InvalidArgumentError, match="expected an integer"):
            check_positive(value, "rows")


class TestCheckIndex:

    def test_in_range(self):
        assert check_index(3, 4) == 3

    @pytest.mark.parametrize("index", [-1, 4])
    def test_out_of_range(self, index):
        with pytest.raises(IndexOutOfRangeError) as excinfo:
            check_index(index, 4)
        assert excinfo.value.index == index
        assert excinfo.value.bound == 4

    def test_non_integer(self):
        with pytest.raises(InvalidArgumentError):
            check_index(1.5, 4)


class TestCheckRange:

    def test_full_range(self):
        assert check_range(0, 4, 4, "slice") == (0, 4)

    def test_end_past_extent(self):
        with pytest.raises(IndexOutOfRangeError):
            check_range(0, 5, 4, "slice")

    def test_negative_start(self):
        with pytest.raises(IndexOutOfRangeError):
            check_range(-1, 2, 4, "slice")

    @pytest.mark.parametrize("start, end", [(2, 2), (3, 1)])
    def test_empty_or_reversed(self, start, end):
        with pytest.raises(InvalidArgumentError, match="empty or reversed"):
            check_range(start, end, 4, "slice")


# ═══════════════════════════════════════════════════════════════════════
# Extents
# ═══════════════════════════════════════════════════════════════════════


class TestExtents:

    def test_check_length(self):
        check_length(np.zeros(6), 6, "data")
        with pytest.raises(DimensionMismatchError) as excinfo:
            check_length(np.zeros(5), 6, "data")
        assert excinfo.value.expected == 6
        assert excinfo.value.actual == 5

    def test_check_same_shape(self):
        a = DENSE_DOUBLE.zeros(2, 3)
        check_same_shape(a, DENSE_DOUBLE.ones(2, 3), "add")
        with pytest.raises(DimensionMismatchError, match="add: shape mismatch"):
            check_same_shape(a, DENSE_DOUBLE.zeros(3, 2), "add")

    def test_check_square(self):
        check_square(DENSE_DOUBLE.zeros(3, 3), "lu")
        with pytest.raises(InvalidArgumentError, match="square"):
            check_square(DENSE_DOUBLE.zeros(2, 3), "lu")
