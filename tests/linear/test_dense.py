"""
Tests specific to dense storage.
"""

import numpy as np
import pytest

from pyndarray.linear import DENSE_DOUBLE, DENSE_FLOAT, DenseNDArray, Precision, Shape
from pyndarray.core.exceptions import DimensionMismatchError


class TestDenseStorage:

    def test_class(self):
        assert isinstance(DENSE_DOUBLE.zeros(2, 2), DenseNDArray)

    def test_size_is_length(self):
        assert DENSE_DOUBLE.zeros(3, 4).size() == 12

    @pytest.mark.parametrize("factory, dtype", [
        (DENSE_DOUBLE, np.float64),
        (DENSE_FLOAT, np.float32),
    ])
    def test_buffer_dtype(self, factory, dtype):
        assert factory.ones(2, 3).to_array().dtype == dtype

    def test_float_rounds_on_write(self):
        a = DENSE_FLOAT.zeros(1, 1).set(0, 0.1)
        assert a.get(0) == float(np.float32(0.1))

    def test_wrong_buffer_length(self):
        with pytest.raises(DimensionMismatchError):
            DenseNDArray(Shape(2, 2), Precision.DOUBLE, np.zeros(3))

    def test_fill(self):
        a = DENSE_DOUBLE.zeros(2, 3)
        assert a.fill(7.0) is a
        assert a.sum() == 42.0

    def test_transpose_is_copy(self):
        a = DENSE_DOUBLE.from_array(np.arange(6), 2, 3)
        t = a.T
        t.set(0, 99.0)
        assert a.get(0) == 0.0

    def test_iter_nonzero_in_index_order(self):
        a = DENSE_DOUBLE.from_array([0, 5, 0, 7], 2, 2)
        assert [e.index for e in a.iter_nonzero()] == [1, 3]
        assert [e.index for e in a.iter_nonzero_ordered()] == [1, 3]

    def test_compress_is_noop(self):
        a = DENSE_DOUBLE.ones(2, 2)
        assert a.compress() is a
        assert a.size() == 4
