"""
Dense storage.

One contiguous numpy buffer of length rows * cols in column-major order,
float64 or float32 depending on precision. Element access is O(1) and the
logical (rows, cols) view is a reshape of the buffer, never a copy.
"""

from __future__ import annotations

from typing import Iterator
import numpy as np
from numpy.typing import NDArray as NumpyArray

from pyndarray.core.validation import check_length
from pyndarray.linear.kinds import Precision, StorageKind
from pyndarray.linear.ndarray import Entry, NDArray
from pyndarray.linear.shape import Shape


class DenseNDArray(NDArray):
    """
    NDArray holding every element explicitly, zeros included.

    Args:
        shape: Array shape
        precision: Element precision
        data: Flat column-major buffer to adopt. Must already have the
            precision's dtype and length rows * cols; it is used as-is, not
            copied. None allocates zeros.
    """

    def __init__(self, shape: Shape, precision: Precision, data: NumpyArray | None = None):
        super().__init__(shape, precision)
        if data is None:
            data = np.zeros(shape.length, dtype=precision.dtype)
        else:
            check_length(data, shape.length, 'data')
        self._data = data

    @property
    def storage_kind(self) -> StorageKind:
        return StorageKind.DENSE

    def _get(self, index: int) -> float:
        return float(self._data[index])

    def _set(self, index: int, value: float) -> None:
        self._data[index] = value

    def _assign_flat(self, values: NumpyArray) -> None:
        self._data[:] = values

    def _stored_values(self) -> NumpyArray:
        return self._data

    def _values2d(self) -> NumpyArray:
        return self._data.reshape(self.num_rows, self.num_cols, order='F')

    def size(self) -> int:
        return self.length

    def to_array(self) -> NumpyArray:
        return self._data.copy()

    def copy(self) -> DenseNDArray:
        return DenseNDArray(self._shape.copy(), self._precision, self._data.copy())

    def compress(self) -> DenseNDArray:
        return self

    def zero(self) -> DenseNDArray:
        self._data.fill(0.0)
        return self

    def iter_nonzero(self) -> Iterator[Entry]:
        for index in np.flatnonzero(self._data).tolist():
            yield self._entry(index, float(self._data[index]))

    def iter_nonzero_ordered(self) -> Iterator[Entry]:
        # flatnonzero already walks the buffer in index order
        return self.iter_nonzero()

    def transpose(self) -> DenseNDArray:
        flat = self._values2d().T.reshape(-1, order='F')
        return DenseNDArray(self._shape.T, self._precision, np.array(flat, dtype=self.dtype))

    def fill(self, value: float) -> DenseNDArray:
        """Set every element to `value` in place; returns self."""
        self._data.fill(value)
        return self
