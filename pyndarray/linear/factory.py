"""
Array construction.

An NDArrayFactory is bound to one storage kind and one precision and is the
only place that decides which concrete class backs a new array. The four
variants are exposed as module constants:

    DENSE_DOUBLE, DENSE_FLOAT, SPARSE_DOUBLE, SPARSE_FLOAT

Every constructor takes its shape as a Shape, a (rows, cols) tuple or two
ints:

    >>> from pyndarray.linear.factory import DENSE_DOUBLE
    >>> a = DENSE_DOUBLE.zeros(3, 4)
    >>> b = DENSE_DOUBLE.from_array([1, 2, 3, 4], (2, 2))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray as NumpyArray

from pyndarray.core.validation import check_2d, check_array, check_length, check_positive
from pyndarray.linear.dense import DenseNDArray
from pyndarray.linear.kinds import Precision, StorageKind
from pyndarray.linear.ndarray import NDArray
from pyndarray.linear.shape import Shape
from pyndarray.linear.sparse import SparseNDArray


@dataclass(frozen=True)
class NDArrayFactory:
    """
    Creates arrays of one storage/precision variant.

    Attributes:
        storage: Storage kind of the arrays this factory creates
        precision: Element precision of the arrays this factory creates
    """
    storage: StorageKind
    precision: Precision

    @classmethod
    def for_variant(cls, storage: StorageKind, precision: Precision) -> NDArrayFactory:
        """The shared factory for a storage/precision pair."""
        return _VARIANTS[(StorageKind(storage), Precision(precision))]

    @property
    def dtype(self) -> np.dtype:
        return self.precision.dtype

    # === Internals ===

    def _empty(self, shape: Shape) -> NDArray:
        if self.storage is StorageKind.DENSE:
            return DenseNDArray(shape, self.precision)
        return SparseNDArray(shape, self.precision)

    def _build(self, flat: NumpyArray, shape: Shape) -> NDArray:
        """Array over a flat column-major buffer the caller no longer uses."""
        check_length(flat, shape.length, 'values')
        if self.storage is StorageKind.DENSE:
            return DenseNDArray(shape, self.precision, flat)
        array = SparseNDArray(shape, self.precision)
        array._assign_flat(flat)
        return array

    # === Constructors ===

    def zeros(self, rows: 'int | tuple[int, int] | Shape', cols: int | None = None) -> NDArray:
        return self._empty(Shape.of(rows, cols))

    def ones(self, rows: 'int | tuple[int, int] | Shape', cols: int | None = None) -> NDArray:
        shape = Shape.of(rows, cols)
        return self._build(np.ones(shape.length, dtype=self.dtype), shape)

    def rand(
        self,
        rows: 'int | tuple[int, int] | Shape',
        cols: int | None = None,
        *,
        rng: Any = None,
    ) -> NDArray:
        """
        Array of uniform [0, 1) samples.

        Args:
            rows, cols: Shape of the result
            rng: numpy Generator, integer seed, or None for fresh entropy
        """
        shape = Shape.of(rows, cols)
        values = np.random.default_rng(rng).random(shape.length)
        return self._build(values.astype(self.dtype, copy=False), shape)

    def randn(
        self,
        rows: 'int | tuple[int, int] | Shape',
        cols: int | None = None,
        *,
        rng: Any = None,
    ) -> NDArray:
        """Array of standard normal samples; `rng` as for rand()."""
        shape = Shape.of(rows, cols)
        values = np.random.default_rng(rng).standard_normal(shape.length)
        return self._build(values.astype(self.dtype, copy=False), shape)

    def wrap(
        self,
        values: ArrayLike,
        rows: 'int | tuple[int, int] | Shape',
        cols: int | None = None,
    ) -> NDArray:
        """
        Array over a flat column-major buffer, adopting it when possible.

        A dense factory given a contiguous one-dimensional numpy array of its
        own dtype uses that buffer directly: later writes through either side
        are visible to the other. Anything else is converted (and so copied).
        Sparse factories always build their own storage.

        Raises:
            DimensionMismatchError: If the number of values is not rows * cols
        """
        shape = Shape.of(rows, cols)
        flat = check_array(values, 'values', dtype=self.dtype)
        if flat.ndim != 1:
            flat = flat.reshape(-1, order='F')
        return self._build(np.ascontiguousarray(flat), shape)

    def from_array(
        self,
        values: ArrayLike,
        rows: 'int | tuple[int, int] | Shape',
        cols: int | None = None,
    ) -> NDArray:
        """
        Array holding a copy of a flat column-major buffer.

        Raises:
            DimensionMismatchError: If the number of values is not rows * cols
        """
        shape = Shape.of(rows, cols)
        flat = np.array(check_array(values, 'values'), dtype=self.dtype).reshape(-1, order='F')
        return self._build(flat, shape)

    def from_2d_array(self, values: ArrayLike) -> NDArray:
        """
        Array holding a copy of a two-dimensional (rows, cols) array.

        Raises:
            DimensionMismatchError: If values is not two-dimensional
            InvalidArgumentError: If either dimension is zero
        """
        matrix = check_array(values, 'values')
        check_2d(matrix, 'values')
        shape = Shape(*matrix.shape)
        return self._build(np.array(matrix.reshape(-1, order='F'), dtype=self.dtype), shape)

    def scalar(self, value: float) -> NDArray:
        """1 x 1 array holding `value`."""
        return self.zeros(1, 1).set(0, value)

    def eye(self, n: int) -> NDArray:
        """n x n identity matrix."""
        n = check_positive(n, 'n')
        result = self.zeros(n, n)
        for i in range(n):
            result.set((i, i), 1.0)
        return result

    def row_vector(self, values: ArrayLike) -> NDArray:
        flat = np.ravel(check_array(values, 'values'))
        return self.from_array(flat, 1, check_positive(flat.size, 'length'))

    def column_vector(self, values: ArrayLike) -> NDArray:
        flat = np.ravel(check_array(values, 'values'))
        return self.from_array(flat, check_positive(flat.size, 'length'), 1)

    def __repr__(self) -> str:
        return f"NDArrayFactory({self.storage.value}, {self.precision.value})"


DENSE_DOUBLE = NDArrayFactory(StorageKind.DENSE, Precision.DOUBLE)
DENSE_FLOAT = NDArrayFactory(StorageKind.DENSE, Precision.FLOAT)
SPARSE_DOUBLE = NDArrayFactory(StorageKind.SPARSE, Precision.DOUBLE)
SPARSE_FLOAT = NDArrayFactory(StorageKind.SPARSE, Precision.FLOAT)

_VARIANTS: dict[tuple[StorageKind, Precision], NDArrayFactory] = {
    (f.storage, f.precision): f
    for f in (DENSE_DOUBLE, DENSE_FLOAT, SPARSE_DOUBLE, SPARSE_FLOAT)
}
