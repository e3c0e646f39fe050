"""
Sparse storage.

A dict from linear (column-major) index to value, holding nonzero values
only. An absent index reads as 0.0 and writing 0.0 removes the entry, so
size() is always the number of nonzero elements. Float-precision arrays
round each value through float32 before storing it.

Operations that can be answered from the stored entries alone (scalar
scaling, products with finite operands, sums of two sparse arrays, matrix
products, reductions, transposition) never materialize the dense values.
"""

from __future__ import annotations

from numbers import Real
from typing import Any, Callable, Iterator
import numpy as np
from numpy.typing import NDArray as NumpyArray
import scipy.sparse

from pyndarray.core.validation import check_length, check_same_shape
from pyndarray.linear.axis import Axis
from pyndarray.linear.kinds import Precision, StorageKind
from pyndarray.linear.ndarray import Entry, NDArray
from pyndarray.linear.shape import Shape


class SparseNDArray(NDArray):
    """
    NDArray holding only nonzero elements.

    Args:
        shape: Array shape
        precision: Element precision
    """

    def __init__(self, shape: Shape, precision: Precision):
        super().__init__(shape, precision)
        self._storage: dict[int, float] = {}

    @property
    def storage_kind(self) -> StorageKind:
        return StorageKind.SPARSE

    # === Storage primitives ===

    def _get(self, index: int) -> float:
        return self._storage.get(index, 0.0)

    def _set(self, index: int, value: float) -> None:
        value = self._precision.cast(value)
        if value == 0.0:
            self._storage.pop(index, None)
        else:
            self._storage[index] = value

    def _assign_flat(self, values: NumpyArray) -> None:
        values = np.asarray(values).astype(self.dtype, copy=False)
        check_length(values, self.length, 'values')
        nonzero = np.flatnonzero(values)
        self._storage = dict(zip(nonzero.tolist(), values[nonzero].tolist()))

    def _replace(self, storage: dict[int, float]) -> None:
        """Adopt already-cast values, dropping any that became zero."""
        self._storage = {k: v for k, v in storage.items() if v != 0.0}

    def _cast_all(self, storage: dict[int, float]) -> dict[int, float]:
        if self._precision is Precision.FLOAT:
            return {k: float(np.float32(v)) for k, v in storage.items()}
        return storage

    def _stored_values(self) -> NumpyArray:
        return np.fromiter(self._storage.values(), dtype=np.float64, count=len(self._storage))

    def _coordinates(self) -> tuple[NumpyArray, NumpyArray, NumpyArray]:
        """(rows, cols, values) of the stored entries."""
        indices = np.fromiter(self._storage.keys(), dtype=np.int64, count=len(self._storage))
        return indices % self.num_rows, indices // self.num_rows, self._stored_values()

    def _values2d(self) -> NumpyArray:
        return self.to_array().reshape(self.num_rows, self.num_cols, order='F')

    def _spawn(self, shape: Shape | None = None) -> SparseNDArray:
        return SparseNDArray(shape or self._shape.copy(), self._precision)

    def size(self) -> int:
        return len(self._storage)

    def to_array(self) -> NumpyArray:
        array = np.zeros(self.length, dtype=self.dtype)
        if self._storage:
            indices = np.fromiter(self._storage.keys(), dtype=np.int64, count=len(self._storage))
            array[indices] = self._stored_values()
        return array

    def to_scipy(self) -> scipy.sparse.csc_matrix:
        rows, cols, values = self._coordinates()
        return scipy.sparse.coo_matrix(
            (values, (rows, cols)), shape=self._shape.as_tuple()
        ).tocsc()

    # === Lifecycle ===

    def copy(self) -> SparseNDArray:
        result = self._spawn()
        result._storage = dict(self._storage)
        return result

    def compress(self) -> SparseNDArray:
        # dicts never shrink in place; rebuilding releases the spare slots
        self._storage = dict(self._storage)
        return self

    def zero(self) -> SparseNDArray:
        self._storage.clear()
        return self

    # === Iteration ===

    def iter_nonzero(self) -> Iterator[Entry]:
        for index, value in list(self._storage.items()):
            yield self._entry(index, value)

    def iter_nonzero_ordered(self) -> Iterator[Entry]:
        for index in sorted(self._storage):
            yield self._entry(index, self._storage[index])

    # === Fast paths ===

    def _operand_is_finite(self, other: Any) -> bool:
        if isinstance(other, SparseNDArray):
            return bool(np.all(np.isfinite(other._stored_values())))
        if isinstance(other, NDArray):
            return bool(np.all(np.isfinite(other.to_array())))
        return bool(np.isfinite(other))

    def _elementwise(self, name: str, other: Any, axis: Axis | None, in_place: bool) -> NDArray:
        storage = None
        if axis is None and isinstance(other, Real) and not isinstance(other, bool):
            scalar = self._precision.cast(float(other))
            if name == 'mul' and np.isfinite(scalar):
                storage = {k: v * scalar for k, v in self._storage.items()}
            elif name == 'div' and scalar != 0.0 and not np.isnan(scalar):
                storage = {k: v / scalar for k, v in self._storage.items()}
        elif axis is None and isinstance(other, SparseNDArray):
            check_same_shape(self, other, name)
            if name == 'mul' and self._operand_is_finite(other):
                storage = {k: v * other._get(k) for k, v in self._storage.items()}
            elif name in ('add', 'sub'):
                sign = 1.0 if name == 'add' else -1.0
                storage = dict(self._storage)
                for k, v in other._storage.items():
                    storage[k] = storage.get(k, 0.0) + sign * v
        if storage is None:
            return super()._elementwise(name, other, axis, in_place)
        target = self if in_place else self._spawn()
        target._replace(self._cast_all(storage))
        return target

    def map_sparse_(self, fn: Callable[[float], float]) -> SparseNDArray:
        self._replace(self._cast_all({k: float(fn(v)) for k, v in self._storage.items()}))
        return self

    def pow(self, exponent: float) -> NDArray:
        if exponent > 0:
            return self.copy().pow_(exponent)
        return super().pow(exponent)

    def pow_(self, exponent: float) -> NDArray:
        if exponent > 0:
            with np.errstate(over='ignore', invalid='ignore'):
                storage = {k: float(np.power(v, float(exponent))) for k, v in self._storage.items()}
            self._replace(self._cast_all(storage))
            return self
        return super().pow_(exponent)

    def mmul(self, other: NDArray) -> NDArray:
        self._check_mmul(other)
        # skipping implicit zeros would turn 0 * inf into 0 instead of NaN
        if not (self._operand_is_finite(self) and self._operand_is_finite(other)):
            return super().mmul(other)
        if isinstance(other, SparseNDArray):
            product = (self.to_scipy() @ other.to_scipy()).tocoo()
            product.sum_duplicates()
            result = self._spawn(Shape(self.num_rows, other.num_cols))
            indices = (product.row + product.col * self.num_rows).tolist()
            result._replace(self._cast_all(dict(zip(indices, product.data.tolist()))))
            return result
        values = self.to_scipy() @ other._values2d().astype(np.float64, copy=False)
        return self._result_factory(other).from_2d_array(np.asarray(values))

    def dot(self, other: NDArray) -> float:
        self._check_dot(other)
        if not (self._operand_is_finite(self) and self._operand_is_finite(other)):
            return super().dot(other)
        if isinstance(other, SparseNDArray) and other.size() < self.size():
            return float(sum(v * self._get(k) for k, v in other._storage.items()))
        return float(sum(v * other._get(k) for k, v in self._storage.items()))

    def transpose(self) -> SparseNDArray:
        result = self._spawn(self._shape.T)
        rows, cols = self.num_rows, self.num_cols
        result._storage = {
            (k // rows) + (k % rows) * cols: v for k, v in self._storage.items()
        }
        return result

    def _block(self, r0: int, r1: int, c0: int, c1: int) -> SparseNDArray:
        result = self._spawn(Shape(r1 - r0, c1 - c0))
        height = r1 - r0
        for index, value in self._storage.items():
            row, col = index % self.num_rows, index // self.num_rows
            if r0 <= row < r1 and c0 <= col < c1:
                result._storage[(row - r0) + (col - c0) * height] = value
        return result

    def _reduce_axis(self, fn: Callable[..., NumpyArray], axis: Axis) -> NDArray:
        if fn is not np.sum:
            return super()._reduce_axis(fn, axis)
        rows, cols, values = self._coordinates()
        if axis is Axis.ROW:
            totals = np.bincount(rows, weights=values, minlength=self.num_rows)
            return self.factory.from_array(totals, self.num_rows, 1)
        totals = np.bincount(cols, weights=values, minlength=self.num_cols)
        return self.factory.from_array(totals, 1, self.num_cols)
