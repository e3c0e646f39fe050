"""
The NDArray contract.

NDArray is the one capability set shared by every storage/precision variant.
Arithmetic here is written against the contract only: concrete classes
(DenseNDArray, SparseNDArray) supply element access, export and a handful of
fast paths, and the NDArrayFactory decides which class backs a new array.

Call forms:
    Every arithmetic operation comes in an allocating form (``add``) that
    returns a new array and leaves the receiver untouched, and a mutating
    form with a trailing underscore (``add_``) that writes into the receiver
    and returns it.

Mixed storage:
    Results take the receiver's precision. A dense receiver produces a dense
    result; a sparse receiver stays sparse unless the other operand is
    dense, in which case the result is dense. Mutating forms always keep the
    receiver's variant.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from numbers import Integral, Real
from typing import Any, Callable, Iterator, NamedTuple, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray as NumpyArray

from pyndarray.core.exceptions import DimensionMismatchError, InvalidArgumentError
from pyndarray.core.validation import check_index, check_range, check_same_shape, check_square
from pyndarray.linear.axis import Axis
from pyndarray.linear.kinds import Precision, StorageKind
from pyndarray.linear.shape import Shape

if TYPE_CHECKING:
    import scipy.sparse
    from pyndarray.linear.factory import NDArrayFactory


class Entry(NamedTuple):
    """One element of an array: linear index, subscript and value."""
    index: int
    row: int
    col: int
    value: float


def _rsub(a, b):
    return np.subtract(b, a)


def _rdiv(a, b):
    return np.divide(b, a)


_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    'add': np.add,
    'sub': np.subtract,
    'mul': np.multiply,
    'div': np.divide,
    'rsub': _rsub,
    'rdiv': _rdiv,
}


class NDArray(ABC):
    """
    Two-dimensional numeric array over dense or sparse storage.

    Positions are either a linear (column-major) index or a (row, col)
    tuple. Instances are mutable and therefore unhashable; ``==`` compares
    shape and values regardless of storage kind.
    """

    __hash__ = None  # type: ignore[assignment]
    # numpy operands defer to the reflected operators below
    __array_ufunc__ = None

    def __init__(self, shape: Shape, precision: Precision):
        self._shape = shape
        self._precision = precision

    # === Storage primitives (implemented by each variant) ===

    @property
    @abstractmethod
    def storage_kind(self) -> StorageKind:
        ...

    @abstractmethod
    def _get(self, index: int) -> float:
        """Read a validated linear index."""

    @abstractmethod
    def _set(self, index: int, value: float) -> None:
        """Write a validated linear index."""

    @abstractmethod
    def _assign_flat(self, values: NumpyArray) -> None:
        """Replace all contents from a flat column-major buffer."""

    @abstractmethod
    def _stored_values(self) -> NumpyArray:
        """Stored values (every value for dense, nonzeros for sparse)."""

    @abstractmethod
    def size(self) -> int:
        """Number of stored entries (length for dense storage)."""

    @abstractmethod
    def to_array(self) -> NumpyArray:
        """Copy of the contents as a flat column-major numpy array."""

    @abstractmethod
    def copy(self) -> NDArray:
        """Deep copy with the same variant."""

    @abstractmethod
    def compress(self) -> NDArray:
        """Release unused storage capacity; returns self."""

    @abstractmethod
    def zero(self) -> NDArray:
        """Set every element to zero in place; returns self."""

    @abstractmethod
    def iter_nonzero(self) -> Iterator[Entry]:
        """Nonzero entries in storage order."""

    @abstractmethod
    def iter_nonzero_ordered(self) -> Iterator[Entry]:
        """Nonzero entries in ascending index order."""

    # === Shape introspection ===

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def num_rows(self) -> int:
        return self._shape.rows

    @property
    def num_cols(self) -> int:
        return self._shape.cols

    @property
    def length(self) -> int:
        return self._shape.length

    @property
    def is_vector(self) -> bool:
        return self._shape.is_vector

    @property
    def is_row_vector(self) -> bool:
        return self._shape.is_row_vector

    @property
    def is_column_vector(self) -> bool:
        return self._shape.is_column_vector

    @property
    def is_scalar(self) -> bool:
        return self._shape.is_scalar

    @property
    def is_square(self) -> bool:
        return self._shape.is_square

    @property
    def precision(self) -> Precision:
        return self._precision

    @property
    def dtype(self) -> np.dtype:
        return self._precision.dtype

    @property
    def is_sparse(self) -> bool:
        return self.storage_kind is StorageKind.SPARSE

    @property
    def is_dense(self) -> bool:
        return self.storage_kind is StorageKind.DENSE

    @property
    def factory(self) -> 'NDArrayFactory':
        """The factory that creates arrays of this variant."""
        from pyndarray.linear.factory import NDArrayFactory
        return NDArrayFactory.for_variant(self.storage_kind, self._precision)

    def _result_factory(self, other: Any = None) -> 'NDArrayFactory':
        factory = self.factory
        if isinstance(other, NDArray) and self.is_sparse and other.is_dense:
            from pyndarray.linear.factory import NDArrayFactory
            return NDArrayFactory.for_variant(StorageKind.DENSE, self._precision)
        return factory

    # === Element access ===

    def _resolve(self, pos: Any) -> int:
        if isinstance(pos, tuple):
            if len(pos) != 2:
                raise InvalidArgumentError(f"expected a (row, col) subscript, got {pos!r}")
            row, col = pos
            for part in (row, col):
                if isinstance(part, bool) or not isinstance(part, Integral):
                    raise InvalidArgumentError(f"subscript must be integers, got {pos!r}")
            return self._shape.col_major_index(int(row), int(col))
        return check_index(pos, self.length)

    def _entry(self, index: int, value: float) -> Entry:
        return Entry(index, index % self.num_rows, index // self.num_rows, value)

    def get(self, pos: Any) -> float:
        """Value at a linear index or (row, col) subscript."""
        return self._get(self._resolve(pos))

    def set(self, pos: Any, value: float) -> NDArray:
        """Write a value in place; returns self."""
        self._set(self._resolve(pos), float(value))
        return self

    def increment(self, pos: Any, amount: float = 1.0) -> NDArray:
        index = self._resolve(pos)
        self._set(index, self._get(index) + float(amount))
        return self

    def decrement(self, pos: Any, amount: float = 1.0) -> NDArray:
        return self.increment(pos, -float(amount))

    def __getitem__(self, pos: Any) -> float:
        return self.get(pos)

    def __setitem__(self, pos: Any, value: float) -> None:
        self.set(pos, value)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[Entry]:
        """Every element, zeros included, in index order."""
        for index in range(self.length):
            yield self._entry(index, self._get(index))

    # === Export ===

    def _values2d(self) -> NumpyArray:
        """Logical (rows, cols) values; callers must not write into it."""
        return self.to_array().reshape(self.num_rows, self.num_cols, order='F')

    def to_2d_array(self) -> NumpyArray:
        """Copy of the contents as a (rows, cols) numpy array."""
        return np.array(self._values2d(), order='C')

    def to_scipy(self) -> 'scipy.sparse.csc_matrix':
        """Contents as a SciPy CSC matrix."""
        import scipy.sparse
        return scipy.sparse.csc_matrix(self._values2d())

    def _assign(self, values: NumpyArray) -> None:
        self._assign_flat(np.asarray(values).reshape(-1, order='F'))

    # === Elementwise arithmetic ===

    def _operand(self, other: Any, axis: Axis | None, operation: str) -> Any:
        """Resolve the right-hand side to a scalar or a broadcastable numpy array."""
        if isinstance(other, NDArray):
            if axis is None:
                check_same_shape(self, other, operation)
                return other._values2d()
            if not other.is_vector:
                raise DimensionMismatchError(
                    f"{operation}: broadcast operand must be a vector, got {other.shape}",
                    operation=operation,
                    actual=other.shape,
                )
            expected = self._shape.extent(axis.other)
            if other.length != expected:
                raise DimensionMismatchError(
                    f"{operation}: vector of length {other.length} cannot be broadcast "
                    f"along {axis.value} of {self.shape} (expected length {expected})",
                    operation=operation,
                    expected=expected,
                    actual=other.length,
                )
            values = other.to_array()
            return values.reshape(1, -1) if axis is Axis.ROW else values.reshape(-1, 1)
        if axis is not None:
            raise InvalidArgumentError(f"{operation}: axis broadcast requires a vector operand")
        if isinstance(other, bool) or not isinstance(other, Real):
            raise InvalidArgumentError(
                f"{operation}: operand must be a number or NDArray, got {type(other).__name__}"
            )
        return float(other)

    def _elementwise(self, name: str, other: Any, axis: Axis | None, in_place: bool) -> NDArray:
        rhs = self._operand(other, axis, name)
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            values = _OPERATORS[name](self._values2d(), rhs)
        if in_place:
            self._assign(values)
            return self
        return self._result_factory(other).from_2d_array(values)

    def add(self, other: Any, axis: Axis | None = None) -> NDArray:
        return self._elementwise('add', other, axis, in_place=False)

    def add_(self, other: Any, axis: Axis | None = None) -> NDArray:
        return self._elementwise('add', other, axis, in_place=True)

    def sub(self, other: Any, axis: Axis | None = None) -> NDArray:
        return self._elementwise('sub', other, axis, in_place=False)

    def sub_(self, other: Any, axis: Axis | None = None) -> NDArray:
        return self._elementwise('sub', other, axis, in_place=True)

    def mul(self, other: Any, axis: Axis | None = None) -> NDArray:
        return self._elementwise('mul', other, axis, in_place=False)

    def mul_(self, other: Any, axis: Axis | None = None) -> NDArray:
        return self._elementwise('mul', other, axis, in_place=True)

    def div(self, other: Any, axis: Axis | None = None) -> NDArray:
        return self._elementwise('div', other, axis, in_place=False)

    def div_(self, other: Any, axis: Axis | None = None) -> NDArray:
        return self._elementwise('div', other, axis, in_place=True)

    def rsub(self, other: Any, axis: Axis | None = None) -> NDArray:
        """other - self."""
        return self._elementwise('rsub', other, axis, in_place=False)

    def rsub_(self, other: Any, axis: Axis | None = None) -> NDArray:
        return self._elementwise('rsub', other, axis, in_place=True)

    def rdiv(self, other: Any, axis: Axis | None = None) -> NDArray:
        """other / self."""
        return self._elementwise('rdiv', other, axis, in_place=False)

    def rdiv_(self, other: Any, axis: Axis | None = None) -> NDArray:
        return self._elementwise('rdiv', other, axis, in_place=True)

    # === Unary maps ===

    def _unary(self, fn: Callable[[NumpyArray], NumpyArray], in_place: bool) -> NDArray:
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            values = fn(self._values2d())
        if in_place:
            self._assign(values)
            return self
        return self.factory.from_2d_array(values)

    def map(self, fn: Callable[[float], float]) -> NDArray:
        """Apply a scalar function to every element."""
        return self._unary(np.vectorize(fn, otypes=[np.float64]), in_place=False)

    def map_(self, fn: Callable[[float], float]) -> NDArray:
        return self._unary(np.vectorize(fn, otypes=[np.float64]), in_place=True)

    def map_sparse(self, fn: Callable[[float], float]) -> NDArray:
        """
        Apply a scalar function to nonzero elements only.

        Zeros are left untouched. The result keeps the receiver's variant.
        """
        return self.copy().map_sparse_(fn)

    def map_sparse_(self, fn: Callable[[float], float]) -> NDArray:
        for entry in list(self.iter_nonzero()):
            self._set(entry.index, float(fn(entry.value)))
        return self

    def test(self, predicate: Callable[[float], bool]) -> NDArray:
        """1.0 where the predicate holds, 0.0 elsewhere."""
        mask = np.vectorize(predicate, otypes=[bool])
        return self._unary(lambda v: mask(v).astype(np.float64), in_place=False)

    def test_(self, predicate: Callable[[float], bool]) -> NDArray:
        mask = np.vectorize(predicate, otypes=[bool])
        return self._unary(lambda v: mask(v).astype(np.float64), in_place=True)

    def pow(self, exponent: float) -> NDArray:
        return self._unary(lambda v: np.power(v, float(exponent)), in_place=False)

    def pow_(self, exponent: float) -> NDArray:
        return self._unary(lambda v: np.power(v, float(exponent)), in_place=True)

    def exp(self) -> NDArray:
        return self._unary(np.exp, in_place=False)

    def exp_(self) -> NDArray:
        return self._unary(np.exp, in_place=True)

    def log(self) -> NDArray:
        return self._unary(np.log, in_place=False)

    def log_(self) -> NDArray:
        return self._unary(np.log, in_place=True)

    def neg(self) -> NDArray:
        return self.mul(-1.0)

    def neg_(self) -> NDArray:
        return self.mul_(-1.0)

    # === Linear algebra ===

    def _check_mmul(self, other: NDArray) -> None:
        if not isinstance(other, NDArray):
            raise InvalidArgumentError(f"mmul: expected an NDArray, got {type(other).__name__}")
        if self.num_cols != other.num_rows:
            raise DimensionMismatchError(
                f"mmul: cannot multiply {self.shape} by {other.shape} "
                f"({self.num_cols} columns vs {other.num_rows} rows)",
                operation='mmul',
                expected=self.num_cols,
                actual=other.num_rows,
            )

    def mmul(self, other: NDArray) -> NDArray:
        """Matrix product self @ other."""
        self._check_mmul(other)
        # accumulate in float64 and round once, whatever the operands' storage
        values = np.matmul(
            self._values2d().astype(np.float64, copy=False),
            other._values2d().astype(np.float64, copy=False),
        )
        return self._result_factory(other).from_2d_array(values)

    def transpose(self) -> NDArray:
        return self.factory.from_2d_array(self._values2d().T)

    @property
    def T(self) -> NDArray:
        return self.transpose()

    def _check_dot(self, other: NDArray) -> None:
        if not isinstance(other, NDArray):
            raise InvalidArgumentError(f"dot: expected an NDArray, got {type(other).__name__}")
        if self.length != other.length:
            raise DimensionMismatchError(
                f"dot: length mismatch {self.length} vs {other.length}",
                operation='dot',
                expected=self.length,
                actual=other.length,
            )

    def dot(self, other: NDArray) -> float:
        """Sum of the elementwise product of the flattened arrays."""
        self._check_dot(other)
        lhs = self.to_array().astype(np.float64, copy=False)
        rhs = other.to_array().astype(np.float64, copy=False)
        return float(np.dot(lhs, rhs))

    def pivot(self) -> NDArray:
        """
        Permutation matrix P of partial pivoting, so that P @ self can be
        factorized without row exchanges.

        Rows are chosen by largest absolute value in the current column of
        the partially eliminated matrix, ties going to the lowest row.
        """
        check_square(self, 'pivot')
        n = self.num_rows
        work = np.array(self._values2d(), dtype=np.float64)
        order = np.arange(n)
        for j in range(n):
            p = j + int(np.argmax(np.abs(work[j:, j])))
            if p != j:
                work[[j, p]] = work[[p, j]]
                order[[j, p]] = order[[p, j]]
            if work[j, j] != 0.0:
                multipliers = work[j + 1:, j] / work[j, j]
                work[j + 1:, j:] -= np.outer(multipliers, work[j, j:])
        P = self.factory.zeros(n, n)
        for row, source in enumerate(order):
            P.set((row, int(source)), 1.0)
        return P

    # === Reductions ===

    def sum(self, axis: Axis | None = None) -> 'float | NDArray':
        """Total (no axis), or one sum per row / column."""
        if axis is None:
            return float(np.sum(self._stored_values(), dtype=np.float64))
        return self._reduce_axis(np.sum, axis)

    def mean(self, axis: Axis | None = None) -> 'float | NDArray':
        if axis is None:
            return self.sum() / self.length
        return self._reduce_axis(np.mean, axis)

    def max(self, axis: Axis | None = None) -> 'float | NDArray':
        """Largest value; implicit zeros of sparse storage participate."""
        if axis is None:
            return self._scalar_extreme(np.max)
        return self._reduce_axis(np.max, axis)

    def min(self, axis: Axis | None = None) -> 'float | NDArray':
        """Smallest value; implicit zeros of sparse storage participate."""
        if axis is None:
            return self._scalar_extreme(np.min)
        return self._reduce_axis(np.min, axis)

    def _scalar_extreme(self, fn: Callable[[NumpyArray], Any]) -> float:
        values = self._stored_values()
        if values.size < self.length:
            values = np.append(values, 0.0)
        return float(fn(values))

    def _reduce_axis(self, fn: Callable[..., NumpyArray], axis: Axis) -> NDArray:
        matrix = self._values2d().astype(np.float64, copy=False)
        if axis is Axis.ROW:
            values = fn(matrix, axis=1).reshape(-1, 1)
        else:
            values = fn(matrix, axis=0).reshape(1, -1)
        return self.factory.from_2d_array(values)

    def arg_max(self, axis: Axis) -> NumpyArray:
        """Index of the largest value in each row (ROW) or column (COLUMN)."""
        return np.argmax(self._values2d(), axis=1 if axis is Axis.ROW else 0)

    def arg_min(self, axis: Axis) -> NumpyArray:
        """Index of the smallest value in each row (ROW) or column (COLUMN)."""
        return np.argmin(self._values2d(), axis=1 if axis is Axis.ROW else 0)

    def norm1(self) -> float:
        return float(np.sum(np.abs(self._stored_values()), dtype=np.float64))

    def sum_of_squares(self) -> float:
        values = self._stored_values().astype(np.float64, copy=False)
        return float(np.dot(values, values))

    def norm2(self) -> float:
        return float(np.sqrt(self.sum_of_squares()))

    # === Structure ===

    def diag(self) -> NDArray:
        """
        Vector: square matrix with the vector on its diagonal.
        Matrix: same-shape matrix keeping only the diagonal.
        """
        if self.is_vector:
            n = self.length
            result = self.factory.zeros(n, n)
            for entry in self.iter_nonzero():
                result._set(entry.index + entry.index * n, entry.value)
            return result
        result = self.factory.zeros(self.shape)
        for i in range(min(self.num_rows, self.num_cols)):
            index = i + i * self.num_rows
            result._set(index, self._get(index))
        return result

    def diagonal(self) -> NDArray:
        """Diagonal entries as a column vector."""
        n = min(self.num_rows, self.num_cols)
        values = np.array([self._get(i + i * self.num_rows) for i in range(n)])
        return self.factory.from_array(values, n, 1)

    def slice(
        self,
        start: int,
        end: int,
        col_start: int | None = None,
        col_end: int | None = None,
    ) -> NDArray:
        """
        Copy a contiguous block into a new array.

        slice(start, end) on a vector takes the linear range [start, end),
        keeping the orientation. slice(r0, r1, c0, c1) takes rows [r0, r1)
        and columns [c0, c1).

        Raises:
            IndexOutOfRangeError: If a bound lies outside the array
            InvalidArgumentError: If a range is empty or reversed
        """
        if col_start is None and col_end is None:
            if not self.is_vector:
                raise InvalidArgumentError(
                    f"slice: linear range requires a vector, got {self.shape}"
                )
            start, end = check_range(start, end, self.length, 'slice')
            if self.is_column_vector and not self.is_scalar:
                return self._block(start, end, 0, 1)
            return self._block(0, 1, start, end)
        if col_start is None or col_end is None:
            raise InvalidArgumentError("slice: both col_start and col_end are required")
        r0, r1 = check_range(start, end, self.num_rows, 'slice rows')
        c0, c1 = check_range(col_start, col_end, self.num_cols, 'slice columns')
        return self._block(r0, r1, c0, c1)

    def _block(self, r0: int, r1: int, c0: int, c1: int) -> NDArray:
        return self.factory.from_2d_array(self._values2d()[r0:r1, c0:c1])

    def get_vector(self, index: int, axis: Axis) -> NDArray:
        """Row `index` (ROW) as 1 x cols, or column `index` (COLUMN) as rows x 1."""
        check_index(index, self._shape.extent(axis), f"{axis.value} index")
        if axis is Axis.ROW:
            return self._block(index, index + 1, 0, self.num_cols)
        return self._block(0, self.num_rows, index, index + 1)

    def row(self, index: int) -> NDArray:
        return self.get_vector(index, Axis.ROW)

    def column(self, index: int) -> NDArray:
        return self.get_vector(index, Axis.COLUMN)

    def set_vector(self, index: int, vector: NDArray, axis: Axis) -> NDArray:
        """Overwrite row or column `index` in place with `vector`; returns self."""
        check_index(index, self._shape.extent(axis), f"{axis.value} index")
        expected = self._shape.extent(axis.other)
        if vector.length != expected:
            raise DimensionMismatchError(
                f"set_vector: expected a vector of length {expected}, got {vector.length}",
                operation='set_vector',
                expected=expected,
                actual=vector.length,
            )
        for j, value in enumerate(vector.to_array().tolist()):
            if axis is Axis.ROW:
                self._set(index + j * self.num_rows, value)
            else:
                self._set(j + index * self.num_rows, value)
        return self

    def redim(self, rows: 'int | tuple[int, int] | Shape', cols: int | None = None) -> NDArray:
        """
        New array of another shape and the same variant, holding the values
        whose linear index is valid in both shapes.
        """
        result = self.factory.zeros(rows, cols)
        for entry in self.iter_nonzero():
            if entry.index < result.length:
                result._set(entry.index, entry.value)
        return result

    # === Comparison and display ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NDArray):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return bool(np.array_equal(
            self.to_array().astype(np.float64, copy=False),
            other.to_array().astype(np.float64, copy=False),
            equal_nan=True,
        ))

    def __repr__(self) -> str:
        head = (f"{type(self).__name__}(shape={self.shape}, "
                f"precision={self._precision.value!r}")
        if self.length <= 64:
            return f"{head}, values={self.to_2d_array().tolist()})"
        return f"{head}, size={self.size()})"

    # === Operators ===

    def __add__(self, other: Any) -> NDArray:
        if not isinstance(other, (NDArray, Real)):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: Any) -> NDArray:
        if not isinstance(other, (NDArray, Real)):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other: Any) -> NDArray:
        if not isinstance(other, Real):
            return NotImplemented
        return self.rsub(other)

    def __mul__(self, other: Any) -> NDArray:
        if not isinstance(other, (NDArray, Real)):
            return NotImplemented
        return self.mul(other)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> NDArray:
        if not isinstance(other, (NDArray, Real)):
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other: Any) -> NDArray:
        if not isinstance(other, Real):
            return NotImplemented
        return self.rdiv(other)

    def __matmul__(self, other: Any) -> NDArray:
        if not isinstance(other, NDArray):
            return NotImplemented
        return self.mmul(other)

    def __pow__(self, exponent: Any) -> NDArray:
        if not isinstance(exponent, Real):
            return NotImplemented
        return self.pow(exponent)

    def __neg__(self) -> NDArray:
        return self.neg()

    def __iadd__(self, other: Any) -> NDArray:
        return self.add_(other)

    def __isub__(self, other: Any) -> NDArray:
        return self.sub_(other)

    def __imul__(self, other: Any) -> NDArray:
        return self.mul_(other)

    def __itruediv__(self, other: Any) -> NDArray:
        return self.div_(other)
