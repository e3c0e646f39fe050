"""
Shape of a two-dimensional array.

A Shape is an immutable (rows, cols) pair plus the rule for mapping between
a linear storage index and a (row, col) subscript. The mapping is
column-major:

    index = row + col * rows

and is a bijection over [0, rows * cols).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from pyndarray.core.exceptions import IndexOutOfRangeError, InvalidArgumentError
from pyndarray.core.validation import check_index, check_positive
from pyndarray.linear.axis import Axis


class Subscript(NamedTuple):
    """A (row, col) position."""
    row: int
    col: int


@dataclass(frozen=True)
class Shape:
    """
    Row/column extent of an array.

    Attributes:
        rows: Number of rows (>= 1)
        cols: Number of columns (>= 1)
    """
    rows: int
    cols: int

    def __post_init__(self):
        object.__setattr__(self, 'rows', check_positive(self.rows, 'rows'))
        object.__setattr__(self, 'cols', check_positive(self.cols, 'cols'))

    @classmethod
    def of(cls, rows: 'int | tuple[int, int] | Shape', cols: int | None = None) -> Shape:
        """
        Build a Shape from two ints, a (rows, cols) tuple or another Shape.

        Raises:
            InvalidArgumentError: If the arguments do not describe a shape
        """
        if isinstance(rows, Shape):
            if cols is not None:
                raise InvalidArgumentError("cols must not be given together with a Shape")
            return rows
        if isinstance(rows, tuple):
            if cols is not None or len(rows) != 2:
                raise InvalidArgumentError(f"expected a (rows, cols) pair, got {rows!r}")
            return cls(rows[0], rows[1])
        if cols is None:
            raise InvalidArgumentError("cols is required when rows is an int")
        return cls(rows, cols)

    # === Derived properties ===

    @property
    def length(self) -> int:
        """Total number of elements."""
        return self.rows * self.cols

    @property
    def is_vector(self) -> bool:
        return self.rows == 1 or self.cols == 1

    @property
    def is_row_vector(self) -> bool:
        return self.rows == 1

    @property
    def is_column_vector(self) -> bool:
        return self.cols == 1

    @property
    def is_scalar(self) -> bool:
        return self.rows == 1 and self.cols == 1

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    @property
    def T(self) -> Shape:
        """Transposed shape."""
        return Shape(self.cols, self.rows)

    def extent(self, axis: Axis) -> int:
        """Number of rows for Axis.ROW, number of columns for Axis.COLUMN."""
        return self.rows if axis is Axis.ROW else self.cols

    def as_tuple(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    # === Index mapping ===

    def check_subscript(self, row: int, col: int) -> None:
        """
        Verify (row, col) lies in [0, rows) x [0, cols).

        Raises:
            IndexOutOfRangeError: If the subscript is out of range
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexOutOfRangeError(
                f"subscript ({row}, {col}) out of range for shape ({self.rows}, {self.cols})",
                index=(row, col),
                bound=(self.rows, self.cols),
            )

    def check_index(self, index: int) -> int:
        """Verify a linear index lies in [0, length)."""
        return check_index(index, self.length)

    def col_major_index(self, row: int, col: int) -> int:
        """Linear index of (row, col)."""
        self.check_subscript(row, col)
        return row + col * self.rows

    def from_col_major_index(self, index: int) -> Subscript:
        """(row, col) subscript of a linear index."""
        index = self.check_index(index)
        return Subscript(index % self.rows, index // self.rows)

    def copy(self) -> Shape:
        return Shape(self.rows, self.cols)

    def __str__(self) -> str:
        return f"({self.rows}, {self.cols})"
