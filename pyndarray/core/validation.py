"""
Input validation utilities for PyNDArray.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from __future__ import annotations

from numbers import Integral
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyndarray.core.exceptions import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidArgumentError,
)

if TYPE_CHECKING:
    from pyndarray.linear.ndarray import NDArray as Array


def check_array(
    array: ArrayLike,
    name: str,
    dtype: np.dtype | type = np.float64,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a floating numpy array.

    Args:
        array: Input to validate
        name: Parameter name for error messages
        dtype: Floating dtype of the returned array

    Returns:
        numpy.ndarray of the requested dtype

    Raises:
        InvalidArgumentError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise InvalidArgumentError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise InvalidArgumentError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.size and not np.issubdtype(result.dtype, np.number) \
            and result.dtype != np.bool_:
        raise InvalidArgumentError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(dtype, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        InvalidArgumentError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise InvalidArgumentError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a raw array is 2-dimensional.

    Raises:
        DimensionMismatchError: If array is not 2D
    """
    if array.ndim != 2:
        raise DimensionMismatchError(
            f"{name}: expected 2D array, got {array.ndim}D with shape {array.shape}",
            operation=name,
            expected=2,
            actual=array.ndim,
        )


def check_positive(value: Any, name: str) -> int:
    """
    Verify a dimension is a positive integer.

    Returns:
        The value as a Python int

    Raises:
        InvalidArgumentError: If value is not an integer or is < 1
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidArgumentError(f"{name}: expected an integer, got {value!r}")
    if value < 1:
        raise InvalidArgumentError(f"{name}: must be positive, got {value}")
    return int(value)


def check_index(index: Any, length: int, name: str = "index") -> int:
    """
    Verify a linear index lies in [0, length).

    Raises:
        IndexOutOfRangeError: If index is out of range
        InvalidArgumentError: If index is not an integer
    """
    if isinstance(index, bool) or not isinstance(index, Integral):
        raise InvalidArgumentError(f"{name}: expected an integer, got {index!r}")
    if index < 0 or index >= length:
        raise IndexOutOfRangeError(
            f"{name}: {index} out of range [0, {length})",
            index=index,
            bound=length,
        )
    return int(index)


def check_length(values: NDArray[Any], length: int, name: str) -> None:
    """
    Verify a flat buffer holds exactly `length` values.

    Raises:
        DimensionMismatchError: If the sizes differ
    """
    if values.size != length:
        raise DimensionMismatchError(
            f"{name}: expected {length} values, got {values.size}",
            operation=name,
            expected=length,
            actual=values.size,
        )


def check_same_shape(lhs: 'Array', rhs: 'Array', operation: str) -> None:
    """
    Verify two arrays have identical shapes.

    Raises:
        DimensionMismatchError: If the shapes differ
    """
    if lhs.shape != rhs.shape:
        raise DimensionMismatchError(
            f"{operation}: shape mismatch {lhs.shape} vs {rhs.shape}",
            operation=operation,
            expected=lhs.shape,
            actual=rhs.shape,
        )


def check_square(array: 'Array', name: str) -> None:
    """
    Verify an array is square.

    Raises:
        InvalidArgumentError: If rows != cols
    """
    if not array.is_square:
        raise InvalidArgumentError(
            f"{name}: only square matrices are supported, got {array.shape}"
        )


def check_range(start: Any, end: Any, extent: int, name: str) -> tuple[int, int]:
    """
    Verify a half-open range [start, end) is non-empty and within [0, extent].

    Returns:
        (start, end) as Python ints

    Raises:
        IndexOutOfRangeError: If either bound falls outside [0, extent]
        InvalidArgumentError: If the range is empty or reversed
    """
    for bound in (start, end):
        if isinstance(bound, bool) or not isinstance(bound, Integral):
            raise InvalidArgumentError(f"{name}: expected integer bounds, got {bound!r}")
    if start < 0 or end > extent:
        raise IndexOutOfRangeError(
            f"{name}: range [{start}, {end}) outside [0, {extent}]",
            index=(start, end),
            bound=extent,
        )
    if start >= end:
        raise InvalidArgumentError(f"{name}: empty or reversed range [{start}, {end})")
    return int(start), int(end)
