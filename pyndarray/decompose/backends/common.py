"""
Helpers shared by the decomposition backends.
"""

import warnings
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyndarray.core.exceptions import NumericalError
from pyndarray.core.validation import check_finite, check_square
from pyndarray.linear.ndarray import NDArray as Array


def lu_input(array: Array, name: str) -> NDArray[np.float64]:
    """
    Validate an LU input and return its values as a float64 (n, n) array.

    Raises:
        InvalidArgumentError: If the array is not square or not finite
    """
    check_square(array, name)
    values = array.to_2d_array().astype(np.float64, copy=False)
    check_finite(values, name)
    return values


def zero_pivots(U: NDArray[np.floating[Any]]) -> list[int]:
    """Indices of exactly-zero diagonal entries of an upper triangular factor."""
    return np.flatnonzero(np.diag(U) == 0.0).tolist()


def warn_singular(pivots: list[int], backend: str) -> str:
    """
    Emit the singular-matrix RuntimeWarning and return its message.

    The factorization itself is still valid (P @ A == L @ U) but U has a zero
    on its diagonal, so the matrix cannot be inverted.
    """
    message = (
        f"{backend}: matrix is singular to working precision "
        f"(zero pivot at column {pivots[0]}, {len(pivots)} in total)"
    )
    warnings.warn(message, RuntimeWarning, stacklevel=3)
    return message


def check_factors_finite(name: str, *factors: NDArray[np.floating[Any]]) -> None:
    """
    Raises:
        NumericalError: If any factor holds NaN or Inf
    """
    for factor in factors:
        if not np.all(np.isfinite(factor)):
            raise NumericalError(f"{name}: decomposition produced non-finite values")
