"""
Numerical precision constants and utilities.

Machine epsilon and the numerical-rank threshold used by SVDSolution.rank.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def rank_tolerance(
    singular_values: NDArray[np.floating[Any]],
    shape: tuple[int, int],
    dtype: np.dtype | type = np.float64
) -> float:
    """
    Threshold below which a singular value counts as zero.

    Same rule as numpy.linalg.matrix_rank: max(shape) * eps * sigma_max.
    """
    if singular_values.size == 0:
        return 0.0
    return max(shape) * machine_epsilon(dtype) * float(np.max(singular_values))
