"""
Doolittle LU on the partially pivoted matrix.

The general-purpose backend, used for sparse input. The row permutation
comes from NDArray.pivot(), so the elimination itself never exchanges rows:

    P = A.pivot()
    P @ A = L @ U

L is unit lower triangular and U upper triangular. A zero pivot leaves the
column of L below it at zero and is reported, not raised.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray as NumpyArray

from pyndarray.core.compute.timing import Timer
from pyndarray.core.result import DecompositionResult
from pyndarray.decompose.backends.common import lu_input, warn_singular, zero_pivots
from pyndarray.linear.ndarray import NDArray


def doolittle(A: NumpyArray) -> tuple[NumpyArray, NumpyArray]:
    """
    Factor A = L @ U without row exchanges.

    Args:
        A: (n, n) float64 array, already row-permuted

    Returns:
        (L, U) as float64 arrays
    """
    n = A.shape[0]
    L = np.eye(n)
    U = np.zeros((n, n))
    for j in range(n):
        for i in range(j + 1):
            U[i, j] = A[i, j] - L[i, :i] @ U[:i, j]
        if U[j, j] == 0.0:
            continue
        L[j + 1:, j] = (A[j + 1:, j] - L[j + 1:, :j] @ U[:j, j]) / U[j, j]
    return L, U


class EliminationLUBackend:
    """LU by Doolittle elimination on A.pivot() @ A."""

    @property
    def name(self) -> str:
        return 'elimination_lu'

    def decompose(self, array: NDArray) -> DecompositionResult:
        """
        Factorize a square, finite array.

        Returns:
            DecompositionResult with factors (L, U, P) of the input's variant

        Raises:
            InvalidArgumentError: If the array is not square or not finite
        """
        timer = Timer()
        timer.start()

        lu_input(array, 'lu')

        with timer.section('pivot'):
            P = array.pivot()
            permuted = P.mmul(array).to_2d_array().astype(np.float64, copy=False)

        with timer.section('factorize'):
            l, u = doolittle(permuted)

        pivots = zero_pivots(u)
        warnings: tuple[str, ...] = ()
        if pivots:
            warnings = (warn_singular(pivots, self.name),)

        with timer.section('wrap'):
            factory = array.factory
            L = factory.from_2d_array(l)
            U = factory.from_2d_array(u)

        timer.stop()

        info: dict[str, Any] = {
            'method': 'lu',
            'solver': 'doolittle',
            'singular': bool(pivots),
            'zero_pivots': pivots,
        }

        return DecompositionResult(
            factors=(L, U, P),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=warnings,
        )
