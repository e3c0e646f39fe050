"""
Native backends for LU and SVD.

Both hand the dense values to LAPACK through SciPy. These are the reference
implementations: exact (to floating point) and the default for dense input.
"""

from typing import Any
import numpy as np
import scipy.linalg

from pyndarray.core.exceptions import ConvergenceError
from pyndarray.core.compute.timing import Timer
from pyndarray.core.result import DecompositionResult
from pyndarray.core.validation import check_finite
from pyndarray.decompose.backends.common import (
    check_factors_finite,
    lu_input,
    warn_singular,
    zero_pivots,
)
from pyndarray.linear.factory import NDArrayFactory
from pyndarray.linear.kinds import StorageKind
from pyndarray.linear.ndarray import NDArray


class NativeLUBackend:
    """
    LU with partial pivoting via LAPACK getrf.

    scipy.linalg.lu returns (p, l, u) with A = p @ l @ u, so the row
    permutation applied to A is P = p.T and P @ A = L @ U.
    """

    @property
    def name(self) -> str:
        return 'native_lu'

    def decompose(self, array: NDArray) -> DecompositionResult:
        """
        Factorize a square, finite array.

        Args:
            array: Square NDArray of any variant

        Returns:
            DecompositionResult with factors (L, U, P) of the input's variant

        Raises:
            InvalidArgumentError: If the array is not square or not finite
        """
        timer = Timer()
        timer.start()

        values = lu_input(array, 'lu')

        with timer.section('factorize'):
            p, l, u = scipy.linalg.lu(values, check_finite=False)

        pivots = zero_pivots(u)
        warnings: tuple[str, ...] = ()
        if pivots:
            warnings = (warn_singular(pivots, self.name),)

        with timer.section('wrap'):
            factory = array.factory
            L = factory.from_2d_array(l)
            U = factory.from_2d_array(u)
            P = factory.from_2d_array(p.T)

        timer.stop()

        info: dict[str, Any] = {
            'method': 'lu',
            'solver': 'lapack_getrf',
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


class NativeSVDBackend:
    """
    Thin SVD via LAPACK gesdd.

    Always computes all r = min(rows, cols) components, then keeps the first
    k when k > 0.

    Args:
        k: Number of components to keep; k <= 0 keeps all of them
    """

    def __init__(self, k: int = -1):
        self._k = k

    @property
    def name(self) -> str:
        return 'native_svd'

    def decompose(self, array: NDArray) -> DecompositionResult:
        """
        Factorize any rectangular array.

        Returns:
            DecompositionResult with dense factors (U, S, V), A ~= U @ S @ V.T

        Raises:
            InvalidArgumentError: If the array holds NaN or Inf
            ConvergenceError: If LAPACK fails to converge
            NumericalError: If the factors are not finite
        """
        timer = Timer()
        timer.start()

        values = array.to_2d_array().astype(np.float64, copy=False)
        check_finite(values, 'svd')

        with timer.section('factorize'):
            try:
                u, s, vh = scipy.linalg.svd(values, full_matrices=False, check_finite=False)
            except np.linalg.LinAlgError as e:
                raise ConvergenceError(
                    f"{self.name}: SVD did not converge: {e}", reason=str(e)
                ) from e

        check_factors_finite(self.name, u, s, vh)
        if self._k > 0:
            u, s, vh = u[:, :self._k], s[:self._k], vh[:self._k]

        with timer.section('wrap'):
            factors = wrap_svd_factors(array, u, s, vh)

        timer.stop()

        info: dict[str, Any] = {
            'method': 'svd',
            'solver': 'lapack_gesdd',
            'k': int(s.size),
            'shape': array.shape.as_tuple(),
        }

        return DecompositionResult(
            factors=factors,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
        )


def wrap_svd_factors(
    array: NDArray,
    u: np.ndarray,
    s: np.ndarray,
    vh: np.ndarray,
) -> tuple[NDArray, NDArray, NDArray]:
    """(U, S, V) as dense arrays of the input's precision."""
    factory = NDArrayFactory.for_variant(StorageKind.DENSE, array.precision)
    return (
        factory.from_2d_array(u),
        factory.from_2d_array(np.diag(s)),
        factory.from_2d_array(vh.T),
    )
