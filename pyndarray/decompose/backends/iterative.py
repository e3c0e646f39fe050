"""
Truncated SVD by Lanczos iteration (ARPACK).

Works on the CSC form of the input, so sparse arrays are never densified.
Only valid for 0 < k < min(rows, cols); callers fall back to the native
backend outside that range.
"""

from typing import Any
import numpy as np
import scipy.sparse.linalg
from scipy.sparse.linalg import ArpackNoConvergence

from pyndarray.core.exceptions import ConvergenceError, InvalidArgumentError
from pyndarray.core.compute.timing import Timer
from pyndarray.core.result import DecompositionResult
from pyndarray.core.validation import check_finite
from pyndarray.decompose.backends.common import check_factors_finite
from pyndarray.decompose.backends.native import wrap_svd_factors
from pyndarray.linear.ndarray import NDArray


class ArpackSVDBackend:
    """
    Largest-k singular triplets via scipy.sparse.linalg.svds.

    Args:
        k: Number of components, 0 < k < min(rows, cols)
        max_iterations: ARPACK iteration cap (None for the library default)
        seed: Seed for the ARPACK start vector, for reproducible factors
    """

    def __init__(self, k: int, *, max_iterations: int | None = None, seed: int | None = 0):
        self._k = k
        self._max_iterations = max_iterations
        self._seed = seed

    @property
    def name(self) -> str:
        return 'arpack_svd'

    def decompose(self, array: NDArray) -> DecompositionResult:
        """
        Returns:
            DecompositionResult with dense factors (U, S, V), singular values
            in descending order

        Raises:
            InvalidArgumentError: If k is outside (0, min(rows, cols)) or the
                input is not finite
            ConvergenceError: If ARPACK does not converge
            NumericalError: If the factors are not finite
        """
        r = min(array.num_rows, array.num_cols)
        if not 0 < self._k < r:
            raise InvalidArgumentError(
                f"{self.name}: k must satisfy 0 < k < {r}, got {self._k}"
            )

        timer = Timer()
        timer.start()

        matrix = array.to_scipy().astype(np.float64)
        check_finite(matrix.data, 'svd')

        v0 = None
        if self._seed is not None:
            v0 = np.random.default_rng(self._seed).uniform(-1.0, 1.0, r)

        with timer.section('factorize'):
            try:
                u, s, vh = scipy.sparse.linalg.svds(
                    matrix, k=self._k, solver='arpack', v0=v0, maxiter=self._max_iterations,
                )
            except ArpackNoConvergence as e:
                raise ConvergenceError(
                    f"{self.name}: ARPACK did not converge for k={self._k}",
                    iterations=self._max_iterations,
                    reason=str(e),
                ) from e

        check_factors_finite(self.name, u, s, vh)

        # svds returns the triplets in ascending order of singular value
        order = np.argsort(s)[::-1]
        u, s, vh = u[:, order], s[order], vh[order]

        with timer.section('wrap'):
            factors = wrap_svd_factors(array, u, s, vh)

        timer.stop()

        info: dict[str, Any] = {
            'method': 'svd',
            'solver': 'arpack',
            'k': self._k,
            'shape': array.shape.as_tuple(),
        }

        return DecompositionResult(
            factors=factors,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
        )
