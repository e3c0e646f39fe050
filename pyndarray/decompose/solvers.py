"""
Solver dispatch for decompositions.

This module provides the lu() and svd() functions (public API), the
LUDecomposition and SingularValueDecomposition objects that implement the
Decomposition protocol, and backend selection.
"""

import dataclasses
from numbers import Integral
from typing import Literal

from pyndarray.core.exceptions import InvalidArgumentError
from pyndarray.core.result import DecompositionResult
from pyndarray.decompose.solution import LUSolution, SVDSolution
from pyndarray.decompose.backends.native import NativeLUBackend, NativeSVDBackend
from pyndarray.decompose.backends.elimination import EliminationLUBackend
from pyndarray.decompose.backends.iterative import ArpackSVDBackend
from pyndarray.linear.ndarray import NDArray


# Type aliases for backend selection
LUBackendChoice = Literal['auto', 'native', 'elimination']
SVDMode = Literal['full', 'sparse']


def _check_input(array: NDArray, name: str) -> None:
    if not isinstance(array, NDArray):
        raise InvalidArgumentError(
            f"{name}: expected an NDArray, got {type(array).__name__}"
        )


class LUDecomposition:
    """
    LU factorization with partial pivoting.

    Args:
        backend: 'auto' (native for dense input, elimination for sparse),
            'native' or 'elimination'
    """

    def __init__(self, backend: LUBackendChoice = 'auto'):
        if backend not in ('auto', 'native', 'elimination'):
            raise InvalidArgumentError(f"Unknown LU backend: {backend!r}")
        self._backend = backend

    @property
    def name(self) -> str:
        return f'lu_{self._backend}'

    def decompose(self, array: NDArray) -> DecompositionResult:
        _check_input(array, 'lu')
        return _get_lu_backend(self._backend, array).decompose(array)


class SingularValueDecomposition:
    """
    Thin singular value decomposition, optionally truncated.

    Args:
        k: Number of components to keep; k <= 0 keeps min(rows, cols)
        mode: 'full' for the exact LAPACK solver, 'sparse' for the ARPACK
            solver (used only when 0 < k < min(rows, cols))
    """

    def __init__(self, k: int = -1, mode: SVDMode = 'full'):
        if isinstance(k, bool) or not isinstance(k, Integral):
            raise InvalidArgumentError(f"svd: k must be an integer, got {k!r}")
        if mode not in ('full', 'sparse'):
            raise InvalidArgumentError(f"Unknown SVD mode: {mode!r}")
        self._k = int(k)
        self._mode = mode

    @property
    def name(self) -> str:
        return f'svd_{self._mode}'

    def decompose(self, array: NDArray) -> DecompositionResult:
        _check_input(array, 'svd')
        r = min(array.num_rows, array.num_cols)
        if self._k > r:
            raise InvalidArgumentError(
                f"svd: k={self._k} exceeds min(rows, cols)={r} for shape {array.shape}"
            )

        if self._mode == 'full':
            return NativeSVDBackend(self._k).decompose(array)

        if 0 < self._k < r:
            return ArpackSVDBackend(self._k).decompose(array)

        # ARPACK cannot return all r components; answer exactly instead
        result = NativeSVDBackend(self._k).decompose(array)
        message = (
            f"sparse mode requires 0 < k < {r}, got k={self._k}; "
            f"used the dense solver"
        )
        return dataclasses.replace(
            result,
            info={**result.info, 'fallback': 'native_svd'},
            warnings=result.warnings + (message,),
        )


def lu(array: NDArray, *, backend: LUBackendChoice = 'auto') -> LUSolution:
    """
    Factor a square array as P @ A = L @ U.

    This is the primary public API for LU. L is unit lower triangular, U is
    upper triangular and P a permutation matrix, all created through the
    input's factory.

    A singular input is not an error: the factors are returned, a
    RuntimeWarning is emitted and ``solution.is_singular`` is True.

    Args:
        array: Square NDArray of any variant
        backend: Computational backend to use:
            - 'auto': LAPACK for dense input, elimination for sparse input
            - 'native': LAPACK getrf through SciPy
            - 'elimination': Doolittle elimination on A.pivot() @ A

    Returns:
        LUSolution with L, U, P, determinant() and solve()

    Raises:
        InvalidArgumentError: If the input is not square or holds NaN/Inf

    Example:
        >>> from pyndarray.linear import DENSE_DOUBLE
        >>> from pyndarray.decompose import lu
        >>>
        >>> A = DENSE_DOUBLE.from_2d_array([[4, 3], [6, 3]])
        >>> L, U, P = lu(A)
        >>> lu(A).determinant()
        -6.0
    """
    return LUSolution(_result=LUDecomposition(backend).decompose(array))


def svd(array: NDArray, *, k: int = -1, mode: SVDMode = 'full') -> SVDSolution:
    """
    Singular value decomposition A ~= U @ S @ V.T.

    With r = min(rows, cols), U is rows x r, S is an r x r diagonal matrix
    of singular values in descending order and V is cols x r. With k > 0
    only the first k components are kept. Factors are dense arrays of the
    input's precision.

    Args:
        array: NDArray of any shape and variant
        k: Number of components; k <= 0 keeps all r of them
        mode:
            - 'full': exact LAPACK solver
            - 'sparse': ARPACK on the sparse form when 0 < k < r, otherwise
              the exact solver (recorded in ``info['fallback']``)

    Returns:
        SVDSolution with U, S, V, singular_values, rank and reconstruct()

    Raises:
        InvalidArgumentError: If k > r, the mode is unknown or the input
            holds NaN/Inf
        ConvergenceError: If the solver does not converge
        NumericalError: If the factors are not finite
    """
    return SVDSolution(_result=SingularValueDecomposition(k, mode).decompose(array))


def _get_lu_backend(choice: LUBackendChoice, array: NDArray):
    """
    Select and instantiate the LU backend.

    Args:
        choice: User's backend preference
        array: The input (its storage kind decides 'auto')

    Returns:
        Backend instance ready to decompose
    """
    if choice == 'auto':
        if array.is_sparse:
            return EliminationLUBackend()
        return NativeLUBackend()

    elif choice == 'native':
        return NativeLUBackend()

    elif choice == 'elimination':
        return EliminationLUBackend()

    else:
        raise InvalidArgumentError(f"Unknown LU backend: {choice!r}")
