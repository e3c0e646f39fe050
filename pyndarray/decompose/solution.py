"""
Decomposition solution types.

User-facing wrappers around the DecompositionResult a backend returns.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray as NumpyArray
import scipy.linalg

from pyndarray.core.compute.precision import rank_tolerance
from pyndarray.core.exceptions import DimensionMismatchError, SingularMatrixError
from pyndarray.core.result import DecompositionResult
from pyndarray.linear.ndarray import NDArray


def _permutation_sign(P: NumpyArray) -> float:
    """Determinant (+1 or -1) of a permutation matrix."""
    order = np.argmax(P, axis=1)
    seen = np.zeros(order.size, dtype=bool)
    sign = 1.0
    for start in range(order.size):
        if seen[start]:
            continue
        length = 0
        j = start
        while not seen[j]:
            seen[j] = True
            j = order[j]
            length += 1
        if length % 2 == 0:
            sign = -sign
    return sign


@dataclass
class _SolutionBase:
    _result: DecompositionResult

    @property
    def factors(self) -> tuple[NDArray, ...]:
        return self._result.factors

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def result(self) -> DecompositionResult:
        """The underlying result envelope."""
        return self._result

    def __iter__(self):
        return iter(self._result)

    def __len__(self) -> int:
        return len(self._result)

    def __getitem__(self, index: int) -> NDArray:
        return self._result[index]


@dataclass
class LUSolution(_SolutionBase):
    """
    LU factorization P @ A = L @ U.

    Unpacks as ``L, U, P = solution``.
    """

    @property
    def L(self) -> NDArray:
        return self._result.factors[0]

    @property
    def U(self) -> NDArray:
        return self._result.factors[1]

    @property
    def P(self) -> NDArray:
        return self._result.factors[2]

    @property
    def is_singular(self) -> bool:
        return bool(self._result.info.get('singular', False))

    def determinant(self) -> float:
        """det(A) = det(P) * prod(diag(U)), det(P) being +1 or -1."""
        diagonal = self.U.diagonal().to_array().astype(np.float64, copy=False)
        return _permutation_sign(self.P.to_2d_array()) * float(np.prod(diagonal))

    def solve(self, b: NDArray) -> NDArray:
        """
        Solve A @ x = b by forward and back substitution.

        Args:
            b: Right-hand side with as many rows as A (a column vector or a
                matrix of several right-hand sides)

        Returns:
            x, created through the factorized matrix's factory

        Raises:
            DimensionMismatchError: If b has the wrong number of rows
            SingularMatrixError: If A is singular
        """
        n = self.L.num_rows
        if b.num_rows != n:
            raise DimensionMismatchError(
                f"solve: right-hand side has {b.num_rows} rows, expected {n}",
                operation='solve',
                expected=n,
                actual=b.num_rows,
            )
        if self.is_singular:
            pivots = self._result.info.get('zero_pivots', [])
            raise SingularMatrixError(
                "solve: matrix is singular",
                matrix_name='A',
                rank=n - len(pivots),
                expected_rank=n,
            )
        rhs = self.P.mmul(b).to_2d_array().astype(np.float64, copy=False)
        y = scipy.linalg.solve_triangular(
            self.L.to_2d_array(), rhs, lower=True, unit_diagonal=True
        )
        x = scipy.linalg.solve_triangular(self.U.to_2d_array(), y, lower=False)
        return self.L.factory.from_2d_array(x)


@dataclass
class SVDSolution(_SolutionBase):
    """
    Singular value decomposition A ~= U @ S @ V.T.

    Unpacks as ``U, S, V = solution``.
    """

    @property
    def U(self) -> NDArray:
        return self._result.factors[0]

    @property
    def S(self) -> NDArray:
        return self._result.factors[1]

    @property
    def V(self) -> NDArray:
        return self._result.factors[2]

    @property
    def k(self) -> int:
        """Number of components kept."""
        return self.S.num_rows

    @property
    def singular_values(self) -> NumpyArray:
        """Diagonal of S, in descending order."""
        return self.S.diagonal().to_array().astype(np.float64, copy=False)

    @property
    def rank(self) -> int:
        """
        Numerical rank among the kept components.

        A singular value counts when it exceeds
        max(rows, cols) * eps * sigma_max, eps taken at the input precision.
        """
        values = self.singular_values
        tol = rank_tolerance(values, self._result.info['shape'], self.S.dtype)
        return int(np.sum(values > tol))

    def reconstruct(self) -> NDArray:
        """U @ S @ V.T."""
        return self.U.mmul(self.S).mmul(self.V.T)
