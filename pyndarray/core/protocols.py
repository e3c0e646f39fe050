"""
Core protocols for PyNDArray.

We use Protocol (structural typing) rather than ABC (nominal typing) so
native and hand-rolled decomposition backends only have to agree on shape,
not on a base class.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from pyndarray.core.result import DecompositionResult
    from pyndarray.linear.ndarray import NDArray


@runtime_checkable
class Decomposition(Protocol):
    """
    Protocol for decomposition backends.

    Each backend takes an NDArray and produces a DecompositionResult whose
    factors are new, independently owned NDArrays. Backends are stateless
    apart from construction-time parameters (e.g. truncation rank), which
    makes them safe to share and easy to swap.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{engine}_{algorithm}'
        Examples: 'native_lu', 'elimination_lu', 'native_svd', 'arpack_svd'
        """
        ...

    def decompose(self, array: 'NDArray') -> 'DecompositionResult':
        """
        Factorize the array.

        Raises:
            InvalidArgumentError: If the input violates a precondition
            ConvergenceError: If an iterative solver fails to converge
            NumericalError: If the factors are not finite
        """
        ...
