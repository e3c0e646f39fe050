"""
Matrix decompositions.

Public API:
    lu(array, ...) -> LUSolution
    svd(array, k=-1, mode='full') -> SVDSolution

The functions handle input validation, backend selection and result
wrapping. LUDecomposition and SingularValueDecomposition expose the same
algorithms through the Decomposition protocol, returning the bare
DecompositionResult.

Example:
    >>> from pyndarray.decompose import svd
    >>> U, S, V = svd(A, k=2)
"""

from pyndarray.decompose.solution import LUSolution, SVDSolution
from pyndarray.decompose.solvers import (
    LUDecomposition,
    SingularValueDecomposition,
    lu,
    svd,
)

__all__ = [
    "lu",
    "svd",
    "LUDecomposition",
    "SingularValueDecomposition",
    "LUSolution",
    "SVDSolution",
]
