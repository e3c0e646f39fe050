"""
Decomposition backends.

Available backends:
    NativeLUBackend: LAPACK LU through SciPy (dense input)
    EliminationLUBackend: Doolittle elimination on the pivoted matrix (sparse input)
    NativeSVDBackend: LAPACK thin SVD through SciPy
    ArpackSVDBackend: Truncated SVD by ARPACK on sparse storage
"""

from pyndarray.decompose.backends.native import NativeLUBackend, NativeSVDBackend
from pyndarray.decompose.backends.elimination import EliminationLUBackend
from pyndarray.decompose.backends.iterative import ArpackSVDBackend

__all__ = [
    "NativeLUBackend",
    "NativeSVDBackend",
    "EliminationLUBackend",
    "ArpackSVDBackend",
]
