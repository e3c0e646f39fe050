"""
Core infrastructure for PyNDArray.

This module provides shared abstractions and utilities used by the array
engine (linear) and the decompositions (decompose).

Key components:
    protocols: Decomposition protocol
    result: DecompositionResult envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, precision and tolerance utilities
"""

from pyndarray.core.protocols import Decomposition
from pyndarray.core.result import DecompositionResult
from pyndarray.core.exceptions import (
    PyNDArrayError,
    InvalidArgumentError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "Decomposition",
    # Result
    "DecompositionResult",
    # Exceptions
    "PyNDArrayError",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
]
