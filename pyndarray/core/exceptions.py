"""
Exception hierarchy for PyNDArray.

All exceptions inherit from PyNDArrayError to allow catching any
library-specific error. The concrete classes also inherit from the matching
builtin (ValueError, IndexError) so callers using plain Python idioms still
catch them.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyNDArrayError(Exception):
    """Base exception for all PyNDArray errors."""
    pass


class InvalidArgumentError(PyNDArrayError, ValueError):
    """
    A structural precondition was violated.

    Raised for non-square input to LU, non-positive dimensions, invalid
    slice ranges, unknown options and similar caller mistakes.
    """
    pass


class DimensionMismatchError(InvalidArgumentError):
    """
    Array shapes are incompatible for the requested operation.

    Raised by elementwise arithmetic, broadcasting, mmul and dot before
    any partial computation takes place.

    Attributes:
        operation: Name of the operation that rejected the operands
        expected: Expected extent or shape, if known
        actual: Actual extent or shape, if known
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        expected: object | None = None,
        actual: object | None = None
    ):
        super().__init__(message)
        self.operation = operation
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(PyNDArrayError, IndexError):
    """
    Subscript or linear index outside the array bounds.

    Attributes:
        index: The offending index or (row, col) subscript
        bound: The exclusive upper bound (or (rows, cols) pair)
    """

    def __init__(
        self,
        message: str,
        index: object | None = None,
        bound: object | None = None
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound


class NumericalError(PyNDArrayError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during a
    decomposition, e.g. non-finite factors.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular where an invertible one is required.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank, if computed
        expected_rank: Expected rank
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank


class ConvergenceError(NumericalError):
    """
    Iterative solver failed to converge.

    Raised by the iterative SVD solver instead of returning partial or
    silently wrong factors.

    Attributes:
        iterations: Number of iterations completed, if known
        reason: Why convergence failed (e.g., 'max_iterations')
    """

    def __init__(
        self,
        message: str,
        iterations: int | None = None,
        reason: str | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.reason = reason
