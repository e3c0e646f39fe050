"""
Tests for the exception hierarchy.

Validates:
    - Every library error is a PyNDArrayError
    - Builtin bases (ValueError, IndexError) so plain Python idioms still work
    - Diagnostic attributes are stored and default to None
"""

import pytest

from pyndarray.core.exceptions import (
    ConvergenceError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    NumericalError,
    PyNDArrayError,
    SingularMatrixError,
)


# ═══════════════════════════════════════════════════════════════════════
# Hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestHierarchy:

    @pytest.mark.parametrize("cls", [
        InvalidArgumentError,
        DimensionMismatchError,
        IndexOutOfRangeError,
        NumericalError,
        SingularMatrixError,
        ConvergenceError,
    ])
    def test_all_derive_from_base(self, cls):
        assert issubclass(cls, PyNDArrayError)

    def test_invalid_argument_is_value_error(self):
        assert issubclass(InvalidArgumentError, ValueError)

    def test_dimension_mismatch_is_invalid_argument(self):
        assert issubclass(DimensionMismatchError, InvalidArgumentError)
        assert issubclass(DimensionMismatchError, ValueError)

    def test_index_out_of_range_is_index_error(self):
        assert issubclass(IndexOutOfRangeError, IndexError)
        assert not issubclass(IndexOutOfRangeError, ValueError)

    def test_numerical_errors(self):
        assert issubclass(SingularMatrixError, NumericalError)
        assert issubclass(ConvergenceError, NumericalError)

    def test_catch_as_builtin(self):
        with pytest.raises(IndexError):
            raise IndexOutOfRangeError("out of range", index=5, bound=4)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:

    def test_dimension_mismatch(self):
        e = DimensionMismatchError("bad", operation="add", expected=4, actual=3)
        assert str(e) == "bad"
        assert e.operation == "add"
        assert e.expected == 4
        assert e.actual == 3

    def test_dimension_mismatch_defaults(self):
        e = DimensionMismatchError("bad")
        assert e.operation is None
        assert e.expected is None
        assert e.actual is None

    def test_index_out_of_range(self):
        e = IndexOutOfRangeError("oops", index=(3, 0), bound=(3, 4))
        assert e.index == (3, 0)
        assert e.bound == (3, 4)

    def test_singular_matrix(self):
        e = SingularMatrixError("singular", matrix_name="A", rank=2, expected_rank=3)
        assert e.matrix_name == "A"
        assert e.rank == 2
        assert e.expected_rank == 3

    def test_convergence(self):
        e = ConvergenceError("no", iterations=100, reason="max_iterations")
        assert e.iterations == 100
        assert e.reason == "max_iterations"

    def test_convergence_defaults(self):
        e = ConvergenceError("no")
        assert e.iterations is None
        assert e.reason is None
