"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyndarray.core.compute.tolerances import select_tolerance
from pyndarray.linear import (
    DENSE_DOUBLE,
    DENSE_FLOAT,
    SPARSE_DOUBLE,
    SPARSE_FLOAT,
)


ALL_FACTORIES = [DENSE_DOUBLE, DENSE_FLOAT, SPARSE_DOUBLE, SPARSE_FLOAT]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(params=ALL_FACTORIES, ids=lambda f: f"{f.storage.value}-{f.precision.value}")
def factory(request):
    """Every storage/precision variant."""
    return request.param


@pytest.fixture
def tol(factory):
    """Tolerance tier matching the factory's precision."""
    return select_tolerance(factory.precision.value)


# ═══════════════════════════════════════════════════════════════════════
# Reference arrays (values listed in column-major order)
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def v1(factory):
    """Row vector [0, 1, 4, 3]."""
    return factory.from_array([0, 1, 4, 3], 1, 4)


@pytest.fixture
def v2(factory):
    """Row vector [1, 2, 0, 4]."""
    return factory.from_array([1, 2, 0, 4], 1, 4)


@pytest.fixture
def v3(factory):
    """Column vector [1, 2, 4]."""
    return factory.from_array([1, 2, 4], 3, 1)


@pytest.fixture
def m1(factory):
    """3 x 4 matrix holding 1..12 column by column."""
    return factory.from_array(np.arange(1, 13), 3, 4)


@pytest.fixture
def m2(factory):
    """4 x 3 matrix holding 1..12 column by column."""
    return factory.from_array(np.arange(1, 13), 4, 3)
