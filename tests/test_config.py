"""
Tests for EngineConfig.
"""

import pytest

from pyndarray import EngineConfig
from pyndarray.core.exceptions import InvalidArgumentError
from pyndarray.decompose import svd
from pyndarray.linear import DENSE_DOUBLE, SPARSE_DOUBLE, SPARSE_FLOAT, Shape


class TestEngineConfig:

    def test_defaults(self):
        config = EngineConfig()
        assert config.factory is DENSE_DOUBLE
        assert config.seed is None
        assert config.svd_mode == 'full'

    def test_frozen(self):
        config = EngineConfig()
        with pytest.raises(AttributeError):
            config.seed = 3

    def test_with_factory(self):
        config = EngineConfig(seed=5, svd_mode='sparse')
        other = config.with_factory(SPARSE_FLOAT)
        assert other.factory is SPARSE_FLOAT
        assert (other.seed, other.svd_mode) == (5, 'sparse')
        assert config.factory is DENSE_DOUBLE

    def test_seeded_rng_reproducible(self):
        config = EngineConfig(seed=11)
        assert config.rng().random() == config.rng().random()

    def test_seeded_rand_reproducible(self):
        config = EngineConfig(factory=SPARSE_DOUBLE, seed=11)
        a = config.rand(4, 3)
        assert a.is_sparse
        assert a == config.rand(4, 3)

    def test_shared_rng_gives_independent_draws(self):
        config = EngineConfig(seed=11)
        generator = config.rng()
        first = config.rand(4, 3, rng=generator)
        second = config.rand(4, 3, rng=generator)
        assert first != second
        assert first == config.rand(4, 3)

    def test_explicit_rng_overrides_seed(self):
        config = EngineConfig(seed=11)
        assert config.rand(3, 3, rng=1) == DENSE_DOUBLE.rand(3, 3, rng=1)

    def test_delegates_to_factory(self):
        config = EngineConfig(factory=SPARSE_FLOAT)
        zeros = config.zeros(2, 3)
        ones = config.ones((2, 3))
        wrapped = config.wrap([1.0, 0.0, 2.0, 0.0], 2, 2)
        for array in (zeros, ones, wrapped):
            assert array.factory is SPARSE_FLOAT
        assert zeros.shape == ones.shape == Shape(2, 3)
        assert wrapped.size() == 2

    def test_svd_mode_passes_through(self):
        config = EngineConfig(factory=SPARSE_DOUBLE, seed=2, svd_mode='sparse')
        solution = svd(config.rand(10, 6), k=2, mode=config.svd_mode)
        assert solution.backend_name == 'arpack_svd'

    def test_unknown_svd_mode(self):
        with pytest.raises(InvalidArgumentError):
            EngineConfig(svd_mode='randomized')

    def test_factory_type_checked(self):
        with pytest.raises(InvalidArgumentError):
            EngineConfig(factory='dense')
