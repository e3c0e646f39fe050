"""
Engine configuration.

There is no process-wide default factory. Code that wants a default
variant takes an EngineConfig and passes it down:

    >>> config = EngineConfig(factory=SPARSE_DOUBLE, seed=7)
    >>> weights = config.rand(100, 20)
    >>> solution = svd(weights, k=5, mode=config.svd_mode)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike

from pyndarray.core.exceptions import InvalidArgumentError
from pyndarray.linear.factory import DENSE_DOUBLE, NDArrayFactory
from pyndarray.linear.ndarray import NDArray


@dataclass(frozen=True)
class EngineConfig:
    """
    Defaults for array creation and decomposition.

    Attributes:
        factory: Variant used by zeros/ones/rand/wrap
        seed: Seed for rng() and rand(); None draws fresh entropy
        svd_mode: Default SVD mode, 'full' or 'sparse'
    """
    factory: NDArrayFactory = DENSE_DOUBLE
    seed: int | None = None
    svd_mode: str = 'full'

    def __post_init__(self):
        if not isinstance(self.factory, NDArrayFactory):
            raise InvalidArgumentError(
                f"factory: expected an NDArrayFactory, got {type(self.factory).__name__}"
            )
        if self.svd_mode not in ('full', 'sparse'):
            raise InvalidArgumentError(f"Unknown SVD mode: {self.svd_mode!r}")

    def rng(self) -> np.random.Generator:
        """Fresh Generator seeded with `seed`."""
        return np.random.default_rng(self.seed)

    def with_factory(self, factory: NDArrayFactory) -> EngineConfig:
        """Copy of this config using another factory."""
        return dataclasses.replace(self, factory=factory)

    def zeros(self, rows: Any, cols: int | None = None) -> NDArray:
        return self.factory.zeros(rows, cols)

    def ones(self, rows: Any, cols: int | None = None) -> NDArray:
        return self.factory.ones(rows, cols)

    def rand(self, rows: Any, cols: int | None = None, *, rng: Any = None) -> NDArray:
        """
        Uniform [0, 1) array.

        Without `rng` each call draws from a fresh rng(), so a seeded config
        returns the same array on every call. Pass one shared generator
        (``g = config.rng(); config.rand(..., rng=g)``) for successive,
        independent draws.
        """
        return self.factory.rand(rows, cols, rng=self.rng() if rng is None else rng)

    def wrap(self, values: ArrayLike, rows: Any, cols: int | None = None) -> NDArray:
        return self.factory.wrap(values, rows, cols)
