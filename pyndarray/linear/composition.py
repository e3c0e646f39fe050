"""
Combining several vectors into one.

    >>> VectorComposition.AVERAGE.compose(u, v, w)

The result has the first vector's shape and variant.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable
import numpy as np

from pyndarray.core.exceptions import DimensionMismatchError, InvalidArgumentError
from pyndarray.linear.ndarray import NDArray


class VectorComposition(Enum):
    SUM = 'sum'
    AVERAGE = 'average'
    MAX = 'max'
    MIN = 'min'

    def compose(self, *vectors: NDArray | Iterable[NDArray]) -> NDArray:
        """
        Elementwise combination of equal-length vectors.

        Accepts the vectors as separate arguments or as a single iterable.

        Raises:
            InvalidArgumentError: If no vectors are given
            DimensionMismatchError: If the vectors differ in length
        """
        if len(vectors) == 1 and not isinstance(vectors[0], NDArray):
            vectors = tuple(vectors[0])
        if not vectors:
            raise InvalidArgumentError(f"{self.value}: at least one vector is required")
        first = vectors[0]
        for vector in vectors[1:]:
            if vector.length != first.length:
                raise DimensionMismatchError(
                    f"{self.value}: vector of length {vector.length} "
                    f"does not match length {first.length}",
                    operation=self.value,
                    expected=first.length,
                    actual=vector.length,
                )

        stacked = np.stack([v.to_array().astype(np.float64, copy=False) for v in vectors])
        values = _REDUCERS[self](stacked, axis=0)
        return first.factory.from_array(values, first.shape)


_REDUCERS = {
    VectorComposition.SUM: np.sum,
    VectorComposition.AVERAGE: np.mean,
    VectorComposition.MAX: np.max,
    VectorComposition.MIN: np.min,
}
