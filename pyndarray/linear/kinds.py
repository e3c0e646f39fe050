"""
Storage kinds and precisions.

The four array variants are the product of these two closed enums:
{DENSE, SPARSE} x {DOUBLE, FLOAT}.
"""

from enum import Enum

import numpy as np


class StorageKind(Enum):
    DENSE = 'dense'
    SPARSE = 'sparse'


class Precision(Enum):
    DOUBLE = 'double'
    FLOAT = 'float'

    @property
    def dtype(self) -> np.dtype:
        """NumPy dtype backing this precision."""
        return np.dtype(np.float64) if self is Precision.DOUBLE else np.dtype(np.float32)

    def cast(self, value: float) -> float:
        """Round a Python float to this precision."""
        if self is Precision.FLOAT:
            return float(np.float32(value))
        return float(value)
