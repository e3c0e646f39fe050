"""
PyNDArray: two-dimensional numeric arrays over dense and sparse storage.

One array contract across four variants (dense/sparse x double/float),
with elementwise arithmetic, broadcasting, reductions, matrix products and
LU / SVD decompositions.

Submodules:
    linear: Arrays, shapes, factories and vector composition
    decompose: LU and singular value decompositions
    config: Explicit engine defaults
"""

__version__ = "0.1.0"

from pyndarray import linear
from pyndarray import decompose
from pyndarray.config import EngineConfig

__all__ = [
    "__version__",
    "linear",
    "decompose",
    "EngineConfig",
]
