"""
Two-dimensional numeric arrays.

One NDArray contract over dense and sparse storage at double or float
precision. Arrays are created through an NDArrayFactory:

    >>> from pyndarray.linear import DENSE_DOUBLE, Axis
    >>> m = DENSE_DOUBLE.from_array(range(1, 13), 3, 4)
    >>> m.sum(Axis.COLUMN)
"""

from pyndarray.linear.axis import Axis
from pyndarray.linear.shape import Shape, Subscript
from pyndarray.linear.kinds import Precision, StorageKind
from pyndarray.linear.ndarray import Entry, NDArray
from pyndarray.linear.dense import DenseNDArray
from pyndarray.linear.sparse import SparseNDArray
from pyndarray.linear.factory import (
    NDArrayFactory,
    DENSE_DOUBLE,
    DENSE_FLOAT,
    SPARSE_DOUBLE,
    SPARSE_FLOAT,
)
from pyndarray.linear.composition import VectorComposition

__all__ = [
    "Axis",
    "Shape",
    "Subscript",
    "Precision",
    "StorageKind",
    "Entry",
    "NDArray",
    "DenseNDArray",
    "SparseNDArray",
    "NDArrayFactory",
    "DENSE_DOUBLE",
    "DENSE_FLOAT",
    "SPARSE_DOUBLE",
    "SPARSE_FLOAT",
    "VectorComposition",
]
