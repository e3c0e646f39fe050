"""
Axis of a two-dimensional array.

Axis.ROW addresses rows: a reduction along ROW yields one value per row and
a vector broadcast along ROW is applied to every row (so its length equals
the number of columns). Axis.COLUMN is the mirror image.
"""

from enum import Enum


class Axis(Enum):
    ROW = 'row'
    COLUMN = 'column'

    @property
    def other(self) -> 'Axis':
        """The complementary axis."""
        return Axis.COLUMN if self is Axis.ROW else Axis.ROW
