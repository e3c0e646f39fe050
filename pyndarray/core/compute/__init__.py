"""
Shared compute infrastructure for PyNDArray.

IMPORTANT: This is NOT where decomposition backends live. Those go in
decompose/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    precision: Numerical precision constants and utilities
    tolerances: Tolerance tiers per precision
"""

from pyndarray.core.compute.timing import Timer
from pyndarray.core.compute.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Timing
    "Timer",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
