"""
Tolerance tiers for numerical validation.

Defines precision expectations for the two storage precisions:
- DOUBLE (float64): reference, near machine precision
- FLOAT (float32): relaxed for single-precision arithmetic

Used when checking factor reconstructions and cross-variant results.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Double precision: factorizations must reproduce the input to ~1e-9
FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-10,
    name='fp64',
    description='Double precision, dense or sparse storage',
)

# Single precision
FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='Single precision, dense or sparse storage',
)


def select_tolerance(precision: str) -> ToleranceTier:
    """Select the tolerance tier for a precision name ('double' or 'float')."""
    if precision == 'float':
        return FP32
    return FP64
