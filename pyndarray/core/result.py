"""
Result container for all PyNDArray decompositions.

DecompositionResult is the standardized envelope every decomposition
backend returns. It holds the factor arrays in a fixed order and carries
timing, diagnostics and warnings alongside them.

Design decisions:
    - factors is a tuple, so the envelope behaves as a fixed-size sequence
      (``L, U, P = result``)
    - info dict for flexible metadata (solver, rank, singular)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True); the factor arrays themselves are owned by
      the caller once returned
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, TYPE_CHECKING

if TYPE_CHECKING:
    from pyndarray.linear.ndarray import NDArray


@dataclass(frozen=True)
class DecompositionResult:
    """
    Immutable result envelope for decompositions.

    Attributes:
        factors: Factor arrays in algorithm order ((L, U, P) or (U, S, V))
        info: Structured metadata (method, solver, rank, ...)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> DecompositionResult(
        ...     factors=(L, U, P),
        ...     info={'method': 'lu', 'singular': False},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='native_lu'
        ... )
    """
    factors: tuple['NDArray', ...]
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator['NDArray']:
        return iter(self.factors)

    def __len__(self) -> int:
        return len(self.factors)

    def __getitem__(self, index: int) -> 'NDArray':
        return self.factors[index]

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
