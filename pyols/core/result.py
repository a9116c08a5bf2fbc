"""
Generic result container for PyOLS computations.

Every backend hands back the same envelope: a domain-specific parameter
payload plus metadata. The envelope is frozen, so a fit result can be
rendered, logged or stored without anyone changing it underneath.

Design decisions:
    - Generic over parameter payload P
    - info dict for diagnostics (rank, dropped rows, degenerate pivots)
    - timing is optional (unit tests can pass None)
    - warnings collects non-fatal issues instead of printing them
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific parameters (coefficients, fit statistics)
        info: Structured metadata (method, rank, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=LinearParams(...),
        ...     info={'method': 'normal_equations', 'rank': 3},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_gauss',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
