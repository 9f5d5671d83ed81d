"""
Pool metrics aggregation.

Order-independent counts over a pool snapshot.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable

from sequencer.core.transaction import Transaction


@dataclass(frozen=True)
class PoolMetrics:
    """Aggregate counts over a snapshot."""
    total: int = 0
    by_origin: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "total": self.total,
            "by_origin": dict(self.by_origin),
        }


def compute_metrics(snapshot: Iterable[Transaction]) -> PoolMetrics:
    """
    Count transactions in total and per origin.

    Args:
        snapshot: Transactions to aggregate, in any order

    Returns:
        PoolMetrics for the snapshot
    """
    by_origin = Counter(tx.origin for tx in snapshot)
    return PoolMetrics(
        total=sum(by_origin.values()),
        by_origin=dict(by_origin),
    )
