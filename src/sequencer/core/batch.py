"""
Batch model.

Represents one complete ordering of a pool snapshot produced by a strategy.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, List, Tuple

from sequencer.core.transaction import Transaction


@dataclass(frozen=True)
class Batch:
    """
    An ordered batch of transactions.

    The transactions are held in a tuple, so a caller holding a batch
    cannot reorder it or change the pool it was built from.

    Attributes:
        strategy: Name of the strategy that produced the ordering
        transactions: Transactions in their final committed order
        deterministic: False when the ordering must not be assumed reproducible
        batch_id: Unique identifier for the batch
        created_at: When the batch was ordered
    """

    strategy: str
    transactions: Tuple[Transaction, ...] = ()
    deterministic: bool = True
    batch_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def size(self) -> int:
        """Get the number of transactions in this batch."""
        return len(self.transactions)

    @property
    def is_empty(self) -> bool:
        """Check if batch has no transactions."""
        return len(self.transactions) == 0

    def get_transaction_ids(self) -> List[str]:
        """Get all transaction IDs in committed order."""
        return [tx.id for tx in self.transactions]

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.transactions)

    def __len__(self) -> int:
        return len(self.transactions)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "batch_id": self.batch_id,
            "strategy": self.strategy,
            "deterministic": self.deterministic,
            "size": self.size,
            "created_at": self.created_at.isoformat(),
            "transactions": [tx.to_dict() for tx in self.transactions],
        }

    def __repr__(self) -> str:
        return f"Batch(id={self.batch_id[:8]}..., strategy={self.strategy}, size={self.size})"
