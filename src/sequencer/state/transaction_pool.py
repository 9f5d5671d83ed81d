"""
Transaction Pool - holds pending transactions for one batching cycle.

Append-only and in-memory. Insertion order is preserved and is itself
meaningful: it is the tie-break for every deterministic ordering.
"""

import threading
from collections import Counter
from typing import Dict, Iterable, List, Set, Tuple

import structlog

from sequencer.core.transaction import Transaction

logger = structlog.get_logger(__name__)


class TransactionPool:
    """
    Manages the pool of pending transactions.

    Responsibilities:
    - Accept transactions in arrival order
    - Hand out consistent point-in-time snapshots
    - Answer aggregate queries over the current contents
    - Reset or rotate between batching cycles

    Thread-safe for concurrent access. The lock is held only for the
    duration of a single call.
    """

    def __init__(self):
        """Initialize an empty transaction pool."""
        # Transactions in insertion order
        self._transactions: List[Transaction] = []

        # Seen ids, used only to flag duplicates
        self._seen_ids: Set[str] = set()

        # Lock for thread safety
        self._lock = threading.Lock()

    def ingest(self, tx: Transaction) -> None:
        """
        Append a transaction to the pool.

        This is an unconditional append. Duplicate ids are accepted but
        logged, since they break identity-based reasoning downstream.

        Args:
            tx: The transaction to add
        """
        with self._lock:
            if tx.id in self._seen_ids:
                logger.warning(
                    "duplicate_transaction_id",
                    tx_id=tx.id,
                    origin=tx.origin,
                )
            self._seen_ids.add(tx.id)
            self._transactions.append(tx)
            size = len(self._transactions)

        logger.debug(
            "transaction_ingested",
            tx_id=tx.id,
            origin=tx.origin,
            fee_bid=tx.fee_bid,
            pool_size=size,
        )

    def ingest_many(self, txs: Iterable[Transaction]) -> int:
        """
        Append multiple transactions in order.

        Args:
            txs: Transactions to add

        Returns:
            Number of transactions ingested
        """
        ingested = 0
        for tx in txs:
            self.ingest(tx)
            ingested += 1
        return ingested

    def snapshot(self) -> Tuple[Transaction, ...]:
        """
        Get an immutable copy of the pool in insertion order.

        Later calls to ingest() never affect a snapshot already taken.
        """
        with self._lock:
            return tuple(self._transactions)

    def size(self) -> int:
        """Get the number of transactions in the pool."""
        with self._lock:
            return len(self._transactions)

    def distribution_by_origin(self) -> Dict[str, int]:
        """Count transactions per origin, recomputed on every call."""
        return dict(Counter(tx.origin for tx in self.snapshot()))

    def reset(self) -> int:
        """
        Discard every transaction in the pool.

        Returns:
            Number of transactions discarded
        """
        with self._lock:
            discarded = len(self._transactions)
            self._transactions = []
            self._seen_ids = set()

        logger.info("pool_reset", discarded=discarded)
        return discarded

    def rotate(self) -> Tuple[Transaction, ...]:
        """
        Atomically snapshot and clear the pool.

        Closes the current batching cycle and opens the next one, so no
        transaction ingested concurrently can fall between the two.

        Returns:
            The contents of the closed cycle in insertion order
        """
        with self._lock:
            closed = tuple(self._transactions)
            self._transactions = []
            self._seen_ids = set()

        logger.info("pool_rotated", closed_size=len(closed))
        return closed

    def __len__(self) -> int:
        return self.size()
