"""
Main Sequencer orchestrator.

Coordinates the transaction pool and ordering engine to provide
the ingestion, batch-request and metrics entry points.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional, Tuple

import structlog

from sequencer.config import OrderingStrategy, SequencerConfig, get_config
from sequencer.core.batch import Batch
from sequencer.core.transaction import Transaction
from sequencer.engine.metrics import PoolMetrics, compute_metrics
from sequencer.engine.ordering import OrderingEngine, StrategySelector
from sequencer.state.transaction_pool import TransactionPool

logger = structlog.get_logger(__name__)


class Sequencer:
    """
    Main sequencer orchestrator.

    Coordinates sequencer components:
    - Transaction ingestion into the pool
    - Batch construction under a named ordering strategy
    - Side-by-side comparison of strategies over one snapshot
    - Pool metrics and cycle rotation

    Usage:
        ```python
        sequencer = Sequencer()
        sequencer.submit(Transaction("tx_0", "optimism", 1, 20))
        batch = sequencer.create_batch(OrderingStrategy.FAIR)
        ```
    """

    def __init__(
        self,
        config: Optional[SequencerConfig] = None,
        pool: Optional[TransactionPool] = None,
        engine: Optional[OrderingEngine] = None,
    ):
        """
        Initialize the sequencer.

        Args:
            config: Sequencer configuration
            pool: Custom transaction pool (a fresh one if not provided)
            engine: Custom ordering engine (built from config if not provided)
        """
        self.config = config or get_config()
        self.pool = pool if pool is not None else TransactionPool()
        self.engine = engine or OrderingEngine(config=self.config)

        # State
        self._batches_created = 0
        self._cycles_closed = 0
        self._last_batch_time: Optional[datetime] = None

        # Callbacks
        self._on_batch_created: Optional[Callable[[Batch], None]] = None

    # Ingestion

    def submit(self, tx: Transaction) -> None:
        """Add a transaction to the current batching cycle."""
        self.pool.ingest(tx)

    def submit_many(self, txs: Iterable[Transaction]) -> int:
        """Add several transactions in order, returning how many were added."""
        return self.pool.ingest_many(txs)

    # Batch construction

    def create_batch(self, strategy: Optional[StrategySelector] = None) -> Batch:
        """
        Order the current pool contents.

        Args:
            strategy: Strategy to apply (config default if not provided)

        Returns:
            Batch holding every pooled transaction in committed order

        Raises:
            UnknownStrategyError: If the strategy is not registered
        """
        if strategy is None:
            strategy = self.config.default_strategy
        batch = self.engine.order(self.pool.snapshot(), strategy)
        self._record(batch)
        return batch

    def create_vulnerable_batch(self) -> Batch:
        """Order by fee bid, highest first (MEV exploitable)."""
        return self.create_batch(OrderingStrategy.PRIORITY)

    def create_fair_batch(self) -> Batch:
        """Order by submission time, first come first served."""
        return self.create_batch(OrderingStrategy.FAIR)

    def create_random_batch(self) -> Batch:
        """Order randomly. The result is not reproducible."""
        return self.create_batch(OrderingStrategy.RANDOM)

    def compare_strategies(
        self,
        strategies: Optional[Iterable[StrategySelector]] = None,
    ) -> Dict[str, Batch]:
        """
        Order one snapshot under several strategies.

        Args:
            strategies: Strategies to compare (all registered if not provided)

        Returns:
            Mapping of strategy name to batch
        """
        batches = self.engine.order_all(self.pool.snapshot(), strategies)
        for batch in batches.values():
            self._record(batch)
        return batches

    def _record(self, batch: Batch) -> None:
        self._batches_created += 1
        self._last_batch_time = batch.created_at

        logger.info(
            "batch_created",
            batch_id=batch.batch_id[:8] + "...",
            strategy=batch.strategy,
            size=batch.size,
            deterministic=batch.deterministic,
        )

        if self._on_batch_created:
            self._on_batch_created(batch)

    # Metrics and cycle management

    def get_metrics(self) -> PoolMetrics:
        """Get transaction counts for the current pool."""
        return compute_metrics(self.pool.snapshot())

    def close_cycle(self) -> Tuple[Transaction, ...]:
        """
        End the current batching cycle.

        Returns:
            The transactions of the closed cycle in insertion order
        """
        closed = self.pool.rotate()
        self._cycles_closed += 1
        logger.info(
            "cycle_closed",
            cycle=self._cycles_closed,
            size=len(closed),
        )
        return closed

    def get_stats(self) -> dict:
        """Get sequencer statistics."""
        return {
            "pool_size": self.pool.size(),
            "strategies": self.engine.available_strategies(),
            "default_strategy": OrderingStrategy(self.config.default_strategy).value,
            "batches_created": self._batches_created,
            "cycles_closed": self._cycles_closed,
            "last_batch_time": self._last_batch_time.isoformat() if self._last_batch_time else None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    # Callback registration

    def on_batch_created(self, callback: Callable[[Batch], None]) -> None:
        """Register callback for batch creation events."""
        self._on_batch_created = callback
