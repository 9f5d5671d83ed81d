"""
Rollup Sequencer

Transaction-ordering strategies for a rollup-style sequencer.
The sequencer collects pending transactions from several rollups and
decides the order in which they are committed to a batch, which in turn
decides how much MEV an ordering-privileged party can extract.
"""

__version__ = "0.1.0"

from sequencer.core.transaction import Transaction
from sequencer.core.batch import Batch
from sequencer.core.sequencer import Sequencer
from sequencer.config import OrderingStrategy, SequencerConfig
from sequencer.engine.ordering import OrderingEngine, UnknownStrategyError
from sequencer.engine.metrics import PoolMetrics
from sequencer.state.transaction_pool import TransactionPool

__all__ = [
    "Sequencer",
    "Transaction",
    "Batch",
    "OrderingStrategy",
    "SequencerConfig",
    "OrderingEngine",
    "UnknownStrategyError",
    "PoolMetrics",
    "TransactionPool",
]
