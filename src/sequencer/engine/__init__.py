"""
Ordering Engine module.

Contains the ordering strategies, the strategy registry and the
order-independent pool metrics.
"""

from sequencer.engine.ordering import (
    OrderingEngine,
    OrderingStrategyBase,
    PriorityStrategy,
    FairStrategy,
    RandomStrategy,
    OrderingError,
    UnknownStrategyError,
    StrategyRegistrationError,
    EntropyUnavailableError,
    InvalidOrderingError,
)
from sequencer.engine.metrics import PoolMetrics, compute_metrics

__all__ = [
    "OrderingEngine",
    "OrderingStrategyBase",
    "PriorityStrategy",
    "FairStrategy",
    "RandomStrategy",
    "OrderingError",
    "UnknownStrategyError",
    "StrategyRegistrationError",
    "EntropyUnavailableError",
    "InvalidOrderingError",
    "PoolMetrics",
    "compute_metrics",
]
