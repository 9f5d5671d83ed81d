"""
State Management module.

Holds pending transactions for the current batching cycle.
"""

from sequencer.state.transaction_pool import TransactionPool

__all__ = [
    "TransactionPool",
]
