"""
Core sequencer components.

This module contains the transaction and batch models and the main
sequencer orchestration.
"""

from sequencer.core.transaction import Transaction
from sequencer.core.batch import Batch
from sequencer.core.sequencer import Sequencer

__all__ = [
    "Transaction",
    "Batch",
    "Sequencer",
]
