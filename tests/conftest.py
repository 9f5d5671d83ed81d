"""
Pytest configuration and shared fixtures for the test suite.
"""

from typing import List

import pytest

from sequencer.config import OrderingStrategy, SequencerConfig
from sequencer.core.sequencer import Sequencer
from sequencer.core.transaction import Transaction
from sequencer.engine.ordering import OrderingEngine
from sequencer.state.transaction_pool import TransactionPool


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config() -> SequencerConfig:
    """Create a test configuration."""
    return SequencerConfig(
        default_strategy=OrderingStrategy.PRIORITY,
        random_seed=None,
        log_level="DEBUG",
    )


@pytest.fixture
def seeded_config() -> SequencerConfig:
    """Create a test configuration with a fixed random seed."""
    return SequencerConfig(
        default_strategy=OrderingStrategy.FAIR,
        random_seed=1234,
        log_level="DEBUG",
    )


# ============================================================================
# Test Data Generators
# ============================================================================

ORIGINS = ["optimism", "arbitrum", "polygon"]


def make_transaction(
    index: int,
    fee_bid: int = 20,
    submitted_at: int = 0,
    origin: str = "optimism",
    tx_id: str = None,
) -> Transaction:
    """Create a transaction with a deterministic id."""
    return Transaction(
        id=tx_id or f"tx_{index}",
        origin=origin,
        submitted_at=submitted_at,
        fee_bid=fee_bid,
        payload=f"Transfer {index + 1} ETH",
    )


def make_transactions(count: int) -> List[Transaction]:
    """
    Create transactions with mixed bids, timestamps and origins.

    Timestamps are deliberately out of insertion order and bids repeat,
    so every deterministic strategy has ties to break.
    """
    return [
        make_transaction(
            i,
            fee_bid=(100 if i % 3 == 0 else 20) + (i % 2) * 5,
            submitted_at=(i * 37) % 11,
            origin=ORIGINS[i % len(ORIGINS)],
        )
        for i in range(count)
    ]


@pytest.fixture
def scenario_transactions() -> List[Transaction]:
    """Three transactions a, b, c with bids [20, 100, 20] and times [5, 1, 3]."""
    return [
        make_transaction(0, fee_bid=20, submitted_at=5, origin="optimism", tx_id="a"),
        make_transaction(1, fee_bid=100, submitted_at=1, origin="arbitrum", tx_id="b"),
        make_transaction(2, fee_bid=20, submitted_at=3, origin="optimism", tx_id="c"),
    ]


@pytest.fixture
def sample_transactions() -> List[Transaction]:
    """Create a dozen mixed sample transactions."""
    return make_transactions(12)


# ============================================================================
# Component Fixtures
# ============================================================================

@pytest.fixture
def pool() -> TransactionPool:
    """Create an empty transaction pool."""
    return TransactionPool()


@pytest.fixture
def filled_pool(pool, sample_transactions) -> TransactionPool:
    """Create a pool holding the sample transactions."""
    pool.ingest_many(sample_transactions)
    return pool


@pytest.fixture
def engine(test_config) -> OrderingEngine:
    """Create an ordering engine backed by OS randomness."""
    return OrderingEngine(config=test_config)


@pytest.fixture
def sequencer(test_config) -> Sequencer:
    """Create a sequencer with an empty pool."""
    return Sequencer(config=test_config)
