"""
Ordering Engine - turns a pool snapshot into an ordered batch.

Implements the built-in ordering strategies and a registry so new
strategies can be added without touching the existing ones.
"""

import os
import random
from abc import ABC, abstractmethod
from collections import Counter
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

import structlog

from sequencer.config import OrderingStrategy, SequencerConfig, get_config
from sequencer.core.batch import Batch
from sequencer.core.transaction import Transaction

logger = structlog.get_logger(__name__)


StrategySelector = Union[OrderingStrategy, str]


class OrderingError(Exception):
    """Base exception for ordering failures."""
    pass


class UnknownStrategyError(OrderingError, ValueError):
    """Raised when a batch is requested for a strategy that is not registered."""

    def __init__(self, strategy: str, available: Sequence[str]):
        self.strategy = strategy
        self.available = list(available)
        super().__init__(
            f"Unknown strategy: {strategy!r} (available: {', '.join(self.available)})"
        )


class StrategyRegistrationError(OrderingError):
    """Raised when a strategy name is already taken."""
    pass


class EntropyUnavailableError(OrderingError):
    """Raised at startup when no OS randomness source exists."""
    pass


class InvalidOrderingError(OrderingError):
    """Raised when a strategy returns something other than a permutation of its snapshot."""
    pass


class OrderingStrategyBase(ABC):
    """
    Abstract base class for ordering strategies.

    Implement this to add a new ordering policy (for example a batch
    auction). Implementations must return a permutation of the snapshot:
    every transaction exactly once, none added, none dropped. The
    snapshot itself must not be modified.
    """

    name: str = ""
    deterministic: bool = True

    @abstractmethod
    def order(self, snapshot: Sequence[Transaction]) -> List[Transaction]:
        """
        Order a snapshot of the pool.

        Args:
            snapshot: Transactions in pool insertion order

        Returns:
            New list holding the same transactions in committed order
        """
        pass


class PriorityStrategy(OrderingStrategyBase):
    """
    Highest fee bid first.

    Equal bids keep their insertion order. This is the MEV-exploitable
    policy: a searcher can always outbid a target to land right before it.
    """

    name = OrderingStrategy.PRIORITY.value
    deterministic = True

    def order(self, snapshot: Sequence[Transaction]) -> List[Transaction]:
        # Stable sort: equal bids stay in insertion order
        return sorted(snapshot, key=lambda tx: -tx.fee_bid)


class FairStrategy(OrderingStrategyBase):
    """
    First come, first served by submission timestamp.

    Equal timestamps keep their insertion order. Resists bid-based
    front-running but not an adversary who controls submission timing.
    """

    name = OrderingStrategy.FAIR.value
    deterministic = True

    def order(self, snapshot: Sequence[Transaction]) -> List[Transaction]:
        return sorted(snapshot, key=lambda tx: tx.submitted_at)


class RandomStrategy(OrderingStrategyBase):
    """
    Uniformly random permutation.

    NOT deterministic: two calls over the same snapshot may differ and
    callers must never assume otherwise. Every call draws from a fresh
    generator, so concurrent callers cannot influence each other.

    By default each generator is a random.SystemRandom backed by OS
    entropy. Passing a seed makes every call build random.Random(seed)
    instead, which is only meant for tests and reproducible demos.
    """

    name = OrderingStrategy.RANDOM.value
    deterministic = False

    def __init__(
        self,
        seed: Optional[int] = None,
        rng_factory: Optional[Callable[[], random.Random]] = None,
    ):
        """
        Initialize the random strategy.

        Args:
            seed: Fixed seed applied to a fresh generator on every call
            rng_factory: Callable returning a new generator per call.
                         Takes precedence over seed.

        Raises:
            EntropyUnavailableError: If no seed or factory is given and the
                                     OS has no randomness source
        """
        self.seed = seed

        if rng_factory is not None:
            self._rng_factory = rng_factory
        elif seed is not None:
            self._rng_factory = lambda: random.Random(seed)
        else:
            _require_entropy()
            self._rng_factory = random.SystemRandom

    def order(self, snapshot: Sequence[Transaction]) -> List[Transaction]:
        batch = list(snapshot)
        self._rng_factory().shuffle(batch)
        return batch


def _require_entropy() -> None:
    """Fail fast if the OS cannot supply random bytes."""
    try:
        os.urandom(1)
    except NotImplementedError as e:
        raise EntropyUnavailableError(
            "No OS randomness source available for the random strategy"
        ) from e


def _strategy_name(strategy: StrategySelector) -> str:
    if isinstance(strategy, OrderingStrategy):
        return strategy.value
    return str(strategy)


class OrderingEngine:
    """
    Main engine that coordinates transaction ordering.

    Keeps a registry of named strategies and evaluates each one
    independently over the same snapshot, so policies can be compared
    side by side.
    """

    def __init__(
        self,
        config: Optional[SequencerConfig] = None,
        strategies: Optional[Iterable[OrderingStrategyBase]] = None,
        random_seed: Optional[int] = None,
    ):
        """
        Initialize the ordering engine.

        Args:
            config: Sequencer configuration
            strategies: Extra strategies registered after the built-ins
            random_seed: Seed for the random strategy (overrides config)
        """
        self.config = config or get_config()

        seed = random_seed if random_seed is not None else self.config.random_seed

        self._strategies: Dict[str, OrderingStrategyBase] = {}
        for builtin in (PriorityStrategy(), FairStrategy(), RandomStrategy(seed=seed)):
            self._strategies[builtin.name] = builtin

        for strategy in strategies or []:
            self.register(strategy)

        logger.info(
            "ordering_engine_initialized",
            strategies=self.available_strategies(),
            seeded=seed is not None,
        )

    def register(self, strategy: OrderingStrategyBase, replace: bool = False) -> None:
        """
        Register a strategy under its name.

        Args:
            strategy: Strategy implementation
            replace: Allow overriding an existing strategy with the same name

        Raises:
            StrategyRegistrationError: If the name is empty or already taken
        """
        if not strategy.name:
            raise StrategyRegistrationError("Strategy must define a name")
        if strategy.name in self._strategies and not replace:
            raise StrategyRegistrationError(
                f"Strategy already registered: {strategy.name}"
            )

        self._strategies[strategy.name] = strategy
        logger.info(
            "strategy_registered",
            strategy=strategy.name,
            deterministic=strategy.deterministic,
        )

    def available_strategies(self) -> List[str]:
        """Get the names of all registered strategies."""
        return list(self._strategies)

    def get_strategy(self, strategy: StrategySelector) -> OrderingStrategyBase:
        """
        Look up a registered strategy.

        Raises:
            UnknownStrategyError: If no strategy is registered under the name
        """
        name = _strategy_name(strategy)
        try:
            return self._strategies[name]
        except KeyError:
            raise UnknownStrategyError(name, self.available_strategies()) from None

    def order(
        self,
        snapshot: Sequence[Transaction],
        strategy: StrategySelector,
    ) -> Batch:
        """
        Produce a batch from a snapshot using one strategy.

        Args:
            snapshot: Pool snapshot in insertion order
            strategy: Name of the strategy to apply

        Returns:
            Batch holding the full ordering of the snapshot

        Raises:
            UnknownStrategyError: If the strategy is not registered
            InvalidOrderingError: If the strategy drops, adds or repeats transactions
        """
        impl = self.get_strategy(strategy)
        ordered = impl.order(snapshot)

        if Counter(ordered) != Counter(snapshot):
            raise InvalidOrderingError(
                f"Strategy {impl.name!r} did not return a permutation of its snapshot "
                f"(got {len(ordered)} transactions, expected {len(snapshot)})"
            )

        batch = Batch(
            strategy=impl.name,
            transactions=tuple(ordered),
            deterministic=impl.deterministic,
        )

        logger.debug(
            "batch_ordered",
            batch_id=batch.batch_id[:8] + "...",
            strategy=impl.name,
            size=batch.size,
        )
        return batch

    def order_all(
        self,
        snapshot: Sequence[Transaction],
        strategies: Optional[Iterable[StrategySelector]] = None,
    ) -> Dict[str, Batch]:
        """
        Run several strategies over the same snapshot.

        Args:
            snapshot: Pool snapshot in insertion order
            strategies: Strategies to run (all registered if not provided)

        Returns:
            Mapping of strategy name to batch, in the order requested
        """
        selected = list(strategies) if strategies is not None else self.available_strategies()
        snapshot = tuple(snapshot)

        batches = {}
        for strategy in selected:
            batch = self.order(snapshot, strategy)
            batches[batch.strategy] = batch
        return batches
