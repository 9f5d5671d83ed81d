"""
Command-line interface for the Rollup Sequencer.

Provides a demonstration driver that fills a pool with synthetic
transactions and prints the resulting orderings side by side.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional, Sequence

import structlog

from sequencer import __version__
from sequencer.config import SequencerConfig, set_config
from sequencer.core.batch import Batch
from sequencer.core.sequencer import Sequencer
from sequencer.core.transaction import Transaction
from sequencer.engine.ordering import UnknownStrategyError

ALL_STRATEGIES = "all"

STRATEGY_TITLES = {
    "priority": "Priority (Fee Bid Ordering: MEV Exploitable)",
    "fair": "Fair (Timestamp Ordering: MEV Resistant)",
    "random": "Random (Random Ordering: MEV Resistant)",
}


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structured logging."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_format
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
    )


def generate_demo_transactions(
    count: int,
    origins: Sequence[str],
    start_ms: Optional[int] = None,
) -> List[Transaction]:
    """
    Generate synthetic transactions for the demo.

    Every third transaction bids 100, the rest bid 20, and submissions
    are spread 100 ms apart across the origins in turn.

    Args:
        count: Number of transactions to generate
        origins: Rollups to cycle through
        start_ms: Timestamp of the first transaction (now if not provided)

    Returns:
        Transactions in submission order
    """
    if start_ms is None:
        start_ms = int(time.time() * 1000)

    return [
        Transaction(
            id=f"tx_{i}",
            origin=origins[i % len(origins)],
            submitted_at=start_ms + i * 100,
            fee_bid=100 if i % 3 == 0 else 20,
            payload=f"Transfer {i + 1} ETH",
        )
        for i in range(count)
    ]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rollup-sequencer",
        description="Transaction ordering strategies for a rollup sequencer",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Compare orderings on synthetic transactions")
    demo_parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of transactions to generate (default: 10)",
    )
    demo_parser.add_argument(
        "--strategy",
        default=ALL_STRATEGIES,
        help="Strategy to show: priority, fair, random or all (default: all)",
    )
    demo_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Fixed seed for the random strategy",
    )
    demo_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    demo_parser.add_argument(
        "--log-json",
        action="store_true",
        help="Output logs in JSON format",
    )

    # Strategies command
    subparsers.add_parser("strategies", help="List available ordering strategies")

    return parser


def print_batch(batch: Batch) -> None:
    """Print one batch in committed order."""
    print(STRATEGY_TITLES.get(batch.strategy, batch.strategy))
    for i, tx in enumerate(batch, start=1):
        print(
            f"  {i}. {tx.id} | {tx.origin} | Fee: {tx.fee_bid} "
            f"| Time: {tx.submitted_at} | {tx.payload}"
        )
    if not batch.deterministic:
        print("  (non-deterministic: this order is not reproducible)")
    print("-" * 51)


def run_demo(args: argparse.Namespace) -> int:
    """Run the ordering demonstration."""
    config = SequencerConfig(
        random_seed=args.seed,
        log_level=args.log_level,
        log_json=args.log_json,
    )
    set_config(config)

    count = args.count if args.count is not None else config.demo_transaction_count

    sequencer = Sequencer(config=config)
    sequencer.submit_many(generate_demo_transactions(count, config.demo_origins))

    print(f"Rollup Sequencer v{__version__}: MEV ordering demo")
    print()

    strategies = None if args.strategy == ALL_STRATEGIES else [args.strategy]
    try:
        batches = sequencer.compare_strategies(strategies)
    except UnknownStrategyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for batch in batches.values():
        print_batch(batch)
        print()

    metrics = sequencer.get_metrics()
    print("Sequencer Metrics:")
    print(f"  Total Transactions: {metrics.total}")
    print(f"  Rollup Distribution: {metrics.by_origin}")
    return 0


def list_strategies() -> int:
    """Print the registered strategies."""
    sequencer = Sequencer(config=SequencerConfig())
    for name in sequencer.engine.available_strategies():
        strategy = sequencer.engine.get_strategy(name)
        kind = "deterministic" if strategy.deterministic else "non-deterministic"
        print(f"{name} ({kind})")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Setup logging
    log_level = getattr(args, "log_level", "WARNING")
    log_json = getattr(args, "log_json", False)
    setup_logging(log_level, log_json)

    # Run appropriate command
    if args.command == "demo":
        sys.exit(run_demo(args))
    elif args.command == "strategies":
        sys.exit(list_strategies())


if __name__ == "__main__":
    main()
