"""
Configuration management for the Rollup Sequencer.

Supports configuration via environment variables and .env files.
"""

from enum import Enum
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OrderingStrategy(str, Enum):
    """Built-in transaction ordering strategies."""
    PRIORITY = "priority"         # Highest fee bid first (MEV exploitable)
    FAIR = "fair"                 # First come, first served by timestamp
    RANDOM = "random"             # Uniformly random permutation


class SequencerConfig(BaseSettings):
    """
    Configuration settings for the Rollup Sequencer.

    All settings can be configured via environment variables with the SEQUENCER_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEQUENCER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Ordering settings
    default_strategy: OrderingStrategy = Field(
        default=OrderingStrategy.PRIORITY,
        description="Strategy used when a batch is requested without one"
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Fixed seed for the random strategy (tests and demos only)"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )

    # Demo driver settings
    demo_origins: List[str] = Field(
        default_factory=lambda: ["optimism", "arbitrum", "polygon"],
        min_length=1,
        description="Rollups that submit synthetic demo transactions"
    )
    demo_transaction_count: int = Field(
        default=10,
        ge=0,
        description="Number of synthetic transactions generated by the demo"
    )


# Global config instance
_config: Optional[SequencerConfig] = None


def get_config() -> SequencerConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = SequencerConfig()
    return _config


def set_config(config: SequencerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
