"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the
contract host and the keeper.

Usage:
    from sorotask.config import ContractSettings, KeeperSettings

    # Load from environment variables (SOROTASK_*, KEEPER_*)
    contract_settings = ContractSettings()
    keeper_settings = KeeperSettings()

    # Or override with explicit values
    keeper_settings = KeeperSettings(max_retries=5)
"""

from __future__ import annotations

from typing import Literal

try:
    from pydantic import Field
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install sorotask"
    ) from e


class ContractSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the contract host environment.

    Attributes:
        storage_backend: "memory" (ephemeral) or "sqlite" (durable).
        db_path: SQLite database file, used when storage_backend is "sqlite".
        log_dir: Directory for the log file written by setup_logging.
        log_level: Console log level name.

    Environment Variables:
        SOROTASK_STORAGE_BACKEND
        SOROTASK_DB_PATH
        SOROTASK_LOG_DIR
        SOROTASK_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="SOROTASK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    storage_backend: Literal["memory", "sqlite"] = "memory"
    db_path: str = "sorotask.sqlite3"
    log_dir: str = ".local/sorotask"
    log_level: str = "INFO"


class KeeperSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the off-ledger keeper.

    Attributes:
        polling_interval: Seconds between polling cycles.
        max_concurrent_reads: Max task reads in flight while polling.
        max_concurrent_executions: Max execute calls in flight per cycle.
        max_retries: Retries after the first failed execute attempt.
        base_delay: Base backoff delay in seconds.
        max_delay: Upper bound on a single backoff delay in seconds.
        gas_warn_threshold: Gas balance below which a task is flagged low.

    Environment Variables:
        KEEPER_POLLING_INTERVAL
        KEEPER_MAX_CONCURRENT_READS
        KEEPER_MAX_CONCURRENT_EXECUTIONS
        KEEPER_MAX_RETRIES
        KEEPER_BASE_DELAY
        KEEPER_MAX_DELAY
        KEEPER_GAS_WARN_THRESHOLD
    """

    model_config = SettingsConfigDict(
        env_prefix="KEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    polling_interval: float = Field(default=10.0, gt=0)
    max_concurrent_reads: int = Field(default=10, ge=1)
    max_concurrent_executions: int = Field(default=3, ge=1)
    max_retries: int = Field(default=3, ge=0)
    base_delay: float = Field(default=1.0, ge=0)
    max_delay: float = Field(default=10.0, ge=0)
    gas_warn_threshold: int = 500
