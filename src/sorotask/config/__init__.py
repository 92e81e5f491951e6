"""Configuration module using Pydantic Settings.

Provides typed configuration with environment variable support.

Usage:
    from sorotask.config import ContractSettings, KeeperSettings

    settings = ContractSettings(storage_backend="sqlite", db_path="tasks.db")
    keeper = KeeperSettings(polling_interval=5.0)
"""

from sorotask.config.settings import ContractSettings, KeeperSettings

__all__ = [
    "ContractSettings",
    "KeeperSettings",
]
