"""
Environment configuration management module.

This module provides the immutable Env container that is loaded once at
process start and passed explicitly to whatever needs configuration.
"""

from __future__ import annotations

import logging
from argparse import Namespace
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..constants import (
    DEFAULT_CONNECTION_TIMEOUT,
    DEFAULT_MAX_OVERFLOW,
    DEFAULT_POOL_SIZE,
    DEFAULT_QUERY_TIMEOUT,
)
from ..database.config import create_database_config
from ..models import DatabaseConfig
from .loader import ConfigLoader
from .schema import ConfigSchema

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass(frozen=True)
class Env:
    """Immutable configuration container."""

    DATABASE_URL: str
    POOL_SIZE: int = DEFAULT_POOL_SIZE
    MAX_OVERFLOW: int = DEFAULT_MAX_OVERFLOW
    CONNECTION_TIMEOUT: int = DEFAULT_CONNECTION_TIMEOUT
    QUERY_TIMEOUT: int = DEFAULT_QUERY_TIMEOUT
    VERBOSE: bool = False

    @classmethod
    def from_config(cls, config: ConfigSchema) -> "Env":
        return cls(
            DATABASE_URL=config.database_url,
            POOL_SIZE=config.pool_size,
            MAX_OVERFLOW=config.max_overflow,
            CONNECTION_TIMEOUT=config.connection_timeout,
            QUERY_TIMEOUT=config.query_timeout,
            VERBOSE=config.verbose,
        )

    @classmethod
    def load(
        cls,
        cli_args: Optional[Namespace] = None,
        cli_overrides: Optional[Mapping[str, Any]] = None,
    ) -> "Env":
        """
        Load configuration from .env.local, the environment and the CLI.

        Args:
            cli_args: Parsed CLI arguments
            cli_overrides: Overrides keyed by environment variable name

        Returns:
            Configured Env instance

        Raises:
            ConfigError: If required fields are missing or invalid
        """
        try:
            config = ConfigLoader.load(
                schema=ConfigSchema,
                cli_args=cli_args,
                cli_overrides=cli_overrides,
            )
        except ValueError as e:
            raise ConfigError(str(e)) from e

        logger.debug("Environment configuration loaded successfully")
        return cls.from_config(config)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "Env":
        """
        Create Env instance from mapping (useful for testing).

        Only the mapping is read, not the process environment.

        Raises:
            ConfigError: If required fields are missing or invalid
        """
        try:
            config = ConfigLoader.load(schema=ConfigSchema, environ=mapping)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        return cls.from_config(config)

    def to_database_config(self) -> DatabaseConfig:
        """
        Build the validated database configuration.

        Raises:
            ConfigError: If the URL or a pool setting is invalid
        """
        db_config = create_database_config(
            url=self.DATABASE_URL,
            pool_size=self.POOL_SIZE,
            max_overflow=self.MAX_OVERFLOW,
            connection_timeout=self.CONNECTION_TIMEOUT,
            query_timeout=self.QUERY_TIMEOUT,
        )
        if db_config is None:
            raise ConfigError("Invalid database configuration")
        return db_config

    def mask(self) -> dict:
        """
        Return masked version for safe logging (hides sensitive values).

        Returns:
            Dictionary with sensitive values masked
        """
        return {
            "DATABASE_URL": "***" if self.DATABASE_URL else None,
            "POOL_SIZE": self.POOL_SIZE,
            "MAX_OVERFLOW": self.MAX_OVERFLOW,
            "CONNECTION_TIMEOUT": self.CONNECTION_TIMEOUT,
            "QUERY_TIMEOUT": self.QUERY_TIMEOUT,
            "VERBOSE": self.VERBOSE,
        }
