#!/usr/bin/env python3
"""
Database Models

This module contains data structures related to database configuration.
"""

from typing import NamedTuple


class DatabaseConfig(NamedTuple):
    """
    Database configuration settings.

    Attributes:
        url: Database connection URL
        pool_size: Number of connections in the pool
        max_overflow: Maximum overflow connections beyond pool_size
        connection_timeout: Timeout for getting connections (seconds)
        query_timeout: Timeout for individual statements when the caller
            gives no deadline (seconds)
    """

    url: str
    pool_size: int = 4
    max_overflow: int = 8  # Allow burst connections
    connection_timeout: int = 30  # seconds
    query_timeout: int = 60  # seconds

    @property
    def max_connections(self) -> int:
        return self.pool_size + self.max_overflow
