#!/usr/bin/env python3
"""
Artist Database Package

A PostgreSQL data-access layer for artists, locations and events with
invited artists. It provides transactional multi-row upserts with per-row
failure aggregation, soft deletion, and ID-based references between
entities that are resolved at read time.

This package provides both a command-line interface for schema management
and a programmatic API for the entity handlers.
"""

__version__ = "1.0.0"
__author__ = "Artist Database"
__description__ = "PostgreSQL data-access layer for artists, locations and events"
__license__ = "MIT"
__status__ = "Production"

# Import models for public API
from .models import (
    Artist,
    Origin,
    Socials,
    Location,
    Event,
    InvitedArtist,
    Active,
    Deleted,
    RecordMetadata,
    DatabaseConfig,
)

# Import errors for public API
from .errors import (
    DatabaseError,
    InvalidIdentifierError,
    ResourceNotFoundError,
    AggregatedWriteError,
    RowFailure,
    TransactionAbortedError,
    TransactionClosedError,
    OperationCancelledError,
    StorageError,
)

# Import constants for public API
from .constants import (
    EXIT_SUCCESS,
    EXIT_CONFIG_ERROR,
    EXIT_DATABASE_ERROR,
    EXIT_INTERRUPTED,
    EXIT_UNEXPECTED_ERROR,
    DEFAULT_POOL_SIZE,
    DEFAULT_MAX_OVERFLOW,
    DEFAULT_CONNECTION_TIMEOUT,
    DEFAULT_QUERY_TIMEOUT,
)

# Import database functions for public API
from .database import (
    Context,
    Database,
    create_database,
    create_database_config,
    by_id,
    by_name,
    by_last_name,
    by_artist_name,
)

# Import observability for public API
from .observability import Metrics

# Import CLI functionality for public API
from .cli import (
    main,
    create_argument_parser,
)

# Import utilities for public API
from .utils import setup_logging

# Public API exports
__all__ = [
    # Package metadata
    "__version__",
    "__author__",
    "__description__",
    # Data models
    "Artist",
    "Origin",
    "Socials",
    "Location",
    "Event",
    "InvitedArtist",
    "Active",
    "Deleted",
    "RecordMetadata",
    "DatabaseConfig",
    # Errors
    "DatabaseError",
    "InvalidIdentifierError",
    "ResourceNotFoundError",
    "AggregatedWriteError",
    "RowFailure",
    "TransactionAbortedError",
    "TransactionClosedError",
    "OperationCancelledError",
    "StorageError",
    # Constants
    "EXIT_SUCCESS",
    "EXIT_CONFIG_ERROR",
    "EXIT_DATABASE_ERROR",
    "EXIT_INTERRUPTED",
    "EXIT_UNEXPECTED_ERROR",
    "DEFAULT_POOL_SIZE",
    "DEFAULT_MAX_OVERFLOW",
    "DEFAULT_CONNECTION_TIMEOUT",
    "DEFAULT_QUERY_TIMEOUT",
    # Database
    "Context",
    "Database",
    "create_database",
    "create_database_config",
    "by_id",
    "by_name",
    "by_last_name",
    "by_artist_name",
    # Observability
    "Metrics",
    # CLI functions
    "main",
    "create_argument_parser",
    # Utilities
    "setup_logging",
]
