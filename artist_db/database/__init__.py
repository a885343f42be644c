#!/usr/bin/env python3
"""
Database package for the artist database.

This package provides connection management, configuration, the entity
handlers for artists, locations and events, and schema management.
"""

from .connection import (
    Connection,
    Transaction,
    create_db_connection_pool,
    rollback_and_log_error,
)

from .config import (
    validate_database_url,
    create_database_config,
)

from .context import Context, ensure_context

from .filters import (
    GetRequest,
    by_id,
    by_name,
    by_last_name,
    by_artist_name,
)

from .artist import ArtistHandler
from .location import LocationHandler
from .event import EventHandler

from .facade import Database, create_database

from .tables import create_tables, destroy_tables

from .utils import (
    classify_database_error,
    validate_uuid,
)

__all__ = [
    # Connection management
    "Connection",
    "Transaction",
    "create_db_connection_pool",
    "rollback_and_log_error",
    # Configuration
    "validate_database_url",
    "create_database_config",
    # Call context
    "Context",
    "ensure_context",
    # Filters
    "GetRequest",
    "by_id",
    "by_name",
    "by_last_name",
    "by_artist_name",
    # Handlers
    "ArtistHandler",
    "LocationHandler",
    "EventHandler",
    # Facade
    "Database",
    "create_database",
    # Schema
    "create_tables",
    "destroy_tables",
    # Utilities
    "classify_database_error",
    "validate_uuid",
]
