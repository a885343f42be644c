#!/usr/bin/env python3
"""
Application Constants

This module contains all configuration constants, table names and exit codes
used throughout the artist database service.
"""

# Exit codes for different failure modes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 3
EXIT_DATABASE_ERROR = 4
EXIT_INTERRUPTED = 130  # Conventional exit code for Ctrl+C
EXIT_UNEXPECTED_ERROR = 10

# Database connection pool constants
DEFAULT_POOL_SIZE = 4
DEFAULT_MAX_OVERFLOW = 8  # Allow burst connections
DEFAULT_CONNECTION_TIMEOUT = 30  # seconds
DEFAULT_QUERY_TIMEOUT = 60  # seconds

# Upper bound for cleanup rollbacks, independent of the caller's deadline
ROLLBACK_TIMEOUT = 5.0  # seconds

# Table names
TABLE_ARTISTS = "artists"
TABLE_LOCATIONS = "locations"
TABLE_EVENTS = "events"
TABLE_INVITED_ARTISTS = "invited_artists"

# Observability
SERVICE_NAME = "artist_db"
TRACING_INSTRUMENTATION_NAME = "artist_db.database"

# Command labels used for duration and error metrics
COMMAND_PING = "ping"
COMMAND_BEGIN = "begin"
COMMAND_QUERY = "query"
COMMAND_EXEC = "exec"
COMMAND_COMMIT = "commit"
COMMAND_ROLLBACK = "rollback"
