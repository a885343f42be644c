"""
Utilities module for the artist database.

This module provides shared utility functions organized by concern:
- Logging utilities for consistent logging setup and structured records
- General helper functions for UTC timestamps
- Validation utilities for entity identifiers
"""

# Logging utilities
from .logging import setup_logging, log_tuple_modified, log_rollback_failure

# General helper utilities
from .helpers import utc_now, to_utc

# Validation utilities
from .validation import validate_uuid, require_uuid, canonical_uuid, new_id

__all__ = [
    "setup_logging",
    "log_tuple_modified",
    "log_rollback_failure",
    "utc_now",
    "to_utc",
    "validate_uuid",
    "require_uuid",
    "canonical_uuid",
    "new_id",
]
