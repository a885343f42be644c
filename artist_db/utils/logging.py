"""
Logging utilities for the artist database.

This module provides centralized logging configuration and the structured,
machine-readable log records written by the entity handlers.
"""

import json
import logging
import time
from typing import Any, Dict, Optional


def setup_logging(verbose: bool = False):
    """Setup logging configuration with appropriate level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    format_string = "%(asctime)s - %(levelname)s - %(message)s"

    logging.basicConfig(level=level, format=format_string, datefmt="%Y-%m-%d %H:%M:%S")

    # Set specific logger levels
    logging.getLogger("psycopg").setLevel(logging.WARNING)  # Reduce driver noise
    logging.getLogger("psycopg.pool").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.INFO if verbose else logging.WARNING)


def log_tuple_modified(
    action: str,
    entity: str,
    entity_id: str,
    fields: Optional[Dict[str, Any]] = None,
    timestamp: Optional[float] = None,
    logger: Optional[logging.Logger] = None,
):
    """
    Log a structured record for a row that was written or soft-deleted.

    The record is designed to be parsed by automated tools as an audit trail.

    Args:
        action: What happened to the row (upsert, delete)
        entity: Entity name (artist, location, event)
        entity_id: ID of the modified row
        fields: Additional loggable fields of the entity
        timestamp: Record timestamp (defaults to current time)
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if timestamp is None:
        timestamp = time.time()

    record = {
        "event_type": "tuple_modified",
        "timestamp": timestamp,
        "action": action,
        "entity": entity,
        "id": entity_id,
    }
    if fields:
        record["fields"] = fields

    logger.info(f"TUPLE_MODIFIED: {json.dumps(record, ensure_ascii=False, default=str)}")


def log_rollback_failure(
    error_message: str,
    timestamp: Optional[float] = None,
    logger: Optional[logging.Logger] = None,
):
    """
    Log a structured record for a cleanup rollback that failed.

    Args:
        error_message: Description of the rollback error
        timestamp: Failure timestamp (defaults to current time)
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if timestamp is None:
        timestamp = time.time()

    failure_record = {
        "event_type": "rollback_failure",
        "timestamp": timestamp,
        "error_message": error_message,
        "success": False,
    }

    # ERROR level, a failed rollback can leave a connection in a bad state
    logger.error(f"ROLLBACK_FAILURE: {json.dumps(failure_record, ensure_ascii=False)}")
