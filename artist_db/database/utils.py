"""
Database utilities module.

This module provides utility functions for database operations including
error classification and UUID validation.
"""

from ..utils.validation import validate_uuid, require_uuid

__all__ = ["classify_database_error", "validate_uuid", "require_uuid"]


def classify_database_error(exception: Exception) -> str:
    """
    Classify database errors into permanent, transient, or systemic categories.

    Args:
        exception: Database exception to classify

    Returns:
        Error type: "permanent", "transient", or "systemic"
    """
    error_str = str(exception).lower()

    # Systemic errors - the service cannot work at all
    systemic_indicators = [
        "authentication failed",
        "permission denied",
        "no pg_hba.conf entry",
        "ssl required",
    ]

    for indicator in systemic_indicators:
        if indicator in error_str:
            return "systemic"

    # Missing role or database, e.g. 'role "adb" does not exist'
    if "does not exist" in error_str and (
        error_str.startswith('role "') or error_str.startswith('database "')
    ):
        return "systemic"

    # Permanent errors - retrying cannot help
    permanent_indicators = [
        "id must be valid uuid",
        "invalid input syntax for type uuid",
        "violates foreign key constraint",
        "violates check constraint",
        "violates not-null constraint",
        "duplicate key",
        "does not exist",  # Missing relation or column
    ]

    for indicator in permanent_indicators:
        if indicator in error_str:
            return "permanent"

    # Includes: connection timeout, temporary network issues, deadlocks, etc.
    return "transient"
