"""
Validation utilities for the artist database.

This module provides identifier validation and generation. Identifiers are
stored in their canonical form: lower-case hex with hyphens.
"""

import uuid
from typing import Optional

from ..errors import InvalidIdentifierError


def validate_uuid(uuid_string: str) -> bool:
    """
    Validate that a string is a valid UUID format.

    Args:
        uuid_string: String to validate

    Returns:
        True if valid UUID, False otherwise
    """
    if not isinstance(uuid_string, str):
        return False

    try:
        uuid.UUID(uuid_string)
        return True
    except ValueError:
        return False


def require_uuid(identifier: str) -> str:
    """
    Return the canonical form of identifier.

    Upper-case, braced, hyphen-less and urn:uuid: spellings are accepted and
    rewritten to the form PostgreSQL returns.

    Raises:
        InvalidIdentifierError: If the identifier is not a valid UUID
    """
    if not validate_uuid(identifier):
        raise InvalidIdentifierError(identifier)
    return str(uuid.UUID(identifier))


def canonical_uuid(identifier: Optional[str]) -> Optional[str]:
    """Canonicalize identifier if it is a UUID, otherwise return it unchanged."""
    if validate_uuid(identifier):
        return str(uuid.UUID(identifier))
    return identifier


def new_id() -> str:
    """Generate a fresh entity ID."""
    return str(uuid.uuid4())
