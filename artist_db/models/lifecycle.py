#!/usr/bin/env python3
"""
Record Lifecycle Models

Every stored row carries creation and modification timestamps plus a
visibility state. A row is either Active or Deleted at some point in time;
reads only ever return Active rows.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..utils.helpers import to_utc


@dataclass(frozen=True)
class Active:
    """The row is visible to reads."""


@dataclass(frozen=True)
class Deleted:
    """The row was soft-deleted at the given time."""

    at: datetime


VisibilityState = Union[Active, Deleted]

ACTIVE = Active()


@dataclass(frozen=True)
class RecordMetadata:
    """
    Lifecycle metadata of a stored row.

    Attributes:
        created_at: Time of the first insert
        updated_at: Time of the last write
        state: Active or Deleted(at)
    """

    created_at: datetime
    updated_at: datetime
    state: VisibilityState = ACTIVE

    @classmethod
    def from_row(
        cls,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime] = None,
    ) -> "RecordMetadata":
        """Build metadata from the created_at/updated_at/deleted_at columns."""
        state: VisibilityState = ACTIVE if deleted_at is None else Deleted(to_utc(deleted_at))
        return cls(
            created_at=to_utc(created_at),
            updated_at=to_utc(updated_at),
            state=state,
        )

    @property
    def is_active(self) -> bool:
        return isinstance(self.state, Active)
