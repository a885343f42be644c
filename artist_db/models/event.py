#!/usr/bin/env python3
"""
Event Data Models

Events reference their location and invited artists by ID only. The
references are resolved at read time through the owning handlers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..utils.helpers import to_utc
from ..utils.validation import canonical_uuid, new_id, require_uuid
from .lifecycle import RecordMetadata


@dataclass
class InvitedArtist:
    """
    An artist invited to an event.

    Attributes:
        id: UUID of the invited artist
        confirmed: Whether the artist confirmed the invitation
    """

    id: str
    confirmed: bool = False

    def __post_init__(self):
        self.id = canonical_uuid(self.id)

    def log_fields(self) -> Dict[str, Any]:
        return {"id": self.id, "confirmed": self.confirmed}


@dataclass
class Event:
    """
    An event at an optional location with a list of invited artists.

    Attributes:
        id: UUID string, generated when not given
        name: Name of the event, must not be empty
        start_time: Optional start time (normalized to UTC)
        location_id: Optional UUID of the location
        invited_artists: Invited artists, in row order when read back
        metadata: Lifecycle metadata, set on entities read from the database
    """

    id: str = field(default_factory=new_id)
    name: str = ""
    start_time: Optional[datetime] = None
    location_id: Optional[str] = None
    invited_artists: List[InvitedArtist] = field(default_factory=list)
    metadata: Optional[RecordMetadata] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        self.id = canonical_uuid(self.id)
        self.location_id = canonical_uuid(self.location_id)
        self.start_time = to_utc(self.start_time)
        self.invited_artists = list(self.invited_artists) if self.invited_artists else []

    @classmethod
    def create(
        cls,
        name: str,
        start_time: Optional[datetime] = None,
        location_id: Optional[str] = None,
        invited_artists: Iterable[InvitedArtist] = (),
    ) -> "Event":
        """
        Create a new event with a fresh ID, validating every reference.

        Raises:
            ValueError: If the name is empty
            InvalidIdentifierError: If the location or an invited artist ID is not a UUID
        """
        if not name:
            raise ValueError("event name must not be empty")

        if location_id is not None:
            require_uuid(location_id)

        invited = list(invited_artists)
        for artist in invited:
            require_uuid(artist.id)

        return cls(
            name=name,
            start_time=start_time,
            location_id=location_id,
            invited_artists=invited,
        )

    def log_fields(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"id": self.id, "name": self.name}
        if self.start_time is not None:
            fields["start_time"] = self.start_time.isoformat()
        if self.location_id is not None:
            fields["location_id"] = self.location_id
        fields["invited_artists"] = [a.log_fields() for a in self.invited_artists]
        return fields
