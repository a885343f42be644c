#!/usr/bin/env python3
"""
Artist Data Models

This module contains the Artist entity and its value objects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..utils.helpers import to_utc
from ..utils.validation import canonical_uuid, new_id
from .lifecycle import RecordMetadata


@dataclass
class Origin:
    """
    Where an artist comes from.

    Attributes:
        date_of_birth: Date of birth, None if unknown (normalized to UTC)
        place_of_birth: Place of birth
        nationality: Nationality
    """

    date_of_birth: Optional[datetime] = None
    place_of_birth: str = ""
    nationality: str = ""

    def __post_init__(self):
        self.date_of_birth = to_utc(self.date_of_birth)


@dataclass
class Socials:
    """Social media presences of an artist."""

    instagram: str = ""
    facebook: str = ""
    bandcamp: str = ""


@dataclass
class Artist:
    """
    An artist who can be invited to events.

    Attributes:
        id: UUID string, generated when not given
        first_name: First name
        last_name: Last name
        artist_name: Stage name
        pronouns: Ordered list of pronouns, possibly empty
        origin: Date/place of birth and nationality
        language: Preferred language
        socials: Social media handles
        bio_german: German biography
        bio_english: English biography
        email: Contact email
        metadata: Lifecycle metadata, set on entities read from the database
    """

    id: str = field(default_factory=new_id)
    first_name: str = ""
    last_name: str = ""
    artist_name: str = ""
    pronouns: List[str] = field(default_factory=list)
    origin: Origin = field(default_factory=Origin)
    language: str = ""
    socials: Socials = field(default_factory=Socials)
    bio_german: str = ""
    bio_english: str = ""
    email: str = ""
    metadata: Optional[RecordMetadata] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        self.id = canonical_uuid(self.id)
        self.pronouns = list(self.pronouns) if self.pronouns else []

    def log_fields(self) -> Dict[str, Any]:
        """Fields that are safe to put into log records."""
        return {"id": self.id}
