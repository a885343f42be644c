#!/usr/bin/env python3
"""
Location Data Models
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..utils.validation import canonical_uuid, new_id
from .lifecycle import RecordMetadata


@dataclass
class Location:
    """
    A place where events happen.

    Attributes:
        id: UUID string, generated when not given
        name: Name of the location
        metadata: Lifecycle metadata, set on entities read from the database
    """

    id: str = field(default_factory=new_id)
    name: str = ""
    metadata: Optional[RecordMetadata] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        self.id = canonical_uuid(self.id)

    def log_fields(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}
