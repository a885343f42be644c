#!/usr/bin/env python3
"""
Data Models Module

This module contains all data structures and type definitions used
throughout the artist database.
"""

from .artist import Artist, Origin, Socials
from .location import Location
from .event import Event, InvitedArtist
from .lifecycle import Active, Deleted, RecordMetadata, VisibilityState
from .database import DatabaseConfig

__all__ = [
    "Artist",
    "Origin",
    "Socials",
    "Location",
    "Event",
    "InvitedArtist",
    "Active",
    "Deleted",
    "RecordMetadata",
    "VisibilityState",
    "DatabaseConfig",
]
