"""
Event database handler.

An event row and its invited-artist rows are written under one savepoint,
so an event is stored with all of its invitations or not at all. The
location and artists are referenced by ID only; the schema enforces that
they exist when the event is written.
"""

from datetime import datetime
from typing import Any, List, Sequence

from ..constants import TABLE_EVENTS, TABLE_INVITED_ARTISTS
from ..models import Event, InvitedArtist, RecordMetadata
from ..utils.validation import require_uuid
from .connection import Transaction
from .context import Context
from .filters import COLUMN_ID, COLUMN_NAME
from .handler import EntityHandler, uuid_text

ENTITY_EVENT = "event"

UPSERT_EVENT_SQL = f"""
    INSERT INTO {TABLE_EVENTS} (id, name, start_time, location_id, created_at, updated_at)
    VALUES (%(id)s, %(name)s, %(start_time)s, %(location_id)s, %(now)s, %(now)s)
    ON CONFLICT (id) DO UPDATE SET
        name = EXCLUDED.name,
        start_time = EXCLUDED.start_time,
        location_id = EXCLUDED.location_id,
        updated_at = EXCLUDED.updated_at,
        deleted_at = NULL
"""

# Only the confirmation changes for an existing invitation
UPSERT_INVITED_ARTIST_SQL = f"""
    INSERT INTO {TABLE_INVITED_ARTISTS} (artist_id, event_id, confirmed)
    VALUES (%(artist_id)s, %(event_id)s, %(confirmed)s)
    ON CONFLICT (artist_id, event_id) DO UPDATE SET
        confirmed = EXCLUDED.confirmed
"""

SELECT_INVITED_ARTISTS_SQL = f"""
    SELECT artist_id, confirmed FROM {TABLE_INVITED_ARTISTS} WHERE event_id = %s
"""


class EventHandler(EntityHandler[Event]):
    """Upsert, retrieval and soft deletion of events and their invitations."""

    entity = ENTITY_EVENT
    table = TABLE_EVENTS
    columns = ("id", "name", "start_time", "location_id", "created_at", "updated_at")
    filter_columns = frozenset({COLUMN_ID, COLUMN_NAME})

    def _validate(self, event: Event) -> None:
        require_uuid(event.id)
        if not event.name:
            raise ValueError(f"event {event.id} has an empty name")
        if event.location_id is not None:
            require_uuid(event.location_id)
        for invited in event.invited_artists:
            require_uuid(invited.id)

    def _write_row(self, tx: Transaction, event: Event, now: datetime, ctx: Context) -> None:
        tx.exec(
            UPSERT_EVENT_SQL,
            {
                "id": event.id,
                "name": event.name,
                "start_time": event.start_time,
                "location_id": event.location_id,
                "now": now,
            },
            ctx=ctx,
        )

        for invited in event.invited_artists:
            tx.exec(
                UPSERT_INVITED_ARTIST_SQL,
                {
                    "artist_id": invited.id,
                    "event_id": event.id,
                    "confirmed": invited.confirmed,
                },
                ctx=ctx,
            )

    def _from_row(self, row: Sequence[Any], ctx: Context) -> Event:
        event_id, name, start_time, location_id, created_at, updated_at = row
        event_id = str(event_id)

        return Event(
            id=event_id,
            name=name,
            start_time=start_time,
            location_id=uuid_text(location_id),
            invited_artists=self._invited_artists(event_id, ctx),
            metadata=RecordMetadata.from_row(created_at, updated_at),
        )

    def _invited_artists(self, event_id: str, ctx: Context) -> List[InvitedArtist]:
        rows = self._conn.query(SELECT_INVITED_ARTISTS_SQL, (event_id,), ctx=ctx)
        return [
            InvitedArtist(id=str(artist_id), confirmed=bool(confirmed))
            for artist_id, confirmed in rows
        ]
