"""
Location database handler.
"""

from datetime import datetime
from typing import Any, Sequence

from ..constants import TABLE_LOCATIONS
from ..models import Location, RecordMetadata
from .connection import Transaction
from .context import Context
from .filters import COLUMN_ID, COLUMN_NAME
from .handler import EntityHandler

ENTITY_LOCATION = "location"

UPSERT_LOCATION_SQL = f"""
    INSERT INTO {TABLE_LOCATIONS} (id, name, created_at, updated_at)
    VALUES (%(id)s, %(name)s, %(now)s, %(now)s)
    ON CONFLICT (id) DO UPDATE SET
        name = EXCLUDED.name,
        updated_at = EXCLUDED.updated_at,
        deleted_at = NULL
"""


class LocationHandler(EntityHandler[Location]):
    """Upsert, retrieval and soft deletion of locations."""

    entity = ENTITY_LOCATION
    table = TABLE_LOCATIONS
    columns = ("id", "name", "created_at", "updated_at")
    filter_columns = frozenset({COLUMN_ID, COLUMN_NAME})

    def _write_row(self, tx: Transaction, location: Location, now: datetime, ctx: Context) -> None:
        tx.exec(
            UPSERT_LOCATION_SQL,
            {"id": location.id, "name": location.name, "now": now},
            ctx=ctx,
        )

    def _from_row(self, row: Sequence[Any], ctx: Context) -> Location:
        location_id, name, created_at, updated_at = row
        return Location(
            id=str(location_id),
            name=name,
            metadata=RecordMetadata.from_row(created_at, updated_at),
        )
