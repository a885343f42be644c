"""
Database facade.

The Database object owns the connection and composes the artist, location
and event handlers behind one interface for the API layer. It also
resolves the weak references events hold to locations and artists.
"""

import logging
from typing import List, Optional, Tuple

from ..errors import ResourceNotFoundError
from ..models import Artist, DatabaseConfig, Event, Location
from ..observability import Metrics
from . import tables
from .artist import ArtistHandler
from .connection import Connection
from .context import Context
from .event import EventHandler
from .filters import GetRequest, by_id
from .location import LocationHandler


class Database:
    """
    Access to the artist database.

    Attributes:
        artists: Artist handler
        locations: Location handler
        events: Event handler
    """

    def __init__(
        self,
        conn: Connection,
        conn_string: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        tracer_provider=None,
    ):
        """
        Args:
            conn: Open connection, closed by close()
            conn_string: Database URL used for schema operations by default
            logger: Logger injected into every handler
            tracer_provider: OpenTelemetry TracerProvider (no-op if None)
        """
        self._conn = conn
        self._conn_string = conn_string
        self._logger = logger if logger is not None else logging.getLogger(__name__)

        self.artists = ArtistHandler(conn, logger=logger, tracer_provider=tracer_provider)
        self.locations = LocationHandler(conn, logger=logger, tracer_provider=tracer_provider)
        self.events = EventHandler(conn, logger=logger, tracer_provider=tracer_provider)

    @property
    def metrics(self) -> Metrics:
        return self._conn.metrics

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def ready(self, ctx: Optional[Context] = None) -> None:
        """Raise if no connection to the database can be established."""
        self._conn.ping(ctx)

    def close(self) -> None:
        self._conn.close()

    def _schema_conn_string(self, conn_string: Optional[str]) -> str:
        conn_string = conn_string if conn_string is not None else self._conn_string
        if not conn_string:
            raise ValueError("no connection string given for schema operation")
        return conn_string

    def create_tables(self, conn_string: Optional[str] = None) -> None:
        """Apply the schema migrations. Does nothing if they are applied."""
        tables.create_tables(self._schema_conn_string(conn_string))

    def destroy_tables(self, conn_string: Optional[str] = None) -> None:
        """Revert the schema migrations. Does nothing if there are none."""
        tables.destroy_tables(self._schema_conn_string(conn_string))

    # Artists

    def upsert_artists(self, *artists: Artist, ctx: Optional[Context] = None) -> None:
        self.artists.upsert(*artists, ctx=ctx)

    def get_artists(self, request: GetRequest, ctx: Optional[Context] = None) -> List[Artist]:
        return self.artists.get(request, ctx=ctx)

    def delete_artist_by_id(self, artist_id: str, ctx: Optional[Context] = None) -> None:
        self.artists.delete_by_id(artist_id, ctx=ctx)

    # Locations

    def upsert_locations(self, *locations: Location, ctx: Optional[Context] = None) -> None:
        self.locations.upsert(*locations, ctx=ctx)

    def get_locations(self, request: GetRequest, ctx: Optional[Context] = None) -> List[Location]:
        return self.locations.get(request, ctx=ctx)

    def delete_location_by_id(self, location_id: str, ctx: Optional[Context] = None) -> None:
        self.locations.delete_by_id(location_id, ctx=ctx)

    # Events

    def upsert_events(self, *events: Event, ctx: Optional[Context] = None) -> None:
        self.events.upsert(*events, ctx=ctx)

    def get_events(self, request: GetRequest, ctx: Optional[Context] = None) -> List[Event]:
        return self.events.get(request, ctx=ctx)

    def delete_event_by_id(self, event_id: str, ctx: Optional[Context] = None) -> None:
        self.events.delete_by_id(event_id, ctx=ctx)

    # Reference resolution

    def get_event_location(self, event: Event, ctx: Optional[Context] = None) -> Optional[Location]:
        """
        Resolve the location of an event.

        Returns:
            The live location, or None if the event has none or it no longer resolves
        """
        if event.location_id is None:
            return None

        try:
            locations = self.locations.get(by_id(event.location_id), ctx=ctx)
        except ResourceNotFoundError:
            self._logger.debug(f"Location {event.location_id} of event {event.id} does not resolve")
            return None

        return locations[0]

    def get_invited_artists(
        self, event: Event, ctx: Optional[Context] = None
    ) -> List[Tuple[Artist, bool]]:
        """
        Resolve the invited artists of an event.

        Returns:
            (artist, confirmed) pairs in invitation order, skipping artists
            that no longer resolve
        """
        resolved = []
        for invited in event.invited_artists:
            try:
                artists = self.artists.get(by_id(invited.id), ctx=ctx)
            except ResourceNotFoundError:
                self._logger.debug(f"Invited artist {invited.id} of event {event.id} does not resolve")
                continue
            resolved.append((artists[0], invited.confirmed))
        return resolved


def create_database(
    config: DatabaseConfig,
    logger: Optional[logging.Logger] = None,
    tracer_provider=None,
    metrics: Optional[Metrics] = None,
) -> Database:
    """
    Connect to the database described by config.

    Args:
        config: Database configuration settings
        logger: Logger injected into every handler
        tracer_provider: OpenTelemetry TracerProvider (no-op if None)
        metrics: Metrics to record into (a fresh registry if None)

    Returns:
        Database with an open connection pool
    """
    conn = Connection.from_config(config, metrics=metrics, tracer_provider=tracer_provider)
    return Database(conn, conn_string=config.url, logger=logger, tracer_provider=tracer_provider)
