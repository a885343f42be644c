"""
Shared write/read/delete protocol of the entity handlers.

Every handler upserts many rows in one transaction, aggregating per-row
failures, reads only live rows, and soft-deletes by stamping deleted_at.
Subclasses provide the table, the columns and the row mapping.
"""

import logging
from typing import Any, Dict, FrozenSet, Generic, List, Optional, Sequence, Tuple, TypeVar

import psycopg

from ..errors import (
    AggregatedWriteError,
    OperationCancelledError,
    ResourceNotFoundError,
    RowFailure,
    StorageError,
    TransactionAbortedError,
    TransactionClosedError,
)
from ..observability import Metrics, get_tracer
from ..utils.helpers import utc_now
from ..utils.logging import log_tuple_modified
from ..utils.validation import require_uuid
from .connection import Connection, Transaction, rollback_and_log_error
from .context import Context, ensure_context
from .filters import GetRequest
from .utils import classify_database_error

OPERATION_UPSERT = "upsert"
OPERATION_GET = "get"
OPERATION_DELETE = "delete"

T = TypeVar("T")


class EntityHandler(Generic[T]):
    """
    Base class for the artist, location and event handlers.

    Subclasses set entity, table, columns and filter_columns and implement
    _write_row and _from_row.
    """

    entity: str = ""
    table: str = ""
    # Columns selected by get(), in the order _from_row expects
    columns: Tuple[str, ...] = ()
    filter_columns: FrozenSet[str] = frozenset()

    def __init__(
        self,
        conn: Connection,
        logger: Optional[logging.Logger] = None,
        tracer_provider=None,
        metrics: Optional[Metrics] = None,
    ):
        """
        Args:
            conn: Shared database connection
            logger: Logger for write records and failures (module logger if None)
            tracer_provider: OpenTelemetry TracerProvider (no-op if None)
            metrics: Object metrics sink (the connection's metrics if None)
        """
        self._conn = conn
        self._logger = logger if logger is not None else logging.getLogger(type(self).__module__)
        self._tracer = get_tracer(tracer_provider)
        self._metrics = metrics if metrics is not None else conn.metrics

    def _validate(self, entity: T) -> None:
        """Reject an entity before any I/O. Raises ValueError."""
        require_uuid(entity.id)

    def _write_row(self, tx: Transaction, entity: T, now, ctx: Context) -> None:
        raise NotImplementedError

    def _from_row(self, row: Sequence[Any], ctx: Context) -> T:
        raise NotImplementedError

    def upsert(self, *entities: T, ctx: Optional[Context] = None) -> None:
        """
        Create or update entities in a single transaction.

        Rows are written in the given order. A failing row does not stop the
        others; its failure is collected and raised after the commit.

        Raises:
            AggregatedWriteError: If one or more rows were rejected
            TransactionAbortedError: If the transaction went away mid-loop
            StorageError: If the transaction could not be started or committed
        """
        ctx = ensure_context(ctx)

        with self._tracer.start_as_current_span(f"{self.entity}.upsert") as span:
            span.set_attribute("count", len(entities))

            try:
                tx = self._conn.begin(ctx)
            except psycopg.Error as e:
                raise StorageError(self.entity, OPERATION_UPSERT, f"creating tx failed: {e}") from e

            failures: List[RowFailure] = []
            written: List[Tuple[str, Dict[str, Any]]] = []
            try:
                for index, entity in enumerate(entities):
                    entity_id = getattr(entity, "id", "")
                    try:
                        self._validate(entity)
                        with tx.savepoint(ctx, logger=self._logger):
                            self._write_row(tx, entity, utc_now(), ctx)
                    except (TransactionClosedError, OperationCancelledError) as e:
                        raise TransactionAbortedError(
                            f"{self.entity} upsert aborted, tx cancelled: {e}"
                        ) from e
                    except (psycopg.Error, ValueError) as e:
                        self._metrics.track_object_error(self.entity, OPERATION_UPSERT)
                        self._logger.warning(
                            f"Upserting {self.entity} {entity_id} failed ({classify_database_error(e)}): {str(e)}"
                        )
                        failures.append(RowFailure(index, entity_id, e))
                    else:
                        written.append((entity_id, entity.log_fields()))

                try:
                    tx.commit(ctx)
                except (TransactionClosedError, OperationCancelledError) as e:
                    raise TransactionAbortedError(f"committing {self.entity} tx failed: {e}") from e
                except psycopg.Error as e:
                    raise StorageError(self.entity, OPERATION_UPSERT, f"committing tx failed: {e}") from e
            finally:
                rollback_and_log_error(tx, self._logger)

            # Only committed rows are reported
            for entity_id, fields in written:
                log_tuple_modified(OPERATION_UPSERT, self.entity, entity_id, fields=fields, logger=self._logger)
            self._metrics.track_objects_changed(len(written), self.entity, OPERATION_UPSERT)

            if failures:
                raise AggregatedWriteError(self.entity, failures)

    def get(self, request: GetRequest, ctx: Optional[Context] = None) -> List[T]:
        """
        Retrieve live entities matching request.

        Raises:
            ValueError: If this entity cannot be filtered by request.column
            ResourceNotFoundError: If no live row matches
            StorageError: On any other storage failure
        """
        if request.column not in self.filter_columns:
            raise ValueError(f"{self.entity} cannot be filtered by {request.column!r}")

        ctx = ensure_context(ctx)

        with self._tracer.start_as_current_span(f"{self.entity}.get") as span:
            span.set_attribute("type", request.column)

            predicate, params = request.predicate()
            sql = (
                f"SELECT {', '.join(self.columns)} FROM {self.table} "
                f"WHERE deleted_at IS NULL AND {predicate}"
            )

            try:
                rows = self._conn.query(sql, params, ctx=ctx)
                entities = [self._from_row(row, ctx) for row in rows]
            except psycopg.Error as e:
                self._metrics.track_object_error(self.entity, OPERATION_GET)
                self._logger.error(
                    f"Querying {self.entity} by {request.column} failed ({classify_database_error(e)}): {str(e)}"
                )
                raise StorageError(self.entity, OPERATION_GET, f"query failed: {e}") from e

            if not entities:
                raise ResourceNotFoundError(self.entity, f"{request.column}={request.value}")

            self._metrics.track_objects_retrieved(len(entities), self.entity)
            return entities

    def delete_by_id(self, entity_id: str, ctx: Optional[Context] = None) -> None:
        """
        Soft-delete an entity. Deleting an already deleted entity succeeds.

        Raises:
            InvalidIdentifierError: If entity_id is not a valid UUID
            ResourceNotFoundError: If no row has this ID
            StorageError: On any other storage failure
        """
        entity_id = require_uuid(entity_id)
        ctx = ensure_context(ctx)

        with self._tracer.start_as_current_span(f"{self.entity}.delete"):
            now = utc_now()
            sql = (
                f"UPDATE {self.table} SET deleted_at = %s, updated_at = %s "
                f"WHERE id = %s RETURNING id"
            )

            try:
                row = self._conn.query_row(sql, (now, now, entity_id), ctx=ctx)
            except psycopg.Error as e:
                self._metrics.track_object_error(self.entity, OPERATION_DELETE)
                self._logger.error(
                    f"Deleting {self.entity} {entity_id} failed ({classify_database_error(e)}): {str(e)}"
                )
                raise StorageError(self.entity, OPERATION_DELETE, f"update failed: {e}") from e

            if row is None:
                raise ResourceNotFoundError(self.entity, f"id={entity_id}")

            self._metrics.track_objects_changed(1, self.entity, OPERATION_DELETE)
            log_tuple_modified(OPERATION_DELETE, self.entity, entity_id, logger=self._logger)


def text(value: Optional[str]) -> str:
    """Map a nullable text column to a plain string."""
    return value if value is not None else ""


def uuid_text(value: Any) -> Optional[str]:
    """Map a nullable uuid column to its string form."""
    return str(value) if value is not None else None
