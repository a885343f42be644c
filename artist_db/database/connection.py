"""
Database connection management module.

This module wraps a psycopg connection pool behind the small interface the
entity handlers use: ping, begin, query, query_row, exec and close. Every
command is timed into the command metrics and runs inside a tracing span.
Driver errors are propagated unchanged.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import psycopg
from psycopg_pool import ConnectionPool

from ..constants import (
    COMMAND_BEGIN,
    COMMAND_COMMIT,
    COMMAND_EXEC,
    COMMAND_PING,
    COMMAND_QUERY,
    COMMAND_ROLLBACK,
    ROLLBACK_TIMEOUT,
)
from ..errors import OperationCancelledError, TransactionClosedError
from ..models import DatabaseConfig
from ..observability import Metrics, get_tracer
from ..utils.logging import log_rollback_failure
from .context import Context, ensure_context

logger = logging.getLogger(__name__)

Params = Optional[Union[Sequence[Any], Mapping[str, Any]]]
Row = Tuple[Any, ...]


def create_db_connection_pool(config: DatabaseConfig) -> ConnectionPool:
    """
    Create a database connection pool.

    Args:
        config: Database configuration settings

    Returns:
        Open connection pool

    Raises:
        psycopg.OperationalError: If the pool cannot reach the database in time
    """
    logger.info(
        f"Creating database connection pool (size={config.pool_size}, max_overflow={config.max_overflow})"
    )

    connection_pool = ConnectionPool(
        config.url,
        # Server-side bound for statements without a caller deadline
        kwargs={"options": f"-c statement_timeout={config.query_timeout * 1000}"},
        min_size=1,  # Minimum connections to keep open
        max_size=config.max_connections,
        timeout=config.connection_timeout,
        open=False,
    )
    connection_pool.open(wait=True, timeout=config.connection_timeout)

    logger.info("Database connection pool created successfully")
    return connection_pool


class _StatementCanceller:
    """
    Cancels the statement running on pgconn, but never after it finished.

    A timer or context callback that fires late must not cancel the next
    statement on a connection that went back to the pool.
    """

    def __init__(self, pgconn: psycopg.Connection):
        self._pgconn = pgconn
        self._lock = threading.Lock()
        self._finished = False

    def cancel(self) -> None:
        with self._lock:
            if self._finished:
                return
            try:
                self._pgconn.cancel()
            except psycopg.Error as e:
                logger.warning(f"Failed to cancel running statement: {str(e)}")

    def finish(self) -> None:
        with self._lock:
            self._finished = True


@contextmanager
def _cancellable(ctx: Context, pgconn: psycopg.Connection, default_timeout: Optional[float]) -> Iterator[None]:
    """
    Run a statement so that it is cancelled on the server when ctx fires.

    The deadline is ctx's if it has one, otherwise default_timeout.
    """
    ctx.check()

    remaining = ctx.remaining()
    if remaining is None:
        remaining = default_timeout

    canceller = _StatementCanceller(pgconn)
    timer = None
    if remaining is not None:
        timer = threading.Timer(remaining, canceller.cancel)
        timer.daemon = True
        timer.start()

    try:
        with ctx.on_cancel(canceller.cancel):
            yield
    except psycopg.errors.QueryCanceled as e:
        if ctx.done():
            raise OperationCancelledError(ctx.reason()) from e
        raise
    finally:
        canceller.finish()
        if timer is not None:
            timer.cancel()


class Transaction:
    """
    A database transaction on a connection checked out of the pool.

    The connection is returned to the pool by commit() or rollback(). Any use
    after that raises TransactionClosedError.
    """

    def __init__(
        self,
        pgconn: psycopg.Connection,
        pool: ConnectionPool,
        metrics: Metrics,
        tracer,
        statement_timeout: Optional[float] = None,
    ):
        self._conn = pgconn
        self._pool = pool
        self._metrics = metrics
        self._tracer = tracer
        self._statement_timeout = statement_timeout
        self._closed = False
        self._savepoints = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise TransactionClosedError("transaction is closed")
        if self._conn.closed:
            self._release()
            raise TransactionClosedError("transaction connection was closed")

    def _release(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._pool.putconn(self._conn)

    def _run(self, ctx: Context, sql: str, params: Params) -> psycopg.Cursor:
        self._ensure_open()
        try:
            with _cancellable(ctx, self._conn, self._statement_timeout):
                return self._conn.execute(sql, params)
        except psycopg.errors.InFailedSqlTransaction as e:
            raise TransactionClosedError("transaction was aborted by a previous error") from e
        except psycopg.OperationalError as e:
            if self._conn.closed or self._conn.broken:
                self._release()
                raise TransactionClosedError(f"transaction connection lost: {e}") from e
            raise

    def exec(self, sql: str, params: Params = None, ctx: Optional[Context] = None) -> int:
        """Execute a statement inside the transaction and return the row count."""
        ctx = ensure_context(ctx)
        with self._tracer.start_as_current_span("tx.exec"), self._metrics.time_command(COMMAND_EXEC):
            return self._run(ctx, sql, params).rowcount

    def query(self, sql: str, params: Params = None, ctx: Optional[Context] = None) -> List[Row]:
        """Run a query inside the transaction and fetch all rows."""
        ctx = ensure_context(ctx)
        with self._tracer.start_as_current_span("tx.query"), self._metrics.time_command(COMMAND_QUERY):
            return self._run(ctx, sql, params).fetchall()

    @contextmanager
    def savepoint(
        self, ctx: Optional[Context] = None, logger: Optional[logging.Logger] = None
    ) -> Iterator["Transaction"]:
        """
        Scope a group of statements so their failure leaves the transaction usable.

        On an exception the statements are rolled back to the savepoint and the
        exception is re-raised. If even that fails the failure is logged as a
        ROLLBACK_FAILURE record to logger and the transaction is closed.
        """
        ctx = ensure_context(ctx)
        self._savepoints += 1
        name = f"sp_{self._savepoints}"

        self.exec(f"SAVEPOINT {name}", ctx=ctx)
        try:
            yield self
        except BaseException:
            if not self._closed:
                try:
                    self.exec(f"ROLLBACK TO SAVEPOINT {name}", ctx=Context.with_timeout(ROLLBACK_TIMEOUT))
                except (psycopg.Error, TransactionClosedError, OperationCancelledError) as e:
                    log_rollback_failure(
                        f"rolling back to savepoint {name} failed: {str(e)}",
                        logger=logger if logger is not None else logging.getLogger(__name__),
                    )
                    self._abandon()
            raise
        else:
            self.exec(f"RELEASE SAVEPOINT {name}", ctx=ctx)

    def commit(self, ctx: Optional[Context] = None) -> None:
        """Commit the transaction and return the connection to the pool."""
        ctx = ensure_context(ctx)
        self._ensure_open()
        with self._tracer.start_as_current_span("tx.commit"), self._metrics.time_command(COMMAND_COMMIT):
            try:
                with _cancellable(ctx, self._conn, self._statement_timeout):
                    self._conn.commit()
            finally:
                self._release()

    def rollback(self, ctx: Optional[Context] = None) -> None:
        """Roll the transaction back and return the connection to the pool."""
        ctx = ensure_context(ctx)
        self._ensure_open()
        with self._tracer.start_as_current_span("tx.rollback"), self._metrics.time_command(COMMAND_ROLLBACK):
            try:
                with _cancellable(ctx, self._conn, self._statement_timeout):
                    self._conn.rollback()
            finally:
                self._release()

    def _abandon(self) -> None:
        """Give up on the transaction; the pool discards or resets the connection."""
        if self._closed:
            return
        try:
            self._conn.close()
        finally:
            self._release()


def rollback_and_log_error(tx: Transaction, logger: logging.Logger) -> None:
    """
    Roll back tx unless it is already closed, logging any failure.

    Runs under its own bounded context so that a cancelled caller does not
    prevent cleanup. A closed transaction (e.g. after a successful commit)
    is the expected case and ignored silently.
    """
    if tx.closed:
        return

    try:
        tx.rollback(Context.with_timeout(ROLLBACK_TIMEOUT))
    except TransactionClosedError:
        pass
    except (psycopg.Error, OperationCancelledError) as e:
        log_rollback_failure(str(e), logger=logger)


class Connection:
    """
    Instrumented access to a psycopg connection pool.

    Single statements run on a pooled connection that is committed and
    returned right after the statement. Use begin() for multi-statement work.
    """

    def __init__(
        self,
        pool: ConnectionPool,
        metrics: Optional[Metrics] = None,
        tracer_provider=None,
        query_timeout: Optional[float] = None,
        connection_timeout: Optional[float] = None,
    ):
        """
        Args:
            pool: Open psycopg connection pool
            metrics: Metrics to record command durations into
            tracer_provider: OpenTelemetry TracerProvider (no-op if None)
            query_timeout: Statement timeout when the caller gives no deadline
            connection_timeout: Timeout for checking a connection out of the pool
        """
        self._pool = pool
        self._metrics = metrics if metrics is not None else Metrics()
        self._tracer = get_tracer(tracer_provider)
        self._query_timeout = query_timeout
        self._connection_timeout = connection_timeout
        self._closed = False
        self._close_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: DatabaseConfig, metrics: Optional[Metrics] = None, tracer_provider=None) -> "Connection":
        """Open a pool for config and wrap it."""
        return cls(
            create_db_connection_pool(config),
            metrics=metrics,
            tracer_provider=tracer_provider,
            query_timeout=config.query_timeout,
            connection_timeout=config.connection_timeout,
        )

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    def _checkout_timeout(self, ctx: Context) -> Optional[float]:
        remaining = ctx.remaining()
        if remaining is None:
            return self._connection_timeout
        if self._connection_timeout is None:
            return remaining
        return min(remaining, self._connection_timeout)

    @contextmanager
    def _statement(self, ctx: Context) -> Iterator[psycopg.Connection]:
        ctx.check()
        with self._pool.connection(timeout=self._checkout_timeout(ctx)) as pgconn:
            with _cancellable(ctx, pgconn, self._query_timeout):
                yield pgconn

    def ping(self, ctx: Optional[Context] = None) -> None:
        """Check that the database is reachable."""
        ctx = ensure_context(ctx)
        with self._tracer.start_as_current_span("db.ping"), self._metrics.time_command(COMMAND_PING):
            with self._statement(ctx) as pgconn:
                pgconn.execute("SELECT 1")

    def begin(self, ctx: Optional[Context] = None) -> Transaction:
        """Check out a connection and start a transaction on it."""
        ctx = ensure_context(ctx)
        with self._tracer.start_as_current_span("db.begin"), self._metrics.time_command(COMMAND_BEGIN):
            ctx.check()
            pgconn = self._pool.getconn(timeout=self._checkout_timeout(ctx))
            return Transaction(
                pgconn,
                self._pool,
                self._metrics,
                self._tracer,
                statement_timeout=self._query_timeout,
            )

    def query(self, sql: str, params: Params = None, ctx: Optional[Context] = None) -> List[Row]:
        """Run a query and fetch all rows."""
        ctx = ensure_context(ctx)
        with self._tracer.start_as_current_span("db.query"), self._metrics.time_command(COMMAND_QUERY):
            with self._statement(ctx) as pgconn:
                return pgconn.execute(sql, params).fetchall()

    def query_row(self, sql: str, params: Params = None, ctx: Optional[Context] = None) -> Optional[Row]:
        """Run a query and fetch the first row, None if there is none."""
        ctx = ensure_context(ctx)
        with self._tracer.start_as_current_span("db.query_row"), self._metrics.time_command(COMMAND_QUERY):
            with self._statement(ctx) as pgconn:
                return pgconn.execute(sql, params).fetchone()

    def exec(self, sql: str, params: Params = None, ctx: Optional[Context] = None) -> int:
        """Execute a statement and return the row count."""
        ctx = ensure_context(ctx)
        with self._tracer.start_as_current_span("db.exec"), self._metrics.time_command(COMMAND_EXEC):
            with self._statement(ctx) as pgconn:
                return pgconn.execute(sql, params).rowcount

    def close(self) -> None:
        """Close the pool. Calling it again does nothing."""
        with self._close_lock:
            if self._closed:
                logger.debug("Connection pool already closed, nothing to close")
                return
            self._closed = True

        logger.info("Closing database connection pool")
        self._pool.close()
        logger.info("Database connection pool closed successfully")
