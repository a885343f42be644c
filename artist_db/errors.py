"""
Database error taxonomy.

Callers are expected to branch on ResourceNotFoundError and
InvalidIdentifierError only. Everything else is a failure to be logged.
"""

from typing import Iterator, List, NamedTuple, Optional, Type


class DatabaseError(Exception):
    """Base class for all errors raised by the data-access layer."""


class InvalidIdentifierError(DatabaseError, ValueError):
    """An ID is not a well-formed UUID. Raised before any I/O."""

    def __init__(self, identifier: object):
        self.identifier = identifier
        super().__init__(f"id must be valid UUID, got {identifier!r}")


class ResourceNotFoundError(DatabaseError):
    """A lookup or delete matched zero live rows."""

    def __init__(self, entity: str, detail: Optional[str] = None):
        self.entity = entity
        message = f"{entity} not found"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class TransactionClosedError(DatabaseError):
    """The transaction handle was used after it was closed or aborted."""


class TransactionAbortedError(DatabaseError):
    """A multi-row write was aborted because its transaction went away."""


class OperationCancelledError(DatabaseError):
    """The caller's context was cancelled or its deadline passed."""


class StorageError(DatabaseError):
    """
    Opaque driver or storage failure.

    The original driver exception is kept as __cause__.
    """

    def __init__(self, entity: str, operation: str, message: str):
        self.entity = entity
        self.operation = operation
        super().__init__(f"{entity} {operation}: {message}")


class RowFailure(NamedTuple):
    """
    A single rejected row of a multi-row write.

    Attributes:
        index: Position of the entity in the upsert call
        entity_id: ID of the rejected entity
        cause: The exception that rejected it
    """

    index: int
    entity_id: str
    cause: BaseException


class AggregatedWriteError(DatabaseError):
    """
    One or more rows of a multi-row upsert failed.

    The rows that did not fail were committed.
    """

    def __init__(self, entity: str, failures: List[RowFailure]):
        self.entity = entity
        self.failures = list(failures)
        details = "; ".join(
            f"[{f.index}] {f.entity_id}: {f.cause}" for f in self.failures
        )
        super().__init__(
            f"{entity} upsert failed for {len(self.failures)} row(s): {details}"
        )

    def __iter__(self) -> Iterator[RowFailure]:
        return iter(self.failures)

    def __len__(self) -> int:
        return len(self.failures)

    def contains(self, kind: Type[BaseException]) -> bool:
        """Return True if any row failed with an exception of the given kind."""
        return any(isinstance(f.cause, kind) for f in self.failures)

    def indexes(self) -> List[int]:
        """Positions of the rejected entities."""
        return [f.index for f in self.failures]
