"""
Lookup filters for entity retrieval.

A GetRequest selects exactly one lookup mode and compiles to a single
parameterised predicate. Handlers decide which columns they accept.
"""

from typing import Any, NamedTuple, Tuple

from ..utils.validation import require_uuid

COLUMN_ID = "id"
COLUMN_NAME = "name"
COLUMN_LAST_NAME = "last_name"
COLUMN_ARTIST_NAME = "artist_name"


class GetRequest(NamedTuple):
    """
    A single-column equality filter.

    Attributes:
        column: Column the filter compares against
        value: Bound parameter value
    """

    column: str
    value: Any

    def predicate(self, alias: str = "") -> Tuple[str, Tuple[Any, ...]]:
        """
        Compile the filter to a SQL predicate and its parameters.

        Args:
            alias: Optional table alias to qualify the column with

        Returns:
            Tuple of (predicate, params)
        """
        column = f"{alias}.{self.column}" if alias else self.column
        return f"{column} = %s", (self.value,)


def by_id(entity_id: str) -> GetRequest:
    """
    Filter by primary key.

    Raises:
        InvalidIdentifierError: If entity_id is not a valid UUID
    """
    return GetRequest(COLUMN_ID, require_uuid(entity_id))


def by_name(name: str) -> GetRequest:
    return GetRequest(COLUMN_NAME, name)


def by_last_name(last_name: str) -> GetRequest:
    return GetRequest(COLUMN_LAST_NAME, last_name)


def by_artist_name(artist_name: str) -> GetRequest:
    return GetRequest(COLUMN_ARTIST_NAME, artist_name)
