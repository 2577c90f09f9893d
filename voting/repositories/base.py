"""Repository Base — shared plumbing for the SQL adapters.

Invariants:
    - A rehydration failure caused by row content surfaces as CorruptRowError
      naming the table and row id; decoding errors keep their own kind but
      gain the table/row in their context
    - Pagination arguments are validated before any round-trip
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from voting.core.errors import (
    CorruptRowError, InvalidIdentifierError, MalformedTimestampError, ValidationError,
)
from voting.infrastructure.database import DatabaseSessionManager


class SqlRepository:
    """Holds the session manager, the injected logger and the default page size."""

    def __init__(
        self,
        db: DatabaseSessionManager,
        logger: logging.Logger | None = None,
        page_size: int = 50,
    ):
        self._db = db
        self._logger = logger or logging.getLogger(type(self).__module__)
        self._page_size = page_size

    def _log_write(self, operation: str, entity: str, entity_id: object) -> None:
        self._logger.debug(
            f"{operation} {entity} {entity_id}",
            extra={"operation": operation, "entity": entity, "entity_id": str(entity_id)},
        )


def get_rowcount(result: Any) -> int:
    """Safely get rowcount from result."""
    return getattr(result, "rowcount", 0) or 0


def check_page(limit: int, offset: int) -> None:
    if limit < 1:
        raise ValidationError("limit must be >= 1", "limit", "INVALID_LIMIT")
    if offset < 0:
        raise ValidationError("offset must be >= 0", "offset", "INVALID_OFFSET")


@contextmanager
def decoding_row(table: str, row_id: object) -> Iterator[None]:
    """Attribute any failure while turning a row into an entity to that row."""
    try:
        yield
    except ValidationError as e:
        raise CorruptRowError(table, row_id, e.message) from e
    except (MalformedTimestampError, InvalidIdentifierError) as e:
        e.context.entity = table
        e.context.entity_id = str(row_id)
        e.add_note(f"while decoding {table} row {row_id}")
        raise
