"""
Repository contract shared by users, listings and enquiries.

Every write is a single-row commit; nothing here spans several records.
"""

from typing import Any, Mapping, Optional, Protocol, TypeVar, Union

from pydantic import BaseModel

RecordT = TypeVar("RecordT")

# Column values keyed by attribute name, or a schema dumped with exclude_unset
Values = Union[Mapping[str, Any], BaseModel]


class BaseRepository(Protocol[RecordT]):
    """Lookup by integer id plus create, patch and hard delete."""

    def get_by_id(self, id: int) -> Optional[RecordT]:
        """The record, or None. Soft-deleted enquiries are still returned."""
        ...

    def create(self, values: Values) -> RecordT:
        """Insert and return the stored record with generated columns loaded."""
        ...

    def update(self, record: RecordT, values: Values) -> RecordT:
        """Apply only the given attributes and commit."""
        ...

    def delete(self, id: int) -> Optional[RecordT]:
        """Remove the row. Returns what was removed, None when absent."""
        ...
