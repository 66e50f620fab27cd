"""Record store protocol and query value types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Sequence

from sqlmodel import SQLModel

COLLECTIONS = (
    "expenses",
    "income",
    "monthly_budgets",
    "accounts",
    "expense_categories",
)

FILTER_OPS = ("eq", "gte", "lte", "lt")


class StoreError(RuntimeError):
    """Raised when the backing store rejects a query or mutation."""


class UnknownCollectionError(StoreError):
    """Raised for collections or fields the store does not expose."""


class RecordNotFound(StoreError):
    """Raised when an update or delete targets a missing record."""

    def __init__(self, collection: str, record_id: int):
        super().__init__(f"{collection} record {record_id} was not found")
        self.collection = collection
        self.record_id = record_id


@dataclass(frozen=True, slots=True)
class Filter:
    """Single predicate applied to a collection field."""

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in FILTER_OPS:
            raise ValueError(f"Unsupported filter operator: {self.op}")

    @classmethod
    def eq(cls, field: str, value: Any) -> Filter:
        return cls(field, "eq", value)

    @classmethod
    def gte(cls, field: str, value: Any) -> Filter:
        return cls(field, "gte", value)

    @classmethod
    def lte(cls, field: str, value: Any) -> Filter:
        return cls(field, "lte", value)

    @classmethod
    def lt(cls, field: str, value: Any) -> Filter:
        return cls(field, "lt", value)


@dataclass(frozen=True, slots=True)
class Ordering:
    field: str
    descending: bool = False


class RecordStore(Protocol):
    """Query interface over the user's collections."""

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        ordering: Optional[Ordering] = None,
        limit: Optional[int] = None,
        *,
        user_id: int,
    ) -> list[SQLModel]:
        """Return records matching every filter, in the requested order."""
        ...

    def get(self, collection: str, record_id: int, *, user_id: int) -> Optional[SQLModel]:
        """Return a single record or None."""
        ...

    def insert(
        self, collection: str, values: Mapping[str, Any], *, user_id: int
    ) -> SQLModel:
        """Create a record and return it with its assigned id."""
        ...

    def update(
        self, collection: str, record_id: int, patch: Mapping[str, Any], *, user_id: int
    ) -> SQLModel:
        """Apply a partial update and return the stored record."""
        ...

    def delete(self, collection: str, record_id: int, *, user_id: int) -> None:
        """Remove a record."""
        ...
