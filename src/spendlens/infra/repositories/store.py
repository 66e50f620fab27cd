"""SQLModel implementation of the record store."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, select

from ...domain.repositories.store import (
    COLLECTIONS,
    Filter,
    Ordering,
    RecordNotFound,
    StoreError,
    UnknownCollectionError,
)
from ...logging_config import get_logger
from ...models import Account, Expense, ExpenseCategory, Income, MonthlyBudget
from ..database import SessionFactory

logger = get_logger(__name__)

_TABLES: dict[str, type[SQLModel]] = dict(
    zip(COLLECTIONS, (Expense, Income, MonthlyBudget, Account, ExpenseCategory))
)

# Ownership columns cannot be supplied by callers.
_PROTECTED_FIELDS = {"id", "user_id"}


class SQLModelRecordStore:
    """SQLModel-based record store scoped per user."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _table(self, collection: str) -> type[SQLModel]:
        try:
            return _TABLES[collection]
        except KeyError:
            raise UnknownCollectionError(f"Unknown collection: {collection}") from None

    def _column(self, table: type[SQLModel], field: str):
        if field not in table.model_fields:
            raise UnknownCollectionError(f"{table.__tablename__} has no field {field!r}")
        return getattr(table, field)

    def _check_fields(self, table: type[SQLModel], values: Mapping[str, Any]) -> dict[str, Any]:
        clean: dict[str, Any] = {}
        for key, value in values.items():
            if key in _PROTECTED_FIELDS:
                continue
            self._column(table, key)
            clean[key] = value
        return clean

    def _apply_filter(self, statement, table: type[SQLModel], item: Filter):
        column = self._column(table, item.field)
        if item.op == "eq":
            return statement.where(column == item.value)
        if item.op == "gte":
            return statement.where(column >= item.value)
        if item.op == "lte":
            return statement.where(column <= item.value)
        return statement.where(column < item.value)

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        ordering: Optional[Ordering] = None,
        limit: Optional[int] = None,
        *,
        user_id: int,
    ) -> list[SQLModel]:
        """Return matching records for the user, detached from the session."""
        table = self._table(collection)
        statement = select(table).where(table.user_id == user_id)  # type: ignore[attr-defined]
        for item in filters:
            statement = self._apply_filter(statement, table, item)
        if ordering is not None:
            column = self._column(table, ordering.field)
            statement = statement.order_by(column.desc() if ordering.descending else column.asc())
        if limit is not None:
            statement = statement.limit(limit)

        try:
            with self.session_factory() as session:
                rows = list(session.exec(statement).all())
                session.expunge_all()
        except SQLAlchemyError as exc:
            logger.error(
                "Query failed",
                extra={"collection": collection, "error": str(exc)},
            )
            raise StoreError(f"Failed to query {collection}") from exc
        return rows

    def get(self, collection: str, record_id: int, *, user_id: int) -> Optional[SQLModel]:
        """Return a single record owned by the user."""
        table = self._table(collection)
        try:
            with self.session_factory() as session:
                obj = session.exec(
                    select(table)
                    .where(table.id == record_id)  # type: ignore[attr-defined]
                    .where(table.user_id == user_id)  # type: ignore[attr-defined]
                ).first()
                if obj is not None:
                    session.expunge(obj)
                return obj
        except SQLAlchemyError as exc:
            logger.error(
                "Get failed",
                extra={"collection": collection, "record_id": record_id, "error": str(exc)},
            )
            raise StoreError(f"Failed to load {collection} record {record_id}") from exc

    def insert(self, collection: str, values: Mapping[str, Any], *, user_id: int) -> SQLModel:
        """Create a new record owned by the user."""
        table = self._table(collection)
        record = table(**self._check_fields(table, values), user_id=user_id)
        try:
            with self.session_factory() as session:
                session.add(record)
                session.commit()
                session.refresh(record)
                session.expunge(record)
        except SQLAlchemyError as exc:
            logger.error(
                "Insert failed",
                extra={"collection": collection, "error": str(exc)},
            )
            raise StoreError(f"Failed to create {collection} record") from exc
        logger.info("Record created", extra={"collection": collection, "record_id": record.id})
        return record

    def update(
        self, collection: str, record_id: int, patch: Mapping[str, Any], *, user_id: int
    ) -> SQLModel:
        """Apply a partial update to an existing record."""
        table = self._table(collection)
        changes = self._check_fields(table, patch)
        try:
            with self.session_factory() as session:
                record = session.exec(
                    select(table)
                    .where(table.id == record_id)  # type: ignore[attr-defined]
                    .where(table.user_id == user_id)  # type: ignore[attr-defined]
                ).first()
                if record is None:
                    raise RecordNotFound(collection, record_id)
                for key, value in changes.items():
                    setattr(record, key, value)
                session.add(record)
                session.commit()
                session.refresh(record)
                session.expunge(record)
                return record
        except SQLAlchemyError as exc:
            logger.error(
                "Update failed",
                extra={"collection": collection, "record_id": record_id, "error": str(exc)},
            )
            raise StoreError(f"Failed to update {collection} record {record_id}") from exc

    def delete(self, collection: str, record_id: int, *, user_id: int) -> None:
        """Delete a record owned by the user."""
        table = self._table(collection)
        try:
            with self.session_factory() as session:
                record = session.exec(
                    select(table)
                    .where(table.id == record_id)  # type: ignore[attr-defined]
                    .where(table.user_id == user_id)  # type: ignore[attr-defined]
                ).first()
                if record is None:
                    raise RecordNotFound(collection, record_id)
                session.delete(record)
                session.commit()
        except SQLAlchemyError as exc:
            logger.error(
                "Delete failed",
                extra={"collection": collection, "record_id": record_id, "error": str(exc)},
            )
            raise StoreError(f"Failed to delete {collection} record {record_id}") from exc
        logger.info("Record deleted", extra={"collection": collection, "record_id": record_id})
