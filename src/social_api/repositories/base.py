"""Generic data access helpers shared by the entity repositories."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.orm import Session

from social_api.core.errors import MissingRowError
from social_api.db.session import Base

ModelT = TypeVar("ModelT", bound=Base)

__all__ = ["Repository"]


class Repository(Generic[ModelT]):
    """Thin wrapper around database access for one entity type.

    Writes are flushed, not committed; the calling service owns the transaction.
    """

    model: type[ModelT]

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, row_id: str) -> ModelT | None:
        """Return a row by primary key."""
        return self.session.get(self.model, row_id)

    def list(
        self,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ModelT]:
        """Return rows matching every criterion, in the requested order."""
        stmt = select(self.model).where(*criteria).order_by(*order_by)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.scalars(stmt))

    def first(self, *criteria: ColumnElement[bool]) -> ModelT | None:
        """Return the first row matching every criterion."""
        return self.session.scalars(select(self.model).where(*criteria).limit(1)).first()

    def count(self, *criteria: ColumnElement[bool]) -> int:
        """Return how many rows match every criterion."""
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        return int(self.session.scalar(stmt) or 0)

    def create(self, **values: Any) -> ModelT:
        """Insert a new row and return the persisted ORM instance."""
        row = self.model(**values)
        self.session.add(row)
        self.session.flush()
        return row

    def update(self, row_id: str, **values: Any) -> ModelT:
        """Apply field updates to an existing row.

        Raises:
            MissingRowError: If no row has the given id.
        """
        row = self.get_by_id(row_id)
        if row is None:
            raise MissingRowError(self.model.__tablename__, row_id)
        for key, value in values.items():
            setattr(row, key, value)
        self.session.flush()
        return row

    def delete(self, row_id: str) -> None:
        """Remove a row by primary key.

        Raises:
            MissingRowError: If no row has the given id.
        """
        row = self.get_by_id(row_id)
        if row is None:
            raise MissingRowError(self.model.__tablename__, row_id)
        self.session.delete(row)
        self.session.flush()
