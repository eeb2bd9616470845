"""Generic persistence capability shared by the feature modules.

A ``Repository`` wraps one SQLModel table behind find/create/update/delete
calls. Each write commits on its own, so callers can treat every call as
atomic. Integrity failures are rolled back and surface as ``RepositoryError``
carrying a ``RepositoryErrorKind``; callers map the kind onto the HTTP error
taxonomy instead of inspecting driver exceptions.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, col, func, select

from locals_api.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=SQLModel)

# SQLSTATE codes reported by PostgreSQL drivers
_PG_UNIQUE_VIOLATION = "23505"
_PG_FOREIGN_KEY_VIOLATION = "23503"


class RepositoryErrorKind(str, Enum):
    UNIQUE_VIOLATION = "unique_violation"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    UNKNOWN = "unknown"


class RepositoryError(Exception):
    """A write was rejected by the database."""

    def __init__(self, kind: RepositoryErrorKind, table: str):
        self.kind = kind
        self.table = table
        super().__init__(f"{kind.value} on table {table}")


def classify_integrity_error(error: IntegrityError) -> RepositoryErrorKind:
    """Work out which constraint an IntegrityError tripped."""
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == _PG_UNIQUE_VIOLATION:
        return RepositoryErrorKind.UNIQUE_VIOLATION
    if sqlstate == _PG_FOREIGN_KEY_VIOLATION:
        return RepositoryErrorKind.FOREIGN_KEY_VIOLATION

    # SQLite only exposes the constraint through the message text
    text = str(orig).upper()
    if "UNIQUE" in text or "DUPLICATE" in text:
        return RepositoryErrorKind.UNIQUE_VIOLATION
    if "FOREIGN KEY" in text:
        return RepositoryErrorKind.FOREIGN_KEY_VIOLATION
    return RepositoryErrorKind.UNKNOWN


class Repository(Generic[T]):
    """CRUD access to a single table.

    Args:
        session: Database session
        model: SQLModel table class
        unique_fields: Columns that together form a unique key; used by
            ``create_many(skip_duplicates=True)``
    """

    def __init__(
        self,
        session: Session,
        model: type[T],
        unique_fields: tuple[str, ...] = (),
    ):
        self.session = session
        self.model = model
        self.unique_fields = unique_fields

    @property
    def table_name(self) -> str:
        return str(self.model.__tablename__)

    def get(self, entity_id: Any) -> T | None:
        return self.session.get(self.model, entity_id)

    def find_one(self, *where: Any) -> T | None:
        statement = select(self.model).where(*where)
        return self.session.exec(statement).first()

    def find_many(self, *where: Any, order_by: Any | None = None) -> list[T]:
        statement = select(self.model)
        if where:
            statement = statement.where(*where)
        if order_by is not None:
            statement = statement.order_by(order_by)
        return list(self.session.exec(statement).all())

    def count(self, *where: Any) -> int:
        statement = select(func.count()).select_from(self.model)
        if where:
            statement = statement.where(*where)
        return self.session.exec(statement).one()

    def create(self, data: SQLModel | Mapping[str, Any]) -> T:
        """Insert one row and return it refreshed from the database."""
        entity = self.model.model_validate(data)
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    def create_many(
        self,
        rows: Sequence[SQLModel | Mapping[str, Any]],
        *,
        skip_duplicates: bool = False,
    ) -> int:
        """Insert several rows in one transaction.

        With ``skip_duplicates`` rows whose unique key already exists, either
        in the table or earlier in ``rows``, are dropped instead of failing
        the whole insert.

        Returns:
            Number of rows inserted
        """
        entities = [self.model.model_validate(row) for row in rows]
        if skip_duplicates and self.unique_fields:
            entities = self._without_duplicates(entities)
        if not entities:
            return 0

        self.session.add_all(entities)
        self._commit()
        return len(entities)

    def update(self, entity: T, data: Mapping[str, Any]) -> T:
        """Apply ``data`` to an entity already loaded in this session."""
        entity.sqlmodel_update(dict(data))
        if "updated_at" in self.model.model_fields:
            entity.sqlmodel_update({"updated_at": datetime.now(UTC)})
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    def delete(self, entity: T) -> None:
        self.session.delete(entity)
        self._commit()

    def _unique_key(self, entity: SQLModel) -> tuple[Any, ...]:
        return tuple(getattr(entity, field) for field in self.unique_fields)

    def _existing_keys(self, entities: Iterable[T]) -> set[tuple[Any, ...]]:
        lead = self.unique_fields[0]
        candidates = {getattr(entity, lead) for entity in entities}
        if not candidates:
            return set()
        statement = select(self.model).where(
            col(getattr(self.model, lead)).in_(candidates)
        )
        return {self._unique_key(row) for row in self.session.exec(statement).all()}

    def _without_duplicates(self, entities: list[T]) -> list[T]:
        seen = self._existing_keys(entities)
        kept: list[T] = []
        for entity in entities:
            key = self._unique_key(entity)
            if key in seen:
                continue
            seen.add(key)
            kept.append(entity)
        skipped = len(entities) - len(kept)
        if skipped:
            logger.debug("duplicates_skipped", table=self.table_name, skipped=skipped)
        return kept

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            kind = classify_integrity_error(e)
            logger.info("integrity_error", table=self.table_name, kind=kind.value)
            raise RepositoryError(kind, self.table_name) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(
                "database_error",
                table=self.table_name,
                error_type=type(e).__name__,
            )
            raise RepositoryError(RepositoryErrorKind.UNKNOWN, self.table_name) from e
