from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, event
from sqlmodel import Session, SQLModel, create_engine

from locals_api.core.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine with pool settings suited to the backend.

    SQLite (used for tests and quick local runs) gets foreign key
    enforcement switched on and no connection pool sizing.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        sqlite_engine = create_engine(url, **kwargs)
        event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=settings.DEBUG and settings.ENVIRONMENT == "local",
        **kwargs,
    )


engine = build_engine(settings.SQLALCHEMY_DATABASE_URI)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def init_db(bind: Engine | None = None) -> None:
    """Create missing tables (local runs and tests; production uses Alembic)."""
    # Import models so they register on SQLModel.metadata
    from locals_api.auth.models import User  # noqa: F401
    from locals_api.products.models import Product  # noqa: F401
    from locals_api.translations.models import Translation  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
