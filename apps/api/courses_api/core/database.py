"""SQLAlchemy engine and session factory."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(self, url: str) -> None:
        self.url = make_url(url)
        engine_kwargs: dict = {}
        if self.url.get_backend_name() == "sqlite":
            # Requests run on the event loop thread while sessions may be opened from the threadpool.
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if self.url.database in (None, "", ":memory:"):
                # One shared connection keeps an in-memory database alive for the engine's lifetime.
                engine_kwargs["poolclass"] = StaticPool

        self.engine: Engine = create_engine(self.url, **engine_kwargs)
        if self.url.get_backend_name() == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def create_all(self) -> None:
        from courses_api.repositories import models  # noqa: F401  registers mappers on Base.metadata

        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        finally:
            session.close()


__all__ = ["Base", "Database"]
