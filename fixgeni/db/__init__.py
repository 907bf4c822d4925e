from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Iterator

from fastapi import Request
from sqlalchemy import MetaData, create_engine, event
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Naming convention so Alembic generates stable constraint names
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}
Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))


class StoreUnavailable(RuntimeError):
    """The store could not be reached or a store call timed out."""


@contextmanager
def store_errors(db: Session | None = None) -> Iterator[None]:
    """
    Translate connection-level SQLAlchemy failures into StoreUnavailable.

    When `db` is given its transaction is rolled back first, so the session
    can be used again once the store is back.
    """
    try:
        yield
    except (sa_exc.OperationalError, sa_exc.InterfaceError, sa_exc.TimeoutError) as exc:
        if db is not None:
            db.rollback()
        raise StoreUnavailable(str(getattr(exc, "orig", None) or exc)) from exc


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _engine_kwargs(url: str, timeout_sec: float) -> dict:
    if _is_sqlite(url):
        kwargs: dict = {"connect_args": {"check_same_thread": False, "timeout": timeout_sec}}
        database = make_url(url).database
        if not database or database == ":memory:":
            kwargs["poolclass"] = StaticPool
        return kwargs

    connect_args: dict = {}
    if url.startswith("postgresql"):
        connect_args["connect_timeout"] = max(1, int(timeout_sec))
    return {
        "pool_pre_ping": True,
        "pool_timeout": timeout_sec,
        "connect_args": connect_args,
    }


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Store:
    """
    Explicit handle over the SQLAlchemy engine and session factory.

    Constructed once per process, `init()` on startup and `close()` on
    shutdown (see `fixgeni/main.py`). Routes reach it through `get_db`.
    """

    def __init__(self, url: str, *, timeout_sec: float = 10.0, echo: bool = False) -> None:
        self.url = url
        self.timeout_sec = timeout_sec
        self.echo = echo
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker | None = None

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Store is not initialized. Call init() on startup.")
        return self._engine

    def init(self) -> None:
        if self._engine is not None:
            return None

        if _is_sqlite(self.url):
            database = make_url(self.url).database
            if database and database != ":memory:":
                Path(database).parent.mkdir(parents=True, exist_ok=True)

        engine = create_engine(self.url, echo=self.echo, **_engine_kwargs(self.url, self.timeout_sec))
        if _is_sqlite(self.url):
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

        self._engine = engine
        self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def close(self) -> None:
        if self._engine is None:
            return None
        self._engine.dispose()
        self._engine = None
        self._sessionmaker = None

    def session(self) -> Session:
        if self._sessionmaker is None:
            raise RuntimeError("Store is not initialized. Call init() on startup.")
        return self._sessionmaker()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        db = self.session()
        try:
            yield db
        finally:
            db.close()

    def create_schema(self) -> None:
        # Models must be imported so their tables are registered on Base.metadata
        from fixgeni.models import category, kb_article  # noqa: F401

        with store_errors():
            Base.metadata.create_all(bind=self.engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request from the app's store."""
    store: Store = request.app.state.store
    db = store.session()
    try:
        yield db
    finally:
        db.close()


__all__ = ["Base", "Store", "StoreUnavailable", "get_db", "store_errors"]
