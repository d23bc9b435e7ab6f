import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .base import Base
from .locks import MemberLocks

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Store:
    """Owns the engine and session factory for one database.

    The process entry point calls ``open()`` once and ``close()`` on shutdown;
    request handlers and scripts get sessions through ``session()``.
    """

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs):
        self.url = url
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self.locks = MemberLocks()
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Store is not open")
        return self._engine

    def open(self) -> "Store":
        if self._engine is not None:
            return self
        # Required for SQLite (otherwise threading errors under the threadpool)
        connect_args = {}
        if self.url.startswith("sqlite"):
            connect_args = {"check_same_thread": False}

        self._engine = create_engine(
            self.url,
            echo=self.echo,
            connect_args=connect_args,
            **self.engine_kwargs,
        )
        if self.url.startswith("sqlite"):
            event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )
        Base.metadata.create_all(bind=self._engine)
        logger.info(f"Store opened: {self._engine.url.render_as_string(hide_password=True)}")
        return self

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Store is not open")
        return self._session_factory()

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Store closed")
