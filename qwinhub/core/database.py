from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from qwinhub.core.config import Settings


Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one running application.

    Built once by the app factory and disposed on shutdown; request handlers reach it
    through ``get_db`` instead of a module-level engine.
    """

    def __init__(self, url: str, timeout_seconds: int = 10, echo: bool = False, **engine_kwargs):
        self.url = url
        if url.startswith("sqlite"):
            connect_args = {"check_same_thread": False, "timeout": timeout_seconds}
        else:
            engine_kwargs.setdefault("pool_timeout", timeout_seconds)
            connect_args = {}
            if url.startswith("postgresql"):
                connect_args["options"] = f"-c statement_timeout={timeout_seconds * 1000}"
        connect_args.update(engine_kwargs.pop("connect_args", {}))

        self.engine: Engine = create_engine(url, echo=echo, connect_args=connect_args, **engine_kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.DATABASE_URL, timeout_seconds=settings.DB_TIMEOUT_SECONDS, echo=settings.SQL_ECHO)

    def create_all(self):
        # Importing the models registers every table on Base.metadata.
        import qwinhub.models.all_models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    with request.app.state.database.session() as db:
        yield db
