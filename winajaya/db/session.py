# File: winajaya/db/session.py

"""
Database connector.

One Database object is built at startup and shared by reference: the app
keeps it on app.state and request handlers pull sessions from it.
"""

from collections.abc import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from winajaya.models.base import Base


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        is_sqlite = url.startswith("sqlite")

        self.engine: Engine = create_engine(
            url,
            connect_args={"check_same_thread": False} if is_sqlite else {},
            **engine_kwargs,
        )
        if is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def authenticate(self) -> None:
        """
        Check that the configured database accepts connections.

        Raises whatever the driver raises when it does not.
        """
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def sync(self) -> None:
        """
        Create tables for every registered model that is missing one.
        """
        # Registers users / branches on Base.metadata
        from winajaya.models import branch, user  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def get_db(self) -> Generator[Session, None, None]:
        db = self.session()
        try:
            yield db
        finally:
            db.close()
