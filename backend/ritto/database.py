from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .config import get_settings


def build_engine(url: str, timeout_seconds: float, **kwargs) -> Engine:
    """
    Create an engine whose every statement completes or fails in bounded time.

    SQLite: busy timeout + foreign keys. PostgreSQL: server-side statement_timeout.
    """
    if url.startswith("sqlite"):
        # check_same_thread=False: FastAPI runs sync endpoints in a threadpool
        connect_args = {"check_same_thread": False, "timeout": timeout_seconds}
    elif url.startswith("postgresql"):
        connect_args = {"options": f"-c statement_timeout={int(timeout_seconds * 1000)}"}
    else:
        connect_args = {}

    engine = create_engine(url, connect_args=connect_args, **kwargs)

    if url.startswith("sqlite"):
        @event.listens_for(engine, "connect")
        def enable_sqlite_fk(dbapi_connection, _):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


settings = get_settings()

engine = build_engine(settings.resolved_database_url, settings.db_timeout_seconds)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables (development and tests; production runs alembic)."""
    from .models import Base

    Base.metadata.create_all(bind=bind or engine)
