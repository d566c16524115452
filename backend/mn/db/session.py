"""
Database session management.
"""
from contextlib import contextmanager
import logging
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from mn.core.config import settings
from mn.core.errors import BackendError, ConflictError, StoreError
from mn.db.base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_transactions(engine):
    """
    Turn on foreign key enforcement for every connection and let SQLAlchemy
    emit BEGIN itself, so multi-statement reads run inside one transaction.
    """

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        # pysqlite must not manage transactions on its own.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_db_engine(database_url: str, echo: bool = False, pool_timeout: int = 30):
    """
    Create an engine for the given URL.

    SQLite only supports one writer at a time, so the pool is pinned to a
    single connection instead of retrying on "database is locked" errors.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(
            database_url,
            echo=echo,
            pool_pre_ping=True,
            pool_recycle=3600
        )

    if url.database in (None, "", ":memory:"):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool
        )
    else:
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            pool_size=1,
            max_overflow=0,
            pool_timeout=pool_timeout
        )
    _enable_sqlite_transactions(engine)
    return engine


engine = create_db_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_timeout=settings.DB_POOL_TIMEOUT
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _is_unique_violation(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "unique" in message or "duplicate" in message


@contextmanager
def transaction(db: Session):
    """
    Run a unit of work in one transaction.

    Commits when the block finishes and rolls back on any error. Unique
    violations are raised as ``ConflictError``, other store failures as
    ``StoreError``; domain errors pass through unchanged.
    """
    try:
        yield db
        db.commit()
    except BackendError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        if _is_unique_violation(e):
            raise ConflictError() from e
        logger.error(f"Integrity error: {e.orig}")
        raise StoreError(f"Store error: {e.orig}") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error: {e}", exc_info=True)
        raise StoreError(f"Store error: {e}") from e
    except Exception:
        db.rollback()
        raise


def init_db(bind=None):
    """Initialize database tables."""
    # Import all models so SQLAlchemy can register them
    import mn.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
