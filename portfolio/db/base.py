"""Engine and session handling for the portfolio store."""

from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from portfolio.config import settings


class Base(DeclarativeBase):
    pass


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """Engine for DATABASE_URL, created on first use."""
    global _engine
    if _engine is not None:
        return _engine

    url = settings.database_url
    if not url:
        raise ValueError("DATABASE_URL not configured")

    if url.startswith("sqlite"):
        # Local development database; FastAPI runs sync routes in a thread pool
        _engine = create_engine(url, connect_args={"check_same_thread": False})
    else:
        _engine = create_engine(url, pool_pre_ping=True, pool_recycle=300)
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=True)
    return _session_factory


@contextmanager
def open_session() -> Iterator[Session]:
    """Session for scripts and the CLI; rolled back if the block raises."""
    db = get_session_factory()()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request."""
    with open_session() as db:
        yield db


def init_db() -> None:
    """Create any missing tables (Alembic owns schema changes)."""
    from portfolio.db import tables  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
