"""Database connection and session management."""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session as OrmSession
from sqlalchemy.pool import StaticPool

from ..errors import DashboardError, PersistenceError
from ..settings import APP_SUPPORT_DIR
from .models import Base

logger = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────────

DB_PATH = APP_SUPPORT_DIR / "dashboard.db"

# ── engine & session factory (created lazily) ─────────────────────────────

_engine = None
_SessionFactory = None


def _make_engine(url: str):
    kwargs = {"echo": False}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            # one shared connection, or every session sees an empty database
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def _get_engine():
    global _engine
    if _engine is None:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        _engine = _make_engine(f"sqlite:///{DB_PATH}")
    return _engine


def _get_session_factory():
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    return _SessionFactory


# ── public API ────────────────────────────────────────────────────────────


def configure_engine(url: str) -> None:
    """Override the database connection URL.  Used by tests to point at
    an in-memory SQLite database instead of the real one on disk."""
    global _engine, _SessionFactory
    _SessionFactory = None
    _engine = _make_engine(url)


def init_db() -> None:
    """Create all tables."""
    engine = _get_engine()
    logger.info("Creating tables on %s", engine.url)
    Base.metadata.create_all(engine)


@contextmanager
def get_session():
    """Yield a SQLAlchemy session; commit on success, rollback on error.

    Driver errors surface as :class:`PersistenceError`; dashboard errors
    raised inside the block pass through unchanged.
    """
    factory = _get_session_factory()
    session: OrmSession = factory()
    try:
        yield session
        session.commit()
    except DashboardError:
        session.rollback()
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Database error")
        raise PersistenceError(f"Database error: {exc}") from exc
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
