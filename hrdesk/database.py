# hrdesk/database.py
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from hrdesk.config import get_settings

logger = logging.getLogger(__name__)


def _build_engine(settings):
    url = settings.database_url
    kwargs = {"echo": settings.db_echo}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # one shared connection, otherwise every checkout sees an empty in-memory db
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
        if settings.db_ssl_ca:
            kwargs["connect_args"] = {"ssl_ca": settings.db_ssl_ca}

    engine = create_engine(url, **kwargs)

    if url.startswith("sqlite"):
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_conn, _record):
            # sqlite ignores ON DELETE CASCADE unless asked per connection
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = _build_engine(get_settings())

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping():
    """Borrow a pooled connection and run a trivial query; raises on failure."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def init_db():
    # models must be imported so their tables are registered on Base.metadata
    from hrdesk.employees import models as _employees  # noqa: F401
    from hrdesk.attendance import models as _attendance  # noqa: F401
    from hrdesk.salary import models as _salary  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured on %s", engine.url.render_as_string(hide_password=True))
