import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Declarative base shared by every record table
Base = declarative_base()

_engines = {}


def get_engine(database_uri: str) -> Engine:
    """
    Return the engine for a database URI, creating it on first use

    Resources stored in the same database share one engine and pool.
    """
    if database_uri in _engines:
        return _engines[database_uri]

    url = make_url(database_uri)
    if url.get_backend_name() == "sqlite":
        # SQLite will not create missing parent directories on its own
        if url.database and url.database != ":memory:":
            parent = os.path.dirname(os.path.abspath(url.database))
            os.makedirs(parent, exist_ok=True)
        engine = create_engine(
            database_uri,
            connect_args={"check_same_thread": False},
            echo=False,
        )
    else:
        engine = create_engine(
            database_uri,
            pool_pre_ping=True,
            pool_size=10,
            max_overflow=20,
            pool_recycle=3600,
            echo=False,
        )
    _engines[database_uri] = engine
    logger.info(f"Created database engine for {url.render_as_string(hide_password=True)}")
    return engine


def get_session_factory(database_uri: str) -> sessionmaker:
    """Session factory bound to the engine of a database URI."""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine(database_uri))


def init_db(database_uri: str) -> None:
    """
    Create all record tables that do not exist yet
    """
    # Table classes register themselves on Base when imported
    import school_api.models.records  # noqa: F401

    Base.metadata.create_all(bind=get_engine(database_uri))


def dispose_engines() -> None:
    """Close every pooled connection and forget the engines."""
    for engine in _engines.values():
        engine.dispose()
    _engines.clear()
