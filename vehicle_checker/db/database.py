from typing import Dict, NamedTuple, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, scoped_session, sessionmaker
from sqlalchemy.orm.scoping import ScopedSession

from vehicle_checker import settings

_DB_CONN_CACHE: Dict[str, 'DatabaseConnection'] = {}


class DatabaseConnection(NamedTuple):
    engine: Engine
    session: ScopedSession


DeclarativeBase = declarative_base()


def _create_engine(database_url: str) -> Engine:
    """Creates an engine wrapping the configured db.
    :param database_url: a SQLAlchemy database url.
    :return: an engine around the db.
    """
    return create_engine(database_url)


def _create_scoped_session(engine: Engine) -> ScopedSession:
    """Returns a scoped_session to the db connected to the given engine.
    :param engine: an engine connected to the target db.
    :return: a scoped_session to the db connected to the engine.
    """
    return scoped_session(
        sessionmaker(
            autoflush=False,
            bind=engine,
            expire_on_commit=False))


def init_database(database_url: Optional[str] = None) -> DatabaseConnection:
    url = database_url or settings.DATABASE_URL

    if url not in _DB_CONN_CACHE:
        # imported for its side effect of registering the table
        from vehicle_checker.models.stored_value import StoredValue  # noqa: F401

        engine = _create_engine(url)
        DeclarativeBase.metadata.create_all(engine)

        session = _create_scoped_session(engine=engine)
        _DB_CONN_CACHE[url] = DatabaseConnection(engine=engine, session=session)

    return _DB_CONN_CACHE[url]
