"""
SQLAlchemy engine and session factory for the CRM store.

DATABASE_URL selects the backend: a SQLite file for local runs and tests,
Postgres when deployed. Route handlers open one session per request with
get_session() and close it themselves.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from revenuela.config import DATABASE_URL


class Base(DeclarativeBase):
    pass


def normalize_url(raw_url: str) -> str:
    # Hosted Postgres URLs use postgres:// but SQLAlchemy 2.x requires postgresql://
    return raw_url.replace('postgres://', 'postgresql://', 1)


def engine_options(db_url: str) -> dict:
    if db_url.startswith('sqlite'):
        return {'connect_args': {'check_same_thread': False}}
    return {'pool_pre_ping': True, 'pool_size': 5, 'max_overflow': 10}


url = normalize_url(DATABASE_URL)
engine = create_engine(url, **engine_options(url))

SessionLocal = sessionmaker(bind=engine)


def get_session():
    """Return a new DB session."""
    return SessionLocal()
