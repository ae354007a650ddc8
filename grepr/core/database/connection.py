# File: grepr/core/database/connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from grepr.core.config.settings import settings
from grepr.core.database.base import Base

# check_same_thread=False is needed only for SQLite
connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Creates the history tables if they don't exist."""
    # Register models on the metadata before creating
    import grepr.core.jobs.data.sql_models  # noqa: F401
    Base.metadata.create_all(bind=engine)

