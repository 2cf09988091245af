"""
Connection Engine (SQLAlchemy)

Purpose
-------
Centralizes database initialization for the application:
- Builds the SQLAlchemy connection URL from environment-backed settings.
- Creates the Engine (connection pool + SQL execution entry point).
- Defines shared MetaData for table and schema objects.
- Exposes a Declarative Base class for ORM models.

Notes
-----
- Uses `URL.create(...)` to keep configuration environment-driven.
- SQLite connections are opened with `check_same_thread=False` because FastAPI
  runs sync endpoints in a worker thread pool.
- All ORM models must inherit from `declarativeBase`.
"""


from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.orm import declarative_base
from sqlalchemy.schema import MetaData
from taxonomy_buddy.database.config.config import settings

connection_url = URL.create(
    drivername=settings.DB_DRIVER_NAME,
    username=settings.DB_USERNAME,
    password=settings.DB_PASSWORD,
    host=settings.DB_HOST,
    port=settings.DB_PORT,
    database=settings.DB_DATABASE_NAME,
)
"""Constructs the SQLAlchemy connection URL using values from Settings."""

connect_args = {"check_same_thread": False} if connection_url.get_backend_name() == "sqlite" else {}

connection_engine = create_engine(connection_url, connect_args=connect_args)
"""Engine object: Core interface to the database.
Responsible for managing connections, executing SQL, and pooling.
"""

metadata = MetaData()
"""
Metadata object: Stores schema-level information about tables, constraints, indexes, etc. Shared across all models.
"""

declarativeBase = declarative_base(metadata=metadata)
"""Declarative Base: Root class for ORM models.
All model classes should inherit from this to gain ORM features and automatic schema generation.
"""


def create_schema() -> None:
    """Create every table registered on `metadata` that does not exist yet."""
    # entities must be imported so their tables are registered
    import taxonomy_buddy.database.entities  # noqa: F401

    metadata.create_all(connection_engine)
