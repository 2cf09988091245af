"""
Pytest configuration and shared fixtures.

The settings singleton and the SQLAlchemy engine are built at import time, so
the environment is pointed at a throwaway SQLite file before anything from
`taxonomy_buddy.database` is imported.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="cctb-tests-")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DB_DRIVER_NAME"] = "sqlite"
os.environ["DB_DATABASE_NAME"] = os.path.join(_DB_DIR, "reviews.db")
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "5"

import pytest
from fastapi.testclient import TestClient

from taxonomy_buddy.api.models import CodePairImport
from taxonomy_buddy.database.config.connection_engine import connection_engine, create_schema, metadata
from taxonomy_buddy.database.core.funcs import create_user, import_code_pairs
from taxonomy_buddy.main import app


@pytest.fixture
def database():
    """Fresh, empty schema for each test."""
    metadata.drop_all(connection_engine)
    create_schema()
    yield
    metadata.drop_all(connection_engine)


@pytest.fixture
def client(database):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def reviewer(database):
    return create_user(username="alice", password="Sup3r$ecret")


@pytest.fixture
def other_reviewer(database):
    return create_user(username="bob", password="An0ther$ecret")


def make_pairs(count: int, start: int = 1) -> list[CodePairImport]:
    return [
        CodePairImport(
            version1=f"int f{n}() {{\n    return {n};\n}}\n",
            version2=f"int f{n}() {{\n    return {n} + 1;\n}}\n",
            commit_message=f"Change {n}",
            project_name="demo",
            commit_hash=f"{n:040x}",
        )
        for n in range(start, start + count)
    ]


@pytest.fixture
def code_pairs(database):
    """Three imported code pairs with ids 1, 2, 3."""
    import_code_pairs(code_pairs=make_pairs(3))
    return [1, 2, 3]


@pytest.fixture
def import_pairs(database):
    """Import `count` more generated code pairs; returns how many were inserted."""
    def _import(count: int) -> int:
        return import_code_pairs(code_pairs=make_pairs(count))
    return _import
