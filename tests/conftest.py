# File: tests/conftest.py

import pytest
import os
import sys
import tempfile
import logging
from sqlalchemy import text
from sqlalchemy_utils import database_exists, create_database

# 1. Point the history DB at a throwaway file BEFORE settings are imported
TEST_DB_DIR = tempfile.mkdtemp(prefix="grepr_tests_")
os.environ["GREPR_DATABASE_URL"] = f"sqlite:///{TEST_DB_DIR}/grepr_test.db"

# 2. Add project root to path
sys.path.append(os.getcwd())

from grepr.core.database.connection import engine, init_db


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Ensures the DB exists and the history tables are created.
    """
    logging.getLogger("grepr").setLevel(logging.DEBUG)

    if not database_exists(engine.url):
        create_database(engine.url)

    init_db()

    yield


@pytest.fixture(scope="function")
def clean_db(global_setup):
    """Empties the history tables before a test that reads them."""
    with engine.connect() as conn:
        trans = conn.begin()
        conn.execute(text('DELETE FROM "jobs";'))
        trans.commit()

    yield


@pytest.fixture
def sample_tree(tmp_path):
    """
    d/
      one.txt      "foo bar", "baz"
      sub/
        two.txt    "no match", "foo again"
    """
    root = tmp_path / "d"
    root.mkdir()
    (root / "one.txt").write_text("foo bar\nbaz\n")

    sub = root / "sub"
    sub.mkdir()
    (sub / "two.txt").write_text("no match\nfoo again\n")

    return root
