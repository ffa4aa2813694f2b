import os
import tempfile

import pytest

from quotator_crawler.core.coordinator import RefreshCoordinator
from quotator_crawler.db.db import Database
from quotator_crawler.db.repository import Repository


@pytest.fixture(scope='function')
def test_db_path():
    """Create a temporary database file for testing."""
    fd, path = tempfile.mkstemp(suffix='.db')
    os.close(fd)  # Peewee manages the connection
    try:
        yield path
    finally:
        for suffix in ('', '-wal', '-shm'):
            if os.path.exists(path + suffix):
                os.remove(path + suffix)


@pytest.fixture(scope='function')
def db_instance(test_db_path):
    """Initialize a Database against the temporary file."""
    db = Database()
    db.init_db(db_path=test_db_path)
    yield db
    db.close()


@pytest.fixture(scope='function')
def repository(db_instance):
    """Provide a Repository over the freshly migrated store."""
    return Repository(db_instance)


@pytest.fixture(scope='function')
def coordinator(repository):
    coordinator = RefreshCoordinator(repository)
    yield coordinator
    coordinator.wait(timeout=5)
