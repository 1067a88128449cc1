import pytest

from fuzzy_history.config import DATA_DIR_ENV
from fuzzy_history.history.database import Database


@pytest.fixture
async def db():
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    await database.connect()
    yield database
    await database.close()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the data directory at a temporary path."""
    path = tmp_path / "data"
    monkeypatch.setenv(DATA_DIR_ENV, str(path))
    return path
