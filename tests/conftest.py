"""Shared pytest fixtures for all tests."""

import io

import pytest
from fastapi.testclient import TestClient

from cli.config import Config
from fileserver.database import init_database
from fileserver.storage.namespace import NamespaceManager


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Use the cheapest bcrypt work factor so tests stay fast."""
    monkeypatch.setattr("fileserver.config.BCRYPT_ROUNDS", 4)


@pytest.fixture
def test_db(monkeypatch, tmp_path):
    """
    Create a temporary identity database for each test.
    """
    db_path = tmp_path / "data" / "users.db"
    monkeypatch.setattr("fileserver.database.DATABASE_PATH", str(db_path))
    monkeypatch.setattr("fileserver.config.DATABASE_PATH", str(db_path))
    init_database()
    return db_path


@pytest.fixture
def storage_root(monkeypatch, tmp_path):
    """
    Point the server at an empty storage root.
    """
    root = tmp_path / "uploads"
    root.mkdir()
    monkeypatch.setattr("fileserver.config.STORAGE_ROOT", str(root))
    return root


@pytest.fixture
def namespaces(storage_root):
    return NamespaceManager(storage_root)


@pytest.fixture
def api(test_db, storage_root):
    """FastAPI test client backed by a temporary database and storage root."""
    from fileserver.main import app
    return TestClient(app)


@pytest.fixture
def make_api(test_db, storage_root):
    """Factory for independent clients, each with its own cookie jar."""
    from fileserver.main import app

    def _make() -> TestClient:
        return TestClient(app)

    return _make


@pytest.fixture
def incoming():
    """Build an IncomingFile from a name and bytes."""
    from fileserver.services.upload_service import IncomingFile

    def _make(name, data: bytes = b"content") -> IncomingFile:
        return IncomingFile(filename=name, stream=io.BytesIO(data))

    return _make


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary CLI config directory.
    """
    config_dir = tmp_path / '.upzload'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary CLI config instance.
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing file uploads.
    """
    file_path = tmp_path / 'test.txt'
    file_path.write_text('Sample content for testing')
    return file_path


@pytest.fixture
def multiple_sample_files(tmp_path):
    """
    Create multiple sample files for testing batch uploads.
    """
    files = []
    for i in range(3):
        file_path = tmp_path / f'test{i}.txt'
        file_path.write_text(f'Sample content {i}')
        files.append(file_path)
    return files
