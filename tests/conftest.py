"""Pytest fixtures for pld tests."""
import pytest

from pld.client import PldClient
from pld.core.settings import Settings


@pytest.fixture
def config_dir(tmp_path):
    """Directory holding config.json and history.json."""
    return tmp_path / "pld"


@pytest.fixture
def settings(config_dir):
    """Settings pointing at a temporary config dir with a tiny read size."""
    return Settings(config_dir=config_dir, chunk_size=4)


@pytest.fixture
def client(settings):
    """PldClient backed by the temporary config dir."""
    return PldClient(settings)


@pytest.fixture
def sample_file(tmp_path):
    """A 12-byte file."""
    path = tmp_path / "sample.txt"
    path.write_bytes(b"hello world!")
    return path


@pytest.fixture
def legacy_config():
    """config.json as written by old installs."""
    return {'apiKey': 'legacy-key-1234'}


@pytest.fixture
def sample_history_data():
    """history.json entry as stored on disk."""
    return {
        'service': 'pixeldrain',
        'timestamp': '2024-05-01T10:20:30.000Z',
        'filename': 'video.mp4',
        'fileSize': '1.5 GB',
        'fileId': 'abc123',
        'downloadLink': 'https://pixeldrain.com/u/abc123',
    }
