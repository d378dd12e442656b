"""
Storage Test Configuration and Fixtures

This file contains pytest fixtures shared across storage tests.

To use pytest:
    pip install pytest
    pytest tests/storage/
"""

import tempfile
from pathlib import Path

import pytest

from recording.models.recording_models import Artifact, RecordingResult
from storage import RecordingStore, StorageConfig

# =============================================================================
# DIRECTORY FIXTURES
# =============================================================================


@pytest.fixture
def temp_storage_dir():
    """
    Provide a temporary directory for storage tests.

    Automatically cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# =============================================================================
# CONFIG AND STORE FIXTURES
# =============================================================================


@pytest.fixture
def storage_config(temp_storage_dir):
    """
    Provide a StorageConfig pointed at the temp directory.

    The YAML file lives in the temp directory too, so nothing is
    written into the working tree.
    """
    config = StorageConfig(config_path=temp_storage_dir / "storage.yaml")
    config.set('recordings_base_path', str(temp_storage_dir / "recordings"), save=False)
    config.set('min_free_space_bytes', 1024, save=False)  # 1 KB for testing
    return config


@pytest.fixture
def recording_store(storage_config):
    """
    Provide RecordingStore with temp directory.

    Usage:
        def test_save(recording_store, sample_result):
            stored = recording_store.save(sample_result)
    """
    return RecordingStore(storage_config)


# =============================================================================
# RESULT FIXTURES
# =============================================================================


@pytest.fixture
def sample_result():
    """Provide a small finished recording"""
    return RecordingResult(
        artifact=Artifact(data=b"\x1a\x45\xdf\xa3fake-webm", mime_type="video/webm"),
        duration=7,
        timestamp="2025-07-26T12:00:00.000Z",
    )


def make_result(timestamp: str, data: bytes = b"data", duration: int = 1) -> RecordingResult:
    """Build a RecordingResult with a fixed timestamp"""
    return RecordingResult(
        artifact=Artifact(data=data, mime_type="video/webm"),
        duration=duration,
        timestamp=timestamp,
    )


@pytest.fixture
def result_factory():
    """Provide make_result() to tests"""
    return make_result


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """
    Configure pytest with custom markers.

    Same markers as recording tests for consistency.
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "unit_integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
