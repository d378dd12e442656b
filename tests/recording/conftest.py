"""
Recording Test Configuration and Fixtures

Shared fixtures for recording module tests.
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from recording.controllers.capture_session import CaptureSession
from recording.implementations.mock_device import MockCaptureDevice

# =============================================================================
# DEVICE FIXTURES
# =============================================================================


@pytest.fixture
def mock_device_fast():
    """
    Provide MockCaptureDevice without timing simulation (fast tests).

    Chunks only arrive through recorder.emit().

    Usage:
        def test_device(mock_device_fast):
            stream = mock_device_fast.open_stream(CaptureConstraints())
    """
    device = MockCaptureDevice(simulate_timing=False)
    yield device
    device.cleanup()


@pytest.fixture
def mock_device_realistic():
    """
    Provide MockCaptureDevice whose recorders emit chunks on a timer.
    """
    device = MockCaptureDevice(simulate_timing=True)
    yield device
    device.cleanup()


# =============================================================================
# CAPTURE SESSION FIXTURES
# =============================================================================


@pytest.fixture
def session(mock_device_fast):
    """
    Provide CaptureSession with a hand-ticked clock.

    Usage:
        def test_session(session):
            session.request_access()
            session.start()
            session.clock.tick()
    """
    capture_session = CaptureSession(mock_device_fast, auto_tick=False)
    yield capture_session
    capture_session.cleanup()


@pytest.fixture
def ready_session(session):
    """Provide a session that already has device access"""
    session.request_access()
    return session


@pytest.fixture
def recording_session(ready_session):
    """Provide a session that is already recording"""
    ready_session.start()
    return ready_session


# =============================================================================
# TEMPORARY DIRECTORY FIXTURES
# =============================================================================


@pytest.fixture
def temp_recording_dir():
    """
    Provide temporary directory for recordings.

    Directory is automatically cleaned up after test.
    """
    temp_dir = Path(tempfile.mkdtemp())

    yield temp_dir

    # Cleanup
    if temp_dir.exists():
        shutil.rmtree(temp_dir)


# =============================================================================
# CALLBACK TRACKING FIXTURES
# =============================================================================


@pytest.fixture
def callback_tracker():
    """
    Provide helper for tracking callback calls.

    Usage:
        def test_callback(session, callback_tracker):
            session.on_complete = callback_tracker.track
            # ... stop recording ...
            assert callback_tracker.was_called()
    """

    class CallbackTracker:
        def __init__(self):
            self.calls = []

        def track(self, *args, **kwargs):
            """Record a callback invocation"""
            self.calls.append({"args": args, "kwargs": kwargs})

        def was_called(self) -> bool:
            """Check if callback was called"""
            return len(self.calls) > 0

        def get_call_count(self) -> int:
            """Get number of times callback was called"""
            return len(self.calls)

        def get_last_call(self):
            """Get arguments from last call"""
            return self.calls[-1] if self.calls else None

        def reset(self):
            """Clear call history"""
            self.calls.clear()

    return CallbackTracker()


# =============================================================================
# HELPERS
# =============================================================================


def tick(session, count: int) -> None:
    """Deliver `count` clock ticks to a hand-ticked session"""
    for _ in range(count):
        session.clock.tick()


@pytest.fixture
def ticker():
    """Provide the tick() helper to tests"""
    return tick


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """
    Configure pytest with custom markers for recording tests.
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "unit_integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
    config.addinivalue_line("markers", "requires_ffmpeg: Tests requiring FFmpeg")
