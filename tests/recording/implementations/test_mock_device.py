"""
Mock Capture Device Tests

Tests for MockCaptureDevice showing:
- Stream grant / denial
- Recorder chunk emission rules
- Trailing data flushed on end
- Simulated failures
- Timing simulation

To run:
    pytest tests/recording/implementations/test_mock_device.py -v
"""

import time

import pytest

from recording.constants import RecorderState
from recording.implementations.mock_device import (
    FAKE_WEBM_HEADER,
    MockCaptureDevice,
    MockStream,
)
from recording.interfaces.capture_device_interface import (
    CaptureProcessError,
    PermissionDeniedError,
)
from recording.models.recording_models import CaptureConstraints

# =============================================================================
# STREAM TESTS
# =============================================================================


@pytest.mark.unit
def test_open_stream(mock_device_fast):
    """Test a stream is granted and tracked."""
    stream = mock_device_fast.open_stream(CaptureConstraints())

    assert isinstance(stream, MockStream)
    assert stream.is_active() is True
    assert mock_device_fast.streams == [stream]


@pytest.mark.unit
def test_stream_release_once(mock_device_fast):
    """Test releasing twice only counts once."""
    stream = mock_device_fast.open_stream(CaptureConstraints())

    stream.release()
    stream.release()

    assert stream.is_active() is False
    assert stream.release_count == 1


@pytest.mark.unit
def test_simulate_denial(mock_device_fast):
    """Test declined access raises."""
    mock_device_fast.simulate_denial()

    with pytest.raises(PermissionDeniedError):
        mock_device_fast.open_stream(CaptureConstraints())

    assert mock_device_fast.streams == []


@pytest.mark.unit
def test_simulate_no_device(mock_device_fast):
    """Test missing devices make the device unavailable."""
    mock_device_fast.simulate_no_device()

    assert mock_device_fast.is_available() is False
    with pytest.raises(PermissionDeniedError):
        mock_device_fast.open_stream(CaptureConstraints())


# =============================================================================
# RECORDER TESTS
# =============================================================================


@pytest.fixture
def recorder(mock_device_fast):
    stream = mock_device_fast.open_stream(CaptureConstraints())
    return mock_device_fast.create_recorder(stream, "video/webm;codecs=vp9")


@pytest.mark.unit
def test_recorder_initial_state(recorder):
    """Test recorder starts inactive."""
    assert recorder.state == RecorderState.INACTIVE
    assert recorder.mime_type == "video/webm;codecs=vp9"


@pytest.mark.unit
def test_emit_only_while_recording(recorder):
    """Test chunks are delivered only in RECORDING."""
    received = []
    recorder.on_data_available = received.append

    assert recorder.emit(b"early") is False

    recorder.begin()
    assert recorder.emit(b"a") is True

    recorder.pause()
    assert recorder.emit(b"paused") is False

    recorder.resume()
    assert recorder.emit(b"b") is True

    assert received == [b"a", b"b"]
    assert recorder.get_emitted_count() == 2


@pytest.mark.unit
def test_end_flushes_trailing_chunk(recorder):
    """Test queued trailing data arrives before end() returns."""
    received = []
    recorder.on_data_available = received.append
    recorder.begin()
    recorder.queue_trailing_chunk(b"tail")

    recorder.end()

    assert received == [b"tail"]
    assert recorder.state == RecorderState.INACTIVE


@pytest.mark.unit
def test_end_twice_is_safe(recorder):
    """Test end() on an inactive recorder does nothing."""
    recorder.begin()
    recorder.end()
    recorder.end()

    assert recorder.state == RecorderState.INACTIVE


@pytest.mark.unit
def test_begin_on_released_stream(mock_device_fast):
    """Test recording from a released stream fails."""
    stream = mock_device_fast.open_stream(CaptureConstraints())
    recorder = mock_device_fast.create_recorder(stream, "video/webm")
    stream.release()

    with pytest.raises(CaptureProcessError):
        recorder.begin()


@pytest.mark.unit
def test_simulate_begin_failure_once(mock_device_fast):
    """Test only the next recorder fails."""
    stream = mock_device_fast.open_stream(CaptureConstraints())
    mock_device_fast.simulate_begin_failure()

    failing = mock_device_fast.create_recorder(stream, "video/webm")
    working = mock_device_fast.create_recorder(stream, "video/webm")

    with pytest.raises(CaptureProcessError):
        failing.begin()
    working.begin()

    assert working.state == RecorderState.RECORDING


@pytest.mark.unit
def test_create_recorder_rejects_foreign_stream(mock_device_fast):
    """Test recorders need a stream from this device type."""
    with pytest.raises(TypeError):
        mock_device_fast.create_recorder(object(), "video/webm")


@pytest.mark.unit
def test_cleanup_releases_everything(mock_device_fast, recorder):
    """Test device cleanup ends recorders and releases streams."""
    recorder.begin()

    mock_device_fast.cleanup()

    assert recorder.state == RecorderState.INACTIVE
    assert mock_device_fast.active_stream_count() == 0


@pytest.mark.unit
def test_last_recorder(mock_device_fast, recorder):
    """Test last_recorder tracks the newest recorder."""
    assert mock_device_fast.last_recorder is recorder


# =============================================================================
# TIMING SIMULATION TESTS
# =============================================================================


@pytest.mark.slow
@pytest.mark.unit_integration
def test_timed_recorder_emits_chunks(mock_device_realistic):
    """Test the timer thread produces a WebM-looking stream."""
    stream = mock_device_realistic.open_stream(CaptureConstraints())
    recorder = mock_device_realistic.create_recorder(stream, "video/webm")
    recorder.chunk_interval = 0.05
    received = []
    recorder.on_data_available = received.append

    recorder.begin()
    time.sleep(0.3)
    recorder.end()

    assert len(received) >= 2
    assert received[0].startswith(FAKE_WEBM_HEADER)
