"""
Recording Factory Tests

To run:
    pytest tests/recording/test_recording_factory.py -v
"""

import pytest

from recording.controllers.capture_session import CaptureSession
from recording.factory import RecordingFactory
from recording.implementations.ffmpeg_device import FFmpegCaptureDevice
from recording.implementations.mock_device import MockCaptureDevice


@pytest.mark.unit
def test_create_mock_device():
    """Test forcing mock mode."""
    device = RecordingFactory.create_device(mode="mock", simulate_timing=False)

    assert isinstance(device, MockCaptureDevice)
    assert device.simulate_timing is False


@pytest.mark.unit
def test_create_device_unknown_mode():
    """Test unknown modes are rejected."""
    with pytest.raises(ValueError):
        RecordingFactory.create_device(mode="webcam")


@pytest.mark.unit
def test_create_real_device_unavailable(monkeypatch):
    """Test forcing real capture without FFmpeg fails loudly."""
    monkeypatch.setattr(FFmpegCaptureDevice, "is_available", lambda self: False)

    with pytest.raises(RuntimeError):
        RecordingFactory.create_device(mode="real")


@pytest.mark.unit
def test_auto_falls_back_to_mock(monkeypatch):
    """Test auto mode uses the mock when real capture is unavailable."""
    monkeypatch.setattr(FFmpegCaptureDevice, "is_available", lambda self: False)

    device = RecordingFactory.create_device(mode="auto")

    assert isinstance(device, MockCaptureDevice)


@pytest.mark.unit
def test_auto_prefers_real(monkeypatch):
    """Test auto mode uses FFmpeg when available."""
    monkeypatch.setattr(FFmpegCaptureDevice, "is_available", lambda self: True)

    device = RecordingFactory.create_device(mode="auto")

    assert isinstance(device, FFmpegCaptureDevice)


@pytest.mark.unit
def test_create_session(mock_device_fast):
    """Test sessions are created fresh for a device."""
    first = RecordingFactory.create_session(mock_device_fast, auto_tick=False)
    second = RecordingFactory.create_session(mock_device_fast, auto_tick=False)

    assert isinstance(first, CaptureSession)
    assert first is not second
    assert first.device is mock_device_fast

    first.cleanup()
    second.cleanup()

