"""
Recording Module

Camera + microphone capture sessions for cooking videos.

Provides automatic detection and graceful fallback between real FFmpeg
capture and mock implementations for testing.

Public API:
    - RecordingFactory: Factory for devices and sessions
    - CaptureSession: Start/pause/resume/stop with a duration clock
    - PermissionGate: Device access requests
    - RecordingResult / Artifact / CaptureConstraints: Data models
    - CaptureError / PermissionDeniedError: Custom exceptions
    - RecordingPhase: Phase enumeration

Usage:
    from recording import RecordingFactory

    device = RecordingFactory.create_device()
    with RecordingFactory.create_session(device) as session:
        session.on_complete = lambda result: print(result.duration)
        session.request_access()
        session.start()
        ...
        session.stop()
"""

from recording.constants import (
    PERMISSION_DENIED_MESSAGE,
    PermissionState,
    RecordingPhase,
)
from recording.controllers.capture_session import CaptureSession
from recording.controllers.permission_gate import PermissionGate
from recording.factory import RecordingFactory
from recording.interfaces.capture_device_interface import (
    CaptureDeviceInterface,
    CaptureError,
    PermissionDeniedError,
)
from recording.models.recording_models import (
    Artifact,
    CaptureConstraints,
    RecordingResult,
)
from recording.utils.recording_utils import format_duration, generate_filename

__all__ = [
    "PERMISSION_DENIED_MESSAGE",
    "Artifact",
    "CaptureConstraints",
    "CaptureDeviceInterface",
    "CaptureError",
    "CaptureSession",
    "PermissionDeniedError",
    "PermissionGate",
    "PermissionState",
    "RecordingFactory",
    "RecordingPhase",
    "RecordingResult",
    "format_duration",
    "generate_filename",
]
