"""
Recording Controllers Package

High-level controllers that coordinate device access, recording and timing.
"""

from recording.controllers.capture_session import CaptureSession
from recording.controllers.chunk_accumulator import ChunkAccumulator
from recording.controllers.duration_clock import DurationClock
from recording.controllers.permission_gate import PermissionGate
from recording.controllers.session_state_machine import (
    TRANSITIONS,
    SessionStateMachine,
)

# Public API
__all__ = [
    "CaptureSession",
    "ChunkAccumulator",
    "DurationClock",
    "PermissionGate",
    "SessionStateMachine",
    "TRANSITIONS",
]
