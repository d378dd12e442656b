"""
Recording Interfaces Package

Exposes abstract interfaces for capture components.
"""

from recording.interfaces.capture_device_interface import (
    CaptureDeviceInterface,
    CaptureError,
    CaptureProcessError,
    ChunkCallback,
    ChunkRecorderInterface,
    PermissionDeniedError,
    StreamHandle,
)

# Public API
__all__ = [
    # Interfaces
    "CaptureDeviceInterface",
    "ChunkCallback",
    "ChunkRecorderInterface",
    "StreamHandle",
    # Exceptions
    "CaptureError",
    "CaptureProcessError",
    "PermissionDeniedError",
]
