"""
Recording Implementations Package

Exposes concrete implementations of the capture interfaces.
"""

from recording.implementations.ffmpeg_device import (
    FFmpegCaptureDevice,
    FFmpegChunkRecorder,
    FFmpegStream,
)
from recording.implementations.mock_device import (
    MockCaptureDevice,
    MockChunkRecorder,
    MockStream,
)

# Public API
__all__ = [
    "FFmpegCaptureDevice",
    "FFmpegChunkRecorder",
    "FFmpegStream",
    "MockCaptureDevice",
    "MockChunkRecorder",
    "MockStream",
]
