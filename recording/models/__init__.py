"""
Recording Models Package

Exposes the data classes exchanged at the recording boundary.
"""

from recording.models.recording_models import (
    Artifact,
    CaptureConstraints,
    RecordingResult,
    utc_timestamp,
)

# Public API
__all__ = [
    "Artifact",
    "CaptureConstraints",
    "RecordingResult",
    "utc_timestamp",
]
