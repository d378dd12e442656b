"""
Recording Models Tests

To run:
    pytest tests/recording/models/test_recording_models.py -v
"""

import dataclasses
from datetime import datetime, timezone

import pytest

from recording.models.recording_models import (
    Artifact,
    CaptureConstraints,
    RecordingResult,
    utc_timestamp,
)


@pytest.mark.unit
def test_utc_timestamp_format():
    """Test ISO-8601 UTC with milliseconds and Z suffix."""
    moment = datetime(2025, 7, 26, 2, 28, 32, 123456, tzinfo=timezone.utc)

    assert utc_timestamp(moment) == "2025-07-26T02:28:32.123Z"


@pytest.mark.unit
def test_result_default_timestamp_is_now():
    """Test results are stamped when created."""
    before = datetime.now(timezone.utc).replace(microsecond=0)

    result = RecordingResult(artifact=Artifact(b"x", "video/webm"), duration=1)

    assert result.created_at >= before


@pytest.mark.unit
def test_result_is_immutable():
    """Test the handoff value cannot be modified."""
    result = RecordingResult(artifact=Artifact(b"x", "video/webm"), duration=1)

    with pytest.raises(dataclasses.FrozenInstanceError):
        result.duration = 5


@pytest.mark.unit
def test_result_dict_layout():
    """Test the handoff dictionary field names."""
    result = RecordingResult(
        artifact=Artifact(b"abc", "video/webm"),
        duration=7,
        timestamp="2025-07-26T02:28:32.123Z",
    )

    assert result.to_dict() == {
        "artifact": {"data": b"abc", "mime_type": "video/webm"},
        "duration": 7,
        "timestamp": "2025-07-26T02:28:32.123Z",
    }
    assert RecordingResult.from_dict(result.to_dict()) == result


@pytest.mark.unit
def test_artifact_size():
    """Test size reports the blob length."""
    assert Artifact(b"12345", "video/webm").size == 5


@pytest.mark.unit
def test_constraints_are_hints():
    """Test arbitrary values are accepted without validation."""
    constraints = CaptureConstraints(width=1, height=99999, facing_mode="sideways")

    assert constraints.to_dict()["video"]["height"] == 99999
