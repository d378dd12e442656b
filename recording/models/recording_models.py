"""
Recording Models

Data classes passed across the recording boundary:
- CaptureConstraints: hints handed to the capture device
- Artifact: the finalized media blob
- RecordingResult: the value handed to the recipe processor
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from config.settings import (
    AUDIO_SAMPLE_RATE_HINT,
    ECHO_CANCELLATION_HINT,
    FACING_MODE_HINT,
    NOISE_SUPPRESSION_HINT,
    VIDEO_HEIGHT_HINT,
    VIDEO_WIDTH_HINT,
)


@dataclass(frozen=True)
class CaptureConstraints:
    """
    Desired capture configuration.

    All fields are hints. A capture backend may silently substitute the
    closest configuration it supports; nothing here is validated.
    """

    width: int = VIDEO_WIDTH_HINT
    height: int = VIDEO_HEIGHT_HINT
    facing_mode: str = FACING_MODE_HINT
    echo_cancellation: bool = ECHO_CANCELLATION_HINT
    noise_suppression: bool = NOISE_SUPPRESSION_HINT
    sample_rate: int = AUDIO_SAMPLE_RATE_HINT

    def to_dict(self) -> Dict[str, Any]:
        """Nested video/audio layout, as reported by stream settings"""
        return {
            "video": {
                "width": self.width,
                "height": self.height,
                "facing_mode": self.facing_mode,
            },
            "audio": {
                "echo_cancellation": self.echo_cancellation,
                "noise_suppression": self.noise_suppression,
                "sample_rate": self.sample_rate,
            },
        }


@dataclass(frozen=True)
class Artifact:
    """Finalized recording: one binary blob plus its content type."""

    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        """Size of the blob in bytes"""
        return len(self.data)

    def __repr__(self) -> str:
        return f"Artifact(mime_type='{self.mime_type}', size={self.size})"


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Format a moment as ISO-8601 UTC with milliseconds.

    Example:
        utc_timestamp() -> "2025-07-26T02:28:32.123Z"
    """
    moment = moment or datetime.now(timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class RecordingResult:
    """
    Outcome of one recording session.

    Produced exactly once when the session stops. Field names are the
    handoff contract with the recipe processor and must not change.
    """

    artifact: Artifact
    duration: int  # Elapsed seconds counted by the duration clock
    timestamp: str = field(default_factory=utc_timestamp)

    @property
    def created_at(self) -> datetime:
        """Timestamp parsed back into an aware datetime"""
        return datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the handoff dictionary"""
        return {
            "artifact": {
                "data": self.artifact.data,
                "mime_type": self.artifact.mime_type,
            },
            "duration": self.duration,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecordingResult":
        """Create RecordingResult from handoff dictionary"""
        artifact = data["artifact"]
        return cls(
            artifact=Artifact(
                data=bytes(artifact["data"]),
                mime_type=artifact["mime_type"],
            ),
            duration=int(data["duration"]),
            timestamp=data["timestamp"],
        )

    def __repr__(self) -> str:
        return (
            f"RecordingResult(duration={self.duration}, "
            f"timestamp='{self.timestamp}', artifact={self.artifact!r})"
        )
