"""
Stored Recording Model

Data class describing a recording saved on disk and its JSON sidecar.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class StoredRecording:
    """
    A finished recording written to storage.

    The artifact lives at `filepath`; its metadata lives next to it
    in a `.json` file with the same stem.
    """

    filename: str  # recording_2025-07-26_143022.webm
    filepath: Path
    mime_type: str
    duration: int  # seconds, as counted by the session
    timestamp: str  # ISO-8601 UTC, from the RecordingResult
    size_bytes: int

    def __post_init__(self):
        """Ensure filepath is a Path object"""
        if not isinstance(self.filepath, Path):
            self.filepath = Path(self.filepath)

    @property
    def metadata_path(self) -> Path:
        """Path of the JSON sidecar"""
        return self.filepath.with_suffix(".json")

    @property
    def exists(self) -> bool:
        """Check if the artifact file still exists on disk"""
        return self.filepath.exists()

    def to_dict(self) -> dict:
        """Convert to dictionary for the JSON sidecar"""
        return {
            "filename": self.filename,
            "mime_type": self.mime_type,
            "duration": self.duration,
            "timestamp": self.timestamp,
            "size_bytes": self.size_bytes,
        }

    @classmethod
    def from_dict(cls, data: dict, directory: Path) -> "StoredRecording":
        """Create StoredRecording from a sidecar dictionary"""
        return cls(
            filename=data["filename"],
            filepath=Path(directory) / data["filename"],
            mime_type=data["mime_type"],
            duration=int(data["duration"]),
            timestamp=data["timestamp"],
            size_bytes=int(data["size_bytes"]),
        )

    def __repr__(self) -> str:
        return (
            f"StoredRecording(filename='{self.filename}', "
            f"duration={self.duration}, size={self.size_bytes})"
        )
