"""
Recording Store

Persists finished RecordingResults to local disk.

Each recording becomes two files in the pending directory:
- recording_2025-07-26_143022.webm  (the artifact bytes)
- recording_2025-07-26_143022.json  (duration, timestamp, mime type, size)
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from config.settings import DIR_PENDING, RECORDING_FILENAME_FORMAT
from recording.models.recording_models import Artifact, RecordingResult
from recording.utils.recording_utils import (
    check_disk_space,
    extension_for_mime,
    format_file_size,
    generate_filename,
)
from storage.config import StorageConfig
from storage.models.stored_recording import StoredRecording


class StorageError(Exception):
    """Raised when a storage operation fails"""
    pass


class StorageFullError(StorageError):
    """Raised when free space is below the configured minimum"""
    pass


class RecordingStore:
    """
    File-based store for finished recordings.

    Usage:
        store = RecordingStore(StorageConfig())
        stored = store.save(result)
        for item in store.list_recordings():
            print(item.filename, item.duration)
    """

    def __init__(self, config: Optional[StorageConfig] = None):
        self.logger = logging.getLogger(__name__)
        self.config = config or StorageConfig()
        self.base_path = self.config.recordings_base_path
        self.pending_dir = self.base_path / DIR_PENDING

        self._create_directories()

        self.logger.info(f"Recording store initialized at {self.base_path}")

    def _create_directories(self) -> None:
        """Create storage directory structure if missing"""
        try:
            self.pending_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create directories: {e}") from e

    def _unique_path(self, path: Path) -> Path:
        """Append a counter when a file with the same name already exists"""
        if not path.exists():
            return path

        counter = 1
        while True:
            candidate = path.with_name(f"{path.stem}_{counter}{path.suffix}")
            if not candidate.exists():
                return candidate
            counter += 1

    def save(self, result: RecordingResult) -> StoredRecording:
        """
        Write a recording and its metadata sidecar.

        Args:
            result: Finished recording from a CaptureSession

        Returns:
            StoredRecording describing the saved file

        Raises:
            StorageFullError: Not enough free space
            StorageError: Write failed
        """
        required = self.config.min_free_space_bytes + result.artifact.size
        if not check_disk_space(self.base_path, required):
            raise StorageFullError(
                f"Insufficient disk space: need {format_file_size(required)} free"
            )

        extension = extension_for_mime(result.artifact.mime_type)
        try:
            moment = result.created_at.astimezone()
        except ValueError:
            moment = datetime.now()

        filepath = self._unique_path(
            generate_filename(self.pending_dir, RECORDING_FILENAME_FORMAT, extension, moment)
        )

        stored = StoredRecording(
            filename=filepath.name,
            filepath=filepath,
            mime_type=result.artifact.mime_type,
            duration=result.duration,
            timestamp=result.timestamp,
            size_bytes=result.artifact.size,
        )

        try:
            filepath.write_bytes(result.artifact.data)

            if self.config.write_metadata:
                with open(stored.metadata_path, 'w') as f:
                    json.dump(stored.to_dict(), f, indent=2)

        except OSError as e:
            # Don't leave a half-written artifact behind
            if filepath.exists():
                filepath.unlink()
            raise StorageError(f"Failed to save recording: {e}") from e

        self.logger.info(
            f"Saved recording: {stored.filename} "
            f"({format_file_size(stored.size_bytes)}, {stored.duration}s)"
        )
        return stored

    def list_recordings(self) -> List[StoredRecording]:
        """
        List saved recordings, newest first.

        Recordings without a readable sidecar are skipped.
        """
        recordings = []

        for metadata_path in self.pending_dir.glob("*.json"):
            try:
                with open(metadata_path, 'r') as f:
                    data = json.load(f)
                stored = StoredRecording.from_dict(data, self.pending_dir)
            except (OSError, ValueError, KeyError) as e:
                self.logger.warning(f"Skipping unreadable metadata {metadata_path.name}: {e}")
                continue

            if stored.exists:
                recordings.append(stored)

        recordings.sort(key=lambda item: (item.timestamp, item.filename), reverse=True)
        return recordings

    def load(self, stored: StoredRecording) -> RecordingResult:
        """
        Read a stored recording back into a RecordingResult.

        Raises:
            StorageError: Artifact missing or unreadable
        """
        try:
            data = stored.filepath.read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to load recording {stored.filename}: {e}") from e

        return RecordingResult(
            artifact=Artifact(data=data, mime_type=stored.mime_type),
            duration=stored.duration,
            timestamp=stored.timestamp,
        )

    def delete(self, stored: StoredRecording) -> None:
        """
        Delete a recording and its sidecar.

        Missing files are logged and ignored.
        """
        for path in (stored.filepath, stored.metadata_path):
            if not path.exists():
                self.logger.warning(f"File not found for deletion: {path}")
                continue
            try:
                path.unlink()
            except OSError as e:
                raise StorageError(f"Failed to delete file: {e}") from e

        self.logger.info(f"Deleted recording: {stored.filename}")

    def get_storage_info(self) -> dict:
        """Summary for status displays"""
        recordings = self.list_recordings()
        return {
            "base_path": str(self.base_path),
            "recording_count": len(recordings),
            "total_size_bytes": sum(item.size_bytes for item in recordings),
        }
