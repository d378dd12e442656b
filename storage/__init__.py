"""
Storage Module

Local persistence for finished recordings.

- config.py: YAML storage configuration
- recording_store.py: Save, list, load and delete recordings
- models/: Data structures
"""

from storage.config import StorageConfig
from storage.models.stored_recording import StoredRecording
from storage.recording_store import RecordingStore, StorageError, StorageFullError

# Public API - what users import
__all__ = [
    "RecordingStore",
    "StorageConfig",
    "StorageError",
    "StorageFullError",
    "StoredRecording",
]
