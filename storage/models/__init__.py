"""Storage data models"""

from storage.models.stored_recording import StoredRecording

__all__ = ["StoredRecording"]
