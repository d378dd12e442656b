"""
Recording Utilities Package

Exposes shared utility functions for recording operations.
"""

from recording.utils.recording_utils import (
    check_disk_space,
    extension_for_mime,
    format_duration,
    format_file_size,
    generate_filename,
)

# Public API
__all__ = [
    "check_disk_space",
    "extension_for_mime",
    "format_duration",
    "format_file_size",
    "generate_filename",
]
