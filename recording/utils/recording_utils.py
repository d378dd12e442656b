"""
Recording Utilities

Shared helper functions for recording and storing sessions.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

from config.settings import MIN_FREE_SPACE_BYTES, RECORDING_FILENAME_FORMAT

# Container mime type -> file extension
MIME_EXTENSIONS = {
    "video/webm": "webm",
    "video/mp4": "mp4",
    "video/x-matroska": "mkv",
    "audio/webm": "weba",
    "audio/ogg": "ogg",
}


def format_duration(seconds: int) -> str:
    """
    Format elapsed seconds for the recording display.

    Minutes and seconds are both zero-padded to two digits.

    Args:
        seconds: Elapsed seconds

    Returns:
        Formatted string (e.g., "00:07", "10:30")

    Example:
        format_duration(630) -> "10:30"
        format_duration(5) -> "00:05"
    """
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def extension_for_mime(mime_type: str) -> str:
    """
    Get file extension for a content type.

    Codec parameters are ignored ("video/webm;codecs=vp9" -> "webm").

    Example:
        extension_for_mime("video/webm") -> "webm"
    """
    base_type = mime_type.split(";", 1)[0].strip().lower()
    return MIME_EXTENSIONS.get(base_type, "bin")


def generate_filename(
    base_path: Path,
    format_string: str = RECORDING_FILENAME_FORMAT,
    extension: str = "webm",
    moment: Optional[datetime] = None,
) -> Path:
    """
    Build the path a recording is written to.

    The stem is the local time rendered with format_string, so two
    recordings started in the same second collide. RecordingStore
    resolves collisions with a numeric suffix.

    Example:
        generate_filename(Path("/recordings"), moment=datetime(2025, 7, 26, 14, 30, 22))
        -> /recordings/recording_2025-07-26_143022.webm
    """
    stem = (moment or datetime.now()).strftime(format_string)
    return base_path / f"{stem}.{extension}"


def check_disk_space(path: Path, required_bytes: int = MIN_FREE_SPACE_BYTES) -> bool:
    """
    Whether the filesystem holding path has at least required_bytes free.

    A path that cannot be inspected counts as full.
    """
    try:
        free = shutil.disk_usage(path).free
    except OSError as e:
        logging.error(f"Cannot read free space for {path}: {e}")
        return False

    return free >= required_bytes


_SIZE_UNITS = ("KB", "MB", "GB", "TB")


def format_file_size(size_bytes: int) -> str:
    """
    Example:
        format_file_size(500) -> "500 B"
        format_file_size(45000000) -> "42.9 MB"
    """
    if size_bytes < 1024:
        return f"{max(0, int(size_bytes))} B"

    size = size_bytes / 1024.0
    for unit in _SIZE_UNITS[:-1]:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} {_SIZE_UNITS[-1]}"
