"""
Recording Utilities Tests

Tests for utility functions showing:
- Elapsed time formatting
- Mime type to extension mapping
- Filename generation
- Disk space checking
- File size formatting

To run:
    pytest tests/recording/utils/test_recording_utils.py -v
"""

from datetime import datetime
from pathlib import Path

import pytest

from recording.utils.recording_utils import (
    check_disk_space,
    extension_for_mime,
    format_duration,
    format_file_size,
    generate_filename,
)

# =============================================================================
# DURATION FORMATTING TESTS
# =============================================================================


@pytest.mark.unit
def test_format_duration_pads_both_parts():
    """Test minutes and seconds are zero-padded."""
    assert format_duration(0) == "00:00"
    assert format_duration(5) == "00:05"
    assert format_duration(7) == "00:07"


@pytest.mark.unit
def test_format_duration_minutes():
    """Test values over a minute."""
    assert format_duration(65) == "01:05"
    assert format_duration(630) == "10:30"


@pytest.mark.unit
def test_format_duration_over_an_hour():
    """Test minutes keep counting past 59."""
    assert format_duration(3725) == "62:05"


@pytest.mark.unit
def test_format_duration_negative_clamped():
    """Test negative input displays as zero."""
    assert format_duration(-3) == "00:00"


# =============================================================================
# MIME TYPE TESTS
# =============================================================================


@pytest.mark.unit
def test_extension_for_mime_ignores_codecs():
    """Test codec parameters are stripped."""
    assert extension_for_mime("video/webm;codecs=vp9") == "webm"
    assert extension_for_mime("video/webm") == "webm"


@pytest.mark.unit
def test_extension_for_mime_mp4():
    """Test mp4 container mapping."""
    assert extension_for_mime("video/mp4") == "mp4"


@pytest.mark.unit
def test_extension_for_mime_unknown():
    """Test unknown content types fall back to bin."""
    assert extension_for_mime("application/x-unknown") == "bin"


# =============================================================================
# FILENAME GENERATION TESTS
# =============================================================================


@pytest.mark.unit
def test_generate_filename(temp_recording_dir):
    """Test generating timestamped filename."""
    filename = generate_filename(temp_recording_dir)

    # Should return a Path
    assert isinstance(filename, Path)

    # Should have .webm extension
    assert filename.suffix == ".webm"

    # Should be in the specified directory
    assert filename.parent == temp_recording_dir

    assert filename.stem.startswith("recording_")


@pytest.mark.unit
def test_generate_filename_fixed_moment(temp_recording_dir):
    """Test timestamp formatting with a fixed moment."""
    moment = datetime(2025, 7, 26, 14, 30, 22)

    filename = generate_filename(temp_recording_dir, moment=moment)

    assert filename.name == "recording_2025-07-26_143022.webm"


@pytest.mark.unit
def test_generate_filename_custom_extension(temp_recording_dir):
    """Test generating filename with custom extension."""
    filename = generate_filename(temp_recording_dir, extension="mp4")

    assert filename.suffix == ".mp4"


# =============================================================================
# DISK SPACE TESTS
# =============================================================================


@pytest.mark.unit
def test_check_disk_space(temp_recording_dir):
    """Test checking for a tiny amount of space."""
    assert check_disk_space(temp_recording_dir, required_bytes=1) is True


@pytest.mark.unit
def test_check_disk_space_insufficient(temp_recording_dir):
    """Test checking for an impossible amount of space."""
    huge = 1024 ** 6  # 1 EB

    assert check_disk_space(temp_recording_dir, required_bytes=huge) is False


@pytest.mark.unit
def test_check_disk_space_missing_path():
    """Test missing path reports insufficient space."""
    assert check_disk_space(Path("/nonexistent/path/for/test"), 1) is False


# =============================================================================
# FILE SIZE FORMATTING TESTS
# =============================================================================


@pytest.mark.unit
def test_format_file_size_bytes():
    """Test formatting byte sizes."""
    assert format_file_size(0) == "0 B"
    assert format_file_size(500) == "500 B"


@pytest.mark.unit
def test_format_file_size_kilobytes():
    """Test formatting kilobyte sizes."""
    assert format_file_size(2048) == "2.0 KB"


@pytest.mark.unit
def test_format_file_size_megabytes():
    """Test formatting megabyte sizes."""
    assert format_file_size(45000000) == "42.9 MB"
