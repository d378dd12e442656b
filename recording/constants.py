"""
Recording Constants

Enums, FFmpeg command construction and small helpers for the recording
system. Tunable values live in config/settings.py.
"""

from enum import Enum
from pathlib import Path

from config.settings import (
    AUDIO_BITRATE,
    AUDIO_CHANNELS,
    AUDIO_CODEC,
    AUDIO_INPUT_DEVICE,
    AUDIO_INPUT_FORMAT,
    VIDEO_CODEC,
    VIDEO_FPS,
)

# =============================================================================
# SESSION STATE TRACKING
# =============================================================================


class RecordingPhase(Enum):
    """
    Phases of a recording session.

    Lifecycle: IDLE -> READY -> RECORDING <-> PAUSED -> STOPPED
    """

    IDLE = "idle"  # No device access yet
    READY = "ready"  # Stream granted, not recording
    RECORDING = "recording"  # Chunks flowing, clock counting
    PAUSED = "paused"  # Chunks suspended, clock frozen
    STOPPED = "stopped"  # Artifact finalized (terminal)


class SessionEvent(Enum):
    """Events that drive the session state machine."""

    ACCESS_GRANTED = "access_granted"
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    STOP = "stop"


class PermissionState(Enum):
    """Outcome of the last device access request."""

    UNREQUESTED = "unrequested"
    GRANTED = "granted"
    DENIED = "denied"


class RecorderState(Enum):
    """States of a chunk recorder (mirrors the platform recorder states)."""

    INACTIVE = "inactive"
    RECORDING = "recording"
    PAUSED = "paused"


# Single undifferentiated message for declined access and missing devices
PERMISSION_DENIED_MESSAGE = "Please allow camera and microphone access to record"

# =============================================================================
# FFMPEG COMMAND CONFIGURATION
# =============================================================================

VIDEO_INPUT_FORMAT = "v4l2"
FFMPEG_LOG_LEVEL = "error"
THREAD_QUEUE_SIZE = 512

# Audio denoise filter used for the noise suppression hint
NOISE_SUPPRESSION_FILTER = "afftdn"


def get_ffmpeg_command(
    input_device: str,
    width: int,
    height: int,
    sample_rate: int,
    noise_suppression: bool = True,
    fps: int = VIDEO_FPS,
    audio_device: str = AUDIO_INPUT_DEVICE,
) -> list[str]:
    """
    Generate FFmpeg command for chunked WebM capture.

    Video comes from the V4L2 device, audio from PulseAudio. The encoded
    stream is written to stdout so it can be read back in chunks.

    Args:
        input_device: Camera device path (e.g., /dev/video0)
        width: Requested video width in pixels
        height: Requested video height in pixels
        sample_rate: Requested audio sample rate
        noise_suppression: Apply a denoise filter to the audio track
        fps: Frame rate
        audio_device: PulseAudio source name

    Returns:
        List of command arguments for subprocess

    Example:
        cmd = get_ffmpeg_command("/dev/video0", 1280, 720, 44100)
        subprocess.Popen(cmd, stdout=subprocess.PIPE)
    """
    command = [
        "ffmpeg",
        "-f",
        VIDEO_INPUT_FORMAT,
        "-video_size",
        f"{width}x{height}",
        "-framerate",
        str(fps),
        "-thread_queue_size",
        str(THREAD_QUEUE_SIZE),
        "-i",
        input_device,
        "-f",
        AUDIO_INPUT_FORMAT,
        "-ac",
        str(AUDIO_CHANNELS),
        "-ar",
        str(sample_rate),
        "-thread_queue_size",
        str(THREAD_QUEUE_SIZE),
        "-i",
        audio_device,
        "-c:v",
        VIDEO_CODEC,
        "-deadline",
        "realtime",
        "-row-mt",
        "1",
        "-c:a",
        AUDIO_CODEC,
        "-b:a",
        AUDIO_BITRATE,
    ]

    if noise_suppression:
        command.extend(["-af", NOISE_SUPPRESSION_FILTER])

    # WebM cluster output to stdout
    command.extend(
        [
            "-f",
            "webm",
            "-loglevel",
            FFMPEG_LOG_LEVEL,
            "pipe:1",
        ],
    )

    return command


def validate_camera_device(device_path: str) -> bool:
    """
    Check if camera device exists and is a character device.

    Args:
        device_path: Path to camera device (e.g., /dev/video0)

    Returns:
        True if device exists, False otherwise
    """
    device = Path(device_path)
    return device.exists() and device.is_char_device()
