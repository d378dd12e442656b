"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Secrets and machine-specific values belong in .env, NOT here
- Import these settings in modules: from config.settings import CLOCK_TICK_INTERVAL
- Capture constraints are HINTS - the capture backend may substitute
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# CAPTURE CONSTRAINT HINTS
# =============================================================================

# Video hints (closest supported mode is used if unavailable)
VIDEO_WIDTH_HINT = 1280
VIDEO_HEIGHT_HINT = 720
VIDEO_FPS = 30
FACING_MODE_HINT = "environment"  # Prefer back camera for cooking

# Audio hints
ECHO_CANCELLATION_HINT = True
NOISE_SUPPRESSION_HINT = True
AUDIO_SAMPLE_RATE_HINT = 44100  # Hz
AUDIO_CHANNELS = 1  # Camera microphones are mono

# =============================================================================
# CAPTURE DEVICES
# =============================================================================

# Capture backend selection: auto, real, mock
CAPTURE_MODE = os.getenv("CAPTURE_MODE", "auto")

DEFAULT_CAMERA_DEVICE = os.getenv("CAMERA_DEVICE", "/dev/video0")
AUDIO_INPUT_DEVICE = os.getenv("AUDIO_INPUT_DEVICE", "default")  # PulseAudio source
AUDIO_INPUT_FORMAT = "pulse"
CAMERA_WARMUP_TIME = 0.5  # seconds

# =============================================================================
# RECORDING CONFIGURATION
# =============================================================================

# Container requested from the recorder, and the type of the final artifact
RECORDER_MIME_TYPE = "video/webm;codecs=vp9"
ARTIFACT_MIME_TYPE = "video/webm"

# Encoder settings used by the FFmpeg recorder
VIDEO_CODEC = "libvpx-vp9"
AUDIO_CODEC = "libopus"
AUDIO_BITRATE = "96k"

# Chunk emission
CHUNK_SIZE_BYTES = 64 * 1024  # Max bytes per emitted chunk
MOCK_CHUNK_INTERVAL = 0.25  # seconds between fake chunks (mock recorder)

# Duration clock
CLOCK_TICK_INTERVAL = 1.0  # seconds per tick

# Recorder shutdown
RECORDER_STOP_TIMEOUT = 5.0  # seconds to wait for FFmpeg to flush

# =============================================================================
# STORAGE CONFIGURATION
# =============================================================================

# Base directory for finished recordings
RECORDINGS_BASE_PATH = Path(os.getenv("RECORDINGS_PATH", "./recordings")).resolve()
STORAGE_CONFIG_PATH = Path(os.getenv("STORAGE_CONFIG_PATH", "config/storage.yaml"))

DIR_PENDING = "pending"

RECORDING_FILENAME_FORMAT = "recording_%Y-%m-%d_%H%M%S"

# Space Management (in bytes)
MIN_FREE_SPACE_BYTES = 512 * 1024 * 1024  # 512 MB

# =============================================================================
# RECIPE EXPORT
# =============================================================================

RECIPE_EXPORT_PATH = Path(os.getenv("RECIPE_EXPORT_PATH", "./recipes")).resolve()
RECIPE_FILENAME_SUFFIX = "_recipe.txt"

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_DIR = os.getenv("LOG_DIR", "/var/log/recipe-keeper")
LOG_SERVICE_FILE = "recorder.log"
LOG_FALLBACK_DIR = "logs"
LOG_BACKUP_COUNT = 7  # Days of rotated logs to keep
