"""
FFmpeg Capture Device Implementation

Real capture using a V4L2 camera, a PulseAudio microphone and an FFmpeg
subprocess. FFmpeg encodes WebM (VP9 + Opus) to stdout; a reader thread
turns stdout into chunks for the session.

Access model:
- The stream handle holds an open descriptor on the camera node.
  Opening it is the permission check: a missing node, missing FFmpeg
  or EACCES all surface as PermissionDeniedError.
- Pause/resume suspend the encoder with SIGSTOP/SIGCONT.
"""

import logging
import os
import shutil
import signal
import subprocess
import threading
import time
from typing import Any, Dict, Optional

from config.settings import (
    AUDIO_INPUT_DEVICE,
    CAMERA_WARMUP_TIME,
    CHUNK_SIZE_BYTES,
    DEFAULT_CAMERA_DEVICE,
    RECORDER_STOP_TIMEOUT,
)
from recording.constants import (
    RecorderState,
    get_ffmpeg_command,
    validate_camera_device,
)
from recording.interfaces.capture_device_interface import (
    CaptureDeviceInterface,
    CaptureError,
    CaptureProcessError,
    ChunkRecorderInterface,
    PermissionDeniedError,
    StreamHandle,
)
from recording.models.recording_models import CaptureConstraints


class FFmpegStream(StreamHandle):
    """Open handle on a V4L2 camera node plus the audio source name."""

    def __init__(
        self,
        camera_device: str,
        audio_device: str,
        constraints: CaptureConstraints,
        fd: int,
    ):
        self.logger = logging.getLogger(__name__)
        self.camera_device = camera_device
        self.audio_device = audio_device
        self.constraints = constraints
        self._fd: Optional[int] = fd

    def is_active(self) -> bool:
        return self._fd is not None

    def release(self) -> None:
        if self._fd is None:
            return
        try:
            os.close(self._fd)
        except OSError as e:
            self.logger.warning(f"Error closing {self.camera_device}: {e}")
        self._fd = None
        self.logger.info(f"Stream released: {self.camera_device}")

    @property
    def settings(self) -> Dict[str, Any]:
        settings = self.constraints.to_dict()
        settings["video"]["device"] = self.camera_device
        settings["audio"]["device"] = self.audio_device
        # No FFmpeg equivalent for echo cancellation or facing mode
        settings["audio"]["echo_cancellation"] = False
        settings["video"]["facing_mode"] = None
        return settings


class FFmpegChunkRecorder(ChunkRecorderInterface):
    """
    Chunk recorder backed by an FFmpeg subprocess.

    Usage:
        recorder = FFmpegChunkRecorder(stream, "video/webm;codecs=vp9")
        recorder.on_data_available = chunks.append
        recorder.begin()
        ...
        recorder.end()  # Waits for FFmpeg to flush the last cluster
    """

    def __init__(
        self,
        stream: FFmpegStream,
        mime_type: str,
        chunk_size: int = CHUNK_SIZE_BYTES,
    ):
        self.logger = logging.getLogger(__name__)
        self.stream = stream
        self.chunk_size = chunk_size
        self.on_data_available = None

        self._mime_type = mime_type
        self._state = RecorderState.INACTIVE
        self._process: Optional[subprocess.Popen] = None
        self._reader: Optional[threading.Thread] = None
        self._bytes_read = 0

    def begin(self) -> None:
        if self._state != RecorderState.INACTIVE:
            return

        if not self.stream.is_active():
            raise CaptureProcessError("Stream already released")

        constraints = self.stream.constraints
        command = get_ffmpeg_command(
            input_device=self.stream.camera_device,
            width=constraints.width,
            height=constraints.height,
            sample_rate=constraints.sample_rate,
            noise_suppression=constraints.noise_suppression,
            audio_device=self.stream.audio_device,
        )
        self.logger.debug(f"FFmpeg command: {' '.join(command)}")

        try:
            self._process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
            )
        except FileNotFoundError:
            raise CaptureError(
                "FFmpeg not found. Install with: sudo apt-get install ffmpeg",
            )

        # Give FFmpeg time to open the devices
        time.sleep(CAMERA_WARMUP_TIME)

        if self._process.poll() is not None:
            _, stderr = self._process.communicate()
            error_msg = stderr.decode("utf-8", errors="ignore")
            self._process = None
            raise CaptureProcessError(f"FFmpeg failed to start: {error_msg}")

        self._state = RecorderState.RECORDING
        self._reader = threading.Thread(
            target=self._read_worker,
            daemon=True,
            name="FFmpegRecorder-Reader",
        )
        self._reader.start()

        self.logger.info(f"Recorder started (PID: {self._process.pid})")

    def pause(self) -> None:
        if self._state != RecorderState.RECORDING or self._process is None:
            return
        self._process.send_signal(signal.SIGSTOP)
        self._state = RecorderState.PAUSED
        self.logger.debug("Recorder paused")

    def resume(self) -> None:
        if self._state != RecorderState.PAUSED or self._process is None:
            return
        self._process.send_signal(signal.SIGCONT)
        self._state = RecorderState.RECORDING
        self.logger.debug("Recorder resumed")

    def end(self) -> None:
        if self._state == RecorderState.INACTIVE or self._process is None:
            return

        process = self._process
        self.logger.info("Stopping recorder...")

        # A stopped process cannot handle SIGTERM until continued
        if self._state == RecorderState.PAUSED:
            process.send_signal(signal.SIGCONT)
        self._state = RecorderState.INACTIVE

        process.terminate()
        try:
            process.wait(timeout=RECORDER_STOP_TIMEOUT)
        except subprocess.TimeoutExpired:
            self.logger.warning("FFmpeg didn't stop gracefully, force killing")
            process.kill()
            process.wait()

        # Reader drains stdout to EOF, delivering the trailing chunks
        if self._reader and self._reader.is_alive():
            self._reader.join(timeout=RECORDER_STOP_TIMEOUT)
        self._reader = None

        if process.stderr is not None:
            error_output = process.stderr.read().decode("utf-8", errors="ignore")
            if process.returncode not in (0, -signal.SIGTERM, 255) and error_output:
                self.logger.warning(
                    f"FFmpeg exited with code {process.returncode}: {error_output}",
                )
            process.stderr.close()

        self._process = None
        self.logger.info(f"Recorder stopped ({self._bytes_read} bytes read)")

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def mime_type(self) -> str:
        return self._mime_type

    def _read_worker(self) -> None:
        """Read FFmpeg stdout and emit chunks until EOF"""
        process = self._process
        if process is None or process.stdout is None:
            return

        while True:
            try:
                data = process.stdout.read1(self.chunk_size)
            except (OSError, ValueError) as e:
                self.logger.error(f"Error reading recorder output: {e}")
                break
            if not data:
                break
            self._bytes_read += len(data)
            if self.on_data_available:
                try:
                    self.on_data_available(data)
                except Exception as e:
                    self.logger.error(f"Error in data callback: {e}")

        process.stdout.close()


class FFmpegCaptureDevice(CaptureDeviceInterface):
    """
    Capture device using FFmpeg with V4L2 video and PulseAudio audio.

    Usage:
        device = FFmpegCaptureDevice(camera_device="/dev/video0")
        stream = device.open_stream(CaptureConstraints())
        recorder = device.create_recorder(stream, "video/webm;codecs=vp9")
    """

    def __init__(
        self,
        camera_device: str = DEFAULT_CAMERA_DEVICE,
        audio_device: str = AUDIO_INPUT_DEVICE,
    ):
        """
        Initialize FFmpeg capture device.

        Args:
            camera_device: Path to camera device (e.g., /dev/video0)
            audio_device: PulseAudio source name
        """
        self.logger = logging.getLogger(__name__)
        self.camera_device = camera_device
        self.audio_device = audio_device

        self.logger.info(
            f"FFmpeg Capture Device initialized "
            f"(camera: {camera_device}, audio: {audio_device})",
        )

    def open_stream(self, constraints: CaptureConstraints) -> StreamHandle:
        if not shutil.which("ffmpeg"):
            self.logger.warning("FFmpeg not found in PATH")
            raise PermissionDeniedError("FFmpeg not available")

        if not validate_camera_device(self.camera_device):
            self.logger.warning(f"Camera not found: {self.camera_device}")
            raise PermissionDeniedError(f"Camera not found: {self.camera_device}")

        try:
            fd = os.open(self.camera_device, os.O_RDWR | os.O_NONBLOCK)
        except OSError as e:
            self.logger.warning(f"Cannot open {self.camera_device}: {e}")
            raise PermissionDeniedError(str(e)) from e

        self.logger.info(
            f"Stream granted: {self.camera_device} "
            f"({constraints.width}x{constraints.height} requested)",
        )
        return FFmpegStream(self.camera_device, self.audio_device, constraints, fd)

    def create_recorder(
        self,
        stream: StreamHandle,
        mime_type: str,
    ) -> ChunkRecorderInterface:
        if not isinstance(stream, FFmpegStream):
            raise TypeError(f"FFmpegCaptureDevice cannot record from {stream!r}")
        return FFmpegChunkRecorder(stream, mime_type)

    def is_available(self) -> bool:
        if not shutil.which("ffmpeg"):
            return False
        return validate_camera_device(self.camera_device)

    def cleanup(self) -> None:
        self.logger.debug("FFmpeg Capture Device cleanup")
