"""
Mock Capture Device Implementation

Simulated camera/microphone for testing without real hardware.
Mimics the platform behaviour: access can be granted or declined,
streams can be released, and recorders emit chunks only while recording.

This is a "Fake" (test double) - it has working logic but no real hardware.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from config.settings import MOCK_CHUNK_INTERVAL
from recording.constants import RecorderState
from recording.interfaces.capture_device_interface import (
    CaptureDeviceInterface,
    CaptureProcessError,
    ChunkRecorderInterface,
    PermissionDeniedError,
    StreamHandle,
)
from recording.models.recording_models import CaptureConstraints

# Fake EBML header so generated artifacts look like WebM
FAKE_WEBM_HEADER = b"\x1a\x45\xdf\xa3"


class MockStream(StreamHandle):
    """Fake device stream that only tracks whether it was released."""

    def __init__(self, stream_id: int, constraints: CaptureConstraints):
        self.logger = logging.getLogger(__name__)
        self.stream_id = stream_id
        self._settings = constraints.to_dict()
        self._active = True
        self.release_count = 0

    def is_active(self) -> bool:
        return self._active

    def release(self) -> None:
        if not self._active:
            return
        self._active = False
        self.release_count += 1
        self.logger.info(f"[MOCK] Stream #{self.stream_id} released")

    @property
    def settings(self) -> Dict[str, Any]:
        return self._settings

    def __repr__(self) -> str:
        return f"MockStream(id={self.stream_id}, active={self._active})"


class MockChunkRecorder(ChunkRecorderInterface):
    """
    Fake chunk recorder.

    With simulate_timing=False (default for tests) chunks are produced only
    through emit(). With simulate_timing=True a background thread emits a
    fake chunk every MOCK_CHUNK_INTERVAL seconds while recording.
    """

    def __init__(
        self,
        stream: MockStream,
        mime_type: str,
        simulate_timing: bool = False,
        chunk_interval: float = MOCK_CHUNK_INTERVAL,
        fail_begin: bool = False,
    ):
        self.logger = logging.getLogger(__name__)
        self.stream = stream
        self.simulate_timing = simulate_timing
        self.chunk_interval = chunk_interval
        self.on_data_available = None

        self._mime_type = mime_type
        self._state = RecorderState.INACTIVE
        self._fail_begin = fail_begin
        self._lock = threading.Lock()
        self._emitted = 0
        self._trailing: List[bytes] = []

        # Simulation thread (if using real timing)
        self._worker: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def begin(self) -> None:
        if self._fail_begin:
            self.logger.error("[MOCK] Simulated recorder failure")
            raise CaptureProcessError("Simulated recorder failure")

        if not self.stream.is_active():
            raise CaptureProcessError("Stream already released")

        with self._lock:
            if self._state != RecorderState.INACTIVE:
                return
            self._state = RecorderState.RECORDING

        self.logger.info(f"[MOCK] Recorder started ({self._mime_type})")

        if self.simulate_timing:
            self._stop_event.clear()
            self._worker = threading.Thread(
                target=self._emit_worker,
                daemon=True,
                name="MockRecorder-Worker",
            )
            self._worker.start()

    def pause(self) -> None:
        with self._lock:
            if self._state == RecorderState.RECORDING:
                self._state = RecorderState.PAUSED
                self.logger.debug("[MOCK] Recorder paused")

    def resume(self) -> None:
        with self._lock:
            if self._state == RecorderState.PAUSED:
                self._state = RecorderState.RECORDING
                self.logger.debug("[MOCK] Recorder resumed")

    def end(self) -> None:
        with self._lock:
            if self._state == RecorderState.INACTIVE:
                return
            self._state = RecorderState.INACTIVE

        self._stop_event.set()
        if self._worker and self._worker.is_alive():
            self._worker.join(timeout=2.0)
        self._worker = None

        # Trailing data is flushed before end() returns
        for chunk in self._trailing:
            self._deliver(chunk)
        self._trailing.clear()

        self.logger.info(f"[MOCK] Recorder stopped ({self._emitted} chunks emitted)")

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def mime_type(self) -> str:
        return self._mime_type

    def _emit_worker(self) -> None:
        """Emit a fake chunk every interval while recording"""
        sequence = 0
        while not self._stop_event.wait(self.chunk_interval):
            if self._state != RecorderState.RECORDING:
                continue
            payload = FAKE_WEBM_HEADER if sequence == 0 else b""
            payload += f"chunk-{sequence:05d};".encode("ascii")
            self.emit(payload)
            sequence += 1

    def _deliver(self, data: bytes) -> None:
        self._emitted += 1
        if self.on_data_available:
            self.on_data_available(data)

    # =========================================================================
    # TESTING HELPER METHODS (not part of ChunkRecorderInterface)
    # =========================================================================

    def emit(self, data: bytes) -> bool:
        """
        Deliver one chunk as if the platform produced it.

        Dropped unless the recorder is recording.

        Returns:
            True if the chunk was delivered
        """
        if self._state != RecorderState.RECORDING:
            return False
        self._deliver(data)
        return True

    def queue_trailing_chunk(self, data: bytes) -> None:
        """Queue data to be flushed when end() is called"""
        self._trailing.append(data)

    def get_emitted_count(self) -> int:
        """Number of chunks delivered so far"""
        return self._emitted


class MockCaptureDevice(CaptureDeviceInterface):
    """
    Mock capture device for testing.

    Usage:
        device = MockCaptureDevice()
        stream = device.open_stream(CaptureConstraints())
        recorder = device.create_recorder(stream, "video/webm")
        recorder.begin()
        recorder.emit(b"data")

        # Simulate the user declining access
        device.simulate_denial()
    """

    def __init__(self, simulate_timing: bool = False):
        """
        Initialize mock device.

        Args:
            simulate_timing: If True, recorders emit fake chunks on a timer.
                           If False, chunks only come from emit() (fast tests).
        """
        self.logger = logging.getLogger(__name__)
        self.simulate_timing = simulate_timing

        # Every stream / recorder ever handed out, for leak checks
        self.streams: List[MockStream] = []
        self.recorders: List[MockChunkRecorder] = []

        # Configuration for test scenarios
        self._deny_access = False
        self._unavailable = False
        self._fail_next_begin = False

        self.logger.info(f"Mock Capture Device initialized (simulate_timing: {simulate_timing})")

    def open_stream(self, constraints: CaptureConstraints) -> StreamHandle:
        if self._deny_access or self._unavailable:
            self.logger.warning("[MOCK] Access to camera and microphone declined")
            raise PermissionDeniedError("Permission denied")

        stream = MockStream(len(self.streams) + 1, constraints)
        self.streams.append(stream)
        self.logger.info(f"[MOCK] Stream #{stream.stream_id} granted")
        return stream

    def create_recorder(
        self,
        stream: StreamHandle,
        mime_type: str,
    ) -> ChunkRecorderInterface:
        if not isinstance(stream, MockStream):
            raise TypeError(f"MockCaptureDevice cannot record from {stream!r}")

        recorder = MockChunkRecorder(
            stream,
            mime_type,
            simulate_timing=self.simulate_timing,
            fail_begin=self._fail_next_begin,
        )
        self._fail_next_begin = False
        self.recorders.append(recorder)
        return recorder

    def is_available(self) -> bool:
        return not self._unavailable

    def cleanup(self) -> None:
        self.logger.debug("[MOCK] Cleanup")
        for recorder in self.recorders:
            recorder.end()
        for stream in self.streams:
            stream.release()

    # =========================================================================
    # TESTING HELPER METHODS (not part of CaptureDeviceInterface)
    # =========================================================================

    def simulate_denial(self) -> None:
        """Decline every following open_stream() call"""
        self._deny_access = True
        self.logger.debug("[MOCK] Configured to deny access")

    def simulate_no_device(self) -> None:
        """Behave as if no camera/microphone is connected"""
        self._unavailable = True
        self.logger.debug("[MOCK] Configured without devices")

    def simulate_begin_failure(self) -> None:
        """Make the next created recorder fail in begin()"""
        self._fail_next_begin = True
        self.logger.debug("[MOCK] Configured to fail next recorder start")

    def allow_access(self) -> None:
        """Grant access again after simulate_denial()"""
        self._deny_access = False
        self._unavailable = False

    @property
    def last_recorder(self) -> Optional[MockChunkRecorder]:
        """Most recently created recorder"""
        return self.recorders[-1] if self.recorders else None

    def active_stream_count(self) -> int:
        """Number of streams not yet released"""
        return sum(1 for stream in self.streams if stream.is_active())
