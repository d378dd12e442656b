"""
Capture Session

Manages a single recording: device access, chunked recording with
pause/resume, duration counting and the final artifact.

This is the high-level controller the application uses.

Collaborators:
- PermissionGate: acquires the device stream
- SessionStateMachine: decides which operations are valid
- ChunkAccumulator: buffers chunks from the recorder
- DurationClock: counts seconds while recording
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional

from config.settings import (
    ARTIFACT_MIME_TYPE,
    CLOCK_TICK_INTERVAL,
    RECORDER_MIME_TYPE,
)
from recording.constants import PermissionState, RecordingPhase, SessionEvent
from recording.controllers.chunk_accumulator import ChunkAccumulator
from recording.controllers.duration_clock import DurationClock
from recording.controllers.permission_gate import PermissionGate
from recording.controllers.session_state_machine import SessionStateMachine
from recording.interfaces.capture_device_interface import (
    CaptureDeviceInterface,
    CaptureError,
    ChunkRecorderInterface,
    StreamHandle,
)
from recording.models.recording_models import CaptureConstraints, RecordingResult
from recording.utils.recording_utils import format_duration


class CaptureSession:
    """
    Manages a single recording session.

    Features:
    - Device access through PermissionGate
    - Start / pause / resume / stop, each ignored outside its valid phase
    - Elapsed seconds frozen while paused
    - One RecordingResult, delivered once to on_complete
    - Device stream released on stop and on every abandonment path

    Usage:
        with CaptureSession(device) as session:
            session.on_complete = lambda result: print(result.duration)
            session.request_access()
            session.start()
            session.pause()
            session.resume()
            result = session.stop()
    """

    def __init__(
        self,
        device: CaptureDeviceInterface,
        constraints: Optional[CaptureConstraints] = None,
        mime_type: str = RECORDER_MIME_TYPE,
        artifact_mime_type: str = ARTIFACT_MIME_TYPE,
        clock_interval: float = CLOCK_TICK_INTERVAL,
        auto_tick: bool = True,
    ):
        """
        Initialize capture session.

        Args:
            device: Capture platform for streams and recorders
            constraints: Default constraint hints for access requests
            mime_type: Format requested from the recorder
            artifact_mime_type: Content type of the finalized artifact
            clock_interval: Seconds between duration ticks
            auto_tick: If False, the clock must be ticked by hand

        Example:
            device = RecordingFactory.create_device(mode="mock")
            session = CaptureSession(device)
        """
        self.logger = logging.getLogger(__name__)
        self.device = device
        self.mime_type = mime_type
        self.artifact_mime_type = artifact_mime_type

        self.gate = PermissionGate(
            device,
            constraints,
            on_preview=self._trigger_preview_callback,
        )
        self.state = SessionStateMachine(
            on_state_change=self._trigger_state_change_callback,
        )
        self.chunks = ChunkAccumulator()
        self.clock = DurationClock(
            on_tick=self._on_tick,
            interval=clock_interval,
            auto_tick=auto_tick,
        )

        self._recorder: Optional[ChunkRecorderInterface] = None
        self._lock = threading.RLock()
        self._closed = False
        self._completed = False

        # Callbacks for events
        self.on_complete: Optional[Callable[[RecordingResult], None]] = None
        self.on_state_change: Optional[
            Callable[[RecordingPhase, RecordingPhase], None]
        ] = None
        self.on_tick: Optional[Callable[[int], None]] = None
        self.on_preview: Optional[Callable[[StreamHandle], None]] = None
        self.on_error: Optional[Callable[[str], None]] = None

        self.logger.info("Capture Session initialized")

    # =========================================================================
    # SESSION OPERATIONS
    # =========================================================================

    def request_access(
        self,
        constraints: Optional[CaptureConstraints] = None,
    ) -> Optional[StreamHandle]:
        """
        Request camera and microphone access.

        Only meaningful before recording starts. On success the session
        moves from idle to ready.

        Args:
            constraints: Hints for this request

        Returns:
            The granted stream, or the currently bound stream if the
            request was ignored

        Raises:
            PermissionDeniedError: Access declined or no compatible device;
                the session stays in its pre-access phase
        """
        with self._lock:
            if self._closed:
                self.logger.warning("Cannot request access - session closed")
                return None

            if self.state.phase not in (RecordingPhase.IDLE, RecordingPhase.READY):
                self.logger.warning(
                    f"Ignoring access request in phase {self.state.phase.value}",
                )
                return self.gate.stream

            stream = self.gate.request_access(constraints)
            self.state.fire(SessionEvent.ACCESS_GRANTED)
            return stream

    def start(self) -> bool:
        """
        Start recording.

        Valid only when ready with an active stream; otherwise a no-op.

        Returns:
            True if recording started, False if ignored

        Raises:
            CaptureError: The recorder failed to start. The session is
                closed and must be discarded.
        """
        with self._lock:
            if self._closed or not self.state.can_fire(SessionEvent.START):
                self.logger.warning(
                    f"Cannot start - session in phase: {self.state.phase.value}",
                )
                return False

            if not self.gate.has_access:
                self.logger.warning("Cannot start - no device stream")
                return False

            self.chunks.clear()
            recorder = self.device.create_recorder(self.gate.stream, self.mime_type)
            recorder.on_data_available = self.chunks.put

            try:
                recorder.begin()
            except CaptureError as e:
                self.logger.error(f"Recorder failed to start: {e}", exc_info=True)
                self._abandon()
                self._trigger_error_callback(str(e))
                raise

            self._recorder = recorder
            self.state.fire(SessionEvent.START)
            self.clock.start()

            self.logger.info("Recording started")
            return True

    def pause(self) -> bool:
        """
        Pause recording.

        Chunks already collected are kept; the elapsed counter freezes.

        Returns:
            True if paused, False if ignored
        """
        with self._lock:
            if self._closed or not self.state.can_fire(SessionEvent.PAUSE):
                self.logger.debug(f"Ignoring pause in phase {self.state.phase.value}")
                return False

            self._recorder.pause()
            self.state.fire(SessionEvent.PAUSE)
            self.logger.info(f"Recording paused at {self.formatted_elapsed}")
            return True

    def resume(self) -> bool:
        """
        Resume a paused recording into the same chunk buffer.

        Returns:
            True if resumed, False if ignored
        """
        with self._lock:
            if self._closed or not self.state.can_fire(SessionEvent.RESUME):
                self.logger.debug(f"Ignoring resume in phase {self.state.phase.value}")
                return False

            self._recorder.resume()
            self.state.fire(SessionEvent.RESUME)
            self.logger.info("Recording resumed")
            return True

    def stop(self) -> Optional[RecordingResult]:
        """
        Stop recording and finalize the artifact.

        Valid while recording or paused; otherwise a no-op.

        Returns:
            The RecordingResult, or None if ignored
        """
        with self._lock:
            if self._closed or not self.state.can_fire(SessionEvent.STOP):
                self.logger.warning(
                    f"Cannot stop - not recording (phase: {self.state.phase.value})",
                )
                return None

            self.logger.info("Stopping recording session...")

            self.clock.cancel()
            self._end_recorder()

            artifact = self.chunks.assemble(self.artifact_mime_type)
            self.state.fire(SessionEvent.STOP)

            result = RecordingResult(
                artifact=artifact,
                duration=self.state.elapsed_seconds,
            )
            self.state.complete(result)

            # Session ends after stop
            self.gate.release_all()

        self.clock.join()

        self.logger.info(
            f"Recording complete: {format_duration(result.duration)}, "
            f"{artifact.size} bytes",
        )

        if not self._completed:
            self._completed = True
            self._trigger_complete_callback(result)

        return result

    def cleanup(self) -> None:
        """
        Abandon the session and release everything it holds.

        An active recording is ended without producing a result.
        Safe to call more than once and from any exit path.
        """
        with self._lock:
            if self._closed:
                return
            self.logger.info("Cleaning up Capture Session")
            self._abandon()

        self.clock.join()
        self.logger.info("Capture Session cleanup complete")

    def _abandon(self) -> None:
        """Release clock, recorder and streams (caller holds the lock)"""
        self._closed = True
        self.clock.cancel()
        self._end_recorder()
        self.gate.release_all()

    def _end_recorder(self) -> None:
        if self._recorder is None:
            return
        try:
            self._recorder.end()
        except Exception as e:
            self.logger.error(f"Error stopping recorder: {e}")
        self._recorder = None

    def _on_tick(self) -> None:
        """Clock callback: count the tick only while recording"""
        with self._lock:
            advanced = self.state.advance()
            elapsed = self.state.elapsed_seconds

        if advanced:
            self._trigger_tick_callback(elapsed)

    # =========================================================================
    # CALLBACK TRIGGERS
    # =========================================================================

    def _trigger_complete_callback(self, result: RecordingResult) -> None:
        """Trigger on_complete callback"""
        if self.on_complete:
            try:
                self.on_complete(result)
            except Exception as e:
                self.logger.error(f"Error in complete callback: {e}")

    def _trigger_state_change_callback(
        self,
        old_phase: RecordingPhase,
        new_phase: RecordingPhase,
    ) -> None:
        """Trigger on_state_change callback"""
        if self.on_state_change:
            try:
                self.on_state_change(old_phase, new_phase)
            except Exception as e:
                self.logger.error(f"Error in state change callback: {e}")

    def _trigger_tick_callback(self, elapsed: int) -> None:
        """Trigger on_tick callback"""
        if self.on_tick:
            try:
                self.on_tick(elapsed)
            except Exception as e:
                self.logger.error(f"Error in tick callback: {e}")

    def _trigger_preview_callback(self, stream: StreamHandle) -> None:
        """Trigger on_preview callback"""
        if self.on_preview:
            try:
                self.on_preview(stream)
            except Exception as e:
                self.logger.error(f"Error in preview callback: {e}")

    def _trigger_error_callback(self, error_message: str) -> None:
        """Trigger on_error callback"""
        if self.on_error:
            try:
                self.on_error(error_message)
            except Exception as e:
                self.logger.error(f"Error in error callback: {e}")

    # =========================================================================
    # STATUS AND INFO
    # =========================================================================

    @property
    def phase(self) -> RecordingPhase:
        return self.state.phase

    @property
    def elapsed_seconds(self) -> int:
        return self.state.elapsed_seconds

    @property
    def formatted_elapsed(self) -> str:
        """Elapsed time as MM:SS"""
        return format_duration(self.state.elapsed_seconds)

    @property
    def has_access(self) -> bool:
        return self.gate.has_access

    @property
    def permission_state(self) -> PermissionState:
        return self.gate.permission_state

    @property
    def result(self) -> Optional[RecordingResult]:
        return self.state.result

    @property
    def is_closed(self) -> bool:
        return self._closed

    def is_device_active(self) -> bool:
        """True while the session holds a live device stream"""
        return self.gate.has_access

    def get_status(self) -> Dict[str, Any]:
        """
        Get complete session status.

        Returns:
            Dictionary with status information for the UI layer
        """
        return {
            "phase": self.state.phase.value,
            "permission": self.gate.permission_state.value,
            "has_access": self.has_access,
            "elapsed_seconds": self.state.elapsed_seconds,
            "elapsed": self.formatted_elapsed,
            "chunk_count": self.chunks.chunk_count,
            "closed": self._closed,
            "has_result": self.state.result is not None,
        }

    def get_session_info(self) -> str:
        """
        Get human-readable session information.

        Returns:
            Formatted string with session details
        """
        status = self.get_status()

        info = [
            f"Phase: {status['phase']}",
            f"Camera & microphone: {'ready' if status['has_access'] else 'not connected'}",
        ]

        if self.state.phase in (RecordingPhase.RECORDING, RecordingPhase.PAUSED):
            marker = "REC" if self.state.phase == RecordingPhase.RECORDING else "PAUSED"
            info.append(f"{marker} {status['elapsed']}")

        if self.state.result is not None:
            info.append(
                f"Recorded: {format_duration(self.state.result.duration)} "
                f"({self.state.result.artifact.size} bytes)",
            )

        return "\n".join(info)

    # =========================================================================
    # SCOPED RESOURCE MANAGEMENT
    # =========================================================================

    def __enter__(self) -> "CaptureSession":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.cleanup()

    def __del__(self):
        """Destructor - ensure cleanup"""
        if hasattr(self, "_lock"):
            self.cleanup()
