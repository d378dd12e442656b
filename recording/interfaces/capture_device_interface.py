"""
Capture Device Interface

Abstract interfaces for capture backends.
Defines the contract that any camera/microphone binding must follow.

High-level code (PermissionGate, CaptureSession) depends on these
abstractions, not on FFmpeg or any other platform API directly.

Three roles:
1. CaptureDeviceInterface: grants streams and builds recorders
2. StreamHandle: an exclusively owned live device stream
3. ChunkRecorderInterface: turns a stream into ordered data chunks
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from recording.constants import RecorderState
from recording.models.recording_models import CaptureConstraints

# Receives each chunk of encoded media as it becomes available
ChunkCallback = Callable[[bytes], None]


class StreamHandle(ABC):
    """
    A live camera + microphone stream.

    Owned by exactly one session. Must be released exactly once;
    release() is therefore idempotent.
    """

    @abstractmethod
    def is_active(self) -> bool:
        """
        Check if the stream still holds the device.

        Returns:
            True until release() has been called
        """
        pass

    @abstractmethod
    def release(self) -> None:
        """
        Stop all tracks and give the device back.

        Calling release() on an already released stream does nothing.
        This should never raise exceptions.
        """
        pass

    @property
    @abstractmethod
    def settings(self) -> Dict[str, Any]:
        """
        Configuration actually applied to the stream.

        May differ from the requested constraints.
        """
        pass


class ChunkRecorderInterface(ABC):
    """
    Chunked recorder bound to a granted stream.

    While recording, encoded data is delivered to on_data_available in
    emission order. Nothing is delivered while paused.

    Usage:
        recorder = device.create_recorder(stream, "video/webm;codecs=vp9")
        recorder.on_data_available = chunks.append
        recorder.begin()
        recorder.pause()
        recorder.resume()
        recorder.end()  # Trailing data delivered before this returns
    """

    on_data_available: Optional[ChunkCallback] = None

    @abstractmethod
    def begin(self) -> None:
        """
        Start producing chunks.

        Raises:
            CaptureError: If the recorder cannot be started
        """
        pass

    @abstractmethod
    def pause(self) -> None:
        """Suspend chunk production without discarding anything"""
        pass

    @abstractmethod
    def resume(self) -> None:
        """Resume chunk production"""
        pass

    @abstractmethod
    def end(self) -> None:
        """
        Stop producing chunks.

        Any buffered data is delivered to on_data_available before this
        returns. Calling end() on an inactive recorder does nothing.
        """
        pass

    @property
    @abstractmethod
    def state(self) -> RecorderState:
        """Current recorder state"""
        pass

    @property
    @abstractmethod
    def mime_type(self) -> str:
        """Container/codec the recorder produces"""
        pass


class CaptureDeviceInterface(ABC):
    """
    Abstract base class for capture platforms.

    Any binding (FFmpeg, GStreamer, a browser bridge, a fake) must
    implement these methods to work with PermissionGate and CaptureSession.
    """

    @abstractmethod
    def open_stream(self, constraints: CaptureConstraints) -> StreamHandle:
        """
        Request exclusive access to camera and microphone.

        Constraints are hints; the backend may substitute the closest
        supported configuration.

        Args:
            constraints: Desired capture configuration

        Returns:
            A new, active StreamHandle

        Raises:
            PermissionDeniedError: Access declined or no compatible device
        """
        pass

    @abstractmethod
    def create_recorder(
        self,
        stream: StreamHandle,
        mime_type: str,
    ) -> ChunkRecorderInterface:
        """
        Build a chunk recorder for a granted stream.

        Args:
            stream: Stream previously returned by open_stream()
            mime_type: Requested container/codec

        Returns:
            Inactive recorder (call begin() to start)
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the capture platform can be used at all.

        Returns:
            True if capture software and devices are present
        """
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """
        Release everything the backend still holds.

        This should never raise exceptions.
        """
        pass


class CaptureError(Exception):
    """
    Exception raised for capture errors.

    Examples:
    - Camera or microphone access declined
    - Recorder process failed to start
    - Device lost mid-recording
    """
    pass


class PermissionDeniedError(CaptureError):
    """
    Device access declined or no compatible device.

    The two causes are deliberately not distinguished.
    """
    pass


class CaptureProcessError(CaptureError):
    """Error in the recorder process (FFmpeg crashed, etc.)"""
    pass
