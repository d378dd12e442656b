"""
Permission Gate

Requests camera + microphone access from the capture platform and
tracks the outcome as a simple capability flag.
"""

import logging
from typing import Callable, List, Optional

from recording.constants import PermissionState
from recording.interfaces.capture_device_interface import (
    CaptureDeviceInterface,
    PermissionDeniedError,
    StreamHandle,
)
from recording.models.recording_models import CaptureConstraints

PreviewCallback = Callable[[StreamHandle], None]


class PermissionGate:
    """
    Obtains exclusive device streams.

    A repeated request asks the platform for a fresh stream. The stream
    granted before is NOT released at that point; it is kept in
    `superseded` so the owner can release it when the session ends.
    A denied repeat request leaves an active bound stream and the
    GRANTED state in place.

    Usage:
        gate = PermissionGate(device)
        try:
            stream = gate.request_access()
        except PermissionDeniedError:
            print(PERMISSION_DENIED_MESSAGE)
    """

    def __init__(
        self,
        device: CaptureDeviceInterface,
        constraints: Optional[CaptureConstraints] = None,
        on_preview: Optional[PreviewCallback] = None,
    ):
        """
        Initialize permission gate.

        Args:
            device: Capture platform to request streams from
            constraints: Default constraint hints for requests
            on_preview: Called with every newly granted stream
        """
        self.logger = logging.getLogger(__name__)
        self.device = device
        self.constraints = constraints or CaptureConstraints()
        self.on_preview = on_preview

        self.permission_state = PermissionState.UNREQUESTED
        self.stream: Optional[StreamHandle] = None
        self.superseded: List[StreamHandle] = []

    @property
    def has_access(self) -> bool:
        """True while a granted stream is held"""
        return self.stream is not None and self.stream.is_active()

    def request_access(
        self,
        constraints: Optional[CaptureConstraints] = None,
    ) -> StreamHandle:
        """
        Ask the platform for a camera + microphone stream.

        Args:
            constraints: Hints for this request (default: gate constraints)

        Returns:
            Newly granted stream

        Raises:
            PermissionDeniedError: Access declined or no compatible device
        """
        constraints = constraints or self.constraints
        self.logger.info("Requesting camera and microphone access")

        try:
            stream = self.device.open_stream(constraints)
        except PermissionDeniedError as e:
            if self.has_access:
                # The stream granted earlier is still bound and usable
                self.logger.warning(f"Repeated access request denied, keeping current stream: {e}")
            else:
                self.permission_state = PermissionState.DENIED
                self.logger.warning(f"Device access denied: {e}")
            raise

        if self.stream is not None:
            self.logger.warning(
                "Access requested again - previous stream kept until session ends",
            )
            self.superseded.append(self.stream)

        self.stream = stream
        self.permission_state = PermissionState.GRANTED
        self.logger.info(f"Device access granted: {stream.settings}")

        if self.on_preview:
            try:
                self.on_preview(stream)
            except Exception as e:
                self.logger.error(f"Error in preview callback: {e}")

        return stream

    def release_all(self) -> int:
        """
        Release the current stream and every superseded one.

        Returns:
            Number of streams that were still active
        """
        released = 0
        for stream in self.superseded + ([self.stream] if self.stream else []):
            if stream.is_active():
                released += 1
            try:
                stream.release()
            except Exception as e:
                self.logger.error(f"Error releasing stream: {e}")
        self.superseded.clear()
        if released:
            self.logger.info(f"Released {released} device stream(s)")
        return released
