"""
Recording Factory

Factory pattern for creating capture devices and sessions.
Automatically selects real or mock capture based on availability.
"""

import logging
from typing import Literal, Optional

from config.settings import CLOCK_TICK_INTERVAL
from recording.controllers.capture_session import CaptureSession
from recording.implementations.ffmpeg_device import FFmpegCaptureDevice
from recording.implementations.mock_device import MockCaptureDevice
from recording.interfaces.capture_device_interface import CaptureDeviceInterface
from recording.models.recording_models import CaptureConstraints

# Type alias for better type hints
CaptureMode = Literal["auto", "real", "mock"]


class RecordingFactory:
    """
    Factory for capture devices and sessions.

    Usage:
        # Auto-detect (uses FFmpeg if available, mock otherwise)
        device = RecordingFactory.create_device()

        # Force mock mode (useful for testing)
        device = RecordingFactory.create_device(mode="mock")

        # A fresh session for every new recording
        session = RecordingFactory.create_session(device)
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_device(
        cls,
        mode: CaptureMode = "auto",
        simulate_timing: bool = True,
    ) -> CaptureDeviceInterface:
        """
        Create a capture device.

        Args:
            mode: "auto" (detect), "real" (force FFmpeg), "mock" (force mock)
            simulate_timing: For mock devices, whether recorders emit
                           fake chunks on a timer

        Returns:
            CaptureDeviceInterface implementation

        Raises:
            RuntimeError: If mode="real" but FFmpeg or the camera is missing
            ValueError: Unknown mode
        """
        if mode == "mock":
            cls._logger.info(f"Creating Mock Capture Device (simulate_timing: {simulate_timing})")
            return MockCaptureDevice(simulate_timing=simulate_timing)

        if mode == "real":
            device = FFmpegCaptureDevice()
            if not device.is_available():
                raise RuntimeError("Real capture requested but FFmpeg or camera not available")
            cls._logger.info("Creating FFmpeg Capture Device (forced)")
            return device

        if mode != "auto":
            raise ValueError(f"Unknown capture mode: {mode}")

        device = FFmpegCaptureDevice()
        if device.is_available():
            cls._logger.info("Creating FFmpeg Capture Device (auto-detected)")
            return device

        cls._logger.warning("FFmpeg or camera not available, using Mock Capture Device")
        return MockCaptureDevice(simulate_timing=simulate_timing)

    @classmethod
    def create_session(
        cls,
        device: CaptureDeviceInterface,
        constraints: Optional[CaptureConstraints] = None,
        clock_interval: float = CLOCK_TICK_INTERVAL,
        auto_tick: bool = True,
    ) -> CaptureSession:
        """
        Create a fresh capture session.

        A stopped session is terminal; every new recording needs one of these.
        """
        return CaptureSession(
            device,
            constraints=constraints,
            clock_interval=clock_interval,
            auto_tick=auto_tick,
        )

