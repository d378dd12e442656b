"""
Session State Machine

Authoritative phase of one recording session plus the elapsed-seconds
counter. Every phase change goes through fire(); events that are not
valid in the current phase are ignored.
"""

import logging
from typing import Callable, Dict, Optional

from recording.constants import RecordingPhase, SessionEvent
from recording.models.recording_models import RecordingResult

StateChangeCallback = Callable[[RecordingPhase, RecordingPhase], None]

# (current phase, event) -> next phase
TRANSITIONS: Dict[tuple, RecordingPhase] = {
    (RecordingPhase.IDLE, SessionEvent.ACCESS_GRANTED): RecordingPhase.READY,
    (RecordingPhase.READY, SessionEvent.ACCESS_GRANTED): RecordingPhase.READY,
    (RecordingPhase.READY, SessionEvent.START): RecordingPhase.RECORDING,
    (RecordingPhase.RECORDING, SessionEvent.PAUSE): RecordingPhase.PAUSED,
    (RecordingPhase.PAUSED, SessionEvent.RESUME): RecordingPhase.RECORDING,
    (RecordingPhase.RECORDING, SessionEvent.STOP): RecordingPhase.STOPPED,
    (RecordingPhase.PAUSED, SessionEvent.STOP): RecordingPhase.STOPPED,
}


class SessionStateMachine:
    """
    Phase and counters for a single recording session.

    Invariants:
    - elapsed_seconds only advances while phase is RECORDING
    - elapsed_seconds never decreases; it is reset to 0 only on START
    - result is set only in STOPPED

    Usage:
        machine = SessionStateMachine()
        machine.fire(SessionEvent.ACCESS_GRANTED)  # idle -> ready
        machine.fire(SessionEvent.START)  # ready -> recording
        machine.advance()  # elapsed 0 -> 1
        machine.fire(SessionEvent.PAUSE)  # recording -> paused
        machine.advance()  # ignored, still 1
    """

    def __init__(self, on_state_change: Optional[StateChangeCallback] = None):
        self.logger = logging.getLogger(__name__)

        self.phase = RecordingPhase.IDLE
        self.elapsed_seconds = 0
        self.result: Optional[RecordingResult] = None

        self.on_state_change = on_state_change

    def can_fire(self, event: SessionEvent) -> bool:
        """Check if event is valid in the current phase"""
        return (self.phase, event) in TRANSITIONS

    def fire(self, event: SessionEvent) -> bool:
        """
        Apply an event.

        Args:
            event: Event to apply

        Returns:
            True if the event was accepted, False if ignored
        """
        target = TRANSITIONS.get((self.phase, event))
        if target is None:
            self.logger.debug(
                f"Ignoring {event.value} in phase {self.phase.value}",
            )
            return False

        if event == SessionEvent.START:
            self.elapsed_seconds = 0

        self._transition_to(target, event)
        return True

    def advance(self) -> bool:
        """
        Count one clock tick.

        Returns:
            True if the counter advanced (phase is RECORDING)
        """
        if self.phase != RecordingPhase.RECORDING:
            return False
        self.elapsed_seconds += 1
        return True

    def complete(self, result: RecordingResult) -> None:
        """Attach the finalized result (only valid once stopped)"""
        if self.phase != RecordingPhase.STOPPED:
            raise RuntimeError(
                f"Cannot attach result in phase {self.phase.value}",
            )
        self.result = result

    @property
    def is_active(self) -> bool:
        """True while recording or paused"""
        return self.phase in (RecordingPhase.RECORDING, RecordingPhase.PAUSED)

    def _transition_to(self, new_phase: RecordingPhase, event: SessionEvent) -> None:
        old_phase = self.phase
        if new_phase == old_phase:
            self.logger.debug(f"Already in phase {new_phase.value} ({event.value})")
            return

        self.phase = new_phase

        self.logger.info(
            f"Phase transition: {old_phase.value} -> {new_phase.value} ({event.value})",
        )

        if self.on_state_change:
            try:
                self.on_state_change(old_phase, new_phase)
            except Exception as e:
                self.logger.error(f"Error in state change callback: {e}")

