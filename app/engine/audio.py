"""Alarm audio output contract and the default logging implementation."""

from typing import Protocol

from app.core.logging_handler import setup_logger

logger = setup_logger(__name__)


class AudioOutput(Protocol):
    """Fire-and-forget sound output.  Implementations may raise; callers
    must treat failures as non-fatal."""

    def play(self, sound_id: str, volume: float, loop: bool) -> None:
        ...

    def stop(self) -> None:
        ...


class LoggingAudioOutput:
    """Audio output that only records what would be played."""

    def __init__(self):
        self.playing: str | None = None

    def play(self, sound_id: str, volume: float, loop: bool) -> None:
        self.playing = sound_id
        logger.info("ALARM RINGING: sound=%s volume=%.2f loop=%s", sound_id, volume, loop)

    def stop(self) -> None:
        if self.playing is not None:
            logger.info("Alarm sound stopped: %s", self.playing)
        self.playing = None
