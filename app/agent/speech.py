"""
Contracts for speech recognition and synthesis used by the agent client.

Concrete engines are injected by whoever builds the controller; passing None
means the capability is absent and the UI says so.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from app.core.config import SPEECH_LANG, SPEECH_PITCH, SPEECH_RATE


class RecognitionAlternative(Protocol):
    """One candidate transcript for a recognized phrase."""

    transcript: str


# A recognition event carries every result so far; each result lists its alternatives, best first.
RecognitionResults = Sequence[Sequence[RecognitionAlternative]]


class SpeechRecognizer(Protocol):
    """Speech-to-text engine with incremental results."""

    continuous: bool
    interim_results: bool
    lang: str
    on_result: Callable[[RecognitionResults], None] | None
    on_error: Callable[[str], None] | None
    on_end: Callable[[], None] | None

    def start(self) -> None:
        """Begin capturing audio. May raise if the engine cannot start."""

    def stop(self) -> None:
        """Stop capturing and deliver any pending result."""

    def abort(self) -> None:
        """Stop capturing and discard pending results."""


@dataclass(frozen=True)
class Utterance:
    """Text to speak and how to speak it."""

    text: str
    rate: float = SPEECH_RATE
    pitch: float = SPEECH_PITCH
    lang: str = SPEECH_LANG


class SpeechSynthesizer(Protocol):
    """Text-to-speech engine."""

    def speak(self, utterance: Utterance) -> None:
        """Queue the utterance for playback."""

    def cancel(self) -> None:
        """Stop current playback and drop anything queued."""


def join_transcripts(results: RecognitionResults) -> str:
    """Concatenate the first alternative of every result, in order, with single spaces."""
    parts = [result[0].transcript if result else "" for result in results]
    return " ".join(parts).strip()
