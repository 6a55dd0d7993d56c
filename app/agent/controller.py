"""
Agent controller: the client-side state machine.

idle -> listening -> idle          (voice capture)
idle -> searching -> responding -> idle   (query submission; searching -> idle on failure)

Driven by user actions (start/stop listening, submit) and by callbacks from
the speech recognizer and the responding timer. Speech engines, the gateway
client and the timer are injected so tests can substitute them.
"""

import logging
import threading
from collections.abc import Callable

from app.agent.client import SearchClient, SearchClientError
from app.agent.speech import RecognitionResults, SpeechRecognizer, SpeechSynthesizer, Utterance, join_transcripts
from app.agent.state import TRANSITIONS, AgentState, AgentStatus, InvalidTransitionError
from app.core.config import RESPONDING_DELAY_SECONDS, SPEECH_LANG

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Please provide something to search for."
VOICE_START_FAILED_MESSAGE = "Voice input failed to start. Please try again."
UNEXPECTED_ERROR_MESSAGE = "Unexpected error occurred."

Scheduler = Callable[[float, Callable[[], None]], None]


def timer_scheduler(delay: float, callback: Callable[[], None]) -> None:
    """Run callback once after delay seconds on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()


class AgentController:
    """Owns the AgentState and every transition of it."""

    def __init__(
        self,
        search_client: SearchClient,
        recognizer: SpeechRecognizer | None = None,
        synthesizer: SpeechSynthesizer | None = None,
        schedule: Scheduler = timer_scheduler,
        responding_delay: float = RESPONDING_DELAY_SECONDS,
    ) -> None:
        self.state = AgentState()
        # Timer callbacks run on another thread; every status check-and-change holds this lock.
        self._lock = threading.RLock()
        self._generation = 0
        self.search_client = search_client
        self.synthesizer = synthesizer
        self.schedule = schedule
        self.responding_delay = responding_delay
        self.recognizer = self._attach_recognizer(recognizer)

    # --- Capabilities ---

    def _attach_recognizer(self, recognizer: SpeechRecognizer | None) -> SpeechRecognizer | None:
        """Configure the recognizer for single-phrase interim results; None if absent or it refuses."""
        if recognizer is None:
            return None
        try:
            recognizer.continuous = False
            recognizer.interim_results = True
            recognizer.lang = SPEECH_LANG
            recognizer.on_result = self.on_recognition_result
            recognizer.on_error = self.on_recognition_error
            recognizer.on_end = self.on_recognition_end
        except Exception:
            logger.exception("[agent] speech recognizer setup failed; voice input disabled")
            return None
        return recognizer

    @property
    def speech_supported(self) -> bool:
        return self.recognizer is not None

    # --- Transitions ---

    def _transition(self, target: AgentStatus) -> None:
        with self._lock:
            current = self.state.status
            if target not in TRANSITIONS[current]:
                raise InvalidTransitionError(current, target)
            if current != target:
                logger.info("[agent] %s -> %s", current.value, target.value)
                self._generation += 1
            self.state.status = target

    def _leave(self, expected: AgentStatus) -> None:
        """Go idle only if still in the expected status."""
        with self._lock:
            if self.state.status is expected:
                self._transition(AgentStatus.IDLE)

    # --- Voice capture ---

    def start_listening(self) -> None:
        if self.recognizer is None:
            return
        self.state.error = None
        self.state.transcript = ""
        try:
            self.recognizer.start()
        except Exception:
            logger.exception("[agent] voice input failed to start")
            self.state.error = VOICE_START_FAILED_MESSAGE
            self._transition(AgentStatus.IDLE)
            return
        self._transition(AgentStatus.LISTENING)

    def stop_listening(self) -> None:
        """Ask the recognizer to stop (not awaited) and go idle."""
        if self.recognizer is not None:
            self.recognizer.stop()
        self._transition(AgentStatus.IDLE)

    def toggle_listening(self) -> None:
        with self._lock:
            listening = self.state.status is AgentStatus.LISTENING
        if listening:
            self.stop_listening()
        else:
            self.start_listening()

    def on_recognition_result(self, results: RecognitionResults) -> None:
        text = join_transcripts(results)
        self.state.transcript = text
        self.state.query = text

    def on_recognition_error(self, error: str) -> None:
        logger.info("[agent] recognition error: %s", error)
        self._leave(AgentStatus.LISTENING)

    def on_recognition_end(self) -> None:
        self._leave(AgentStatus.LISTENING)

    # --- Submission ---

    def set_query(self, text: str) -> None:
        self.state.query = text

    def submit(self) -> None:
        """Stop any voice capture, then search for the current query."""
        self.stop_listening()
        self.search(self.state.query)

    def search(self, text: str) -> None:
        if not text.strip():
            self.state.error = EMPTY_QUERY_MESSAGE
            return

        self._transition(AgentStatus.SEARCHING)
        self.state.error = None
        try:
            response = self.search_client.search(text.strip())
        except SearchClientError as e:
            self.state.error = e.message
            self._transition(AgentStatus.IDLE)
            return
        except Exception:
            logger.exception("[agent] search failed")
            self.state.error = UNEXPECTED_ERROR_MESSAGE
            self._transition(AgentStatus.IDLE)
            return

        with self._lock:
            self.state.results = list(response.results)
            self._transition(AgentStatus.RESPONDING)
            generation = self._generation
        self.speak(response.summary)
        self.schedule(self.responding_delay, lambda: self._finish_responding(generation))

    def _finish_responding(self, generation: int) -> None:
        # Stale if any transition happened since this responding window opened.
        with self._lock:
            if generation == self._generation:
                self._leave(AgentStatus.RESPONDING)

    # --- Narration ---

    def speak(self, text: str) -> None:
        """Cancel any narration in progress and speak text. No-op without a synthesizer."""
        if self.synthesizer is None:
            return
        self.synthesizer.cancel()
        self.synthesizer.speak(Utterance(text))

    # --- View helpers ---

    @property
    def action_label(self) -> str:
        return {
            AgentStatus.LISTENING: "Listening...",
            AgentStatus.SEARCHING: "Searching...",
            AgentStatus.RESPONDING: "Responding...",
        }.get(self.state.status, "Ask Agent")

    @property
    def voice_label(self) -> str:
        return "Stop Listening" if self.state.status is AgentStatus.LISTENING else "Talk to Agent"

    @property
    def is_busy(self) -> bool:
        return self.state.status is AgentStatus.SEARCHING
