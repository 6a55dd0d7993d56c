"""
Agent client state: what the UI renders. In-memory only; one per session.
"""

from dataclasses import dataclass, field
from enum import Enum

from app.schemas.search import SearchResult


class AgentStatus(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    SEARCHING = "searching"
    RESPONDING = "responding"


# Named transitions of the client state machine; IDLE -> IDLE is allowed so "stop" is idempotent.
TRANSITIONS: dict[AgentStatus, frozenset[AgentStatus]] = {
    AgentStatus.IDLE: frozenset({AgentStatus.IDLE, AgentStatus.LISTENING, AgentStatus.SEARCHING}),
    AgentStatus.LISTENING: frozenset({AgentStatus.IDLE}),
    AgentStatus.SEARCHING: frozenset({AgentStatus.RESPONDING, AgentStatus.IDLE}),
    AgentStatus.RESPONDING: frozenset({AgentStatus.IDLE}),
}


class InvalidTransitionError(Exception):
    """Raised when the controller tries a transition the state machine does not allow."""

    def __init__(self, current: AgentStatus, target: AgentStatus) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot go from {current.value} to {target.value}")


@dataclass
class AgentState:
    """Current query text, last transcript, last results, status and error message."""

    query: str = ""
    transcript: str = ""
    results: list[SearchResult] = field(default_factory=list)
    status: AgentStatus = AgentStatus.IDLE
    error: str | None = None
