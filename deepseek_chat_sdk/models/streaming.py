"""State and result types for streaming sessions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class SessionState(str, Enum):
    """Lifecycle of a StreamSession. The last three states are terminal."""
    IDLE = "idle"
    REQUESTING = "requesting"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.COMPLETED, SessionState.FAILED, SessionState.CANCELLED)


@dataclass(frozen=True)
class SessionResult:
    """Terminal outcome of one streaming call.

    Attributes:
        outcome: COMPLETED, FAILED or CANCELLED
        reason: Why the session ended ("sentinel", "eof", error text, ...)
        error: The transport error for FAILED sessions
        fragments: Number of text fragments delivered
        decode_errors: Number of frames dropped because they failed to decode
        finish_reason: Last finish_reason reported by the server, if any
        usage: Token usage reported in-stream, if any
    """
    outcome: SessionState
    reason: str = ""
    error: Optional[Exception] = None
    fragments: int = 0
    decode_errors: int = 0
    finish_reason: Optional[str] = None
    usage: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.outcome is SessionState.COMPLETED
