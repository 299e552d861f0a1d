from .conversation_types import ConversationMessage, TurnRole, history_to_wire
from .generation import GenerationResponse, SendResult
from .streaming import SessionResult, SessionState

__all__ = [
    "ConversationMessage",
    "TurnRole",
    "history_to_wire",
    "GenerationResponse",
    "SendResult",
    "SessionResult",
    "SessionState",
]
