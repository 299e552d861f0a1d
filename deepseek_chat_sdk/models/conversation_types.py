from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict


class TurnRole(str, Enum):
    """Conversation turn roles."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ConversationMessage(BaseModel):
    """A single chat turn. Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    role: TurnRole
    content: str

    def to_wire(self) -> Dict[str, str]:
        """Return the {role, content} pair sent to the completion endpoint."""
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def system(cls, content: str) -> "ConversationMessage":
        return cls(role=TurnRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "ConversationMessage":
        return cls(role=TurnRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "ConversationMessage":
        return cls(role=TurnRole.ASSISTANT, content=content)


def history_to_wire(messages: List[Any]) -> List[Dict[str, str]]:
    """Format a history for the request body.

    Accepts ConversationMessage objects or plain {role, content} dicts.
    """
    formatted = []
    for msg in messages:
        if isinstance(msg, ConversationMessage):
            formatted.append(msg.to_wire())
        elif isinstance(msg, dict) and "role" in msg and "content" in msg:
            # Validate role/content through the model so bad roles fail early
            formatted.append(ConversationMessage(role=msg["role"], content=msg["content"]).to_wire())
        else:
            raise ValueError(f"Invalid message format: {type(msg)} - {msg}")
    return formatted
