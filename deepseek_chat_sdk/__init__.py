"""
DeepSeek Chat SDK - streaming chat completions over raw HTTP.

Forwards a conversation to the DeepSeek chat completions endpoint and
returns the reply either as an ordered, cancellable stream of text
fragments or as one single-shot response.

Features:
- Incremental server-sent events decoding with per-frame error isolation
- Explicit session lifecycle (completed / failed / cancelled, exactly once)
- Single-shot and JSON-object (structured) requests
- Conversation history with a streaming assistant placeholder
"""

__version__ = "0.1.0"

from .api.client import ChatClient, Conversation
from .config import ClientConfig, load_config
from .errors import (
    ChatSDKError,
    ConfigurationError,
    FrameDecodeError,
    ProviderError,
    ResponseShapeError,
    TransportError,
)
from .models import (
    ConversationMessage,
    GenerationResponse,
    SendResult,
    SessionResult,
    SessionState,
    TurnRole,
)
from .providers.deepseek import DeepSeekProvider
from .streaming import StreamSession

__all__ = [
    # Clients
    "ChatClient",
    "Conversation",
    "DeepSeekProvider",
    "StreamSession",

    # Configuration
    "ClientConfig",
    "load_config",

    # Models
    "ConversationMessage",
    "TurnRole",
    "GenerationResponse",
    "SendResult",
    "SessionResult",
    "SessionState",

    # Errors
    "ChatSDKError",
    "ConfigurationError",
    "ProviderError",
    "TransportError",
    "ResponseShapeError",
    "FrameDecodeError",
]
