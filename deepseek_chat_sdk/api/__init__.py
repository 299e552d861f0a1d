from .client import ChatClient, Conversation

__all__ = ["ChatClient", "Conversation"]
