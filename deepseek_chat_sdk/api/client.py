"""High-level chat client for the DeepSeek chat SDK."""

from typing import Any, AsyncGenerator, Dict, List, Optional

from ..config.settings import ClientConfig
from ..models.conversation_types import ConversationMessage, TurnRole
from ..models.generation import SendResult
from ..models.streaming import SessionResult
from ..providers.deepseek import DeepSeekProvider


class Conversation:
    """
    Ordered chat history.

    While a reply is streaming, the history ends with an assistant
    placeholder whose content grows as fragments arrive. Messages are
    immutable, so updating the placeholder replaces it in place.
    """

    def __init__(
        self,
        system_prompt: Optional[str] = None,
        messages: Optional[List[ConversationMessage]] = None,
    ):
        self._messages: List[ConversationMessage] = []
        if system_prompt:
            self._messages.append(ConversationMessage.system(system_prompt))
        if messages:
            self._messages.extend(messages)

    @property
    def messages(self) -> List[ConversationMessage]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def add(self, role: TurnRole, content: str) -> ConversationMessage:
        message = ConversationMessage(role=role, content=content)
        self._messages.append(message)
        return message

    def add_user(self, content: str) -> ConversationMessage:
        return self.add(TurnRole.USER, content)

    def begin_reply(self) -> int:
        """Append an empty assistant placeholder and return its index."""
        self._messages.append(ConversationMessage.assistant(""))
        return len(self._messages) - 1

    def update_reply(self, index: int, content: str) -> None:
        if self._messages[index].role is not TurnRole.ASSISTANT:
            raise ValueError(f"message {index} is not an assistant reply")
        self._messages[index] = ConversationMessage.assistant(content)

    def to_wire(self) -> List[Dict[str, str]]:
        return [m.to_wire() for m in self._messages]

    def clear(self, keep_system: bool = True) -> None:
        if keep_system:
            self._messages = [m for m in self._messages if m.role is TurnRole.SYSTEM]
        else:
            self._messages = []


class ChatClient:
    """Chat front-end: keeps the conversation and talks to the provider."""

    def __init__(
        self,
        provider: Optional[DeepSeekProvider] = None,
        *,
        config: Optional[ClientConfig] = None,
        system_prompt: Optional[str] = None,
    ):
        """
        Initialize the client.

        Args:
            provider: Optional preconfigured provider
            config: Optional configuration used when no provider is given
                (defaults to load_config())
            system_prompt: Optional system message placed first in the history
        """
        self.provider = provider if provider is not None else DeepSeekProvider(config)
        self.conversation = Conversation(system_prompt=system_prompt)
        self.last_result: Optional[SessionResult] = None

    async def send(self, text: str) -> AsyncGenerator[str, None]:
        """
        Send a user message and stream the reply.

        The request carries the history up to and including the new user
        turn. The assistant placeholder is appended afterwards and updated
        with the accumulated text after every fragment, so an interrupted
        stream leaves the partial reply in the history.

        Yields:
            str: Text fragments in arrival order

        Raises:
            ValueError: If text is blank
            TransportError: If the stream fails
        """
        content = text.strip()
        if not content:
            raise ValueError("message is empty")

        self.conversation.add_user(content)
        history = self.conversation.messages
        index = self.conversation.begin_reply()

        reply = ""
        session = self.provider.stream(history)
        try:
            async with session:
                async for fragment in session:
                    reply += fragment
                    self.conversation.update_reply(index, reply)
                    yield fragment
        finally:
            self.last_result = session.result

    async def ask(self, text: str, response_format: Optional[Dict[str, Any]] = None) -> SendResult:
        """Single-shot turn; the reply is appended to the history on success."""
        content = text.strip()
        if not content:
            raise ValueError("message is empty")

        self.conversation.add_user(content)
        result = await self.provider.send_once(self.conversation.messages, response_format=response_format)
        if result.ok:
            self.conversation.add(TurnRole.ASSISTANT, result.text or "")
        return result

    async def aclose(self) -> None:
        await self.provider.aclose()

    async def __aenter__(self) -> "ChatClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
