"""Request bodies and headers for the chat completions endpoint."""

import json
from typing import Any, Dict, List, Optional, Union

from ...models.conversation_types import ConversationMessage, history_to_wire


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def build_chat_payload(
    messages: List[Any],
    model: str,
    stream: bool,
    response_format: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the request body.

    Key order matches the wire contract: model, messages, stream and, for
    structured calls, response_format.
    """
    payload: Dict[str, Any] = {
        "model": model,
        "messages": history_to_wire(messages),
        "stream": stream,
    }
    if response_format is not None:
        payload["response_format"] = dict(response_format)
    return payload


def parse_chat_payload(body: Union[bytes, str, Dict[str, Any]]) -> List[ConversationMessage]:
    """Recover the conversation history from an encoded request body."""
    data = json.loads(body) if isinstance(body, (bytes, str)) else body
    messages = data.get("messages")
    if not isinstance(messages, list):
        raise ValueError("request body has no `messages` list")
    return [ConversationMessage(role=m["role"], content=m["content"]) for m in messages]
