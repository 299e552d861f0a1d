"""Unit tests for request body construction."""

import json

import pytest

from deepseek_chat_sdk.models import ConversationMessage, TurnRole
from deepseek_chat_sdk.providers.deepseek import build_chat_payload, build_headers, parse_chat_payload


def test_headers():
    assert build_headers("sk-123") == {
        "Authorization": "Bearer sk-123",
        "Content-Type": "application/json",
    }


def test_history_survives_encoding(sample_conversation_messages):
    payload = build_chat_payload(sample_conversation_messages, "deepseek-chat", stream=True)
    encoded = json.dumps(payload).encode("utf-8")

    assert parse_chat_payload(encoded) == sample_conversation_messages


def test_history_with_unicode_and_quotes():
    history = [
        ConversationMessage.user('He said "héllo"\nthen left 👋'),
        ConversationMessage.assistant(""),
    ]
    payload = build_chat_payload(history, "deepseek-chat", stream=False)

    assert parse_chat_payload(json.dumps(payload, ensure_ascii=False)) == history


def test_order_and_duplicates_preserved():
    history = [ConversationMessage.user("again")] * 3 + [ConversationMessage.system("late system")]
    payload = build_chat_payload(history, "deepseek-chat", stream=True)

    assert [m["content"] for m in payload["messages"]] == ["again", "again", "again", "late system"]
    assert parse_chat_payload(payload)[-1].role is TurnRole.SYSTEM


def test_response_format_is_copied():
    fmt = {"type": "json_object"}
    payload = build_chat_payload([], "deepseek-chat", stream=False, response_format=fmt)

    payload["response_format"]["type"] = "text"
    assert fmt == {"type": "json_object"}


def test_invalid_role_is_rejected():
    with pytest.raises(ValueError):
        build_chat_payload([{"role": "tool", "content": "x"}], "deepseek-chat", stream=True)


def test_invalid_message_is_rejected():
    with pytest.raises(ValueError):
        build_chat_payload(["just a string"], "deepseek-chat", stream=True)


def test_parse_requires_messages():
    with pytest.raises(ValueError):
        parse_chat_payload(b'{"model": "deepseek-chat"}')
