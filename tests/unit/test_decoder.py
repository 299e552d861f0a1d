"""Unit tests for payload decoding."""

import json

import pytest

from deepseek_chat_sdk.errors import FrameDecodeError, ResponseShapeError
from deepseek_chat_sdk.streaming.classifier import classify_frame
from deepseek_chat_sdk.streaming.decoder import (
    decode_chat_completion,
    decode_delta,
    extract_delta_text,
)
from tests.helpers.streaming_mocks import completion_body


class TestDecodeDelta:
    """Test stream frame decoding."""

    def test_extracts_first_choice_content(self):
        raw = json.dumps({
            "choices": [
                {"index": 0, "delta": {"content": "Hi"}},
                {"index": 1, "delta": {"content": "ignored"}},
            ]
        }).encode()
        payload = decode_delta(classify_frame(raw))
        assert extract_delta_text(payload) == "Hi"

    def test_accepts_text_and_extra_fields(self):
        payload = decode_delta('{"id": "x", "system_fingerprint": "fp", "choices": [{"delta": {"role": "assistant", "content": ""}}]}')
        assert payload.id == "x"
        assert extract_delta_text(payload) == ""

    def test_captures_finish_reason_and_usage(self):
        payload = decode_delta(b'{"choices": [{"delta": {"content": ""}, "finish_reason": "stop"}], "usage": {"total_tokens": 12}}')
        assert payload.choices[0].finish_reason == "stop"
        assert payload.usage == {"total_tokens": 12}

    def test_invalid_utf8(self):
        with pytest.raises(FrameDecodeError) as exc_info:
            decode_delta(b'{"choices": "\xff\xfe"}')
        assert exc_info.value.reason == "invalid UTF-8"

    def test_invalid_json(self):
        with pytest.raises(FrameDecodeError) as exc_info:
            decode_delta(b'{"choices": [')
        assert "invalid JSON" in exc_info.value.reason

    def test_non_object_json(self):
        with pytest.raises(FrameDecodeError):
            decode_delta(b"[1, 2]")

    def test_wrong_field_types(self):
        with pytest.raises(FrameDecodeError):
            decode_delta(b'{"choices": "not a list"}')


class TestExtractDeltaText:
    """Test missing-field handling."""

    @pytest.mark.parametrize("raw", [
        b'{"id": "x"}',
        b'{"choices": []}',
        b'{"choices": [{"index": 0}]}',
        b'{"choices": [{"delta": {}}]}',
        b'{"choices": [{"delta": {"content": null}}]}',
    ])
    def test_missing_fields(self, raw):
        payload = decode_delta(raw)
        with pytest.raises(ResponseShapeError) as exc_info:
            extract_delta_text(payload)
        assert "missing field" in str(exc_info.value)


class TestDecodeChatCompletion:
    """Test single-shot response decoding."""

    def test_success(self):
        assert decode_chat_completion(json.dumps(completion_body("hello"))) == "hello"

    def test_renamed_message_field(self):
        with pytest.raises(ResponseShapeError) as exc_info:
            decode_chat_completion(json.dumps(completion_body("hello", key="msg")))
        assert "unparseable response" in str(exc_info.value)

    @pytest.mark.parametrize("body", [b"not json", b"[]", b'{"choices": []}', b'{"choices": "x"}'])
    def test_unparseable(self, body):
        with pytest.raises(ResponseShapeError):
            decode_chat_completion(body)
