"""
Payload decoding for stream frames and single-shot responses.

Decoding is split in two steps: turning raw frame bytes into a typed
DeltaPayload (FrameDecodeError on failure) and pulling the text out of it
(ResponseShapeError when the expected fields are missing).
"""

from __future__ import annotations

import json
from typing import Union

from pydantic import ValidationError

from ..errors import FrameDecodeError, ResponseShapeError
from .types import ChatCompletion, DeltaPayload, StreamFrame

UNPARSEABLE_RESPONSE = "unparseable response"


def _to_text(raw: Union[bytes, str]) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FrameDecodeError("invalid UTF-8", repr(raw)) from e


def decode_delta(frame: Union[StreamFrame, bytes, str]) -> DeltaPayload:
    """
    Decode one payload frame into a DeltaPayload.

    Raises:
        FrameDecodeError: The frame is not UTF-8, not a JSON object, or its
            fields have unexpected types.
    """
    raw = frame.data if isinstance(frame, StreamFrame) else frame
    text = _to_text(raw)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise FrameDecodeError(f"invalid JSON ({e.msg})", text) from e
    if not isinstance(data, dict):
        raise FrameDecodeError("expected a JSON object", text)
    try:
        return DeltaPayload.model_validate(data)
    except ValidationError as e:
        raise FrameDecodeError(f"unexpected payload shape ({e.error_count()} errors)", text) from e


def extract_delta_text(payload: DeltaPayload) -> str:
    """Return choices[0].delta.content.

    An empty string is a valid (empty) delta. A missing or null field is a
    ResponseShapeError.
    """
    if not payload.choices:
        raise ResponseShapeError("missing field `choices` in stream frame")
    choice = payload.choices[0]
    if choice.delta is None or choice.delta.content is None:
        raise ResponseShapeError("missing field `choices[0].delta.content` in stream frame")
    return choice.delta.content


def parse_chat_completion(body: Union[bytes, str]) -> ChatCompletion:
    """Parse a single-shot response body.

    Raises:
        ResponseShapeError: The body is not a JSON object of the expected shape.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ResponseShapeError(f"{UNPARSEABLE_RESPONSE}: body is not JSON") from e
    if not isinstance(data, dict):
        raise ResponseShapeError(f"{UNPARSEABLE_RESPONSE}: expected a JSON object")
    try:
        return ChatCompletion.model_validate(data)
    except ValidationError as e:
        raise ResponseShapeError(f"{UNPARSEABLE_RESPONSE}: {e.error_count()} invalid fields") from e


def extract_message_text(completion: ChatCompletion) -> str:
    """Return choices[0].message.content or raise ResponseShapeError."""
    if not completion.choices:
        raise ResponseShapeError(f"{UNPARSEABLE_RESPONSE}: missing `choices`")
    message = completion.choices[0].message
    if message is None or message.content is None:
        raise ResponseShapeError(f"{UNPARSEABLE_RESPONSE}: missing `choices[0].message.content`")
    return message.content


def decode_chat_completion(body: Union[bytes, str]) -> str:
    """Extract the assistant reply from a single-shot response body."""
    return extract_message_text(parse_chat_completion(body))
