"""Streaming decode pipeline.

Raw body bytes flow through EventSplitter (framing), classify_frame
(sentinel detection) and decode_delta/extract_delta_text (payload
decoding); StreamSession drives the pipeline for one HTTP response.
"""

from .classifier import classify_frame
from .decoder import (
    decode_chat_completion,
    decode_delta,
    extract_delta_text,
    extract_message_text,
    parse_chat_completion,
)
from .session import StreamSession
from .splitter import EventSplitter
from .types import ChatCompletion, DeltaPayload, FrameKind, StreamFrame

__all__ = [
    "EventSplitter",
    "classify_frame",
    "decode_delta",
    "extract_delta_text",
    "parse_chat_completion",
    "extract_message_text",
    "decode_chat_completion",
    "StreamSession",
    "StreamFrame",
    "FrameKind",
    "DeltaPayload",
    "ChatCompletion",
]
