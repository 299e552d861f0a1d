from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict


class FrameKind(str, Enum):
    SENTINEL = "sentinel"
    PAYLOAD = "payload"


@dataclass(frozen=True)
class StreamFrame:
    """One delimited unit of a streaming response.

    Attributes:
        kind: SENTINEL for the terminal [DONE] marker, PAYLOAD otherwise
        data: The frame text with the data: prefix removed
    """
    kind: FrameKind
    data: Union[bytes, str]

    @property
    def is_sentinel(self) -> bool:
        return self.kind is FrameKind.SENTINEL


class _WireModel(BaseModel):
    # Providers add fields freely; only the ones we read are declared.
    model_config = ConfigDict(extra="allow")


class Delta(_WireModel):
    role: Optional[str] = None
    content: Optional[str] = None


class DeltaChoice(_WireModel):
    index: int = 0
    delta: Optional[Delta] = None
    finish_reason: Optional[str] = None


class DeltaPayload(_WireModel):
    """Decoded streaming frame: {choices: [{delta: {content}}], ...}."""
    id: Optional[str] = None
    model: Optional[str] = None
    choices: Optional[List[DeltaChoice]] = None
    usage: Optional[Dict[str, Any]] = None


class Message(_WireModel):
    role: Optional[str] = None
    content: Optional[str] = None


class MessageChoice(_WireModel):
    index: int = 0
    message: Optional[Message] = None
    finish_reason: Optional[str] = None


class ChatCompletion(_WireModel):
    """Single-shot response body: {choices: [{message: {content}}], ...}."""
    id: Optional[str] = None
    model: Optional[str] = None
    choices: Optional[List[MessageChoice]] = None
    usage: Optional[Dict[str, Any]] = None
