from __future__ import annotations

from typing import Union

from ..config.constants import SSE_DONE_SENTINEL
from .types import FrameKind, StreamFrame

_SENTINEL_BYTES = SSE_DONE_SENTINEL.encode("ascii")


def classify_frame(raw: Union[bytes, str]) -> StreamFrame:
    """Classify a frame as the [DONE] sentinel or a payload candidate.

    Total over all inputs; never raises.
    """
    if isinstance(raw, bytes):
        is_sentinel = raw.strip() == _SENTINEL_BYTES
    else:
        is_sentinel = raw.strip() == SSE_DONE_SENTINEL
    return StreamFrame(FrameKind.SENTINEL if is_sentinel else FrameKind.PAYLOAD, raw)
