"""
Server-sent events framing.

Turns the raw body of a streaming response into discrete frames. Events
are separated by a blank line; each event's data: field lines are joined
and the prefix removed. Bytes that do not yet end in a blank line are
carried over to the next chunk, so a frame split across network reads is
reassembled before decoding.
"""

from __future__ import annotations

from typing import List, Union

from ..config.constants import SSE_DATA_PREFIX

_DATA = SSE_DATA_PREFIX.encode("ascii")
_EVENT_BOUNDARY = b"\n\n"
# SSE fields other than data: carry nothing we surface
_IGNORED_FIELDS = (b"event:", b"id:", b"retry:")


class EventSplitter:
    """Incremental splitter for one stream. Not shared between sessions."""

    def __init__(self) -> None:
        self._buffer = b""

    @property
    def pending(self) -> bytes:
        """Bytes received but not yet terminated by a blank line."""
        return self._buffer

    def feed(self, chunk: Union[bytes, str]) -> List[bytes]:
        """
        Add a chunk and return the frames it completes.

        Args:
            chunk: Raw body bytes (or text) as received from the transport

        Returns:
            Frame payloads in arrival order, data: prefix stripped and
            surrounding whitespace trimmed. Frames stay as bytes; text
            decoding happens per frame in the payload decoder.
        """
        if not chunk:
            return []
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")

        # Normalize after joining so a CRLF split across chunks is still caught
        self._buffer = (self._buffer + chunk).replace(b"\r\n", b"\n")
        *events, self._buffer = self._buffer.split(_EVENT_BOUNDARY)
        return _extract_frames(events)

    def flush(self) -> List[bytes]:
        """Return whatever is left as a final frame (end of stream)."""
        tail, self._buffer = self._buffer, b""
        return _extract_frames([tail])

    def reset(self) -> None:
        self._buffer = b""


def _extract_frames(events: List[bytes]) -> List[bytes]:
    frames = []
    for event in events:
        data = _event_data(event)
        if data:
            frames.append(data)
    return frames


def _event_data(event: bytes) -> bytes:
    lines = []
    for line in event.split(b"\n"):
        if line.startswith(_DATA):
            value = line[len(_DATA):]
            if value.startswith(b" "):
                value = value[1:]
            lines.append(value)
        elif not line.strip() or line.startswith(b":"):
            # Blank line or SSE comment (keep-alive)
            continue
        elif line.startswith(_IGNORED_FIELDS):
            continue
        else:
            # Unprefixed payload line; servers occasionally omit the field name
            lines.append(line)
    return b"\n".join(lines).strip()
