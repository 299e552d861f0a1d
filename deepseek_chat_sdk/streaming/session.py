"""
Streaming session: one POST with stream=true, consumed as an async
iterator of text fragments.

    IDLE -> REQUESTING -> STREAMING -> COMPLETED | FAILED | CANCELLED

The request is only issued when iteration starts. Terminal states are
absorbing: the first terminal transition wins, later ones are ignored, and
no fragment is delivered after it.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, AsyncGenerator, Dict, List, Optional, Tuple

import httpx

from ..errors import FrameDecodeError, ResponseShapeError, TransportError
from ..models.streaming import SessionResult, SessionState
from ..observability.logging import ProviderLogger
from ..providers.errors import ErrorMapper
from .classifier import classify_frame
from .decoder import decode_delta, extract_delta_text
from .splitter import EventSplitter
from .types import StreamFrame

# Dropped frames are logged with at most this much of their text
_LOGGED_FRAME_CHARS = 200

# Returned by a read step when the underlying generator is exhausted
_EXHAUSTED = object()


class StreamSession:
    """Cancellable, non-restartable stream of assistant text fragments.

    Use as an async iterator; wrap in ``async with`` (or call ``aclose()``)
    to guarantee the HTTP response is released if the consumer stops
    early. Transport failures are raised from the iteration as
    TransportError after the session has been marked FAILED.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        payload: Dict[str, Any],
        headers: Dict[str, str],
        *,
        model: str,
        logger: ProviderLogger,
        request_id: Optional[str] = None,
    ) -> None:
        self._client = client
        self._url = url
        self._payload = payload
        self._headers = headers
        self.model = model
        self._logger = logger
        self.request_id = request_id or logger.new_request_id()

        self._splitter = EventSplitter()
        self._iterator: Optional[AsyncGenerator[str, None]] = None
        self._step: Optional[asyncio.Future] = None
        self._close_requested = False
        self._state = SessionState.IDLE
        self._result: Optional[SessionResult] = None

        self._start_time: Optional[float] = None
        self._chunks = 0
        self._fragments = 0
        self._total_chars = 0
        self._decode_errors = 0
        self._finish_reason: Optional[str] = None
        self._usage: Dict[str, Any] = {}

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def result(self) -> Optional[SessionResult]:
        """Terminal outcome, or None while the session is still running."""
        return self._result

    @property
    def done(self) -> bool:
        return self._state.is_terminal

    def __aiter__(self) -> "StreamSession":
        return self

    async def __anext__(self) -> str:
        if self._state.is_terminal:
            raise StopAsyncIteration
        if self._iterator is None:
            self._iterator = self._run()

        # Each read runs as its own task so aclose() from another task can interrupt it
        step = self._step = asyncio.ensure_future(self._advance())
        try:
            text = await step
        except asyncio.CancelledError:
            if self._close_requested:
                raise StopAsyncIteration from None
            await self._stop("cancelled by consumer")
            raise
        finally:
            if self._step is step:
                self._step = None

        if text is _EXHAUSTED or self._close_requested:
            raise StopAsyncIteration
        self._fragments += 1
        self._total_chars += len(text)
        return text

    async def __aenter__(self) -> "StreamSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Abandon the session and release the HTTP response.

        Safe to call from any task, including while another task is waiting
        for the next fragment; that waiter then sees the end of iteration.
        No-op once the session has reached a terminal state.
        """
        self._close_requested = True
        await self._stop("closed by consumer")

    async def collect(self) -> str:
        """Consume the whole stream and return the concatenated text."""
        parts: List[str] = []
        async for text in self:
            parts.append(text)
        return "".join(parts)

    async def _advance(self) -> object:
        try:
            return await self._iterator.__anext__()
        except StopAsyncIteration:
            return _EXHAUSTED

    async def _stop(self, reason: str) -> None:
        # Terminal state first, so nothing read after this point is delivered
        self._finish(SessionState.CANCELLED, reason)
        step = self._step
        if step is not None and not step.done():
            step.cancel()
            await asyncio.wait([step])
        if self._iterator is not None:
            await self._iterator.aclose()

    async def _run(self) -> AsyncGenerator[str, None]:
        self._transition(SessionState.REQUESTING)
        self._start_time = time.time()
        self._logger.debug(
            "Starting stream request",
            model=self.model,
            request_id=self.request_id,
            messages=len(self._payload.get("messages", [])),
        )

        try:
            async with self._client.stream(
                "POST", self._url, json=self._payload, headers=self._headers
            ) as response:
                if not response.is_success:
                    await response.aread()
                    raise ErrorMapper.map_status_error(response)

                async for chunk in response.aiter_bytes():
                    if self._state is SessionState.REQUESTING:
                        self._transition(SessionState.STREAMING)
                    self._chunks += 1
                    self._logger.debug(
                        "Received chunk",
                        model=self.model,
                        request_id=self.request_id,
                        size=len(chunk),
                    )

                    texts, saw_sentinel = self._process(self._splitter.feed(chunk))
                    for text in texts:
                        yield text
                    if saw_sentinel:
                        self._finish(SessionState.COMPLETED, "sentinel")
                        return

                # Body ended; a final frame may lack its trailing blank line
                texts, saw_sentinel = self._process(self._splitter.flush())
                for text in texts:
                    yield text
                self._finish(SessionState.COMPLETED, "sentinel" if saw_sentinel else "eof")

        except TransportError as e:
            self._finish(SessionState.FAILED, str(e), error=e)
            raise
        except httpx.HTTPError as e:
            mapped = ErrorMapper.map_transport_error(e)
            self._finish(SessionState.FAILED, str(mapped), error=mapped)
            raise mapped from e
        except (GeneratorExit, asyncio.CancelledError):
            self._finish(SessionState.CANCELLED, "cancelled by consumer")
            raise
        finally:
            self._splitter.reset()

    def _process(self, raw_frames: List[bytes]) -> Tuple[List[str], bool]:
        """Decode frames in order; stop at the sentinel.

        Returns the non-empty fragments and whether the sentinel was seen.
        A frame that fails to decode is logged and skipped without
        affecting the frames after it. Fragments are counted when they are
        handed to the consumer, not here.
        """
        texts = []
        for raw in raw_frames:
            frame = classify_frame(raw)
            if frame.is_sentinel:
                return texts, True
            text = self._decode(frame)
            if text:
                texts.append(text)
        return texts, False

    def _decode(self, frame: StreamFrame) -> Optional[str]:
        try:
            payload = decode_delta(frame)
        except FrameDecodeError as e:
            self._decode_errors += 1
            self._logger.warning(
                "Dropping undecodable frame",
                model=self.model,
                request_id=self.request_id,
                reason=e.reason,
                frame=e.frame[:_LOGGED_FRAME_CHARS],
            )
            return None

        # Usage and finish_reason may arrive on frames that carry no text
        if payload.usage:
            self._usage = dict(payload.usage)
        if payload.choices and payload.choices[0].finish_reason:
            self._finish_reason = payload.choices[0].finish_reason

        try:
            return extract_delta_text(payload)
        except ResponseShapeError as e:
            self._decode_errors += 1
            self._logger.debug(
                "Dropping frame without delta content",
                model=self.model,
                request_id=self.request_id,
                reason=e.message,
            )
            return None

    def _transition(self, state: SessionState) -> None:
        self._logger.debug(
            f"Session {self._state.value} -> {state.value}",
            model=self.model,
            request_id=self.request_id,
        )
        self._state = state

    def _finish(self, outcome: SessionState, reason: str, error: Optional[Exception] = None) -> None:
        if self._state.is_terminal:
            return
        self._transition(outcome)
        self._result = SessionResult(
            outcome=outcome,
            reason=reason,
            error=error,
            fragments=self._fragments,
            decode_errors=self._decode_errors,
            finish_reason=self._finish_reason,
            usage=self._usage,
        )

        if error is not None:
            self._logger.error(
                "Stream failed",
                model=self.model,
                request_id=self.request_id,
                fragments=self._fragments,
                error=error,
            )
        if self._usage:
            self._logger.log_usage(self._usage, self.model, self.request_id)
        if self._start_time is not None:
            self._logger.log_streaming_metrics(
                chunks=self._chunks,
                fragments=self._fragments,
                total_chars=self._total_chars,
                decode_errors=self._decode_errors,
                duration=time.time() - self._start_time,
                model=self.model,
                request_id=self.request_id,
                outcome=outcome.value,
            )
