"""
Exception types raised by the DeepSeek chat SDK.

Configuration and transport errors are always surfaced to the caller.
Frame decode and response shape errors inside a stream are logged and
the offending frame is dropped; for single-shot calls a shape error is
surfaced as a failure.
"""

from typing import Optional


class ChatSDKError(Exception):
    """Base class for all SDK errors."""


class ConfigurationError(ChatSDKError):
    """Raised when the client is misconfigured (e.g. no API key).

    Always raised before any request is issued.
    """


class ProviderError(ChatSDKError):
    """
    Base exception for errors coming back from the completion endpoint.

    Attributes:
        message: Error message
        provider: Provider name
        status_code: HTTP status code if applicable
        retry_after: Seconds the server asked us to wait, if any
        is_retryable: Whether a retry could succeed (informational only)
        original_error: The original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        provider: str = "deepseek",
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.retry_after = retry_after
        self.is_retryable = False
        self.original_error: Optional[BaseException] = None
        self.error_category = None  # set by ErrorMapper


class TransportError(ProviderError):
    """Connection failure, timeout or non-success HTTP status."""


class ResponseShapeError(ProviderError):
    """Well-formed JSON that lacks the fields we need."""


class FrameDecodeError(ChatSDKError):
    """A single stream frame could not be decoded."""

    def __init__(self, reason: str, frame: str = ""):
        super().__init__(f"{reason}: {frame!r}" if frame else reason)
        self.reason = reason
        self.frame = frame
