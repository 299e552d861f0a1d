"""
Error mapping for the completion endpoint.

Converts httpx exceptions and non-success responses into TransportError
instances carrying status code, retry hint and a coarse category. The SDK
never retries on its own; is_retryable is for callers that want to.
"""

from enum import Enum
from typing import Optional

import httpx

from ..errors import TransportError
from ..config.constants import PROVIDER_NAME


class ErrorCategory(Enum):
    """Coarse error categories used for logging."""
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"
    SERVER_ERROR = "server_error"
    NETWORK = "network"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


class ErrorMapper:
    """Maps transport-level failures to TransportError."""

    # Common HTTP status codes that indicate retryable errors
    RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

    @staticmethod
    def categorize_status(status_code: int) -> ErrorCategory:
        if status_code in (401, 403):
            return ErrorCategory.AUTHENTICATION
        if status_code == 429:
            return ErrorCategory.RATE_LIMIT
        if status_code >= 500:
            return ErrorCategory.SERVER_ERROR
        if status_code >= 400:
            return ErrorCategory.VALIDATION
        return ErrorCategory.UNKNOWN

    @staticmethod
    def get_retry_after(response: httpx.Response) -> Optional[float]:
        """
        Extract the Retry-After header value if present.

        Args:
            response: The HTTP response

        Returns:
            Optional[float]: Seconds to wait before retry, or None
        """
        retry_after = response.headers.get('Retry-After')
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass
        return None

    @staticmethod
    def extract_error_message(response: httpx.Response) -> str:
        """Pull the provider's error message out of an error body.

        The body must already have been read. Falls back to the raw text,
        then to the reason phrase.
        """
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            error = data.get('error')
            if isinstance(error, dict) and error.get('message'):
                return str(error['message'])
            if isinstance(error, str) and error:
                return error
            if data.get('message'):
                return str(data['message'])
        text = response.text.strip()
        return text[:500] if text else response.reason_phrase

    @staticmethod
    def map_status_error(response: httpx.Response) -> TransportError:
        """
        Map a non-2xx response to TransportError.

        Args:
            response: The HTTP response (body already read)

        Returns:
            TransportError with status code and category
        """
        status_code = response.status_code
        category = ErrorMapper.categorize_status(status_code)
        detail = ErrorMapper.extract_error_message(response)

        error = TransportError(
            message=f"DeepSeek API error: HTTP {status_code}: {detail}",
            provider=PROVIDER_NAME,
            status_code=status_code,
            retry_after=ErrorMapper.get_retry_after(response)
        )
        error.is_retryable = status_code in ErrorMapper.RETRYABLE_STATUS_CODES
        error.error_category = category
        return error

    @staticmethod
    def map_transport_error(error: Exception) -> TransportError:
        """
        Map an httpx exception raised while sending or reading to TransportError.

        Args:
            error: The httpx exception

        Returns:
            TransportError with the original error attached
        """
        if isinstance(error, httpx.HTTPStatusError):
            mapped = ErrorMapper.map_status_error(error.response)
            mapped.original_error = error
            return mapped

        if isinstance(error, httpx.TimeoutException):
            category = ErrorCategory.TIMEOUT
            message = f"DeepSeek API error: request timed out ({type(error).__name__})"
        elif isinstance(error, httpx.TransportError):
            category = ErrorCategory.NETWORK
            message = f"DeepSeek API error: connection failed: {error}"
        else:
            category = ErrorCategory.UNKNOWN
            message = f"DeepSeek API error: {error}"

        mapped = TransportError(message=message, provider=PROVIDER_NAME)
        mapped.is_retryable = category in (ErrorCategory.TIMEOUT, ErrorCategory.NETWORK)
        mapped.error_category = category
        mapped.original_error = error
        return mapped
