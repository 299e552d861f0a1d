"""
Structured logging for the SDK.

Records are plain stdlib log lines prefixed with key=value context:

    [provider=deepseek model=deepseek-chat request_id=1a2b3c4d] Streaming metrics ...

so a single streamed exchange can be followed by grepping its request_id.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


class ProviderLogger:
    """Structured logger bound to one provider name."""

    def __init__(self, provider_name: str):
        """
        Args:
            provider_name: Name of the provider (e.g., "deepseek")
        """
        self.provider = provider_name
        self.logger = logging.getLogger(f"deepseek_chat_sdk.providers.{provider_name}")

    def _format_message(self, message: str, **fields) -> str:
        parts = [f"provider={self.provider}"]
        parts.extend(f"{key}={value}" for key, value in fields.items() if value is not None)
        return f"[{' '.join(parts)}] {message}"

    def _log(self, level: int, message: str, model: Optional[str],
             request_id: Optional[str], fields: Dict[str, Any]) -> None:
        # Chunk-level debug records are frequent; skip formatting when filtered out
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, self._format_message(message, model=model, request_id=request_id, **fields))

    def debug(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, **fields):
        self._log(logging.DEBUG, message, model, request_id, fields)

    def info(self, message: str, model: Optional[str] = None,
             request_id: Optional[str] = None, **fields):
        self._log(logging.INFO, message, model, request_id, fields)

    def warning(self, message: str, model: Optional[str] = None,
                request_id: Optional[str] = None, **fields):
        self._log(logging.WARNING, message, model, request_id, fields)

    def error(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, error: Optional[BaseException] = None, **fields):
        """Log at ERROR; `error` is expanded into error_type and error_msg fields."""
        if error is not None:
            fields.update(error_type=type(error).__name__, error_msg=str(error))
        self._log(logging.ERROR, message, model, request_id, fields)

    @staticmethod
    def new_request_id() -> str:
        """Short correlation id shared by every record of one request."""
        return uuid.uuid4().hex[:8]

    @contextmanager
    def track_request(self, method: str, model: str,
                      request_id: Optional[str] = None) -> Iterator[Dict[str, Any]]:
        """
        Time a request and log its start, completion or failure.

        Args:
            method: Name of the operation (e.g., "generate")
            model: Model identifier sent with the request
            request_id: Optional request ID (generated if not provided)

        Yields:
            Dict with request_id, model, method and start_time
        """
        info = {
            'request_id': request_id or self.new_request_id(),
            'model': model,
            'method': method,
            'start_time': time.time(),
        }
        self.debug(f"Starting {method} request", model=model, request_id=info['request_id'])

        def elapsed_ms() -> int:
            return int((time.time() - info['start_time']) * 1000)

        try:
            yield info
        except Exception as e:
            self.error(
                f"Failed {method} request",
                model=model,
                request_id=info['request_id'],
                duration_ms=elapsed_ms(),
                error=e,
            )
            raise
        self.info(
            f"Completed {method} request",
            model=model,
            request_id=info['request_id'],
            duration_ms=elapsed_ms(),
        )

    def log_usage(self, usage: Dict[str, Any], model: str, request_id: str):
        """Log token counts reported by the server.

        DeepSeek reports context-cache hits as prompt_cache_hit_tokens; the
        field is omitted from the record when zero or absent.
        """
        self.info(
            "Token usage",
            model=model,
            request_id=request_id,
            prompt_tokens=usage.get('prompt_tokens', 0),
            completion_tokens=usage.get('completion_tokens', 0),
            total_tokens=usage.get('total_tokens', 0),
            cache_hit_tokens=usage.get('prompt_cache_hit_tokens') or None,
        )

    def log_streaming_metrics(self, chunks: int, fragments: int, total_chars: int,
                              decode_errors: int, duration: float,
                              model: str, request_id: str, outcome: str):
        """Summarize a finished stream session in one record."""
        rate = int(total_chars / duration) if duration > 0 else 0
        self.info(
            "Streaming metrics",
            model=model,
            request_id=request_id,
            outcome=outcome,
            chunks=chunks,
            fragments=fragments,
            total_chars=total_chars,
            decode_errors=decode_errors or None,
            duration_ms=int(duration * 1000),
            chars_per_second=rate,
        )
