"""Unit tests for structured provider logging."""

import logging

import pytest

from deepseek_chat_sdk.observability import ProviderLogger

LOGGER_NAME = "deepseek_chat_sdk.providers.deepseek"


@pytest.fixture
def provider_logger():
    return ProviderLogger("deepseek")


def test_fields_prefix_message(provider_logger, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    provider_logger.info("Hello", model="deepseek-chat", request_id="abc", chunks=3, skipped=None)

    assert caplog.records[-1].getMessage() == (
        "[provider=deepseek model=deepseek-chat request_id=abc chunks=3] Hello"
    )


def test_debug_is_filtered_by_level(provider_logger, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    provider_logger.debug("Received chunk", size=10)
    assert caplog.records == []


def test_error_fields(provider_logger, caplog):
    caplog.set_level(logging.ERROR, logger=LOGGER_NAME)

    provider_logger.error("Stream failed", error=ValueError("bad"))

    message = caplog.records[-1].getMessage()
    assert "error_type=ValueError" in message
    assert "error_msg=bad" in message


def test_track_request_success(provider_logger, caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)

    with provider_logger.track_request("generate", "deepseek-chat", request_id="r1") as info:
        assert info["request_id"] == "r1"

    messages = [r.getMessage() for r in caplog.records]
    assert "Starting generate request" in messages[0]
    assert "Completed generate request" in messages[-1]
    assert "duration_ms=" in messages[-1]


def test_track_request_failure(provider_logger, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    with pytest.raises(RuntimeError):
        with provider_logger.track_request("generate", "deepseek-chat"):
            raise RuntimeError("boom")

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert "Failed generate request" in record.getMessage()
    assert "error_msg=boom" in record.getMessage()


def test_usage_omits_zero_cache_hits(provider_logger, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    provider_logger.log_usage({"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5,
                               "prompt_cache_hit_tokens": 0}, "deepseek-chat", "r2")

    message = caplog.records[-1].getMessage()
    assert "total_tokens=5" in message
    assert "cache_hit_tokens" not in message


def test_new_request_id():
    first, second = ProviderLogger.new_request_id(), ProviderLogger.new_request_id()
    assert len(first) == 8
    assert first != second
