"""Shared pytest fixtures for DeepSeek chat SDK tests."""

import httpx
import pytest

from deepseek_chat_sdk.config import ClientConfig
from deepseek_chat_sdk.models import ConversationMessage, TurnRole
from deepseek_chat_sdk.providers.deepseek import DeepSeekProvider


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end tests against recorded or live streams")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep real credentials and .env files out of the tests."""
    for key in ("DEEPSEEK_API_KEY", "DEEPSEEK_BASE_URL", "DEEPSEEK_MODEL", "DEEPSEEK_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def client_config():
    """Configuration with a test API key."""
    return ClientConfig(api_key="test-key")


@pytest.fixture
def make_provider(client_config):
    """Build a provider whose HTTP client is backed by a MockTransport handler."""
    def _make(handler, config=None):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return DeepSeekProvider(config or client_config, http_client=http_client)
    return _make


@pytest.fixture
def sample_conversation_messages():
    """Sample conversation messages."""
    return [
        ConversationMessage(role=TurnRole.SYSTEM, content="You are a helpful assistant."),
        ConversationMessage(role=TurnRole.USER, content="What is the weather like?"),
        ConversationMessage(role=TurnRole.ASSISTANT, content="I don't have access to real-time weather data."),
        ConversationMessage(role=TurnRole.USER, content="Then tell me a joke."),
    ]
