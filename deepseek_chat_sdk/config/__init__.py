"""Configuration for the DeepSeek chat SDK."""

from .constants import (
    CHAT_COMPLETIONS_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_JSON_SYSTEM_PROMPT,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT_SECONDS,
    JSON_OBJECT_FORMAT,
)
from .settings import ClientConfig, CredentialProvider, load_config

__all__ = [
    "ClientConfig",
    "CredentialProvider",
    "load_config",
    "CHAT_COMPLETIONS_PATH",
    "DEFAULT_BASE_URL",
    "DEFAULT_JSON_SYSTEM_PROMPT",
    "DEFAULT_MODEL",
    "DEFAULT_TIMEOUT_SECONDS",
    "JSON_OBJECT_FORMAT",
]
