"""Client configuration.

A ClientConfig is built once (usually from the environment) and passed to
each provider explicitly; there is no process-wide configuration holder.
"""

import math
import os
from typing import Callable, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import ConfigurationError
from .constants import (
    API_KEY_ENV_VAR,
    BASE_URL_ENV_VAR,
    CHAT_COMPLETIONS_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT_SECONDS,
    MODEL_ENV_VAR,
    TIMEOUT_ENV_VAR,
)

CredentialProvider = Callable[[], Optional[str]]


class ClientConfig(BaseModel):
    """Connection settings for the completion endpoint."""

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = Field(None, description="Static bearer credential")
    base_url: str = Field(DEFAULT_BASE_URL, description="Provider base URL")
    model: str = Field(DEFAULT_MODEL, description="Model identifier sent with each request")
    timeout: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0, description="Request timeout in seconds")

    @field_validator("base_url")
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}{CHAT_COMPLETIONS_PATH}"

    def require_api_key(self) -> str:
        """Return the API key or raise ConfigurationError if it is missing."""
        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError(
                f"DeepSeek API key not configured; set {API_KEY_ENV_VAR} "
                "or pass api_key explicitly"
            )
        return self.api_key.strip()


def _getenv(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


def load_config(
    credential_provider: Optional[CredentialProvider] = None,
    env_file: Optional[str] = None,
) -> ClientConfig:
    """
    Build a ClientConfig from the environment.

    Args:
        credential_provider: Optional callable returning the API key. When
            given it takes precedence over DEEPSEEK_API_KEY.
        env_file: Optional path to a .env file (defaults to the nearest
            .env found from the working directory upwards)

    Returns:
        ClientConfig. The API key may still be None here; providers reject
        a missing key at construction time.
    """
    # Keep secrets in a local .env; real environment variables win.
    # Without an explicit file, look for .env from the working directory up.
    if env_file is None:
        env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(dotenv_path=env_file, override=False)

    if credential_provider is not None:
        api_key = credential_provider()
    else:
        api_key = _getenv(API_KEY_ENV_VAR)

    try:
        timeout = float(_getenv(TIMEOUT_ENV_VAR, str(DEFAULT_TIMEOUT_SECONDS)))
        if not math.isfinite(timeout) or timeout <= 0:
            raise ValueError(timeout)
    except ValueError:
        timeout = DEFAULT_TIMEOUT_SECONDS

    return ClientConfig(
        api_key=api_key,
        base_url=_getenv(BASE_URL_ENV_VAR, DEFAULT_BASE_URL),
        model=_getenv(MODEL_ENV_VAR, DEFAULT_MODEL),
        timeout=timeout,
    )
