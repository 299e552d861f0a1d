"""
Endpoint and environment constants.

The SDK talks to a single OpenAI-compatible provider. Everything here can
be overridden through ClientConfig or the environment variables below.
"""

PROVIDER_NAME = "deepseek"

DEFAULT_BASE_URL = "https://api.deepseek.com"
CHAT_COMPLETIONS_PATH = "/v1/chat/completions"
DEFAULT_MODEL = "deepseek-chat"
DEFAULT_TIMEOUT_SECONDS = 60.0

# Environment variables read by load_config()
API_KEY_ENV_VAR = "DEEPSEEK_API_KEY"
BASE_URL_ENV_VAR = "DEEPSEEK_BASE_URL"
MODEL_ENV_VAR = "DEEPSEEK_MODEL"
TIMEOUT_ENV_VAR = "DEEPSEEK_TIMEOUT"

# Server-sent events wire format
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

JSON_OBJECT_FORMAT = {"type": "json_object"}

DEFAULT_JSON_SYSTEM_PROMPT = (
    "You are a JSON data generator. Only return JSON that matches the "
    "requested structure, without any other text or explanation."
)
