from .adapter import DeepSeekProvider
from .payloads import build_chat_payload, build_headers, parse_chat_payload

__all__ = ["DeepSeekProvider", "build_chat_payload", "build_headers", "parse_chat_payload"]
