from __future__ import annotations

from ...config.constants import PROVIDER_NAME
from ...models.generation import GenerationResponse
from ...streaming.decoder import extract_message_text, parse_chat_completion


def parse_generation_response(body: bytes, model: str) -> GenerationResponse:
    """Turn a single-shot response body into a GenerationResponse.

    Raises ResponseShapeError when choices[0].message.content is missing.
    """
    completion = parse_chat_completion(body)
    text = extract_message_text(completion)
    first = completion.choices[0]
    return GenerationResponse(
        text=text,
        model=completion.model or model,
        provider=PROVIDER_NAME,
        usage=completion.usage or {},
        finish_reason=first.finish_reason,
    )
