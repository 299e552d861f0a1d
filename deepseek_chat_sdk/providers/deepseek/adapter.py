import json
from typing import Any, AsyncGenerator, Dict, List, Optional, Union

import httpx

from ...config.constants import DEFAULT_JSON_SYSTEM_PROMPT, JSON_OBJECT_FORMAT, PROVIDER_NAME
from ...config.settings import ClientConfig, load_config
from ...errors import ProviderError, ResponseShapeError
from ...models.conversation_types import ConversationMessage
from ...models.generation import GenerationResponse, SendResult
from ...observability.logging import ProviderLogger
from ...streaming.session import StreamSession
from ..errors import ErrorMapper
from .parsers import parse_generation_response
from .payloads import build_chat_payload, build_headers

logger = ProviderLogger(PROVIDER_NAME)

Messages = Union[str, List[Union[ConversationMessage, Dict[str, str]]]]


def _as_history(messages: Messages) -> List[Any]:
    # A bare string is a one-turn conversation
    if isinstance(messages, str):
        return [ConversationMessage.user(messages)]
    return list(messages)


class DeepSeekProvider:
    """DeepSeek chat completions over raw HTTP.

    The API key is checked when the provider is built, so a missing
    credential fails before any request is made. Each call to stream()
    returns an independent StreamSession with its own framing state; the
    underlying httpx.AsyncClient (and its connection pool) is shared.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config if config is not None else load_config()
        self._api_key = self.config.require_api_key()
        self._client: Optional[httpx.AsyncClient] = http_client
        self._owns_client = http_client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout)
            self._owns_client = True
        return self._client

    @property
    def model(self) -> str:
        return self.config.model

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "DeepSeekProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def stream(self, messages: Messages, request_id: Optional[str] = None) -> StreamSession:
        """
        Start a streaming completion.

        No request is sent until the returned session is iterated.

        Args:
            messages: Conversation history (or a single user prompt)
            request_id: Optional request ID for log correlation

        Returns:
            StreamSession yielding text fragments in arrival order
        """
        payload = build_chat_payload(_as_history(messages), self.model, stream=True)
        return StreamSession(
            self.client,
            self.config.completions_url,
            payload,
            build_headers(self._api_key),
            model=self.model,
            logger=logger,
            request_id=request_id,
        )

    async def generate_stream(self, messages: Messages) -> AsyncGenerator[str, None]:
        """Yield text fragments; closing this generator cancels the request."""
        async with self.stream(messages) as session:
            async for text in session:
                yield text

    async def generate(
        self,
        messages: Messages,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> GenerationResponse:
        """
        Single-shot completion.

        Args:
            messages: Conversation history (or a single user prompt)
            response_format: Optional structured-output hint, e.g.
                {"type": "json_object"}

        Returns:
            GenerationResponse with the complete assistant reply

        Raises:
            TransportError: Network failure, timeout or non-2xx status
            ResponseShapeError: The response lacks choices[0].message.content
        """
        payload = build_chat_payload(
            _as_history(messages), self.model, stream=False, response_format=response_format
        )
        with logger.track_request("generate", self.model) as request_info:
            try:
                response = await self.client.post(
                    self.config.completions_url,
                    json=payload,
                    headers=build_headers(self._api_key),
                )
            except httpx.HTTPError as e:
                raise ErrorMapper.map_transport_error(e) from e

            if not response.is_success:
                raise ErrorMapper.map_status_error(response)

            logger.debug(
                "Received response",
                model=self.model,
                request_id=request_info['request_id'],
                size=len(response.content),
            )
            result = parse_generation_response(response.content, self.model)

            if result.usage:
                logger.log_usage(result.usage, self.model, request_info['request_id'])
            return result

    async def send_once(
        self,
        messages: Messages,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> SendResult:
        """Like generate(), but report failure as a value instead of raising."""
        try:
            response = await self.generate(messages, response_format=response_format)
        except ProviderError as e:
            return SendResult.failure(e)
        return SendResult.success(response)

    async def generate_structured(
        self,
        prompt: str,
        system_prompt: str = DEFAULT_JSON_SYSTEM_PROMPT,
    ) -> GenerationResponse:
        """Ask for a JSON object reply (response_format json_object)."""
        messages = [
            ConversationMessage.system(system_prompt),
            ConversationMessage.user(prompt),
        ]
        return await self.generate(messages, response_format=JSON_OBJECT_FORMAT)

    async def generate_json(
        self,
        prompt: str,
        system_prompt: str = DEFAULT_JSON_SYSTEM_PROMPT,
    ) -> Dict[str, Any]:
        """Structured request whose reply is parsed into a dict.

        Raises:
            ResponseShapeError: The reply is not a JSON object
        """
        response = await self.generate_structured(prompt, system_prompt=system_prompt)
        try:
            data = json.loads(response.text)
        except json.JSONDecodeError as e:
            raise ResponseShapeError(f"reply is not valid JSON: {e.msg}") from e
        if not isinstance(data, dict):
            raise ResponseShapeError("reply is not a JSON object")
        return data
