from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ..errors import ChatSDKError


class GenerationResponse(BaseModel):
    """Complete reply from a single-shot request."""
    text: str
    model: str
    provider: str = "deepseek"
    usage: Dict[str, Any] = Field(default_factory=dict)
    finish_reason: Optional[str] = None


@dataclass(frozen=True)
class SendResult:
    """Outcome of a single-shot request: Success(text) or Failure(error)."""

    text: Optional[str] = None
    error: Optional[ChatSDKError] = None
    response: Optional[GenerationResponse] = None

    @classmethod
    def success(cls, response: GenerationResponse) -> "SendResult":
        return cls(text=response.text, response=response)

    @classmethod
    def failure(cls, error: ChatSDKError) -> "SendResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Return the reply text, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.text or ""
