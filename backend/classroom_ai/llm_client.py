from __future__ import annotations
import logging
import httpx
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence
from pydantic import ValidationError
from .errors import ConfigurationError
from .schemas import ChatMessage, ChatResponse
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LLMConfig:
	api_key: Optional[str]
	base_url: str
	default_model: str
	timeout: float = 30

	@classmethod
	def from_settings(cls, s: Optional[Settings] = None) -> "LLMConfig":
		s = s or default_settings
		return cls(
			api_key=s.openai_api_key,
			base_url=s.openai_base_url,
			default_model=s.openai_model,
			timeout=s.llm_timeout_seconds,
		)


class LLMGateway:
	"""Single chokepoint for chat-completion requests.

	One synchronous POST per call, no retries. Any transport or API failure is
	logged and reported as ``None``; a missing credential raises ``ConfigurationError``.
	"""

	def __init__(self, config: LLMConfig, *, client: Optional[httpx.Client] = None) -> None:
		if not config.api_key:
			raise ConfigurationError("OPENAI_API_KEY is not configured")
		self.config = config
		self._headers = {
			"Authorization": f"Bearer {config.api_key}",
			"Content-Type": "application/json",
		}
		self._client = client or httpx.Client(timeout=config.timeout)

	@property
	def default_model(self) -> str:
		return self.config.default_model

	def complete(self, model: str, messages: Sequence[ChatMessage], *, context: str = "llm") -> Optional[ChatResponse]:
		payload: Dict[str, Any] = {
			"model": model,
			"messages": [m.model_dump() for m in messages],
		}
		try:
			r = self._client.post(self.config.base_url, headers=self._headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			logger.error("[%s] chat completion failed with HTTP %s: %s", context, http_err.response.status_code, http_err.response.text[:500])
			return None
		except httpx.RequestError as net_err:
			logger.error("[%s] chat completion request error: %s", context, net_err)
			return None
		try:
			response = ChatResponse.model_validate(r.json())
		except (ValueError, ValidationError) as parse_err:
			logger.error("[%s] unexpected chat completion body: %s", context, parse_err)
			return None
		if not response.usable:
			logger.error("[%s] chat completion returned no choices", context)
			return None
		return response

	def close(self) -> None:
		self._client.close()


def response_text(response: Optional[ChatResponse]) -> Optional[str]:
	if response is None or not response.usable:
		return None
	return response.first_content()
