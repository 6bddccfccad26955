"""Completion provider client built on the OpenAI SDK.

One call per chat request: no retries, no streaming, explicit timeout.
Provider failures that carry an HTTP status become ``ProviderError`` so the
API layer can echo the provider's status and message; everything else
propagates unchanged and is reported as an internal error.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx
import openai
from openai import AsyncOpenAI

from fee_chat.agent.config import ChatConfig

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Sorry, I couldn't generate a response."
REMAINING_TOKENS_HEADER = "x-ratelimit-remaining-tokens"


@dataclass(eq=False)
class ProviderError(Exception):
    """Raised when the completion provider answers with an error status."""

    message: str
    status_code: int = 500

    def __str__(self) -> str:
        return self.message


def _provider_message(error: openai.APIStatusError) -> str:
    """Pull the human-readable message out of a provider error body."""
    body = error.body
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return error.message


class CompletionService:
    """Thin wrapper around the chat completions endpoint.

    Args:
        config: Model, sampling and timeout settings.
        http_client: Optional preconfigured ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        config: ChatConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def complete(self, messages: list[dict[str, Any]]) -> str:
        """Request one completion and return the first choice's text.

        Args:
            messages: Chat messages (system and user turns).

        Returns:
            The stripped reply, or ``FALLBACK_REPLY`` if the provider
            returned no content.

        Raises:
            ProviderError: If the provider responded with an error status.
        """
        try:
            raw = await self._client.chat.completions.with_raw_response.create(
                model=self._config.model_name,
                messages=messages,
                max_tokens=self._config.max_tokens,
                temperature=self._config.temperature,
            )
        except openai.APIStatusError as e:
            logger.error(
                f"Completion provider error: status={e.status_code} "
                f"type={getattr(e, 'type', None)} code={getattr(e, 'code', None)}"
            )
            raise ProviderError(_provider_message(e), status_code=e.status_code) from e

        remaining = raw.headers.get(REMAINING_TOKENS_HEADER)
        if remaining is not None:
            logger.debug(f"Remaining tokens: {remaining}")

        completion = raw.parse()
        if not completion.choices:
            return FALLBACK_REPLY

        content = completion.choices[0].message.content
        return content.strip() if content and content.strip() else FALLBACK_REPLY

    async def aclose(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self._client.close()
