from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.services.exceptions import DownstreamServiceError, EmptyCompletionError

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """Single-shot client for an OpenAI-compatible chat-completion endpoint.

    No retries and no timeout override: every call is one fresh round trip
    with httpx's default timeout.
    """

    def __init__(
        self,
        url: str,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        api_key: str | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._api_key = api_key
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        else:
            logger.warning("No API key configured for the AI gateway; sending unauthenticated request")
        return headers

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        payload: Dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(self._url, json=payload, headers=self._headers())

        if not response.is_success:
            logger.error("AI gateway error %s: %s", response.status_code, response.text)
            raise DownstreamServiceError(
                "Failed to generate review", status_code=response.status_code
            )

        data = response.json()
        choices = data.get("choices") or []
        message = (choices[0].get("message") or {}) if choices else {}
        text = (message.get("content") or "").strip()
        if not text:
            logger.error("AI gateway returned no content: %s", response.text)
            raise EmptyCompletionError("Failed to generate review")
        return text
