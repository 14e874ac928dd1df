"""
OpenAI Chat Completions client.
Used by the chat relay to answer widget conversations.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from concierge.exceptions import UpstreamError

logger = logging.getLogger(__name__)

SERVICE = "openai"


class OpenAIChatClient:
    """Minimal async client for ``POST /chat/completions``."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.http_client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout, transport=transport
        )

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def complete(self, messages: List[Dict[str, Any]]) -> Optional[str]:
        """
        Send ``messages`` and return the first completion's text.

        Returns None when the provider answers without usable content
        (including error bodies). Raises UpstreamError when the provider
        cannot be reached or the body is not JSON.
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "temperature": self.temperature,
            "messages": messages,
        }

        try:
            response = await self.http_client.post(
                "/chat/completions", json=payload, headers=headers
            )
            data = response.json()
        except httpx.HTTPError as exc:
            logger.error(f"OpenAI API error: {exc}")
            raise UpstreamError(SERVICE, str(exc)) from exc
        except ValueError as exc:
            logger.error(f"OpenAI API returned invalid JSON: {exc}")
            raise UpstreamError(SERVICE, "invalid JSON body") from exc

        if response.is_error:
            logger.warning(f"OpenAI API status {response.status_code}: {data.get('error')}")

        choices = data.get("choices") or [{}]
        content = (choices[0].get("message") or {}).get("content")
        return content or None
