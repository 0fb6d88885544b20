"""
Anthropic Messages API provider for code complexity analysis.

Plain-text completions only; callers pick the model and token budget.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class AnthropicAPIError(Exception):
    """Exception for Anthropic API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class MissingAPIKeyError(ValueError):
    """Raised when a model-backed call is made without an API key."""


class AnthropicProvider:
    """
    Anthropic provider for short text completions.

    Owns one lazily created ``httpx.AsyncClient``; close it with ``close()``
    or use the provider as an async context manager.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Anthropic provider.

        Raises:
            MissingAPIKeyError: If ANTHROPIC_API_KEY not set
        """
        self.settings = settings or get_settings()
        if not self.settings.has_api_key:
            raise MissingAPIKeyError(
                "Please set your Anthropic API key (ANTHROPIC_API_KEY)"
            )
        self.api_key = self.settings.ANTHROPIC_API_KEY
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.REQUEST_TIMEOUT_SECONDS),
                headers={
                    "x-api-key": self.api_key,
                    "anthropic-version": self.settings.ANTHROPIC_VERSION,
                    "Content-Type": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
        reraise=True,
    )
    async def _make_request(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Make API request to the Messages endpoint.

        Args:
            payload: Request body

        Returns:
            API response dict
        """
        client = await self._get_client()
        url = self.settings.ANTHROPIC_BASE_URL

        response = await client.post(url, json=payload)

        if response.status_code == 429:
            # Rate limit - wait and retry once
            logger.warning("Rate limited by Anthropic API, retrying once")
            await asyncio.sleep(2)
            response = await client.post(url, json=payload)

        if response.status_code != 200:
            error_detail = response.text
            try:
                error_json = response.json()
            except ValueError:
                error_json = None
            if isinstance(error_json, dict):
                error = error_json.get("error")
                if isinstance(error, dict):
                    error_detail = error.get("message", error_detail)
                elif isinstance(error, str):
                    error_detail = error
            raise AnthropicAPIError(
                f"API error ({response.status_code}): {error_detail}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise AnthropicAPIError(f"Unexpected response shape: body is not JSON ({e})")

    async def complete(self, prompt: str, model: str, max_tokens: int) -> str:
        """
        Get a text completion for a single user prompt.

        Args:
            prompt: User prompt
            model: Model name
            max_tokens: Completion budget

        Returns:
            Stripped text of the first content block

        Raises:
            AnthropicAPIError: On HTTP errors or an unexpected reply shape
        """
        payload = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

        try:
            response = await self._make_request(payload)
        except httpx.HTTPError as e:
            raise AnthropicAPIError(f"Request failed: {e}")

        try:
            return response["content"][0]["text"].strip()
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise AnthropicAPIError(f"Unexpected response shape: {e}")
