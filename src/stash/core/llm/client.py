"""
Provider clients — direct HTTP access to the three completion APIs.

Each client knows how to shape one provider's request (endpoint, auth,
body) and where that provider puts the generated text.  Requests go out
through ``urllib`` on a worker thread and are bounded by
``asyncio.wait_for`` so the awaiting caller is never blocked indefinitely.
"""

from __future__ import annotations

import asyncio
import json
import urllib.error
import urllib.parse
import urllib.request
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from loguru import logger

from stash.core.exceptions import LLMError

from .config import (
    ANTHROPIC_API_BASE,
    ANTHROPIC_MAX_TOKENS,
    ANTHROPIC_VERSION,
    GOOGLE_API_BASE,
    OPENAI_API_BASE,
    REQUEST_TIMEOUT,
    TEMPERATURE,
    AIProvider,
    ProviderConfig,
)
from .utils import decode_response, extract_text_from_response


@dataclass(frozen=True)
class ProviderRequest:
    """A fully-shaped POST request, ready to send."""

    url: str
    payload: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)

    def to_urllib(self) -> urllib.request.Request:
        headers = {"Content-Type": "application/json", **self.headers}
        data = json.dumps(self.payload).encode("utf-8")
        return urllib.request.Request(url=self.url, data=data, method="POST", headers=headers)


class ProviderClient(ABC):
    """Base class for a single-shot completion client."""

    provider: ClassVar[AIProvider]
    default_api_base: ClassVar[str]

    def __init__(self, model: str, api_key: str, timeout: float = REQUEST_TIMEOUT, api_base: str | None = None):
        if not api_key:
            raise ValueError("api_key is required")
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self.api_base = (api_base or self.default_api_base).rstrip("/")

    @abstractmethod
    def build_request(self, prompt: str, system: str | None = None) -> ProviderRequest:
        """Shape the provider-specific request for *prompt*."""

    def extract_raw_text(self, body: bytes | str) -> str | None:
        """Pull the generated text out of a raw response body."""
        return extract_text_from_response(decode_response(self.provider, body), log_failures=True)

    def _send(self, request: ProviderRequest) -> bytes:
        try:
            with urllib.request.urlopen(request.to_urllib(), timeout=self.timeout) as resp:
                return resp.read()
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="ignore") if hasattr(e, "read") else ""
            raise LLMError(f"{self.provider.display_name} API {e.code}: {body or e.reason}") from e
        except (urllib.error.URLError, OSError) as e:
            raise LLMError(f"{self.provider.display_name} API request failed: {e}") from e

    async def complete(self, prompt: str, system: str | None = None) -> str | None:
        """Send *prompt* and return the generated text, or None if the body carried none.

        Raises:
            LLMError: On HTTP or transport failure.
            TimeoutError: When no response arrives within ``self.timeout`` seconds.
        """
        request = self.build_request(prompt, system=system)
        logger.debug(f"{self.provider.display_name}: POST model={self.model} timeout={self.timeout}s")
        body = await asyncio.wait_for(asyncio.to_thread(self._send, request), timeout=self.timeout)
        return self.extract_raw_text(body)


class GoogleClient(ProviderClient):
    """Gemini ``generateContent``; the key travels in the query string."""

    provider = AIProvider.GOOGLE
    default_api_base = GOOGLE_API_BASE

    def build_request(self, prompt: str, system: str | None = None) -> ProviderRequest:
        query = urllib.parse.urlencode({"key": self.api_key})
        return ProviderRequest(
            url=f"{self.api_base}/models/{self.model}:generateContent?{query}",
            payload={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": TEMPERATURE,
                    "responseMimeType": "application/json",
                },
            },
        )


class OpenAIClient(ProviderClient):
    """Chat completions with JSON-object response format and bearer auth."""

    provider = AIProvider.OPENAI
    default_api_base = OPENAI_API_BASE

    def build_request(self, prompt: str, system: str | None = None) -> ProviderRequest:
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return ProviderRequest(
            url=f"{self.api_base}/chat/completions",
            headers={"Authorization": f"Bearer {self.api_key}"},
            payload={
                "model": self.model,
                "temperature": TEMPERATURE,
                "response_format": {"type": "json_object"},
                "messages": messages,
            },
        )


class AnthropicClient(ProviderClient):
    """Messages API with ``x-api-key`` and a pinned API version header."""

    provider = AIProvider.ANTHROPIC
    default_api_base = ANTHROPIC_API_BASE

    def build_request(self, prompt: str, system: str | None = None) -> ProviderRequest:
        payload: dict[str, Any] = {
            "model": self.model,
            "max_tokens": ANTHROPIC_MAX_TOKENS,
            "temperature": TEMPERATURE,
        }
        if system:
            payload["system"] = system
        payload["messages"] = [{"role": "user", "content": prompt}]
        return ProviderRequest(
            url=f"{self.api_base}/messages",
            headers={"x-api-key": self.api_key, "anthropic-version": ANTHROPIC_VERSION},
            payload=payload,
        )


_CLIENTS: dict[AIProvider, type[ProviderClient]] = {
    AIProvider.GOOGLE: GoogleClient,
    AIProvider.OPENAI: OpenAIClient,
    AIProvider.ANTHROPIC: AnthropicClient,
}


def create_client(config: ProviderConfig, api_key: str) -> ProviderClient:
    """Build the client for ``config.provider``."""
    return _CLIENTS[config.provider](model=config.model, api_key=api_key, timeout=config.timeout)
