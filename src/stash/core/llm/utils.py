"""Typed views over raw provider response bodies.

Each provider nests the generated text differently.  Rather than walk
untyped dicts at the call site, a response body is decoded once into one
of three small variants, each of which knows where its text lives.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from .config import AIProvider


@dataclass(frozen=True)
class GoogleResponse:
    """``generateContent`` body: text lives in ``candidates[0].content.parts[*].text``."""

    parts: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, root: dict[str, Any]) -> GoogleResponse:
        candidates = root.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            return cls()
        content = candidates[0].get("content")
        if not isinstance(content, dict):
            return cls()
        return cls(parts=_text_fields(content.get("parts")))

    @property
    def text(self) -> str | None:
        return self.parts[0] if self.parts else None


@dataclass(frozen=True)
class OpenAIResponse:
    """Chat completions body: text lives in ``choices[0].message.content``."""

    content: str | None = None

    @classmethod
    def from_json(cls, root: dict[str, Any]) -> OpenAIResponse:
        choices = root.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return cls()
        message = choices[0].get("message")
        if not isinstance(message, dict):
            return cls()
        content = message.get("content")
        return cls(content=content if isinstance(content, str) else None)

    @property
    def text(self) -> str | None:
        return self.content


@dataclass(frozen=True)
class AnthropicResponse:
    """Messages body: text lives in the first ``content[*].text`` block."""

    blocks: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, root: dict[str, Any]) -> AnthropicResponse:
        return cls(blocks=_text_fields(root.get("content")))

    @property
    def text(self) -> str | None:
        return self.blocks[0] if self.blocks else None


ProviderResponse = GoogleResponse | OpenAIResponse | AnthropicResponse

_RESPONSE_TYPES: dict[AIProvider, type[GoogleResponse] | type[OpenAIResponse] | type[AnthropicResponse]] = {
    AIProvider.GOOGLE: GoogleResponse,
    AIProvider.OPENAI: OpenAIResponse,
    AIProvider.ANTHROPIC: AnthropicResponse,
}


def _text_fields(items: Any) -> list[str]:
    if not isinstance(items, list):
        return []
    return [item["text"] for item in items if isinstance(item, dict) and isinstance(item.get("text"), str)]


def decode_response(provider: AIProvider, raw: bytes | str) -> ProviderResponse | None:
    """Decode a raw response body into the variant for *provider*.

    Returns None when the body is not a JSON object.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="ignore")
    try:
        root = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"{provider.display_name} response is not valid JSON: {e}")
        return None
    if not isinstance(root, dict):
        logger.warning(f"{provider.display_name} response is not a JSON object")
        return None
    return _RESPONSE_TYPES[provider].from_json(root)


def extract_text_from_response(response: ProviderResponse | None, log_failures: bool = False) -> str | None:
    """Return the generated text carried by a decoded response, if any."""
    text = response.text if response is not None else None
    if text is None and log_failures:
        logger.warning(f"Empty response extraction. Type: {type(response).__name__}, Value: {repr(response)[:500]}")
    return text
