"""
LLM Configuration — provider identifiers, default models and secret names.

Central configuration for the reminder extraction providers.  Change
defaults here to affect every module that talks to an AI provider.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class AIProvider(StrEnum):
    GOOGLE = "google"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"

    @property
    def display_name(self) -> str:
        return PROVIDER_DISPLAY_NAMES[self]

    @property
    def default_model(self) -> str:
        return get_default_model(self)

    @property
    def secret_key(self) -> str:
        """Account name in the platform secret store (``google_api_key`` etc.)."""
        return f"{self.value}_api_key"

    @property
    def env_var(self) -> str:
        return PROVIDER_ENV_MAP[self]


DEFAULT_PROVIDER = AIProvider.GOOGLE

# --- Default model names per provider ---

GOOGLE_MODEL = "gemini-3-flash-preview"
OPENAI_MODEL = "gpt-5.3"
ANTHROPIC_MODEL = "claude-opus-4-1"

# --- Endpoints ---

GOOGLE_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
OPENAI_API_BASE = "https://api.openai.com/v1"
ANTHROPIC_API_BASE = "https://api.anthropic.com/v1"
ANTHROPIC_VERSION = "2023-06-01"

# --- Request shaping ---

TEMPERATURE = 0.1
ANTHROPIC_MAX_TOKENS = 300
REQUEST_TIMEOUT = 12.0

PROVIDER_DISPLAY_NAMES: dict[AIProvider, str] = {
    AIProvider.GOOGLE: "Google",
    AIProvider.OPENAI: "OpenAI",
    AIProvider.ANTHROPIC: "Anthropic",
}

PROVIDER_ENV_MAP: dict[AIProvider, str] = {
    AIProvider.GOOGLE: "GOOGLE_API_KEY",
    AIProvider.OPENAI: "OPENAI_API_KEY",
    AIProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
}


@dataclass(frozen=True)
class ProviderConfig:
    """Read-only provider selection handed to the extractor on every call.

    Attributes:
        provider: Which backend to call.
        model: Model name as the provider's API expects it.
        secret_key: Lookup key for the API secret (``<provider>_api_key``).
        timeout: Upper bound, in seconds, for a single request.
    """

    provider: AIProvider
    model: str
    secret_key: str
    timeout: float = REQUEST_TIMEOUT

    @classmethod
    def for_provider(
        cls,
        provider: AIProvider | str,
        model: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> ProviderConfig:
        resolved = parse_provider(provider)
        return cls(
            provider=resolved,
            model=model or resolved.default_model,
            secret_key=resolved.secret_key,
            timeout=timeout,
        )


def get_default_model(provider: AIProvider | str) -> str:
    """Get the default model name for a provider."""
    model_map = {
        AIProvider.GOOGLE: GOOGLE_MODEL,
        AIProvider.OPENAI: OPENAI_MODEL,
        AIProvider.ANTHROPIC: ANTHROPIC_MODEL,
    }
    return model_map.get(parse_provider(provider), GOOGLE_MODEL)


def parse_provider(value: AIProvider | str | None) -> AIProvider:
    """Resolve a provider identifier, falling back to the default for unknown values."""
    if isinstance(value, AIProvider):
        return value
    try:
        return AIProvider((value or "").strip().lower())
    except ValueError:
        return DEFAULT_PROVIDER
