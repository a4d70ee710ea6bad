"""
LLM provider clients and helpers.

Direct HTTP clients for Google, OpenAI and Anthropic completion APIs,
plus typed views over their response bodies.
"""

from .client import AnthropicClient, GoogleClient, OpenAIClient, ProviderClient, ProviderRequest, create_client
from .config import (
    DEFAULT_PROVIDER,
    PROVIDER_ENV_MAP,
    AIProvider,
    ProviderConfig,
    get_default_model,
    parse_provider,
)
from .utils import (
    AnthropicResponse,
    GoogleResponse,
    OpenAIResponse,
    ProviderResponse,
    decode_response,
    extract_text_from_response,
)

__all__ = [
    "DEFAULT_PROVIDER",
    "PROVIDER_ENV_MAP",
    "AIProvider",
    "AnthropicClient",
    "AnthropicResponse",
    "GoogleClient",
    "GoogleResponse",
    "OpenAIClient",
    "OpenAIResponse",
    "ProviderClient",
    "ProviderConfig",
    "ProviderRequest",
    "ProviderResponse",
    "create_client",
    "decode_response",
    "extract_text_from_response",
    "get_default_model",
    "parse_provider",
]
