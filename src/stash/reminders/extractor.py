"""Reminder extraction — free text in, title and due date out.

``extract_reminder`` never raises for provider trouble: a missing key,
a transport error, a timeout or an unreadable body all return None, and
the caller falls back to ``title=text, due_date=None``.
"""

from __future__ import annotations

from datetime import datetime

from loguru import logger

from stash.core.exceptions import LLMError
from stash.core.llm.client import ProviderClient, create_client
from stash.core.llm.config import ProviderConfig
from stash.core.secrets import SecretProvider

from .models import ParsedReminder
from .parser import parse_json_payload
from .prompt import SYSTEM_PROMPT, build_prompt
from .sync import blocking


def resolve_api_key(config: ProviderConfig, secrets: SecretProvider) -> str | None:
    """Look up the provider's key; blank values count as missing."""
    value = secrets.get(config.secret_key)
    return value.strip() if value and value.strip() else None


async def extract_reminder(
    text: str,
    config: ProviderConfig,
    secrets: SecretProvider,
    *,
    language: str = "en-US",
    now: datetime | None = None,
    timezone_name: str | None = None,
    client: ProviderClient | None = None,
) -> ParsedReminder | None:
    """Ask the configured provider for the reminder's title and due instant.

    Args:
        text: The user's free text, sent verbatim.
        config: Provider, model and secret key to use for this call.
        secrets: Where to look up the API key.
        language: BCP 47 tag describing the user's language.
        now: Reference instant for relative dates. Defaults to now.
        timezone_name: IANA zone for the prompt. Defaults to the local zone.
        client: Pre-built client (tests); built from *config* otherwise.

    Returns:
        The parsed reminder, or None when no AI-derived data is available.
    """
    if client is None:
        api_key = resolve_api_key(config, secrets)
        if api_key is None:
            logger.info(f"No API key for {config.provider.display_name}; skipping reminder extraction")
            return None
        client = create_client(config, api_key)

    prompt = build_prompt(text, now=now, timezone_name=timezone_name, language=language)

    try:
        reply = await client.complete(prompt, system=SYSTEM_PROMPT)
    except TimeoutError:
        logger.warning(f"{config.provider.display_name} did not answer within {config.timeout}s")
        return None
    except LLMError as e:
        logger.warning(f"Reminder extraction failed: {e}")
        return None
    except Exception as e:
        logger.warning(f"Unexpected error during reminder extraction: {e}")
        return None

    if not reply:
        logger.warning(f"{config.provider.display_name} returned no text")
        return None
    return parse_json_payload(reply, fallback_title=text)


extract_reminder_sync = blocking(extract_reminder)
