"""
Dependency-injected secrets management.

Secrets are resolved through a chain of providers. Each provider implements
the SecretProvider protocol. The SecretsManager checks providers in order,
returning the first non-empty result.

Usage:
    from stash.core.secrets import SecretsManager, EnvProvider, KeyringProvider

    manager = SecretsManager(providers=[
        KeyringProvider("com.stash.app"),
        EnvProvider(""),
    ])

    api_key = manager.get("google_api_key")   # keychain first, then $GOOGLE_API_KEY
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml
from loguru import logger

DEFAULT_KEYRING_SERVICE = "com.stash.app"

# ---------------------------------------------------------------------------
# Provider protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class SecretProvider(Protocol):
    """Interface for secret providers. Implement this to add new secret sources."""

    def get(self, key_path: str) -> str | None:
        """Return a secret value for the given dot-notation key, or None."""
        ...


# ---------------------------------------------------------------------------
# Built-in providers
# ---------------------------------------------------------------------------


class EnvProvider:
    """
    Read secrets from environment variables.

    Maps dot-notation keys to env vars:
        "google_api_key" -> PREFIX_GOOGLE_API_KEY
        "ai.google_api_key" -> PREFIX_AI__GOOGLE_API_KEY

    With an empty prefix the key maps straight to the conventional
    variable name (``GOOGLE_API_KEY``).
    """

    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def get(self, key_path: str) -> str | None:
        env_key = self.prefix + key_path.replace(".", "__").upper()
        return os.environ.get(env_key)


class YamlFileProvider:
    """
    Read secrets from a YAML file.

    Expected format:
        google_api_key: "AIza..."
        anthropic_api_key: "sk-ant-..."

    Nested keys are addressed with dots (``ai.google_api_key``).
    """

    def __init__(self, path: str | Path):
        self._path = Path(path).expanduser()
        self._data: dict | None = None

    def _load(self) -> dict:
        if self._data is None:
            if self._path.exists():
                try:
                    with open(self._path, encoding="utf-8") as f:
                        data = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.warning(f"Could not load secrets from {self._path}: {e}")
                    data = {}
                self._data = data if isinstance(data, dict) else {}
            else:
                self._data = {}
        return self._data

    def get(self, key_path: str) -> str | None:
        current: Any = self._load()
        for part in key_path.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return str(current) if current is not None else None


class KeyringProvider:
    """
    Read secrets from the platform secret store (macOS Keychain, Windows
    Credential Locker, Secret Service on Linux) through ``keyring``.

    The key path is used verbatim as the account name under ``service``.
    """

    def __init__(self, service: str = DEFAULT_KEYRING_SERVICE):
        self.service = service
        self._backend = None

    def _get_backend(self):
        if self._backend is None:
            try:
                import keyring

                self._backend = keyring
            except ImportError:
                raise ImportError("Install with: pip install keyring")
        return self._backend

    def get(self, key_path: str) -> str | None:
        try:
            return self._get_backend().get_password(self.service, key_path)
        except Exception as e:
            logger.debug(f"Keyring lookup failed for {key_path}: {e}")
            return None


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------


class SecretsManager:
    """
    Chain-of-responsibility secrets manager.

    Queries providers in order, returning the first non-empty result.
    """

    def __init__(self, providers: list[SecretProvider] | None = None):
        self._providers: list[SecretProvider] = providers or [EnvProvider()]

    def get(self, key_path: str, default: str | None = None) -> str | None:
        """
        Get a secret by dot-notation path.

        Queries each provider in order; empty strings count as missing so a
        blank keychain item does not shadow a real environment variable.
        """
        for provider in self._providers:
            value = provider.get(key_path)
            if value:
                return value
        return default


def build_secrets(
    keyring_service: str = DEFAULT_KEYRING_SERVICE,
    secrets_file: str | Path | None = None,
) -> SecretsManager:
    """Platform secret store first, then bare environment variables.

    When *secrets_file* is given, a YAML file is consulted last.
    """
    providers: list[SecretProvider] = [KeyringProvider(keyring_service), EnvProvider("")]
    if secrets_file:
        providers.append(YamlFileProvider(secrets_file))
    return SecretsManager(providers=providers)
