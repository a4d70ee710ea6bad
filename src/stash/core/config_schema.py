"""Pydantic models for config validation.

Call ``Config.validated()`` to obtain a typed, frozen ``StashSettings``
snapshot.  Journal and extraction code receive this snapshot per call
instead of reading preferences from global state.
"""

from __future__ import annotations

import os
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from stash.core.llm.config import REQUEST_TIMEOUT, AIProvider, ProviderConfig, get_default_model, parse_provider
from stash.core.secrets import DEFAULT_KEYRING_SERVICE


class AppLanguage(StrEnum):
    SYSTEM = "system"
    EN_US = "en-US"
    PT_BR = "pt-BR"


def _system_language() -> str:
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var, "")
        if value:
            return AppLanguage.PT_BR.value if value.lower().startswith("pt") else AppLanguage.EN_US.value
    return AppLanguage.EN_US.value


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class JournalSettings(_Frozen):
    """Where the stash journal lives."""

    path: Path = Path("~/stash.txt").expanduser()

    @field_validator("path", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


class AISettings(_Frozen):
    """Reminder extraction provider selection."""

    provider: AIProvider = AIProvider.GOOGLE
    models: dict[str, str] = {}
    timeout: float = REQUEST_TIMEOUT
    language: AppLanguage = AppLanguage.SYSTEM
    timezone: str | None = None

    @field_validator("provider", mode="before")
    @classmethod
    def _known_provider(cls, v: Any) -> Any:
        return parse_provider(v)

    @field_validator("language", mode="before")
    @classmethod
    def _known_language(cls, v: Any) -> Any:
        try:
            return AppLanguage(v)
        except ValueError:
            return AppLanguage.SYSTEM

    def model_for(self, provider: AIProvider) -> str:
        return self.models.get(provider.value) or get_default_model(provider)


class ReminderSettings(_Frozen):
    """External reminder collaborator settings."""

    timeout: float = 8.0


class SecretsSettings(_Frozen):
    keyring_service: str = DEFAULT_KEYRING_SERVICE
    file: str | None = None


class LoggingSettings(_Frozen):
    """Where log records go.  ``file`` adds a rotating file next to stderr."""

    level: str = "WARNING"
    file: Path | None = None
    rotation: str = "10 MB"
    retention: str = "7 days"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("file", mode="before")
    @classmethod
    def _expand_file(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser() if v.strip() else None
        return v


class StashSettings(_Frozen):
    """Root configuration snapshot."""

    journal: JournalSettings = JournalSettings()
    ai: AISettings = AISettings()
    reminders: ReminderSettings = ReminderSettings()
    secrets: SecretsSettings = SecretsSettings()
    logging: LoggingSettings = LoggingSettings()

    def provider_config(self) -> ProviderConfig:
        """Provider, model and secret key for the currently selected backend."""
        provider = self.ai.provider
        return ProviderConfig(
            provider=provider,
            model=self.ai.model_for(provider),
            secret_key=provider.secret_key,
            timeout=self.ai.timeout,
        )

    def language_tag(self) -> str:
        """BCP 47 tag handed to the extraction prompt."""
        if self.ai.language is AppLanguage.SYSTEM:
            return _system_language()
        return self.ai.language.value
