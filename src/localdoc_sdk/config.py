"""SDK-level configuration loaded from environment and overridable at runtime."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT_URL = "http://localhost:11434/api/chat"
DEFAULT_MODEL = "llama3.1"


class BaseLocaldocSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LOCALDOC_SDK_", extra="ignore")


class CompletionSettings(BaseLocaldocSettings):
    """Global SDK settings for reaching the inference server."""

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    model: str = DEFAULT_MODEL
    timeout: float | None = Field(default=None, gt=0)

    @field_validator("model", mode="after")
    @classmethod
    def model_not_blank(cls, model: str) -> str:
        if not model.strip():
            raise ValueError("model identifier must not be blank")
        return model

    def get_locked(self) -> FrozenCompletionSettings:
        payload = self.model_dump()
        return FrozenCompletionSettings.model_validate(payload)


class FrozenCompletionSettings(CompletionSettings):
    model_config = SettingsConfigDict(env_prefix="LOCALDOC_SDK_", extra="ignore", frozen=True)


settings = CompletionSettings()


def get_sdk_config() -> FrozenCompletionSettings:
    """Return an immutable snapshot of current global SDK settings."""
    return settings.get_locked()
