# src/parley/settings.py
from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ParleySettings(BaseSettings):
    """
    Configuration for the scoring engine.

    Convention:
      - Parley-specific vars use the PARLEY_ prefix.
      - Provider credentials are mirrored to the generic names the provider SDKs
        read (OPENAI_API_KEY, ANTHROPIC_API_KEY, ...) by `apply_to_environment()`.
    """

    model_config = SettingsConfigDict(
        env_prefix="PARLEY_",
        env_file=".env",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Scoring call parameters
    scoring_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    scoring_max_tokens: int = Field(default=2000, gt=0)
    scoring_tokens_per_rubric: int = Field(default=250, gt=0)

    # Model selection
    model_timeout: int = 120
    model_family: str | None = None

    # OpenAI
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_organization: str | None = None
    openai_model_name: str | None = None

    # Anthropic
    anthropic_api_key: str | None = None
    anthropic_model_name: str | None = None

    # Azure OpenAI
    azure_openai_api_key: str | None = None
    azure_openai_endpoint: str | None = None
    azure_openai_api_version: str | None = None
    azure_model_name: str | None = None

    # Ollama
    ollama_url: str | None = None
    ollama_model_name: str | None = None

    # OpenRouter
    openrouter_api_key: str | None = None
    openrouter_api_url: str = "https://openrouter.ai/api/v1"
    openrouter_model_name: str | None = None

    # Bedrock
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_session_token: str | None = None
    aws_region: str = "us-east-1"
    aws_profile: str | None = None
    bedrock_model_name: str | None = None


def _set_if_missing(name: str, value: str | None) -> None:
    if value is None:
        return
    os.environ.setdefault(name, value)


def apply_to_environment(settings: ParleySettings) -> None:
    """
    Export provider credentials under the names provider SDKs and pydantic_ai
    look for. Variables already present in the environment win.
    """
    _set_if_missing("OPENAI_API_KEY", settings.openai_api_key)
    _set_if_missing("OPENAI_BASE_URL", settings.openai_base_url)
    _set_if_missing("OPENAI_ORG_ID", settings.openai_organization)

    _set_if_missing("ANTHROPIC_API_KEY", settings.anthropic_api_key)

    _set_if_missing("AZURE_OPENAI_API_KEY", settings.azure_openai_api_key)
    _set_if_missing("AZURE_OPENAI_ENDPOINT", settings.azure_openai_endpoint)
    _set_if_missing("OPENAI_API_VERSION", settings.azure_openai_api_version)

    _set_if_missing("OPENROUTER_API_KEY", settings.openrouter_api_key)

    _set_if_missing("AWS_ACCESS_KEY_ID", settings.aws_access_key_id)
    _set_if_missing("AWS_SECRET_ACCESS_KEY", settings.aws_secret_access_key)
    _set_if_missing("AWS_SESSION_TOKEN", settings.aws_session_token)
    _set_if_missing("AWS_REGION", settings.aws_region)
    _set_if_missing("AWS_PROFILE", settings.aws_profile)


@lru_cache(maxsize=1)
def get_settings() -> ParleySettings:
    """
    Load settings once (env/.env), export provider envs, and cache.
    """
    s = ParleySettings()
    apply_to_environment(s)
    return s


def reload_settings() -> ParleySettings:
    """
    Clear cache and reload; useful in tests.
    """
    get_settings.cache_clear()
    return get_settings()
