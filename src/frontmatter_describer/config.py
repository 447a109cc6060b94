"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass

PROVIDER_OPENAI = "openai"
PROVIDER_ANTHROPIC = "anthropic"

# Credential variable per provider
API_KEY_ENV = {
    PROVIDER_OPENAI: "OPENAI_API_KEY",
    PROVIDER_ANTHROPIC: "ANTHROPIC_API_KEY",
}

DEFAULT_MODELS = {
    PROVIDER_OPENAI: "gpt-4.1-mini",
    PROVIDER_ANTHROPIC: "claude-haiku-4-5-20251001",
}

DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"


@dataclass(frozen=True)
class AppConfig:
    """Centralized application configuration.

    The API key has no default and ``load_config`` raises a KeyError if the
    provider's credential variable is missing. Generation parameters have
    sensible defaults but can be overridden via environment variables.
    """

    # Required — no default, fail at startup if missing
    api_key: str

    # Generation and scanning defaults — overridable via env
    provider: str = PROVIDER_OPENAI
    model: str = DEFAULT_MODELS[PROVIDER_OPENAI]
    api_url: str = DEFAULT_API_URL
    max_tokens: int = 300
    temperature: float = 0.7
    file_suffix: str = ".md"
    request_timeout: float | None = None


def load_config() -> AppConfig:
    """Construct an AppConfig from environment variables.

    Required environment variables:
        OPENAI_API_KEY: Bearer token for the chat-completion endpoint
            (``ANTHROPIC_API_KEY`` instead when FD_PROVIDER=anthropic).

    Optional environment variables (with defaults):
        FD_PROVIDER: Generation backend, ``openai`` or ``anthropic`` (default: openai).
        FD_MODEL: Model identifier (default depends on the provider).
        FD_API_URL: Chat-completion URL for the openai provider.
        FD_MAX_TOKENS: Max output tokens per request (default: 300).
        FD_TEMPERATURE: Sampling temperature (default: 0.7).
        FD_FILE_SUFFIX: File name suffix to scan for (default: .md).
        FD_REQUEST_TIMEOUT: HTTP timeout in seconds (default: transport default).

    Returns:
        Configured AppConfig instance.

    Raises:
        KeyError: If the provider's credential variable is not set.
        ValueError: If FD_PROVIDER names an unknown provider.
    """
    provider = os.environ.get("FD_PROVIDER", PROVIDER_OPENAI).strip().lower()
    if provider not in API_KEY_ENV:
        raise ValueError(f"Unknown provider {provider!r}; expected one of {sorted(API_KEY_ENV)}")

    timeout = os.environ.get("FD_REQUEST_TIMEOUT")
    return AppConfig(
        api_key=os.environ[API_KEY_ENV[provider]],
        provider=provider,
        model=os.environ.get("FD_MODEL", DEFAULT_MODELS[provider]),
        api_url=os.environ.get("FD_API_URL", DEFAULT_API_URL),
        max_tokens=int(os.environ.get("FD_MAX_TOKENS", "300")),
        temperature=float(os.environ.get("FD_TEMPERATURE", "0.7")),
        file_suffix=os.environ.get("FD_FILE_SUFFIX", ".md"),
        request_timeout=float(timeout) if timeout else None,
    )
