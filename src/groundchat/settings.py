"""Runtime configuration.

Hides where configuration values come from. Components never read the
environment themselves; they receive a Settings value (or the individual
fields they need) from whoever wires them together.
"""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ENDPOINT = "https://gravitymygirl--generate.modal.run"
DEFAULT_GREETING = "Hello! Ask me anything. My responses can be fact-checked in real-time."

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean (got {raw!r})")


class Settings(BaseModel):
    """Explicit configuration for every network-calling component."""

    model_config = ConfigDict(frozen=True)

    # Primary generation backend
    generation_endpoint: str = Field(default=DEFAULT_ENDPOINT)
    max_new_tokens: int = Field(default=256, ge=1)
    generation_timeout: float = Field(default=60.0, gt=0)
    generation_max_retries: int = Field(default=2, ge=0)

    # Classification / verification backend
    llm_provider: str = Field(default="gemini")
    gemini_api_key: str | None = Field(default=None, repr=False)
    gemini_model: str = Field(default="gemini-2.5-flash")
    fact_check_timeout: float = Field(default=60.0, gt=0)
    fact_check_max_retries: int = Field(default=2, ge=0)

    # Conversation behaviour
    context_window: int = Field(default=4, ge=1)
    context_enabled: bool = Field(default=True)
    fact_check_enabled: bool = Field(default=True)
    greeting: str = Field(default=DEFAULT_GREETING)

    # Presentation collaborators
    welcome_audio: Path = Field(default=Path("welcome.wav"))

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Environment variables:
            GROUNDCHAT_ENDPOINT: Generation endpoint URL
            GROUNDCHAT_MAX_NEW_TOKENS: Token budget per reply (default: 256)
            GROUNDCHAT_TIMEOUT: Per-request timeout in seconds (default: 60)
            GROUNDCHAT_MAX_RETRIES: Retries for transient failures (default: 2)
            GROUNDCHAT_CONTEXT_WINDOW: Messages included as context (default: 4)
            GROUNDCHAT_CONTEXT_ENABLED: Initial context toggle (default: true)
            GROUNDCHAT_FACT_CHECK_ENABLED: Initial fact-check toggle (default: true)
            GROUNDCHAT_WELCOME_AUDIO: Path of the welcome audio asset
            LLM_PROVIDER: Fact-check provider (default: gemini)
            GEMINI_API_KEY: Gemini API key
            GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)

        Raises:
            ValueError: If a variable cannot be converted
        """
        values: dict[str, object] = {
            "context_enabled": _env_bool("GROUNDCHAT_CONTEXT_ENABLED", True),
            "fact_check_enabled": _env_bool("GROUNDCHAT_FACT_CHECK_ENABLED", True),
            "gemini_api_key": os.getenv("GEMINI_API_KEY") or None,
        }

        mapping = {
            "GROUNDCHAT_ENDPOINT": "generation_endpoint",
            "GROUNDCHAT_MAX_NEW_TOKENS": "max_new_tokens",
            "GROUNDCHAT_TIMEOUT": "generation_timeout",
            "GROUNDCHAT_MAX_RETRIES": "generation_max_retries",
            "GROUNDCHAT_CONTEXT_WINDOW": "context_window",
            "GROUNDCHAT_WELCOME_AUDIO": "welcome_audio",
            "LLM_PROVIDER": "llm_provider",
            "GEMINI_MODEL": "gemini_model",
        }
        for env_name, field_name in mapping.items():
            raw = os.getenv(env_name)
            if raw:
                values[field_name] = raw

        # One timeout knob covers both backends unless overridden in code
        if "generation_timeout" in values:
            values["fact_check_timeout"] = values["generation_timeout"]

        return cls.model_validate(values)
