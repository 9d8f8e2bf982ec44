"""Configuration management for cmdloop."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="CMDLOOP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Session
    prompt_symbol: str = Field(default="cmdloop", description="Symbol shown in the REPL prompt")
    intro: str = Field(default="cmdloop - interactive command shell", description="Banner printed when the REPL starts")
    history_size: int = Field(default=0, ge=0, description="Maximum remembered commands, 0 keeps everything")

    # Scripts
    script_echo_prefix: str = Field(default="script> ", description="Prefix used when echoing script lines")

    # Errors and logging
    debug: bool = Field(default=False, description="Include exception types in error messages")
    log_level: str = Field(default="WARNING", description="Log level")


def get_settings(**overrides: object) -> Settings:
    """Build settings from the environment, ``.env`` and explicit overrides."""

    return Settings(**overrides)  # type: ignore[arg-type]
