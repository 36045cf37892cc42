from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_EMPTY_MESSAGE = "小老弟，你这周没干活啊？"


class ConfigError(RuntimeError):
    """Raised when redweekly config cannot be parsed."""


class RedmineConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    base_url: str = ""
    user_id: str = "me"
    page_limit: int = Field(default=100, ge=1, le=100)
    timeout_seconds: float = Field(default=20.0, gt=0)

    @field_validator("user_id", mode="before")
    @classmethod
    def stringify_user_id(cls, value: object) -> object:
        # YAML reads an unquoted `user_id: 42` as an int.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class LLMConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    endpoint: str | None = None
    api_key: str | None = None
    model: str | None = None
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=2, ge=0)
    retry_backoff_seconds: float = Field(default=0.5, ge=0)

    @property
    def configured(self) -> bool:
        return bool(self.endpoint and self.api_key and self.model)


class ReportConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    empty_message: str = DEFAULT_EMPTY_MESSAGE


class RedweeklyConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    log_level: str = "info"
    redmine: RedmineConfig = Field(default_factory=RedmineConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)


# Environment variable -> (section, field).
ENV_OVERRIDES: dict[str, tuple[str | None, str]] = {
    "REDMINE_BASE": ("redmine", "base_url"),
    "AI_ENDPOINT": ("llm", "endpoint"),
    "AI_API_KEY": ("llm", "api_key"),
    "AI_API_MODEL": ("llm", "model"),
    "REDWEEKLY_LOG_LEVEL": (None, "log_level"),
}


def default_config_path() -> Path:
    return Path("~/.redweekly/config.yml").expanduser()


def load_config(*, path: Path | None = None, environ: Mapping[str, str] | None = None) -> RedweeklyConfig:
    config_path = path.expanduser() if path is not None else default_config_path()
    raw: dict = {}
    if config_path.exists():
        try:
            loaded = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid config yaml at {config_path}: {exc}") from exc
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError("config root must be a mapping")
        raw = loaded or {}
    elif path is not None:
        raise ConfigError(f"config file not found: {config_path}")

    raw = _apply_env_overrides(raw, os.environ if environ is None else environ)
    try:
        return RedweeklyConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"invalid config schema: {exc}") from exc


def _apply_env_overrides(raw: dict, environ: Mapping[str, str]) -> dict:
    merged = {key: dict(value) if isinstance(value, dict) else value for key, value in raw.items()}
    for env_name, (section, field) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if not value:
            continue
        if section is None:
            merged[field] = value
            continue
        target = merged.setdefault(section, {})
        if not isinstance(target, dict):
            raise ConfigError(f"config section '{section}' must be a mapping")
        target[field] = value
    return merged
