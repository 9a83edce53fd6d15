from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    effort_unit: str
    use_skill_synonyms: bool
    scoring_config_path: str | None
    ai_provider: str
    ai_model: str
    openai_api_key: str | None
    openai_base_url: str | None
    explanation_enabled: bool
    explanation_timeout_s: float
    openai_max_retries: int


settings = Settings(
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    effort_unit=(_get_env("ENGINE_EFFORT_UNIT", "Week") or "Week").strip(),
    use_skill_synonyms=_get_env_bool("ENGINE_USE_SKILL_SYNONYMS", False),
    scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
    ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
    ai_model=(_get_env("AI_MODEL") or _get_env("OPENAI_MODEL", "gpt-4o-mini") or "gpt-4o-mini").strip(),
    openai_api_key=_get_env("OPENAI_API_KEY"),
    openai_base_url=_get_env("OPENAI_BASE_URL"),
    explanation_enabled=_get_env_bool("EXPLANATION_ENABLED", True),
    explanation_timeout_s=_get_env_float("EXPLANATION_TIMEOUT_S", 20.0),
    openai_max_retries=_get_env_int("OPENAI_MAX_RETRIES", 2),
)

if not settings.effort_unit:
    raise RuntimeError("ENGINE_EFFORT_UNIT must not be blank.")

__all__ = ["Settings", "settings"]
