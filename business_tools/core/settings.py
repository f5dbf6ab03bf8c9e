from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type

import yaml
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


DEFAULT_CORS_ORIGINS = [
    "https://mentholraga.github.io",
    "http://localhost:3000",
    "https://yourdomain.com",
]

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config.yaml"  # project root


def _load_yaml_config(cfg_path: Path = CONFIG_PATH) -> dict:
    if not cfg_path.exists():
        return {}
    with open(cfg_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _flatten(cfg: dict) -> Dict[str, Any]:
    llm = (cfg.get("llm") or {})
    server = (cfg.get("server") or {})
    rate_limit = (cfg.get("rate_limit") or {})
    validation = (cfg.get("validation") or {})

    mapped = {
        "llm_provider": llm.get("provider"),
        "llm_model": llm.get("model"),
        "host": server.get("host"),
        "port": server.get("port"),
        "log_level": server.get("log_level"),
        "cors_origins": server.get("cors_origins"),
        "schema_version": server.get("schema_version"),
        "rate_limit_window_seconds": rate_limit.get("window_seconds"),
        "rate_limit_max_requests": rate_limit.get("max_requests"),
        "max_field_length": validation.get("max_field_length"),
    }
    return {k: v for k, v in mapped.items() if v is not None}


class YamlConfigSource(PydanticBaseSettingsSource):
    """Flattens the nested sections of config.yaml onto Settings fields."""

    def __init__(self, settings_cls: Type[BaseSettings], cfg_path: Path = CONFIG_PATH):
        super().__init__(settings_cls)
        self._values = _flatten(_load_yaml_config(cfg_path))

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, False

    def __call__(self) -> Dict[str, Any]:
        return dict(self._values)


class Settings(BaseSettings):
    # LLM
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"

    # API keys (optional until the matching provider is selected)
    OPENAI_API_KEY: Optional[str] = None
    GEMINI_API_KEY: Optional[str] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: List[str] = DEFAULT_CORS_ORIGINS
    schema_version: str = "1.0.0"

    # Inbound rate limiting (per client IP, /api/ only); 0 disables it
    rate_limit_window_seconds: int = 15 * 60
    rate_limit_max_requests: int = 15

    # Upper bound for free-text request fields; None keeps them unbounded
    max_field_length: Optional[int] = None

    class Config:
        env_file = ".env"
        extra = "ignore"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # init kwargs > environment > .env > config.yaml > field defaults
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSource(settings_cls),
            file_secret_settings,
        )
