# === FILE: keyword_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации KeywordScout.
Используется Pydantic для описания схемы и проверки данных.
Объект конфигурации неизменяем и передаётся явно во все компоненты конвейера.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
)

__all__ = [
    "ConfigError",
    "GenerationSettings",
    "PipelineConfig",
    "load_config",
    "resolve_api_key",
]

API_KEY_ENV = "OPENAI_API_KEY"


class ConfigError(ValueError):
    """Некорректная или неполная конфигурация запуска."""


class GenerationSettings(BaseModel):
    """Параметры вызова внешнего сервиса генерации текста."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    model: str = Field("gpt-3.5-turbo", min_length=1, description="Идентификатор модели.")
    temperature: float = Field(0.7, ge=0, le=2, description="Температура сэмплирования.")
    max_tokens: int = Field(800, ge=1, description="Максимальная длина ответа в токенах.")
    api_key: Optional[SecretStr] = Field(None, description="Ключ API (иначе берётся из окружения).")
    base_url: Optional[str] = Field(None, description="OpenAI-совместимый endpoint.")


class PipelineConfig(BaseModel):
    """Конфигурация для одного запуска обработки sitemap."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_workers: int = Field(3, ge=1, description="Максимум одновременно активных задач.")
    rate_limit_delay_ms: int = Field(1000, gt=0, description="Пауза rate-limit (миллисекунды).")
    max_retries: int = Field(3, ge=0, description="Всего попыток генерации статьи.")
    locale_abbreviations: List[str] = Field(
        default_factory=lambda: ["NJ", "NY", "CA"],
        min_length=1,
        description="Аббревиатуры регионов, отличающие keywords от phrases.",
    )
    output_dir: Path = Field(Path("output"), description="Базовая папка для результатов.")
    sitemaps_file: Path = Field(Path("sitemaps.txt"), description="Список URL sitemap.")
    exclusions_file: Path = Field(Path("exclusions.txt"), description="Список исключаемых фраз.")
    timeout: float = Field(30.0, gt=0, description="Таймаут загрузки одного sitemap (секунд).")
    user_agent: str = Field("KeywordScoutBot/1.0", min_length=1, description="Заголовок User-Agent.")
    generation: GenerationSettings = Field(default_factory=GenerationSettings)

    @field_validator("locale_abbreviations", mode="after")
    def _normalize_abbreviations(cls, v: List[str]) -> List[str]:
        cleaned = [item.strip().upper() for item in v]
        if any(not item for item in cleaned):
            raise ValueError("locale_abbreviations must not contain blank entries")
        return list(dict.fromkeys(cleaned))

    @property
    def rate_limit_delay(self) -> float:
        """Пауза rate-limit в секундах."""
        return self.rate_limit_delay_ms / 1000.0


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> PipelineConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект PipelineConfig.
    При отсутствии файла конфига бросает FileNotFoundError,
    при нарушении схемы - pydantic.ValidationError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return PipelineConfig(**data)


def resolve_api_key(settings: GenerationSettings) -> str:
    """
    Возвращает ключ API: из конфига или из переменной окружения OPENAI_API_KEY
    (локальный .env подгружается через python-dotenv).
    Отсутствие ключа - фатальная ошибка конфигурации.
    """
    if settings.api_key is not None and settings.api_key.get_secret_value():
        return settings.api_key.get_secret_value()
    load_dotenv()
    key = os.getenv(API_KEY_ENV, "").strip()
    if not key:
        raise ConfigError(f"API key is not set: configure generation.api_key or {API_KEY_ENV}")
    return key
