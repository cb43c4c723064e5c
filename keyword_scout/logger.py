# keyword_scout/logger.py
"""Логгер KeywordScout.

Все модули пишут в один именованный логгер ``KeywordScout``: строки о
завершении и ошибках сайтов, предупреждения о входных файлах, попытки
генерации статьи. CLI перенастраивает его через :func:`init_logging`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Iterator, Optional, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "KeywordScout"

# Ротация лог-файла: 5 MiB, три архивных копии.
_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 3

LevelT = Union[int, str]


def _coerce_level(level: LevelT) -> int:
    """Переводит 'debug' / 'INFO' / 10 в числовой уровень; неизвестное имя - ValueError."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def _handlers(log_file: Optional[Union[str, Path]], fmt: str) -> Iterator[logging.Handler]:
    formatter = logging.Formatter(fmt)
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    yield console
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            path, maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8"
        )
        rotating.setFormatter(formatter)
        yield rotating


def configure(
    *,
    level: LevelT = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Настраивает логгер проекта: консоль и, при наличии ``log_file``, ротируемый файл."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(_coerce_level(level))
    if replace_handlers:
        for old in list(lg.handlers):
            lg.removeHandler(old)
            old.close()
    for handler in _handlers(log_file, log_format):
        lg.addHandler(handler)
    lg.propagate = False
    return lg


def init_logging(
    level: LevelT = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Точка входа для CLI: всегда заменяет ранее установленные обработчики."""
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
