# File: keyword_scout/utils.py
"""keyword_scout.utils: Утилитарные функции для URL, входных списков, имён файлов и меток времени."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Collection, List, Sequence, Union
from urllib.parse import urlparse

from keyword_scout.logger import logger

__all__: Sequence[str] = (
    "extract_domain",
    "read_lines",
    "remove_duplicates",
    "safe_filename",
    "timestamp",
)

_UNSAFE_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def extract_domain(url: str) -> str:
    """Возвращает hostname из URL; пустой hostname считается ошибкой."""
    host = urlparse(url.strip()).hostname
    if not host:
        raise ValueError(f"Invalid sitemap URL (no host): {url!r}")
    return host


def timestamp() -> str:
    """Метка времени ISO-8601 (UTC), пригодная для имён файлов: ':' и '.' заменены на '-'."""
    now = datetime.now(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
    return stamp.replace(":", "-").replace(".", "-")


def read_lines(path: Union[str, Path]) -> List[str]:
    """Читает файл построчно, возвращает непустые строки без пробелов по краям."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Input file not found: {p}")
    lines = [line.strip() for line in p.read_text(encoding="utf-8").splitlines() if line.strip()]
    logger.debug("Loaded %d entries from %s", len(lines), p)
    return lines


def safe_filename(phrase: str) -> str:
    """Приводит фразу к имени файла: нижний регистр, всё кроме букв и цифр -> '_'."""
    return _UNSAFE_CHARS.sub("_", phrase).lower()


def remove_duplicates(items: Collection[str]) -> List[str]:
    """Удаляет дубликаты, сохраняя порядок."""
    unique = list(dict.fromkeys(items))
    removed = len(items) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate entries", removed)
    return unique
