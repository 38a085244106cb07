"""
Логирование поиска материалов.

Поля поиска (запрос, число токенов, найденные материалы и сертификаты,
статистика кэша расстояний) передаются через extra и выводятся отдельно:
в JSON - объектом "search", в человекочитаемом формате - хвостом строки.
"""

import logging
import json
import sys
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pathlib import Path


# Поля extra, которые пишет движок поиска
SEARCH_FIELDS = ('query', 'mode', 'tokens', 'materials', 'groups', 'cache_size', 'cache_hits')


def search_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Поля поиска из записи лога в порядке SEARCH_FIELDS."""
    return {
        field: getattr(record, field)
        for field in SEARCH_FIELDS
        if hasattr(record, field)
    }


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter.

    Output format:
    {
        "timestamp": "2026-10-18T12:34:56.789Z",
        "level": "DEBUG",
        "logger": "material_search.matching.engine",
        "message": "Поиск завершён",
        "search": {"query": "цемент", "tokens": 1, "groups": 1}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        fields = search_fields(record)
        if fields:
            log_data["search"] = fields

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Формат для локальной разработки.

    Output format:
    2026-10-18 12:34:56 DEBUG    material_search.matching.engine: Поиск завершён | query='цемент' tokens=1
    """

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s %(levelname)-8s %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = search_fields(record)
        if not fields:
            return line
        tail = ' '.join(f"{key}={value!r}" for key, value in fields.items())
        return f"{line} | {tail}"


def setup_logging(
    level: str = "INFO",
    use_json: bool = True,
    log_file: Optional[Path] = None
) -> None:
    """
    Настройка root logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_json: JSON формат (True) или человекочитаемый (False)
        log_file: Путь к файлу логов (опционально)
    """
    formatter = StructuredFormatter() if use_json else HumanReadableFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Logger модуля (обычно get_logger(__name__))."""
    return logging.getLogger(name)


def auto_setup_logging(default_level: str = "INFO", default_format: str = "json") -> None:
    """
    Настройка логирования из переменных окружения.

    Environment variables:
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: default_level)
        LOG_FORMAT: json или human (default: default_format)
        LOG_FILE: Путь к файлу логов (опционально)
    """
    log_level = os.getenv("LOG_LEVEL", default_level)
    log_format = os.getenv("LOG_FORMAT", default_format)
    log_file_path = os.getenv("LOG_FILE")

    setup_logging(
        level=log_level,
        use_json=log_format.lower() == "json",
        log_file=Path(log_file_path) if log_file_path else None,
    )


__all__ = [
    'SEARCH_FIELDS',
    'setup_logging',
    'get_logger',
    'auto_setup_logging',
    'StructuredFormatter',
    'HumanReadableFormatter',
]
