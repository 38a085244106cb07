"""
Search Configuration Loader

Настройки движка поиска материалов из search.yaml (рядом с модулем):
лимиты (размер выдачи, порог "приблизительного" совпадения, окно длины
для fuzzy-сравнения) и режим по умолчанию для пустого запроса.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from material_search.logger import get_logger

logger = get_logger(__name__)


DEFAULT_RESULT_CAP = 10
DEFAULT_APPROXIMATE_THRESHOLD = 20
DEFAULT_FUZZY_LENGTH_WINDOW = 3
DEFAULT_EMPTY_QUERY_MODE = 'empty'


class SearchConfig:
    """Search configuration manager."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize search config loader.

        Args:
            config_path: Path to search.yaml, defaults to the file shipped with the package
        """
        if config_path is None:
            config_path = Path(__file__).parent / 'search.yaml'

        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            self._config = {}
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"⚠️ Не удалось загрузить настройки поиска {self.config_path}: {e}")
            loaded = {}

        if not isinstance(loaded, dict):
            logger.warning(f"⚠️ Некорректный формат {self.config_path}, используются значения по умолчанию")
            loaded = {}

        self._config = loaded

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def get_limit(self, limit_name: str) -> Optional[Any]:
        """Get limit value.

        Args:
            limit_name: Limit name (e.g., 'result_cap', 'approximate_threshold')

        Returns:
            Limit value or None if not found
        """
        return (self._config.get('limits') or {}).get(limit_name)

    def _int_limit(self, limit_name: str, default: int) -> int:
        value = self.get_limit(limit_name)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning(f"⚠️ Некорректное значение limits.{limit_name}: {value!r}")
            return default

    @property
    def result_cap(self) -> Optional[int]:
        """Максимум групп в интерактивной выдаче; None - без ограничения."""
        limits = self._config.get('limits') or {}
        if 'result_cap' in limits and limits['result_cap'] is None:
            return None
        return self._int_limit('result_cap', DEFAULT_RESULT_CAP)

    @property
    def approximate_threshold(self) -> int:
        return self._int_limit('approximate_threshold', DEFAULT_APPROXIMATE_THRESHOLD)

    @property
    def fuzzy_length_window(self) -> int:
        return self._int_limit('fuzzy_length_window', DEFAULT_FUZZY_LENGTH_WINDOW)

    @property
    def default_empty_query_mode(self) -> str:
        """Режим для пустого запроса: 'empty' или 'unfiltered'."""
        mode = (self._config.get('modes') or {}).get('default_empty_query_mode')
        return str(mode) if mode else DEFAULT_EMPTY_QUERY_MODE

    def get_all_config(self) -> Dict[str, Any]:
        """Get full configuration dictionary.

        Returns:
            Complete configuration dictionary
        """
        return self._config.copy()


# Global instance
search_config = SearchConfig()


# Convenience functions
def get_limit(limit_name: str) -> Optional[Any]:
    """Get limit value."""
    return search_config.get_limit(limit_name)


def get_result_cap() -> Optional[int]:
    """Get interactive result cap."""
    return search_config.result_cap
