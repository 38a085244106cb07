"""
Движок поиска материалов по каталогу сертификатов.

Находит материалы по произвольному тексту с учётом опечаток, частей слов,
порядка слов и номера сертификата, группирует их по сертификатам и
ранжирует. Функция чистая: каталог не изменяется, состояние между
вызовами не сохраняется.
"""

import json
from typing import Iterable, List, Optional, Union

from material_search.config import (
    DEFAULT_APPROXIMATE_THRESHOLD,
    DEFAULT_FUZZY_LENGTH_WINDOW,
    DEFAULT_RESULT_CAP,
    SearchConfig,
    search_config,
)
from material_search.logger import auto_setup_logging, get_logger
from material_search.matching.edit_distance import DistanceCache
from material_search.matching.grouper import browse_catalog, group_candidates
from material_search.matching.highlight import highlight as highlight_runs
from material_search.matching.normalizer import tokenize
from material_search.matching.record_scorer import score_material
from material_search.schemas import (
    CertificateRecord,
    EmptyQueryMode,
    GroupedResult,
    HighlightRun,
    load_catalog,
)

logger = get_logger(__name__)

# Маркер "взять ограничение из настроек"
_CONFIG_CAP = object()


def search(
    catalog: Iterable[CertificateRecord],
    query: Optional[str],
    mode: Union[EmptyQueryMode, str] = EmptyQueryMode.EMPTY,
    cap: Optional[int] = DEFAULT_RESULT_CAP,
    approximate_threshold: int = DEFAULT_APPROXIMATE_THRESHOLD,
    length_window: int = DEFAULT_FUZZY_LENGTH_WINDOW,
) -> List[GroupedResult]:
    """
    Поиск материалов по запросу.

    Args:
        catalog: Сертификаты (снимок, не изменяется; подойдёт и генератор)
        query: Текст запроса
        mode: Поведение при пустом запросе (по умолчанию EMPTY - пустая выдача)
        cap: Максимум сертификатов в выдаче, None - без ограничения
        approximate_threshold: Порог суммарного score для approximate
        length_window: Окно длины для fuzzy-сравнения

    Returns:
        Сертификаты с найденными материалами, лучшие первыми
    """
    mode = EmptyQueryMode(mode)
    tokens = tokenize(query)
    # Каталог обходится дважды: оценка и группировка
    catalog = list(catalog)

    if not tokens:
        if mode is EmptyQueryMode.UNFILTERED:
            results = browse_catalog(catalog)
            logger.debug(
                "📋 Пустой запрос, весь каталог",
                extra={"mode": mode.value, "groups": len(results)},
            )
            return results
        logger.debug("Пустой запрос, выдача пуста", extra={"mode": mode.value})
        return []

    cache = DistanceCache()
    candidates = []

    for certificate in catalog:
        for material in certificate.materials:
            candidate = score_material(
                tokens,
                material,
                certificate,
                distance=cache.distance,
                approximate_threshold=approximate_threshold,
                length_window=length_window,
            )
            if candidate is not None:
                candidates.append(candidate)

    results = group_candidates(catalog, candidates, cap=cap)

    logger.debug(
        "🔍 Поиск завершён",
        extra={
            "query": query,
            "tokens": len(tokens),
            "materials": len(candidates),
            "groups": len(results),
            "cache_size": len(cache),
            "cache_hits": cache.hits,
        },
    )
    return results


def highlight(display_text: Optional[str], query: Optional[str]) -> List[HighlightRun]:
    """Фрагменты текста с подсветкой совпадений с запросом."""
    return highlight_runs(display_text, query)


class MaterialMatcher:
    """
    Поиск материалов с параметрами из search.yaml.

    Используется диалогом выбора материала (mode=UNFILTERED) и
    полем автодополнения (mode=EMPTY, значение по умолчанию).
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or search_config

    def search(
        self,
        catalog: Iterable[CertificateRecord],
        query: Optional[str],
        mode: Optional[Union[EmptyQueryMode, str]] = None,
        cap=_CONFIG_CAP,
    ) -> List[GroupedResult]:
        """
        Поиск с ограничениями из настроек.

        Args:
            catalog: Сертификаты
            query: Текст запроса
            mode: Режим пустого запроса; None - из настроек
            cap: Максимум сертификатов; по умолчанию из настроек, None - без ограничения
        """
        if mode is None:
            mode = self.config.default_empty_query_mode
        if cap is _CONFIG_CAP:
            cap = self.config.result_cap

        return search(
            catalog,
            query,
            mode=mode,
            cap=cap,
            approximate_threshold=self.config.approximate_threshold,
            length_window=self.config.fuzzy_length_window,
        )

    def highlight(self, display_text: Optional[str], query: Optional[str]) -> List[HighlightRun]:
        return highlight(display_text, query)


# ============================================
# ПРИМЕР ИСПОЛЬЗОВАНИЯ
# ============================================

def example_usage():
    """Пример использования MaterialMatcher."""

    catalog = load_catalog([
        {
            'id': 'c1',
            'number': 'РОСС RU.АЯ46.Н12345',
            'validUntil': '2027-03-31',
            'materials': ['Цемент М500 Д0', 'Цемент М400 (ЦЕМ II/А-Ш 32,5Б)'],
        },
        {
            'id': 'c2',
            'number': '77.01.03.000.М.012345.06.25',
            'validUntil': '2026-12-01',
            'materials': ['Кирпич керамический полнотелый', 'Кирпич силикатный'],
        },
    ])

    matcher = MaterialMatcher()
    query = 'цемет м500'

    for group in matcher.search(catalog, query):
        print(f"\nСертификат № {group.certificate.number} (лучший score: {group.best_score})")
        for item in group.items:
            runs = matcher.highlight(item.material_text, query)
            marked = ''.join(f"[{run.text}]" if run.highlighted else run.text for run in runs)
            print(f"  {marked}  score={item.score} approximate={item.approximate}")

    print(json.dumps(
        [group.model_dump(mode='json') for group in matcher.search(catalog, '', mode='unfiltered')],
        indent=2,
        ensure_ascii=False,
    ))


if __name__ == '__main__':
    auto_setup_logging(default_level="DEBUG", default_format="human")
    example_usage()
