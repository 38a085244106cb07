"""
Matching Engine

Fuzzy-поиск материалов по каталогу сертификатов:
- нормализация запроса и разбиение на токены
- расстояние Левенштейна с адаптивным порогом
- оценка по всем токенам (логическое И)
- группировка и ранжирование по сертификатам
- подсветка совпадений через LCS
"""

from material_search.matching.engine import MaterialMatcher, highlight, search

__all__ = ['MaterialMatcher', 'search', 'highlight']
