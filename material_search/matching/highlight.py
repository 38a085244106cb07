"""
Подсветка совпадений при отрисовке.

Для каждого токена запроса строится выравнивание по наибольшей общей
подпоследовательности (LCS) с отображаемым текстом; символы текста,
вошедшие в выравнивание, подсвечиваются. На ранжирование не влияет.
"""

from typing import List, Optional, Set

from material_search.matching.normalizer import tokenize
from material_search.schemas import HighlightRun


def lcs_indices(text: List[str], token: str) -> Set[int]:
    """
    Индексы символов text, входящих в LCS-выравнивание с token.

    Args:
        text: Символы отображаемого текста в нижнем регистре
        token: Токен запроса в нижнем регистре

    Returns:
        Множество индексов в text
    """
    n, m = len(text), len(token)
    if n == 0 or m == 0:
        return set()

    dp = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(1, n + 1):
        for j in range(1, m + 1):
            if text[i - 1] == token[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])

    indices = set()
    i, j = n, m
    while i > 0 and j > 0:
        if text[i - 1] == token[j - 1]:
            indices.add(i - 1)
            i -= 1
            j -= 1
        elif dp[i - 1][j] >= dp[i][j - 1]:
            # При равенстве пропускаем символ текста
            i -= 1
        else:
            j -= 1
    return indices


def highlight_indices(display_text: str, query: Optional[str]) -> Set[int]:
    """Объединение индексов подсветки по всем токенам запроса."""
    # Посимвольно, чтобы индексы совпадали с исходным текстом
    lowered = [char.lower() for char in display_text]
    indices: Set[int] = set()
    for token in tokenize(query):
        indices |= lcs_indices(lowered, token)
    return indices


def build_runs(display_text: str, indices: Set[int]) -> List[HighlightRun]:
    """Разбивает текст на чередующиеся подсвеченные и обычные фрагменты."""
    if not display_text:
        return [HighlightRun(text=display_text, highlighted=False)]

    runs = []
    start = 0
    current = 0 in indices
    for k in range(1, len(display_text)):
        is_match = k in indices
        if is_match != current:
            runs.append(HighlightRun(text=display_text[start:k], highlighted=current))
            start = k
            current = is_match
    runs.append(HighlightRun(text=display_text[start:], highlighted=current))
    return runs


def highlight(display_text: Optional[str], query: Optional[str]) -> List[HighlightRun]:
    """
    Фрагменты display_text с подсветкой совпадений с query.

    Пустой текст или запрос без токенов - один неподсвеченный фрагмент.
    """
    display_text = display_text or ''
    return build_runs(display_text, highlight_indices(display_text, query))
