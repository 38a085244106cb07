"""
Расстояние Левенштейна для fuzzy-сравнения токенов запроса со словами
из названий материалов.
"""

from typing import Dict, Tuple


def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Compute the Levenshtein distance between two strings.

    Вставка, удаление и замена стоят 1. Полная матрица
    (len(s1) + 1) x (len(s2) + 1), без досрочного выхода.
    """
    m, n = len(s1), len(s2)

    if m == 0:
        return n
    if n == 0:
        return m

    dp = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,         # deletion
                dp[i][j - 1] + 1,         # insertion
                dp[i - 1][j - 1] + cost   # substitution
            )
    return dp[m][n]


class DistanceCache:
    """
    Кэш расстояний на время одного поиска.

    Одни и те же слова встречаются во многих материалах каталога,
    поэтому пары (токен, слово) считаются один раз.
    """

    def __init__(self):
        self._cache: Dict[Tuple[str, str], int] = {}
        self.hits = 0

    def distance(self, token: str, word: str) -> int:
        key = (token, word)
        cached = self._cache.get(key)
        if cached is not None:
            self.hits += 1
            return cached

        value = levenshtein_distance(token, word)
        self._cache[key] = value
        return value

    def __len__(self) -> int:
        return len(self._cache)
