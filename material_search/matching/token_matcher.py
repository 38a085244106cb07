"""
Сопоставление одного токена запроса с названием материала.

Правила (score - чем меньше, тем лучше):
1. Токен с начала текста или сразу после разделителя     -10
2. Токен в любом другом месте текста                      0
3. Токен в номере сертификата                             5
4. Fuzzy: слово в пределах порога Левенштейна        10 + d

Правила 1-3 возвращают результат сразу: их score не больше 5,
fuzzy-уровень начинается с 10.
"""

from typing import Callable, List, NamedTuple, Optional

from material_search.config import DEFAULT_FUZZY_LENGTH_WINDOW
from material_search.matching.edit_distance import levenshtein_distance
from material_search.matching.normalizer import is_separator, split_words

PREFIX_SCORE = -10
SUBSTRING_SCORE = 0
CERTIFICATE_NUMBER_SCORE = 5
FUZZY_BASE_SCORE = 10


class TokenMatch(NamedTuple):
    matched: bool
    score: int
    fuzzy: bool = False


NO_MATCH = TokenMatch(matched=False, score=0)


def fuzzy_threshold(token_length: int) -> int:
    """Допустимое расстояние: 0 для токенов короче 3 символов, иначе len // 3."""
    if token_length < 3:
        return 0
    return token_length // 3


def occurs_at_word_start(token: str, text: str) -> bool:
    """Есть ли вхождение token в начале text или сразу после разделителя."""
    start = text.find(token)
    while start != -1:
        if start == 0 or is_separator(text[start - 1]):
            return True
        start = text.find(token, start + 1)
    return False


def match_token(
    token: str,
    material: str,
    certificate_number: str = '',
    words: Optional[List[str]] = None,
    distance: Optional[Callable[[str, str], int]] = None,
    length_window: int = DEFAULT_FUZZY_LENGTH_WINDOW,
) -> TokenMatch:
    """
    Проверка одного токена против материала.

    Args:
        token: Токен запроса в нижнем регистре
        material: Название материала в нижнем регистре
        certificate_number: Номер сертификата в нижнем регистре (контекст)
        words: Заранее разбитые слова материала (опционально)
        distance: Функция расстояния, например DistanceCache.distance
        length_window: Максимальная разница длин токена и слова

    Returns:
        TokenMatch; matched=False если ни одно правило не сработало
    """
    if token in material:
        if occurs_at_word_start(token, material):
            return TokenMatch(matched=True, score=PREFIX_SCORE)
        return TokenMatch(matched=True, score=SUBSTRING_SCORE)

    if token in certificate_number:
        return TokenMatch(matched=True, score=CERTIFICATE_NUMBER_SCORE)

    if words is None:
        words = split_words(material)
    if distance is None:
        distance = levenshtein_distance

    threshold = fuzzy_threshold(len(token))
    best_score: Optional[int] = None

    for word in words:
        if abs(len(word) - len(token)) > length_window:
            continue
        dist = distance(token, word)
        if dist <= threshold:
            score = FUZZY_BASE_SCORE + dist
            if best_score is None or score < best_score:
                best_score = score

    if best_score is None:
        return NO_MATCH
    return TokenMatch(matched=True, score=best_score, fuzzy=True)
