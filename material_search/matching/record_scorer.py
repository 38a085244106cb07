"""Оценка материала по всем токенам запроса (логическое И)."""

from typing import Callable, Optional, Sequence

from material_search.config import DEFAULT_APPROXIMATE_THRESHOLD, DEFAULT_FUZZY_LENGTH_WINDOW
from material_search.matching.normalizer import normalize, split_words
from material_search.matching.token_matcher import match_token
from material_search.schemas import CertificateRecord, MatchCandidate


def score_material(
    tokens: Sequence[str],
    material: str,
    certificate: CertificateRecord,
    distance: Optional[Callable[[str, str], int]] = None,
    approximate_threshold: int = DEFAULT_APPROXIMATE_THRESHOLD,
    length_window: int = DEFAULT_FUZZY_LENGTH_WINDOW,
) -> Optional[MatchCandidate]:
    """
    Оценка одного материала сертификата.

    Каждый токен должен совпасть; если хотя бы один не совпал,
    материал исключается. Score материала - сумма score токенов.

    approximate=True, если хоть один токен найден только через fuzzy
    или сумма превышает approximate_threshold. Это подсказка для
    отображения, на фильтрацию не влияет.

    Returns:
        MatchCandidate или None
    """
    lower_material = normalize(material)
    certificate_number = normalize(certificate.number)
    words = split_words(lower_material)

    total_score = 0
    used_fuzzy = False

    for token in tokens:
        result = match_token(
            token,
            lower_material,
            certificate_number,
            words=words,
            distance=distance,
            length_window=length_window,
        )
        if not result.matched:
            return None
        total_score += result.score
        used_fuzzy = used_fuzzy or result.fuzzy

    return MatchCandidate(
        certificate_id=certificate.id,
        material_text=material,
        score=total_score,
        approximate=used_fuzzy or total_score > approximate_threshold,
    )
