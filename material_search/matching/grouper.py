"""Группировка найденных материалов по сертификатам и ранжирование групп."""

from typing import Dict, Iterable, List, Optional, Sequence

from material_search.schemas import CertificateRecord, GroupedResult, MatchCandidate


def group_candidates(
    catalog: Sequence[CertificateRecord],
    candidates: Iterable[MatchCandidate],
    cap: Optional[int] = None,
) -> List[GroupedResult]:
    """
    Группирует кандидатов по сертификату.

    Внутри группы материалы по возрастанию score, группы - по возрастанию
    лучшего score. Сортировки стабильные: при равенстве сохраняется порядок
    каталога. Ограничение cap применяется после сортировки.

    Args:
        catalog: Каталог, из которого получены кандидаты
        candidates: Кандидаты в порядке обхода каталога
        cap: Максимум групп (None - без ограничения)

    Returns:
        Отсортированный список GroupedResult
    """
    if cap is not None and cap < 0:
        raise ValueError(f'cap не может быть отрицательным: {cap}')

    certificates = {certificate.id: certificate for certificate in catalog}

    # dict сохраняет порядок первого появления сертификата
    grouped: Dict[str, List[MatchCandidate]] = {}
    for candidate in candidates:
        grouped.setdefault(candidate.certificate_id, []).append(candidate)

    results = []
    for certificate_id, items in grouped.items():
        items.sort(key=lambda item: item.score)
        results.append(GroupedResult(
            certificate=certificates[certificate_id],
            items=tuple(items),
            best_score=items[0].score,
        ))

    results.sort(key=lambda group: group.best_score)

    if cap is not None:
        results = results[:cap]
    return results


def browse_catalog(catalog: Sequence[CertificateRecord]) -> List[GroupedResult]:
    """
    Весь каталог без оценки, в исходном порядке и без ограничения.

    Сертификаты без материалов в выдачу не попадают.
    """
    results = []
    for certificate in catalog:
        if not certificate.materials:
            continue
        items = tuple(
            MatchCandidate(certificate_id=certificate.id, material_text=material)
            for material in certificate.materials
        )
        results.append(GroupedResult(certificate=certificate, items=items, best_score=0))
    return results
