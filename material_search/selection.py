"""
Работа с выбранным материалом: строка для акта, дописывание в поле
материалов, фильтр реестра сертификатов, проверка срока действия.
"""

from datetime import date
from typing import List, Optional, Sequence

from material_search.schemas import CertificateRecord

SELECTION_SEPARATOR = '; '


def format_valid_until(certificate: CertificateRecord) -> str:
    """Срок действия как ДД.ММ.ГГГГ; нераспознанная дата - как есть."""
    parsed = certificate.valid_until_date
    if parsed is None:
        return certificate.valid_until
    return parsed.strftime('%d.%m.%Y')


def format_selection(certificate: CertificateRecord, material: str) -> str:
    """
    Строка выбранного материала для записи в акт.

    Example:
        "Цемент М500 (сертификат № 123, действителен до 31.03.2027)"
    """
    return (
        f"{material} (сертификат № {certificate.number}, "
        f"действителен до {format_valid_until(certificate)})"
    )


def append_selection(current_value: Optional[str], selection: str) -> str:
    """Дописывает выбранный материал в поле через "; "."""
    if not current_value:
        return selection
    return f"{current_value}{SELECTION_SEPARATOR}{selection}"


def filter_certificates(
    catalog: Sequence[CertificateRecord],
    term: Optional[str]
) -> List[CertificateRecord]:
    """
    Простой фильтр реестра сертификатов по подстроке.

    Сертификат проходит, если term содержится в номере или в одном
    из материалов. Пустой term пропускает всё.
    """
    if not term:
        return list(catalog)

    needle = term.lower()
    return [
        certificate for certificate in catalog
        if needle in certificate.number.lower()
        or any(needle in material.lower() for material in certificate.materials)
    ]


def is_expired(certificate: CertificateRecord, today: Optional[date] = None) -> bool:
    """Истёк ли срок действия; без распознанной даты - не истёк."""
    valid_until = certificate.valid_until_date
    if valid_until is None:
        return False
    return valid_until < (today or date.today())
