"""Поиск материалов по сертификатам для актов освидетельствования."""

from material_search.matching import MaterialMatcher, highlight, search
from material_search.schemas import (
    CertificateRecord,
    EmptyQueryMode,
    GroupedResult,
    HighlightRun,
    MatchCandidate,
    load_catalog,
)
from material_search.selection import (
    append_selection,
    filter_certificates,
    format_selection,
    is_expired,
)

__version__ = "0.1.0"

__all__ = [
    'MaterialMatcher',
    'search',
    'highlight',
    'CertificateRecord',
    'EmptyQueryMode',
    'GroupedResult',
    'HighlightRun',
    'MatchCandidate',
    'load_catalog',
    'append_selection',
    'filter_certificates',
    'format_selection',
    'is_expired',
]
