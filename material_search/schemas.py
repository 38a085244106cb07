"""
Pydantic схемы каталога сертификатов и результатов поиска.

CertificateRecord валидируется на границе загрузки каталога (load_catalog),
поэтому ядро поиска работает с уже проверенными неизменяемыми данными.
"""

from datetime import date
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from material_search.logger import get_logger

logger = get_logger(__name__)


class EmptyQueryMode(str, Enum):
    """Поведение при пустом запросе."""

    # Весь каталог без оценки (диалог "показать все")
    UNFILTERED = 'unfiltered'
    # Пустая выдача (подсказки при вводе)
    EMPTY = 'empty'


class CertificateRecord(BaseModel):
    """Сертификат с перечнем материалов."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    id: str = Field(
        ...,
        min_length=1,
        description="Идентификатор сертификата"
    )
    number: str = Field(
        '',
        description="Номер сертификата"
    )
    valid_until: str = Field(
        '',
        alias='validUntil',
        description="Срок действия в формате YYYY-MM-DD"
    )
    materials: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Материалы, на которые распространяется сертификат"
    )

    @field_validator('number', 'valid_until', mode='before')
    @classmethod
    def validate_text(cls, v: Any) -> str:
        """None превращаем в пустую строку."""
        if v is None:
            return ''
        return v

    @field_validator('materials', mode='before')
    @classmethod
    def validate_materials(cls, v: Any) -> Tuple[str, ...]:
        """Отсутствующий список - пустой, пустые строки отбрасываются."""
        if v is None:
            return ()
        if isinstance(v, str):
            raise ValueError('materials должен быть списком строк')

        materials = []
        for item in v:
            if not isinstance(item, str):
                raise ValueError(f'Материал должен быть строкой: {item!r}')
            if item.strip():
                materials.append(item)
        return tuple(materials)

    @property
    def valid_until_date(self) -> Optional[date]:
        """Дата окончания действия или None, если дата не распознана."""
        try:
            return date.fromisoformat(self.valid_until.strip()[:10])
        except ValueError:
            return None


class MatchCandidate(BaseModel):
    """Материал, прошедший проверку по всем токенам запроса."""

    model_config = ConfigDict(frozen=True)

    certificate_id: str
    material_text: str
    score: int = Field(0, description="Чем меньше, тем лучше")
    approximate: bool = Field(False, description="Совпадение в основном за счёт fuzzy")


class GroupedResult(BaseModel):
    """Найденные материалы одного сертификата."""

    model_config = ConfigDict(frozen=True)

    certificate: CertificateRecord
    items: Tuple[MatchCandidate, ...]
    best_score: int


class HighlightRun(BaseModel):
    """Фрагмент текста для отрисовки с подсветкой или без."""

    model_config = ConfigDict(frozen=True)

    text: str
    highlighted: bool = False


def load_catalog(
    items: Iterable[Union[CertificateRecord, dict]]
) -> List[CertificateRecord]:
    """
    Валидация каталога сертификатов.

    Args:
        items: Сертификаты в виде словарей (как в хранилище) или готовых моделей

    Returns:
        Список CertificateRecord в исходном порядке

    Raises:
        ValueError: Некорректная запись или повторяющийся id
    """
    catalog: List[CertificateRecord] = []
    seen_ids = set()

    for item in items:
        if isinstance(item, CertificateRecord):
            record = item
        else:
            record = CertificateRecord.model_validate(item)

        if record.id in seen_ids:
            raise ValueError(f'Повторяющийся id сертификата: "{record.id}"')
        seen_ids.add(record.id)
        catalog.append(record)

    logger.debug(f"Загружено сертификатов: {len(catalog)}")
    return catalog
