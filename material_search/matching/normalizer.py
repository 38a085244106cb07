"""Нормализация и разбиение поискового запроса на токены."""

import re
from typing import List, Optional

# Разделители слов внутри названия материала
SEPARATOR_CHARS = ',.()'
WORD_SPLIT_RE = re.compile(r'[\s,.()]+')


def normalize(text: Optional[str]) -> str:
    """Нижний регистр без пробелов по краям."""
    return (text or '').strip().lower()


def tokenize(query: Optional[str]) -> List[str]:
    """
    Разбивает запрос на токены по пробелам.

    Returns:
        Непустые токены в нижнем регистре, в порядке появления
    """
    return normalize(query).split()


def is_separator(char: str) -> bool:
    """Пробельный символ или один из знаков , . ( )"""
    return char.isspace() or char in SEPARATOR_CHARS


def split_words(text: str) -> List[str]:
    """Слова текста без пробелов и знаков препинания."""
    return [word for word in WORD_SPLIT_RE.split(text) if word]
