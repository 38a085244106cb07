"""
Unit тесты оценки материала по всем токенам.

Тестируем:
- Логическое И по токенам
- Суммирование score
- Признак approximate
"""

import pytest
from material_search.matching.record_scorer import score_material
from material_search.schemas import CertificateRecord


@pytest.fixture
def certificate():
    return CertificateRecord(id="c1", number="123", materials=["Цемент М500", "Кирпич"])


@pytest.mark.unit
class TestScoreMaterial:
    """Тесты score_material."""

    def test_all_tokens_sum(self, certificate):
        candidate = score_material(["цемент", "м500"], "Цемент М500", certificate)

        assert candidate is not None
        assert candidate.certificate_id == "c1"
        assert candidate.material_text == "Цемент М500"
        assert candidate.score == -20
        assert not candidate.approximate

    def test_word_order_independent(self, certificate):
        forward = score_material(["цемент", "м500"], "Цемент М500", certificate)
        backward = score_material(["м500", "цемент"], "Цемент М500", certificate)

        assert forward.score == backward.score

    def test_one_token_fails(self, certificate):
        assert score_material(["цемент", "бетон"], "Цемент М500", certificate) is None

    def test_material_and_number(self, certificate):
        candidate = score_material(["кирпич", "123"], "Кирпич", certificate)

        assert candidate.score == -5

    def test_fuzzy_marks_approximate(self, certificate):
        candidate = score_material(["цемет"], "Цемент М500", certificate)

        assert candidate.score == 11
        assert candidate.approximate

    def test_threshold_marks_approximate(self, certificate):
        """Пять совпадений по номеру: 25 > 20."""
        candidate = score_material(["1", "2", "3", "12", "23"], "Кирпич", certificate)

        assert candidate.score == 25
        assert candidate.approximate

    def test_threshold_not_exceeded(self, certificate):
        candidate = score_material(["1", "2", "3", "12"], "Кирпич", certificate)

        assert candidate.score == 20
        assert not candidate.approximate

    def test_custom_threshold(self, certificate):
        candidate = score_material(["1", "2"], "Кирпич", certificate, approximate_threshold=5)

        assert candidate.approximate
