"""
Unit тесты логирования.

Тестируем:
- JSON formatter и поля поиска
- Human-readable formatter
- Настройку root logger
- Поля поиска в записях движка
"""

import json
import logging
import sys

import pytest
from material_search.logger import (
    HumanReadableFormatter,
    StructuredFormatter,
    auto_setup_logging,
    get_logger,
    setup_logging,
)
from material_search.matching.engine import search
from material_search.schemas import CertificateRecord


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(**extra):
    record = logging.LogRecord(
        name="material_search.matching.engine",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=10,
        msg="Поиск: %s",
        args=("цемент",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestFormatters:
    """Тесты форматтеров."""

    def test_structured(self):
        record = make_record(query="цемент", tokens=1)
        payload = json.loads(StructuredFormatter().format(record))

        assert payload["level"] == "DEBUG"
        assert payload["logger"] == "material_search.matching.engine"
        assert payload["message"] == "Поиск: цемент"
        assert payload["search"] == {"query": "цемент", "tokens": 1}
        assert payload["timestamp"].endswith("Z")

    def test_structured_without_search_fields(self):
        payload = json.loads(StructuredFormatter().format(make_record()))

        assert "search" not in payload

    def test_structured_ignores_other_extra(self):
        record = make_record(call_site="materials_modal", groups=2)
        payload = json.loads(StructuredFormatter().format(record))

        assert payload["search"] == {"groups": 2}
        assert "call_site" not in json.dumps(payload)

    def test_structured_exception(self):
        try:
            raise ValueError("cap должен быть неотрицательным")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        payload = json.loads(StructuredFormatter().format(record))

        assert "ValueError" in payload["exception"]

    def test_human_readable(self):
        line = HumanReadableFormatter().format(make_record())

        assert "DEBUG" in line
        assert line.endswith("material_search.matching.engine: Поиск: цемент")

    def test_human_readable_search_tail(self):
        line = HumanReadableFormatter().format(make_record(query="цемент", tokens=1))

        assert line.endswith("Поиск: цемент | query='цемент' tokens=1")


@pytest.mark.unit
class TestSetup:
    """Тесты настройки логирования."""

    def test_setup_human(self, restore_root_logger):
        setup_logging(level="debug", use_json=False)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, HumanReadableFormatter)

    def test_setup_with_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "search.log"
        setup_logging(level="INFO", use_json=True, log_file=log_file)

        get_logger("material_search.test").info("Готово", extra={"groups": 3})
        for handler in restore_root_logger.handlers:
            handler.flush()

        payload = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert payload["message"] == "Готово"
        assert payload["search"] == {"groups": 3}
        for handler in restore_root_logger.handlers:
            handler.close()

    def test_auto_setup_from_env(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("LOG_FORMAT", "human")
        monkeypatch.delenv("LOG_FILE", raising=False)

        auto_setup_logging()

        assert restore_root_logger.level == logging.WARNING
        assert isinstance(restore_root_logger.handlers[0].formatter, HumanReadableFormatter)


@pytest.mark.unit
class TestEngineLogging:
    """Движок передаёт поля поиска через extra."""

    def test_search_record_fields(self, caplog):
        catalog = [CertificateRecord(id="c1", number="A-1", materials=["Цемент М500"])]
        caplog.set_level(logging.DEBUG, logger="material_search.matching.engine")

        search(catalog, "цемент")

        records = [r for r in caplog.records if hasattr(r, "groups")]
        assert len(records) == 1
        assert records[0].query == "цемент"
        assert records[0].tokens == 1
        assert records[0].materials == 1
        assert records[0].groups == 1

    def test_empty_query_record_mode(self, caplog):
        caplog.set_level(logging.DEBUG, logger="material_search.matching.engine")

        search([], "   ")

        assert [r.mode for r in caplog.records if hasattr(r, "mode")] == ["empty"]
