"""
Тесты для core: конфигурация, исключения, логирование.
"""

import json
import logging

from tagging.core.config import Settings, TaggingConfig
from tagging.core.exceptions import AlreadyExistsError, NotFoundError, TaggingError, ValidationError
from tagging.core.logging import JSONFormatter, SimpleFormatter, request_id_var
from tagging.core.text import slugify, title_case
from tagging.models import Tagged


def make_record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("tagging.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# ============================================================================
# CONFIG
# ============================================================================


def test_tagging_config_defaults():
    """Test: значения TaggingConfig по умолчанию."""
    config = TaggingConfig()

    assert config.normalizer is slugify
    assert config.display_formatter is title_case
    assert config.untag_on_delete is True
    assert config.delete_unused_tags is False
    assert config.tagged_model is Tagged


def test_tagging_config_from_settings():
    """Test: флаги берутся из Settings, overrides побеждают."""
    source = Settings(TAGGING_UNTAG_ON_DELETE=False, TAGGING_DELETE_UNUSED_TAGS=True)

    config = TaggingConfig.from_settings(source)
    assert config.untag_on_delete is False
    assert config.delete_unused_tags is True

    config = TaggingConfig.from_settings(source, delete_unused_tags=False, normalizer=str.lower)
    assert config.delete_unused_tags is False
    assert config.normalizer("ABC") == "abc"


def test_settings_env_override(monkeypatch):
    """Test: переменные окружения переопределяют настройки."""
    monkeypatch.setenv("TAGGING_DELETE_UNUSED_TAGS", "true")
    monkeypatch.setenv("LOG_FORMAT", "simple")

    source = Settings()

    assert source.TAGGING_DELETE_UNUSED_TAGS is True
    assert source.LOG_FORMAT == "simple"


# ============================================================================
# EXCEPTIONS
# ============================================================================


def test_exception_hierarchy():
    """Test: доменные исключения совместимы со стандартными."""
    assert issubclass(ValidationError, ValueError)
    assert issubclass(NotFoundError, LookupError)
    assert issubclass(AlreadyExistsError, TaggingError)

    error = NotFoundError("Tag", 42)
    assert str(error) == "Tag '42' not found"
    assert error.resource == "Tag"
    assert error.key == 42

    assert str(AlreadyExistsError("TagGroup", "regions")) == "TagGroup 'regions' already exists"


# ============================================================================
# LOGGING
# ============================================================================


def test_json_formatter_includes_extra_and_request_id():
    """Test: JSON лог содержит extra-поля и request_id из контекста."""
    token = request_id_var.set("req-1")
    try:
        line = JSONFormatter().format(make_record("Tag created", slug="travel", tag_id=7))
    finally:
        request_id_var.reset(token)

    data = json.loads(line)
    assert data["message"] == "Tag created"
    assert data["level"] == "INFO"
    assert data["logger"] == "tagging.test"
    assert data["request_id"] == "req-1"
    assert data["extra"] == {"slug": "travel", "tag_id": 7}


def test_json_formatter_without_context():
    """Test: без request_id и extra соответствующих ключей нет."""
    data = json.loads(JSONFormatter().format(make_record("plain")))

    assert "request_id" not in data
    assert "extra" not in data


def test_simple_formatter():
    """Test: человекочитаемый формат с extra-полями."""
    line = SimpleFormatter().format(make_record("Tag removed", slug="food"))

    assert "INFO" in line
    assert "tagging.test: Tag removed" in line
    assert line.endswith("slug=food")
