import logging
import logging.handlers
import uuid
from unittest.mock import patch

import pytest

from sysstats.utils import logger as logger_module
from sysstats.utils.logger import get_logger, setup_logger


@pytest.fixture
def logger_name():
    name = f"sysstats-test-{uuid.uuid4().hex}"
    yield name
    configured = logging.getLogger(name)
    for handler in list(configured.handlers):
        configured.removeHandler(handler)
        handler.close()
    logger_module._loggers.pop(name, None)


def file_handlers(configured):
    return [h for h in configured.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]


def test_console_only_by_default(logger_name):
    configured = setup_logger(logger_name)

    assert configured.level == logging.INFO
    assert not configured.propagate
    assert len(configured.handlers) == 1
    assert file_handlers(configured) == []


def test_file_logging(logger_name, tmp_path):
    log_path = tmp_path / "logs" / "sysstats.log"
    configured = setup_logger(logger_name, log_file_path=str(log_path), console_level_name="WARNING")

    assert configured.level == logging.DEBUG
    [handler] = file_handlers(configured)
    configured.debug("sample taken")
    handler.flush()
    assert "sample taken" in log_path.read_text(encoding="utf-8")


def test_unwritable_directory_falls_back(logger_name, tmp_path):
    fallback = tmp_path / "fallback"
    real_check = logger_module._check_directory_writable

    def check(path):
        if path == str(tmp_path / "denied"):
            return False, "denied"
        return real_check(path)

    with patch.object(logger_module, "_check_directory_writable", side_effect=check), \
            patch.object(logger_module, "_get_fallback_log_directory", return_value=str(fallback)):
        configured = setup_logger(logger_name, log_file_path=str(tmp_path / "denied" / "app.log"))

    [handler] = file_handlers(configured)
    assert handler.baseFilename == str(fallback / "app.log")


def test_file_logging_disabled_when_no_directory_is_writable(logger_name, tmp_path):
    with patch.object(logger_module, "_check_directory_writable", return_value=(False, "denied")):
        configured = setup_logger(logger_name, log_file_path=str(tmp_path / "app.log"))

    assert file_handlers(configured) == []


def test_invalid_level_uses_default(logger_name):
    configured = setup_logger(logger_name, console_level_name="LOUD")
    assert configured.level == logging.INFO


def test_setup_replaces_handlers(logger_name):
    setup_logger(logger_name)
    configured = setup_logger(logger_name)
    assert len(configured.handlers) == 1


def test_get_logger_returns_configured_instance(logger_name):
    configured = setup_logger(logger_name)
    assert get_logger(logger_name) is configured


def test_package_children_propagate_to_package_logger():
    child = get_logger("sysstats.monitoring.example")

    assert child.propagate
    assert child.handlers == []
    assert "sysstats" in logger_module._loggers
