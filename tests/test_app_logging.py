"""Tests for logging configuration."""

import logging

import pytest
from fastapi.testclient import TestClient

from macro_coach.api.app import create_app
from macro_coach.app_logging import LOGGER_NAME, configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    yield logger
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def test_repeated_configuration_keeps_one_handler(package_logger) -> None:
    configure_logging()
    configure_logging("debug")

    assert len(package_logger.handlers) == 1
    assert package_logger.propagate is False
    assert package_logger.level == logging.DEBUG


def test_service_loggers_inherit_package_level(package_logger) -> None:
    configure_logging(logging.WARNING)

    service_logger = logging.getLogger("macro_coach.services.plans")

    assert not service_logger.isEnabledFor(logging.INFO)
    assert service_logger.isEnabledFor(logging.WARNING)


def test_unknown_level_name_is_rejected(package_logger) -> None:
    with pytest.raises(ValueError):
        configure_logging("chatty")


def test_app_uses_configured_log_level(package_logger, container) -> None:
    container.settings = container.settings.model_copy(update={"log_level": "warning"})

    TestClient(create_app(container))

    assert package_logger.level == logging.WARNING
