import logging

import pytest

from org_registry.core.config import settings
from org_registry.core.logging import AUDIT_LOGGER, configure_logging


@pytest.fixture()
def quiet_logging():
    configure_logging("WARNING")
    yield
    configure_logging(settings.LOG_LEVEL)


def test_level_applies_to_project_loggers(quiet_logging):
    assert not logging.getLogger("org_registry.services.org_slugs").isEnabledFor(logging.INFO)
    assert logging.getLogger("org_registry").isEnabledFor(logging.WARNING)


def test_audit_trail_survives_raised_level(quiet_logging):
    assert logging.getLogger(AUDIT_LOGGER).isEnabledFor(logging.INFO)


def test_sqlalchemy_engine_is_kept_quiet():
    configure_logging("DEBUG")
    try:
        assert not logging.getLogger("sqlalchemy.engine").isEnabledFor(logging.INFO)
    finally:
        configure_logging(settings.LOG_LEVEL)
