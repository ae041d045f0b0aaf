import logging

import pytest
import structlog

from config import Settings
from main import create_app


@pytest.fixture
def settings():
    return Settings(secret_key="test-secret", configure_logging=False)


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def restore_logging():
    """Undo setup_logging() so other tests keep structlog's defaults."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
