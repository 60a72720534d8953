"""Shared fixtures."""

import io
import logging

import pytest
from rich.console import Console

from nmigrate.core.application import Application
from nmigrate.core.settings import MigrationSettings
from nmigrate.models.legacy import InterfaceRecord


@pytest.fixture(autouse=True)
def _isolate():
    """Reset the application singleton and the CLI logging setup between tests."""

    yield
    Application.reset()
    logger = logging.getLogger("nmigrate")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def strict() -> MigrationSettings:
    return MigrationSettings()


@pytest.fixture
def lenient() -> MigrationSettings:
    return MigrationSettings(continue_migration=True)


@pytest.fixture
def record():
    """Build an interface record from element data."""

    def make(name: str, **data) -> InterfaceRecord:
        return InterfaceRecord.model_validate({"name": name, **data})

    return make


@pytest.fixture
def app() -> Application:
    """Application printing into a buffer, see ``app.console.file``."""

    application = Application.current()
    application.console = Console(file=io.StringIO(), width=200)
    return application
