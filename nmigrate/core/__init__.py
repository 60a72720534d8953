"""nmigrate core framework."""

from .application import Application
from .controller import BaseController
from .errors import MigrationError, WarningAbort
from .model import DisplayModel
from .settings import MigrationSettings


__all__ = [
    "Application",
    "BaseController",
    "DisplayModel",
    "MigrationError",
    "MigrationSettings",
    "WarningAbort",
]
