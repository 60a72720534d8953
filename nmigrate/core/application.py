"""Application singleton with dependency injection for controllers."""

import logging
from typing import Any, Self

from rich.console import Console

from ..controllers.migration import MigrationController
from ..controllers.reader import ReaderController
from .settings import MigrationSettings


class Application:
    """Main application."""

    _instance: Self | None = None

    def __init__(self) -> None:
        self._console = Console()
        self._controllers: dict[str, Any] = {}
        self._settings = MigrationSettings()

    @classmethod
    def current(cls) -> Self:
        """Get current application instance."""

        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance."""

        cls._instance = None

    @property
    def console(self) -> "Console":
        """Get rich console for displaying messages."""

        return self._console

    @console.setter
    def console(self, value: Console) -> None:
        self._console = value

    @property
    def logger(self) -> logging.Logger:
        """Get the application logger."""

        return logging.getLogger("nmigrate")

    @property
    def settings(self) -> MigrationSettings:
        """Get the settings of the current run."""

        return self._settings

    @settings.setter
    def settings(self, value: MigrationSettings) -> None:
        self._settings = value

    @property
    def reader(self) -> ReaderController:
        """Get reader controller."""

        if "reader" not in self._controllers:
            self._controllers["reader"] = ReaderController(self)
        return self._controllers["reader"]

    @property
    def migration(self) -> MigrationController:
        """Get migration controller."""

        if "migration" not in self._controllers:
            self._controllers["migration"] = MigrationController(self)
        return self._controllers["migration"]
