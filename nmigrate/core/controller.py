"""Base controller class for business logic."""

import logging
from typing import TYPE_CHECKING, Generic, TypeVar


if TYPE_CHECKING:
    from .application import Application
    from .settings import MigrationSettings


AppT = TypeVar("AppT", bound="Application")


class BaseController(Generic[AppT]):  # noqa: UP046
    """Base class for controllers."""

    def __init__(self, app: AppT) -> None:
        self._app = app
        self._logger = logging.getLogger(type(self).__module__)

    @property
    def app(self) -> AppT:
        return self._app

    @property
    def console(self):
        return self._app.console

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def settings(self) -> "MigrationSettings":
        return self._app.settings
