"""nmigrate - wicked to NetworkManager configuration migration."""

__version__ = "0.1.0"

from .core.application import Application
from .core.controller import BaseController
from .core.model import DisplayModel


__all__ = [
    "__version__",
    "Application",
    "BaseController",
    "DisplayModel",
]
