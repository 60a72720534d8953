"""nmigrate controllers and resolution engines."""

from .dns import DnsPolicyEngine
from .migration import MigrationController
from .reader import ReaderController, ReadResult
from .topology import TopologyResolver


__all__ = [
    "DnsPolicyEngine",
    "MigrationController",
    "ReadResult",
    "ReaderController",
    "TopologyResolver",
]
