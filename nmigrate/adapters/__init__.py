"""Target system adapters."""

from .base import Adapter, sysfs_interfaces
from .dryrun import DryRunAdapter
from .factory import make_adapter
from .keyfile import KeyfileAdapter


__all__ = [
    "Adapter",
    "DryRunAdapter",
    "KeyfileAdapter",
    "make_adapter",
    "sysfs_interfaces",
]
