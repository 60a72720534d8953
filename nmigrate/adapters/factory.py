from rich.console import Console

from ..core.settings import MigrationSettings
from .base import Adapter
from .dryrun import DryRunAdapter
from .keyfile import KeyfileAdapter


def make_adapter(settings: MigrationSettings, console: Console | None = None) -> Adapter:
    match settings.adapter:
        case "dry-run":
            return DryRunAdapter(console=console)
        case "keyfile":
            return KeyfileAdapter(settings.keyfile_dir)
        case _:
            raise NotImplementedError(f"Adapter {settings.adapter!r} is not implemented yet")
