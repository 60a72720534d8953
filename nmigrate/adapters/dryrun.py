"""Adapter that prints the connection graph instead of writing it."""

import logging

import orjson
from rich.console import Console

from ..models.connection import NetworkState
from .base import sysfs_interfaces


logger = logging.getLogger(__name__)


class DryRunAdapter:
    name = "dry-run"

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def read_state(self) -> NetworkState:
        return NetworkState()

    def present_interfaces(self) -> set[str]:
        return sysfs_interfaces()

    def write(self, state: NetworkState) -> None:
        for connection in state.connections:
            logger.debug("Connection %s (%s)", connection.id, connection.kind)
        self.console.print_json(orjson.dumps(state.model_dump(mode="json")).decode())
