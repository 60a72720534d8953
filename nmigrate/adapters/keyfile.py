"""Adapter writing NetworkManager keyfiles."""

import configparser
import logging
from ipaddress import ip_interface
from pathlib import Path
from uuid import UUID

from ..core.errors import AdapterError
from ..models.connection import Connection, IpConfig, LoopbackConfig, NetworkState
from ..renderers.engine import get_template_set
from .base import run, sysfs_interfaces, which_or_die


logger = logging.getLogger(__name__)

KEYFILE_MODE = 0o600


def keyfile_name(connection: Connection, suffix: str) -> str:
    return connection.id.replace("/", "_") + suffix


def _addresses(section: configparser.SectionProxy) -> list:
    addresses = []
    for key, value in section.items():
        if key.startswith("address"):
            # "address1=10.0.0.1/8,10.0.0.254" carries an optional gateway
            addresses.append(ip_interface(value.split(",")[0]))
    return addresses


def parse_loopback(path: Path) -> Connection | None:
    """Loopback connection stored in a keyfile, ``None`` for other types."""

    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read(path, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable keyfile %s: %s", path, e)
        return None

    if parser.get("connection", "type", fallback=None) != "loopback":
        return None

    ip_config = IpConfig(method4="manual", method6="manual")
    for family in ("ipv4", "ipv6"):
        if parser.has_section(family):
            ip_config.addresses.extend(_addresses(parser[family]))

    section = parser["connection"]
    loopback = Connection(
        id=section.get("id", path.stem),
        interface=section.get("interface-name", "lo"),
        ip_config=ip_config,
        config=LoopbackConfig(),
    )
    if "uuid" in section:
        loopback.uuid = UUID(section["uuid"])
    return loopback


class KeyfileAdapter:
    """Renders one keyfile per connection into NetworkManager's profile directory.

    Connections marked up are activated through ``nmcli`` after a reload.
    """

    name = "keyfile"

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.template_set = get_template_set("keyfile")

    def read_state(self) -> NetworkState:
        """Existing profiles relevant to the migration, i.e. the loopback."""

        state = NetworkState()
        if not self.directory.is_dir():
            return state
        for path in sorted(self.directory.glob(f"*{self.template_set.suffix}")):
            if (loopback := parse_loopback(path)) is not None:
                state.add_connection(loopback)
                break
        return state

    def present_interfaces(self) -> set[str]:
        return sysfs_interfaces()

    def write(self, state: NetworkState) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            for connection in state.connections:
                path = self.directory / keyfile_name(connection, self.template_set.suffix)
                path.write_text(self.template_set.render(connection, state), encoding="utf-8")
                path.chmod(KEYFILE_MODE)
                logger.info("Wrote %s", path)
        except OSError as e:
            raise AdapterError(f"Couldn't write keyfiles to {self.directory}: {e}") from e

        up = [c for c in state.connections if c.status == "up"]
        if not up:
            return

        which_or_die("nmcli")
        run(["nmcli", "connection", "reload"])
        for connection in up:
            logger.info("Activating %s", connection.id)
            run(["nmcli", "connection", "up", str(connection.uuid)])
