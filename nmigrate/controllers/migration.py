"""Migration controller sequencing building, resolution and hand-off."""

from ipaddress import ip_interface
from typing import TYPE_CHECKING

from ..adapters.base import Adapter
from ..adapters.factory import make_adapter
from ..builders.bridge import build_bridge_port
from ..builders.interface import build_connections
from ..core.controller import BaseController
from ..core.errors import BuildError, WarningAbort
from ..core.settings import MigrationSettings
from ..models.connection import (
    Connection,
    IpConfig,
    LinkSpec,
    LoopbackConfig,
    NetworkState,
    PortDescriptor,
)
from ..models.legacy import InterfaceRecord
from ..models.netconfig import Netconfig, NetconfigDhcp, hostname_option_kind
from .dns import DnsPolicyEngine
from .reader import ReadResult
from .topology import TopologyResolver


if TYPE_CHECKING:
    from uuid import UUID

    from ..core.application import Application  # noqa: F401


LOOPBACK_ADDRESSES = ("127.0.0.1/8", "::1/128")


def create_loopback() -> Connection:
    """Loopback connection used when neither the batch nor the system has one."""

    return Connection(
        id="lo",
        interface="lo",
        ip_config=IpConfig(
            method4="manual",
            method6="manual",
            addresses=[ip_interface(address) for address in LOOPBACK_ADDRESSES],
        ),
        config=LoopbackConfig(),
    )


def declared_ports(record: InterfaceRecord) -> list[tuple[str, PortDescriptor]]:
    """Port devices a bridge or bond record lists itself."""

    if record.bridge:
        return [
            (port.device, PortDescriptor(port_type="bridge", priority=port.priority, path_cost=port.path_cost))
            for port in record.bridge.ports
        ]
    if record.bond:
        return [(slave.device, PortDescriptor(port_type="bond")) for slave in record.bond.slaves]
    return []


class MigrationController(BaseController["Application"]):
    """Controller turning read legacy configuration into a connection graph.

    Owns the warning policy: with ``continue_migration`` disabled the first
    warning aborts the run before anything is written.
    """

    def report(self, warnings: list[str], settings: MigrationSettings, subject: str) -> None:
        """Log warnings and abort unless continuing on warnings."""

        for warning in warnings:
            self.logger.warning("%s", warning)
        if warnings and not settings.continue_migration:
            raise WarningAbort(f"Migration of {subject} failed")

    def build(
        self, interfaces: list[InterfaceRecord], settings: MigrationSettings
    ) -> tuple[list[Connection], dict["UUID", LinkSpec]]:
        """Build every record into connections and pending links."""

        connections: list[Connection] = []
        links: dict[UUID, LinkSpec] = {}
        for record in interfaces:
            outcome = build_connections(record, settings)
            self.report(outcome.warnings, settings, record.name)
            connections.extend(outcome.value.connections)
            links.update(outcome.value.links)
        return connections, links

    def link_declared_ports(
        self,
        interfaces: list[InterfaceRecord],
        connections: list[Connection],
        links: dict["UUID", LinkSpec],
        settings: MigrationSettings,
    ) -> None:
        """Add links for ports listed on a bridge or bond but not naming it as master."""

        warnings = []
        for record in interfaces:
            for device, descriptor in declared_ports(record):
                ports = [c for c in connections if c.interface == device]
                if not ports:
                    warnings.append(f"Missing port {device} of {record.name}")
                    continue
                for port in ports:
                    if descriptor.port_type == "bridge" and port.port_config.type == "none":
                        port.port_config = build_bridge_port(descriptor)
                    if port.uuid not in links and port.controller is None:
                        links[port.uuid] = LinkSpec(master=record.name, port=descriptor)
        self.report(warnings, settings, "declared ports")

    def apply_netconfig(
        self, state: NetworkState, netconfig: Netconfig, adapter: Adapter, settings: MigrationSettings
    ) -> None:
        """Move static DNS onto the loopback and apply the DNS policy."""

        self.report(netconfig.warnings, settings, "netconfig")

        loopback = state.loopback()
        if loopback is None:
            loopback = adapter.read_state().loopback() or create_loopback()
            state.add_connection(loopback)

        loopback.ip_config.nameservers = list(netconfig.static_dns_servers)
        if netconfig.static_dns_searchlist is not None:
            loopback.ip_config.dns_searchlist = list(netconfig.static_dns_searchlist)

        DnsPolicyEngine().apply(netconfig.dns_policy, state.connections)

    def apply_dhcp_hostname(self, state: NetworkState, dhcp: NetconfigDhcp) -> None:
        """Apply the DHCP client hostname options to DHCP-configured connections."""

        for connection in state.connections:
            ip_config = connection.ip_config
            if not state.carries_ip_config(connection) or not ip_config.uses_dhcp:
                continue

            if ip_config.method4 == "auto":
                option = dhcp.dhclient_hostname_option
            else:
                option = dhcp.dhclient6_hostname_option

            match hostname_option_kind(option):
                case "auto":
                    ip_config.dhcp_send_hostname = True
                case "value":
                    ip_config.dhcp_send_hostname = True
                    if ip_config.dhcp_hostname is None:
                        ip_config.dhcp_hostname = option
                case "empty":
                    ip_config.dhcp_send_hostname = False

    def correct_activation(self, state: NetworkState, adapter: Adapter, settings: MigrationSettings) -> None:
        """Mark connections down that can't or shouldn't be activated now."""

        if not settings.activate_connections:
            for connection in state.connections:
                connection.status = "down"
            return

        present = adapter.present_interfaces()
        for connection in state.connections:
            if connection.is_virtual or connection.interface in present:
                continue
            if connection.status == "up":
                self.logger.info(
                    "Interface %s isn't present, %s won't be activated", connection.interface, connection.id
                )
            connection.status = "down"

    def migrate(self, result: ReadResult, settings: MigrationSettings) -> NetworkState:
        """Build, resolve and hand the connection graph to the adapter."""

        if result.warning and not settings.continue_migration:
            raise WarningAbort(f"{result.warning}, aborting the migration")

        connections, links = self.build(result.interfaces, settings)
        self.link_declared_ports(result.interfaces, connections, links, settings)

        state = NetworkState()
        for connection in connections:
            try:
                state.add_connection(connection)
            except ValueError as e:
                raise BuildError(str(e)) from e

        resolver = TopologyResolver(settings)
        self.report(resolver.resolve(state.connections, links).warnings, settings, "the topology")
        self.logger.debug("Topology resolved in %d pass(es)", resolver.passes)

        adapter = make_adapter(settings, self.console)

        if result.netconfig is not None:
            self.apply_netconfig(state, result.netconfig, adapter, settings)
        if result.netconfig_dhcp is not None:
            self.apply_dhcp_hostname(state, result.netconfig_dhcp)

        self.correct_activation(state, adapter, settings)

        adapter.write(state)
        self.logger.info("Migrated %d connection(s)", len(state.connections))
        return state
