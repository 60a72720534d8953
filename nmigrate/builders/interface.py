"""Translation of one legacy interface record into connections."""

import logging
from uuid import uuid4

from ..core.errors import BuildError
from ..core.mac import normalize_mac
from ..core.settings import MigrationSettings
from ..models.common import Outcome
from ..models.connection import (
    BuiltConnections,
    Connection,
    DummyConfig,
    EthernetConfig,
    IpConfig,
    LinkSpec,
    LoopbackConfig,
    PortDescriptor,
)
from ..models.legacy import InterfaceRecord
from .bond import build_bond
from .bridge import build_bridge, build_bridge_port
from .infiniband import build_infiniband
from .ip import build_ip_config
from .ovs import attach_to_ovs, build_ovs_bridge
from .tuntap import build_tuntap
from .vlan import build_vlan
from .wireless import build_wireless


logger = logging.getLogger(__name__)

LOOPBACK_NAME = "lo"


def _mac(address: str | None, name: str) -> str | None:
    if address is None:
        return None
    try:
        return normalize_mac(address)
    except ValueError as e:
        raise BuildError(f"Invalid address of {name}: {e}") from e


def link_spec(record: InterfaceRecord) -> LinkSpec | None:
    """Pending controller reference declared by the record, if any."""

    if not record.link.master:
        return None
    port = None
    if record.link.port:
        port = PortDescriptor(
            port_type=record.link.port.port_type,
            priority=record.link.port.priority,
            path_cost=record.link.port.path_cost,
        )
    return LinkSpec(master=record.link.master, port=port)


def base_connection(record: InterfaceRecord, ip_config: IpConfig) -> Connection:
    """Fields every technology shares."""

    autoconnect = record.control.mode in ("boot", "hotplug")
    connection = Connection(
        id=record.name,
        interface=record.name,
        ip_config=ip_config,
        firewall_zone=record.firewall.zone if record.firewall else None,
        mtu=record.link.mtu or 0,
        autoconnect=autoconnect,
        status="up" if autoconnect else "down",
    )
    if record.link.port and record.link.port.port_type == "bridge":
        connection.port_config = build_bridge_port(record.link.port)
    return connection


def _wireless_connections(
    record: InterfaceRecord, base: Connection, settings: MigrationSettings, outcome: Outcome[BuiltConnections]
) -> list[Connection]:
    configs = outcome.absorb(build_wireless(record.wireless, settings))
    if not configs:
        outcome.warn(f"Wireless interface {record.name} declares no networks, no connection created")
        return []
    if len(configs) == 1:
        base.config = configs[0]
        return [base]

    connections = []
    for index, config in enumerate(configs):
        connections.append(
            base.model_copy(deep=True, update={"id": f"{record.name}-{index}", "uuid": uuid4(), "config": config})
        )
    return connections


def build_connections(record: InterfaceRecord, settings: MigrationSettings) -> Outcome[BuiltConnections]:
    """Build the connections of one interface record.

    Controller references are returned as pending links, they are resolved
    once every record has been built.
    """

    outcome: Outcome[BuiltConnections] = Outcome(BuiltConnections())
    base = base_connection(record, outcome.absorb(build_ip_config(record)))
    link = link_spec(record)
    connections = [base]

    match record.payload:
        case "bond":
            base.config = build_bond(record.bond)
            base.mac_address = _mac(record.bond.address, record.name)
        case "bridge":
            base.config = build_bridge(record.bridge)
            base.mac_address = _mac(record.bridge.address, record.name)
        case "vlan":
            base.config = build_vlan(record.vlan)
            base.mac_address = _mac(record.vlan.address, record.name)
        case "wireless":
            connections = _wireless_connections(record, base, settings, outcome)
        case "infiniband" | "infiniband_child":
            base.config = outcome.absorb(build_infiniband(getattr(record, record.payload)))
        case "tun" | "tap":
            base.config = build_tuntap(getattr(record, record.payload), record.payload)
        case "dummy":
            base.config = DummyConfig()
            base.mac_address = _mac(record.dummy.address, record.name)
        case "ethernet":
            base.config = EthernetConfig()
            base.mac_address = _mac(record.ethernet.address, record.name)
        case "ovs_bridge":
            outcome.value.extend(build_ovs_bridge(record.ovs_bridge, base, link))
            return outcome
        case None if record.name == LOOPBACK_NAME:
            base.config = LoopbackConfig()
        case None:
            base.config = EthernetConfig()

    built = outcome.value
    for connection in connections:
        if link is not None and link.port is not None and link.port.port_type == "ovs-bridge":
            built.extend(attach_to_ovs(connection, link))
            continue
        built.connections.append(connection)
        if link is not None:
            built.links[connection.uuid] = link

    logger.debug("Built %d connection(s) for %s", len(built.connections), record.name)
    return outcome
