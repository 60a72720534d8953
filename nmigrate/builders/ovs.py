"""Open vSwitch translation.

NetworkManager models an OVS bridge as three layered profiles: the bridge,
a port on it, and the internal interface on the port, which carries the IP
settings. A fake bridge is a tagged port on another (real) bridge.
"""

from ..core.errors import BuildError
from ..models.connection import (
    BuiltConnections,
    Connection,
    IpConfig,
    LinkSpec,
    OvsBridgeConfig,
    OvsInterfaceConfig,
    OvsPortConfig,
)
from ..models.legacy import OvsBridge


def _layer(base: Connection, id: str, interface: str, config) -> Connection:  # noqa: A002
    return Connection(
        id=id,
        interface=interface,
        ip_config=IpConfig(method4="disabled", method6="disabled"),
        autoconnect=base.autoconnect,
        status=base.status,
        config=config,
    )


def ovs_port_for(base: Connection) -> Connection:
    """Dedicated OVS port sitting between ``base`` and its bridge."""

    port_id = f"{base.id}-port"
    port = _layer(base, port_id, port_id, OvsPortConfig())
    base.controller = port.uuid
    return port


def build_ovs_bridge(ovs: OvsBridge, base: Connection, link: LinkSpec | None) -> BuiltConnections:
    """Expand ``base`` into the bridge/port/interface layers.

    ``base`` becomes the internal interface and keeps its IP settings.
    """

    if link is not None:
        raise BuildError(f"OVS bridge {base.id} can't itself be attached to {link.master}")

    base.config = OvsInterfaceConfig(interface_type="internal")
    port = ovs_port_for(base)
    built = BuiltConnections()

    if ovs.vlan is None:
        bridge = _layer(base, f"{base.id}-bridge", base.interface or base.id, OvsBridgeConfig())
        port.controller = bridge.uuid
        built.connections.append(bridge)
    else:
        # fake bridge: a tagged port on the parent bridge
        port.config = OvsPortConfig(tag=ovs.vlan.tag)
        built.links[port.uuid] = LinkSpec(master=ovs.vlan.parent)

    built.connections.extend([port, base])
    return built


def attach_to_ovs(base: Connection, link: LinkSpec) -> BuiltConnections:
    """Put ``base`` on its own OVS port; the port holds the pending link."""

    port = ovs_port_for(base)
    return BuiltConnections(connections=[port, base], links={port.uuid: link})
