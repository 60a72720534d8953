"""NetworkManager keyfile (``.nmconnection``) rendering."""

from ipaddress import IPv4Address, IPv4Interface, IPv6Address, IPv6Interface

from ..models.connection import (
    BondConfig,
    BridgeConfig,
    BridgePortConfig,
    Connection,
    EthernetConfig,
    InfinibandConfig,
    IpConfig,
    IpRoute,
    NetworkState,
    OvsBridgeConfig,
    OvsInterfaceConfig,
    OvsPortConfig,
    TunConfig,
    VlanConfig,
    WirelessConfig,
)
from .engine import TemplateSet, make_env, register_template_set, templates_dir


Entries = list[tuple[str, str]]

KEYFILE_TEMPLATE = "keyfile.nmconnection.j2"

KEYFILE_TYPES = {"wireless": "wifi"}

TUN_MODES = {"tun": "1", "tap": "2"}


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _connection(connection: Connection, state: NetworkState) -> Entries:
    entries = [
        ("id", connection.id),
        ("uuid", str(connection.uuid)),
        ("type", KEYFILE_TYPES.get(connection.kind, connection.kind)),
    ]
    if connection.interface:
        entries.append(("interface-name", connection.interface))
    if not connection.autoconnect:
        entries.append(("autoconnect", "false"))
    if connection.firewall_zone:
        entries.append(("zone", connection.firewall_zone))
    if connection.controller is not None:
        entries.append(("controller", str(connection.controller)))
        if controller := state.get_by_uuid(connection.controller):
            entries.append(("port-type", controller.kind))
    return entries


def _link(connection: Connection) -> Entries:
    entries = []
    if connection.mtu:
        entries.append(("mtu", str(connection.mtu)))
    if connection.mac_address:
        entries.append(("cloned-mac-address", connection.mac_address))
    return entries


def _wifi(config: WirelessConfig) -> list[tuple[str, Entries]]:
    wifi: Entries = [("ssid", config.ssid), ("mode", config.mode)]
    if config.hidden:
        wifi.append(("hidden", "true"))
    if config.channel is not None:
        wifi.append(("channel", str(config.channel)))
    if config.band:
        wifi.append(("band", config.band))
    if config.bssid:
        wifi.append(("bssid", config.bssid))
    sections = [("wifi", wifi)]

    if config.security is None:
        return sections

    security: Entries = [("key-mgmt", config.security)]
    if config.password:
        security.append(("psk", config.password))
    if wep := config.wep_security:
        security.append(("auth-alg", wep.auth_alg))
        security.append(("wep-key-type", "1" if wep.key_type == "key" else "2"))
        security.append(("wep-tx-keyidx", str(wep.key_index)))
        security.extend((f"wep-key{i}", key) for i, key in enumerate(wep.keys))
    sections.append(("wifi-security", security))
    return sections


def _technology(connection: Connection) -> list[tuple[str, Entries]]:
    link = _link(connection)

    match connection.config:
        case BondConfig(mode=mode, options=options):
            return [("ethernet", link), ("bond", [("mode", mode), *sorted(options.items())])]
        case BridgeConfig() as bridge:
            entries = [("stp", _bool(bridge.stp))]
            for key in ("priority", "forward_delay", "hello_time", "max_age", "ageing_time"):
                if (value := getattr(bridge, key)) is not None:
                    entries.append((key.replace("_", "-"), str(value)))
            return [("ethernet", link), ("bridge", entries)]
        case VlanConfig(parent=parent, id=vid, protocol=protocol):
            return [("ethernet", link), ("vlan", [("parent", parent), ("id", str(vid)), ("protocol", protocol)])]
        case WirelessConfig() as wireless:
            sections = _wifi(wireless)
            sections[0][1].extend(link)
            return sections
        case InfinibandConfig() as ib:
            entries = [("transport-mode", ib.transport_mode)]
            if ib.p_key is not None:
                entries.append(("p-key", str(ib.p_key)))
            if ib.parent:
                entries.append(("parent", ib.parent))
            if connection.mtu:
                entries.append(("mtu", str(connection.mtu)))
            return [("infiniband", entries)]
        case TunConfig() as tun:
            entries = [("mode", TUN_MODES[tun.mode])]
            if tun.owner is not None:
                entries.append(("owner", tun.owner))
            if tun.group is not None:
                entries.append(("group", tun.group))
            return [("tun", entries)]
        case OvsBridgeConfig() as ovs:
            return [
                (
                    "ovs-bridge",
                    [
                        ("mcast-snooping-enable", _bool(ovs.mcast_snooping_enable)),
                        ("rstp-enable", _bool(ovs.rstp_enable)),
                        ("stp-enable", _bool(ovs.stp_enable)),
                    ],
                )
            ]
        case OvsPortConfig(tag=tag):
            return [("ovs-port", [("tag", str(tag))] if tag is not None else [])]
        case OvsInterfaceConfig(interface_type=interface_type):
            return [("ovs-interface", [("type", interface_type)])]
        case EthernetConfig():
            return [("ethernet", link)]
        case _:
            return [("ethernet", link)] if link else []


def _route(route: IpRoute, any_address: str) -> str:
    value = f"{route.destination},{route.next_hop or any_address}"
    if route.metric is not None:
        value += f",{route.metric}"
    return value


def _ip(ip_config: IpConfig, family: int) -> Entries:
    if family == 4:
        method, address_type, interface_type = ip_config.method4, IPv4Address, IPv4Interface
        routes, any_address, priority = ip_config.routes4, "0.0.0.0", ip_config.dns_priority4
        dhcp = method == "auto"
    else:
        method, address_type, interface_type = ip_config.method6, IPv6Address, IPv6Interface
        routes, any_address, priority = ip_config.routes6, "::", ip_config.dns_priority6
        dhcp = method in ("auto", "dhcp")

    entries: Entries = [("method", method)]
    addresses = [a for a in ip_config.addresses if isinstance(a, interface_type)]
    entries.extend((f"address{i}", str(a)) for i, a in enumerate(addresses, start=1))
    entries.extend((f"route{i}", _route(r, any_address)) for i, r in enumerate(routes or [], start=1))

    nameservers = [str(ns) for ns in ip_config.nameservers if isinstance(ns, address_type)]
    if nameservers:
        entries.append(("dns", ";".join(nameservers) + ";"))
    if ip_config.dns_searchlist:
        entries.append(("dns-search", ";".join(ip_config.dns_searchlist) + ";"))
    if priority is not None:
        entries.append(("dns-priority", str(priority)))
    if ip_config.ignore_auto_dns:
        entries.append(("ignore-auto-dns", "true"))

    if dhcp and ip_config.dhcp_send_hostname is not None:
        entries.append(("dhcp-send-hostname", _bool(ip_config.dhcp_send_hostname)))
    if dhcp and ip_config.dhcp_hostname:
        entries.append(("dhcp-hostname", ip_config.dhcp_hostname))
    return entries


def keyfile_sections(connection: Connection, state: NetworkState) -> list[tuple[str, Entries]]:
    """Keyfile sections of a connection, in file order."""

    sections = [("connection", _connection(connection, state)), *_technology(connection)]

    if isinstance(connection.port_config, BridgePortConfig):
        entries = []
        if connection.port_config.priority is not None:
            entries.append(("priority", str(connection.port_config.priority)))
        if connection.port_config.path_cost is not None:
            entries.append(("path-cost", str(connection.port_config.path_cost)))
        sections.append(("bridge-port", entries))

    if state.carries_ip_config(connection):
        sections.append(("ipv4", _ip(connection.ip_config, 4)))
        sections.append(("ipv6", _ip(connection.ip_config, 6)))

    return sections


def render_keyfile(connection: Connection, state: NetworkState) -> str:
    """Render one connection as a NetworkManager keyfile."""

    template = make_env([templates_dir()]).get_template(KEYFILE_TEMPLATE)
    return template.render(sections=keyfile_sections(connection, state))


def register():
    register_template_set(TemplateSet(name="keyfile", render=render_keyfile, suffix=".nmconnection"))


register()
