"""NetworkManager-side connection model."""

from ipaddress import IPv4Address, IPv4Interface, IPv4Network, IPv6Address, IPv6Interface, IPv6Network
from typing import Annotated, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from .common import MTU, Tier, Vid
from .legacy import PortType


Ipv4Method = Literal["disabled", "auto", "manual", "link-local"]
Ipv6Method = Literal["disabled", "auto", "dhcp", "manual", "ignore", "link-local"]
Status = Literal["up", "down"]

BondMode = Literal["balance-rr", "active-backup", "balance-xor", "broadcast", "802.3ad", "balance-tlb", "balance-alb"]
VlanProtocol = Literal["802.1Q", "802.1ad"]
WirelessMode = Literal["infrastructure", "adhoc", "ap"]
SecurityProtocol = Literal["none", "wpa-psk", "wpa-eap", "sae", "owe", "wpa-eap-suite-b-192"]


# --- IP ----------------------------------------------------------------------


class IpRoute(BaseModel):
    """A static route."""

    destination: IPv4Network | IPv6Network
    """Destination network."""

    next_hop: IPv4Address | IPv6Address | None = None
    """Gateway, if any."""

    metric: int | None = None
    """Route metric."""


class IpConfig(BaseModel):
    """IPv4/IPv6 settings of a connection."""

    method4: Ipv4Method = "auto"
    method6: Ipv6Method = "auto"

    addresses: list[IPv4Interface | IPv6Interface] = Field(default_factory=list)
    """Static addresses of both families."""

    routes4: list[IpRoute] | None = None
    routes6: list[IpRoute] | None = None

    nameservers: list[IPv4Address | IPv6Address] = Field(default_factory=list)
    dns_searchlist: list[str] = Field(default_factory=list)

    ignore_auto_dns: bool = False
    """Drop name servers learned through DHCP or autoconf."""

    dns_priority4: Tier | None = None
    dns_priority6: Tier | None = None

    dhcp_send_hostname: bool | None = None
    dhcp_hostname: str | None = None

    @property
    def has_dns_priority(self) -> bool:
        return self.dns_priority4 is not None or self.dns_priority6 is not None

    @property
    def uses_dhcp(self) -> bool:
        return self.method4 == "auto" or self.method6 in ("auto", "dhcp")


# --- Technology configs ------------------------------------------------------


class EthernetConfig(BaseModel):
    type: Literal["ethernet"] = "ethernet"


class LoopbackConfig(BaseModel):
    type: Literal["loopback"] = "loopback"


class DummyConfig(BaseModel):
    type: Literal["dummy"] = "dummy"


class BondConfig(BaseModel):
    type: Literal["bond"] = "bond"
    mode: BondMode = "balance-rr"
    options: dict[str, str] = Field(default_factory=dict)
    """Kernel bonding options keyed by option name."""


class BridgeConfig(BaseModel):
    type: Literal["bridge"] = "bridge"
    stp: bool = False
    priority: int | None = None
    forward_delay: int | None = None
    hello_time: int | None = None
    max_age: int | None = None
    ageing_time: int | None = None


class VlanConfig(BaseModel):
    type: Literal["vlan"] = "vlan"
    parent: str
    id: Vid
    protocol: VlanProtocol = "802.1Q"


class WepSecurity(BaseModel):
    auth_alg: Literal["open", "shared"] = "open"
    key_type: Literal["key", "passphrase"] = "key"
    keys: list[str] = Field(default_factory=list)
    key_index: int = 0


class WirelessConfig(BaseModel):
    type: Literal["wireless"] = "wireless"
    ssid: str
    mode: WirelessMode = "infrastructure"
    hidden: bool = False
    security: SecurityProtocol | None = None
    """Key management; ``None`` for an open network."""

    password: str | None = None
    channel: int | None = None
    band: Literal["a", "bg"] | None = None
    bssid: str | None = None
    wep_security: WepSecurity | None = None


class InfinibandConfig(BaseModel):
    type: Literal["infiniband"] = "infiniband"
    transport_mode: Literal["datagram", "connected"] = "datagram"
    p_key: int | None = None
    parent: str | None = None


class TunConfig(BaseModel):
    type: Literal["tun"] = "tun"
    mode: Literal["tun", "tap"] = "tun"
    owner: str | None = None
    group: str | None = None


class OvsBridgeConfig(BaseModel):
    type: Literal["ovs-bridge"] = "ovs-bridge"
    mcast_snooping_enable: bool = False
    rstp_enable: bool = False
    stp_enable: bool = False


class OvsPortConfig(BaseModel):
    type: Literal["ovs-port"] = "ovs-port"
    tag: Vid | None = None


class OvsInterfaceConfig(BaseModel):
    type: Literal["ovs-interface"] = "ovs-interface"
    interface_type: Literal["internal", "system"] = "internal"


ConnectionConfig = Annotated[
    EthernetConfig
    | LoopbackConfig
    | DummyConfig
    | BondConfig
    | BridgeConfig
    | VlanConfig
    | WirelessConfig
    | InfinibandConfig
    | TunConfig
    | OvsBridgeConfig
    | OvsPortConfig
    | OvsInterfaceConfig,
    Field(discriminator="type"),
]

CONTROLLER_TYPES = frozenset({"bond", "bridge", "ovs-bridge"})
# OVS layers above the internal interface have no IP settings of their own
NO_IP_TYPES = frozenset({"ovs-bridge", "ovs-port"})
VIRTUAL_TYPES = frozenset(
    {"bond", "bridge", "vlan", "loopback", "dummy", "tun", "ovs-bridge", "ovs-port", "ovs-interface"}
)


# --- Port configs ------------------------------------------------------------


class NoPortConfig(BaseModel):
    type: Literal["none"] = "none"


class BridgePortConfig(BaseModel):
    type: Literal["bridge"] = "bridge"
    priority: int | None = None
    path_cost: int | None = None


PortConfig = Annotated[NoPortConfig | BridgePortConfig, Field(discriminator="type")]


# --- Connection --------------------------------------------------------------


class Connection(BaseModel):
    """A NetworkManager connection profile."""

    id: str
    """Profile name."""

    uuid: UUID = Field(default_factory=uuid4)
    """Unique instance identifier."""

    interface: str | None = None
    """Interface the profile binds to."""

    ip_config: IpConfig = Field(default_factory=IpConfig)
    mac_address: str | None = None
    """Cloned MAC address."""

    firewall_zone: str | None = None
    mtu: MTU = 0
    """MTU, 0 keeps the device default."""

    autoconnect: bool = True
    status: Status = "up"

    controller: UUID | None = None
    """UUID of the connection administering this one."""

    port_config: PortConfig = Field(default_factory=NoPortConfig)
    config: ConnectionConfig = Field(default_factory=EthernetConfig)

    @property
    def kind(self) -> str:
        """Technology of the connection."""

        return self.config.type

    @property
    def is_virtual(self) -> bool:
        """Whether the device is created on demand rather than backed by hardware."""

        return self.kind in VIRTUAL_TYPES


# --- Resolution --------------------------------------------------------------


class PortDescriptor(BaseModel):
    """How a connection attaches to its controller."""

    port_type: PortType
    priority: int | None = None
    path_cost: int | None = None


class LinkSpec(BaseModel):
    """Pending controller reference, still expressed as an interface name."""

    master: str
    port: PortDescriptor | None = None


class ParentMatch(BaseModel):
    """Resolved controller for a pending link."""

    controller: UUID
    tag: Vid | None = None


class NetworkState(BaseModel):
    """The finished connection graph handed to an adapter."""

    connections: list[Connection] = Field(default_factory=list)

    def get_connection(self, id: str) -> Connection | None:  # noqa: A002
        """Find a connection by id."""

        return next((c for c in self.connections if c.id == id), None)

    def get_by_uuid(self, uuid: UUID) -> Connection | None:
        """Find a connection by uuid."""

        return next((c for c in self.connections if c.uuid == uuid), None)

    def loopback(self) -> Connection | None:
        """The loopback connection, if present."""

        return next((c for c in self.connections if c.kind == "loopback"), None)

    def carries_ip_config(self, connection: Connection) -> bool:
        """Whether the connection configures IP itself.

        Ports of a bond or bridge don't, the OVS internal interface does even
        though its OVS port controls it.
        """

        if connection.kind in NO_IP_TYPES:
            return False
        if connection.controller is None:
            return True
        controller = self.get_by_uuid(connection.controller)
        return connection.kind == "ovs-interface" and controller is not None and controller.kind == "ovs-port"

    def add_connection(self, connection: Connection) -> None:
        """Add a connection, rejecting duplicate ids."""

        if self.get_connection(connection.id) is not None:
            raise ValueError(f"Connection {connection.id!r} already exists")
        self.connections.append(connection)


class BuiltConnections(BaseModel):
    """Connections built from one interface record, plus their pending links."""

    connections: list[Connection] = Field(default_factory=list)
    links: dict[UUID, LinkSpec] = Field(default_factory=dict)
    """Pending controller references keyed by dependent connection uuid."""

    def extend(self, other: "BuiltConnections") -> None:
        self.connections.extend(other.connections)
        self.links.update(other.links)
