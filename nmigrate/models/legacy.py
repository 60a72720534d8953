"""Typed records of the legacy (wicked) interface configuration."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .common import Vid, unwrap_list


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class LegacyModel(BaseModel):
    """Base for legacy records.

    Unknown elements are kept in ``model_extra`` so the reader can report
    them instead of silently dropping configuration.
    """

    model_config = ConfigDict(extra="allow", alias_generator=_kebab, populate_by_name=True)

    def unhandled_fields(self, prefix: str = "") -> list[str]:
        """List dotted paths of every element no field consumed."""

        paths = [f"{prefix}{key}" for key in self.model_extra or {}]
        for name, info in type(self).model_fields.items():
            value = getattr(self, name)
            for item in value if isinstance(value, list) else [value]:
                if isinstance(item, LegacyModel):
                    paths.extend(item.unhandled_fields(f"{prefix}{info.alias or name}."))
        return paths


# --- IP ----------------------------------------------------------------------


class Address(LegacyModel):
    local: str
    broadcast: str | None = None


class Nexthop(LegacyModel):
    gateway: str


class Route(LegacyModel):
    destination: str | None = None
    nexthops: list[Nexthop] = Field(default_factory=list, alias="nexthop")
    priority: int | None = None

    @field_validator("nexthops", mode="before")
    @classmethod
    def _list_nexthops(cls, v: Any) -> list[Any]:
        return unwrap_list(v)


class IpStatic(LegacyModel):
    addresses: list[Address] = Field(default_factory=list, alias="address")
    routes: list[Route] = Field(default_factory=list, alias="route")

    @field_validator("addresses", "routes", mode="before")
    @classmethod
    def _list_entries(cls, v: Any) -> list[Any]:
        return unwrap_list(v)


class IpFamily(LegacyModel):
    enabled: bool = True


class Ipv4Dhcp(LegacyModel):
    enabled: bool = False
    hostname: str | None = None


class Ipv6Dhcp(LegacyModel):
    enabled: bool = False
    mode: str = "auto"
    hostname: str | None = None


class Ipv6Auto(LegacyModel):
    enabled: bool = False


# --- Link / control ----------------------------------------------------------


PortType = Literal["bridge", "bond", "ovs-bridge"]


class PortRecord(LegacyModel):
    port_type: PortType = Field(alias="type")
    priority: int | None = None
    path_cost: int | None = None


class LinkRecord(LegacyModel):
    master: str | None = None
    mtu: int | None = None
    port: PortRecord | None = None


class ControlRecord(LegacyModel):
    mode: Literal["boot", "hotplug", "manual", "off"] = "boot"


class FirewallRecord(LegacyModel):
    zone: str | None = None


# --- Bond --------------------------------------------------------------------


WickedBondMode = Literal[
    "balance-rr",
    "active-backup",
    "balance-xor",
    "broadcast",
    "802.3ad",
    "balance-tlb",
    "balance-alb",
]


class Miimon(LegacyModel):
    frequency: int
    carrier_detect: Literal["ioctl", "netif"] = "netif"
    downdelay: int | None = None
    updelay: int | None = None


class ArpMon(LegacyModel):
    interval: int
    validate_: Literal[
        "none", "active", "backup", "all", "filter", "filter_active", "filter_backup"
    ] = Field(default="none", alias="validate")
    validate_targets: Literal["any", "all"] | None = None
    targets: list[str] = Field(default_factory=list)

    @field_validator("targets", mode="before")
    @classmethod
    def _list_targets(cls, v: Any) -> list[Any]:
        return unwrap_list(v, "ipv4-address")


class BondSlave(LegacyModel):
    device: str
    primary: bool | None = None


class Bond(LegacyModel):
    mode: WickedBondMode = "balance-rr"
    miimon: Miimon | None = None
    arpmon: ArpMon | None = None
    slaves: list[BondSlave] = Field(default_factory=list)
    xmit_hash_policy: Literal["layer2", "layer23", "layer34", "encap23", "encap34"] | None = None
    packets_per_slave: int | None = None
    tlb_dynamic_lb: bool | None = None
    lacp_rate: Literal["slow", "fast"] | None = None
    ad_select: Literal["stable", "bandwidth", "count"] | None = None
    ad_user_port_key: int | None = None
    ad_actor_sys_prio: int | None = None
    ad_actor_system: str | None = None
    min_links: int | None = None
    primary_reselect: Literal["always", "better", "failure"] | None = None
    fail_over_mac: Literal["none", "active", "follow"] | None = None
    num_grat_arp: int | None = None
    num_unsol_na: int | None = None
    lp_interval: int | None = None
    resend_igmp: int | None = None
    all_slaves_active: bool | None = None
    address: str | None = None

    @field_validator("slaves", mode="before")
    @classmethod
    def _list_slaves(cls, v: Any) -> list[Any]:
        return unwrap_list(v, "slave")

    def primary(self) -> str | None:
        """Device of the slave flagged as primary."""

        for slave in self.slaves:
            if slave.primary:
                return slave.device
        return None


# --- Bridge ------------------------------------------------------------------


class BridgePort(LegacyModel):
    device: str
    priority: int | None = None
    path_cost: int | None = None


class Bridge(LegacyModel):
    stp: bool = False
    priority: int | None = None
    forward_delay: float | None = None
    hello_time: float | None = None
    max_age: float | None = None
    aging_time: float | None = None
    ports: list[BridgePort] = Field(default_factory=list)
    address: str | None = None

    @field_validator("ports", mode="before")
    @classmethod
    def _list_ports(cls, v: Any) -> list[Any]:
        return unwrap_list(v, "port")


# --- VLAN --------------------------------------------------------------------


class Vlan(LegacyModel):
    device: str
    tag: Vid
    protocol: Literal["ieee802-1Q", "ieee802-1ad"] = "ieee802-1Q"
    address: str | None = None


# --- Wireless ----------------------------------------------------------------


class WpaPsk(LegacyModel):
    passphrase: str


class Wep(LegacyModel):
    auth_algo: Literal["open", "shared"] = "open"
    default_key: int = 0
    key: list[str] = Field(default_factory=list)

    @field_validator("key", mode="before")
    @classmethod
    def _list_keys(cls, v: Any) -> list[Any]:
        return unwrap_list(v)


class WirelessNetwork(LegacyModel):
    essid: str
    scan_ssid: bool = False
    mode: Literal["ad-hoc", "infrastructure", "ap"] = "infrastructure"
    wpa_psk: WpaPsk | None = None
    key_management: list[str] = Field(default_factory=list)
    channel: int | None = None
    access_point: str | None = None
    wep: Wep | None = None

    @field_validator("key_management", mode="before")
    @classmethod
    def _split_key_management(cls, v: Any) -> list[str]:
        tokens: list[str] = []
        for item in unwrap_list(v):
            tokens.extend(t.strip() for t in str(item).split(",") if t.strip())
        return tokens


class Wireless(LegacyModel):
    ap_scan: int | None = None
    networks: list[WirelessNetwork] = Field(default_factory=list)

    @field_validator("networks", mode="before")
    @classmethod
    def _list_networks(cls, v: Any) -> list[Any]:
        return unwrap_list(v, "network")


# --- Infiniband --------------------------------------------------------------


InfinibandMode = Literal["datagram", "connected"]


class Infiniband(LegacyModel):
    mode: InfinibandMode | None = None
    multicast: Literal["allowed", "disallowed"] | None = None


class InfinibandChild(LegacyModel):
    device: str
    pkey: int
    mode: InfinibandMode | None = None
    multicast: Literal["allowed", "disallowed"] | None = None

    @field_validator("pkey", mode="before")
    @classmethod
    def _parse_pkey(cls, v: Any) -> Any:
        if isinstance(v, str):
            return int(v.strip().removeprefix("0x"), 16)
        return v


# --- Other technologies ------------------------------------------------------


class TunTap(LegacyModel):
    owner: int | None = None
    group: int | None = None


class Ethernet(LegacyModel):
    address: str | None = None


class Dummy(LegacyModel):
    address: str | None = None


class OvsBridgeVlan(LegacyModel):
    parent: str
    tag: Vid


class OvsBridge(LegacyModel):
    vlan: OvsBridgeVlan | None = None


# --- Interface ---------------------------------------------------------------


PAYLOADS = (
    "bond",
    "bridge",
    "vlan",
    "wireless",
    "infiniband",
    "infiniband_child",
    "tun",
    "tap",
    "ethernet",
    "dummy",
    "ovs_bridge",
)


class InterfaceRecord(LegacyModel):
    """One ``<interface>`` element."""

    name: str
    origin: Annotated[str | None, Field(alias="@origin")] = None

    link: LinkRecord = Field(default_factory=LinkRecord)
    control: ControlRecord = Field(default_factory=ControlRecord)
    firewall: FirewallRecord | None = None

    ipv4: IpFamily = Field(default_factory=IpFamily)
    ipv4_static: IpStatic | None = None
    ipv4_dhcp: Ipv4Dhcp | None = None
    ipv6: IpFamily = Field(default_factory=IpFamily)
    ipv6_static: IpStatic | None = None
    ipv6_dhcp: Ipv6Dhcp | None = None
    ipv6_auto: Ipv6Auto | None = None

    bond: Bond | None = None
    bridge: Bridge | None = None
    vlan: Vlan | None = None
    wireless: Wireless | None = None
    infiniband: Infiniband | None = None
    infiniband_child: InfinibandChild | None = None
    tun: TunTap | None = None
    tap: TunTap | None = None
    ethernet: Ethernet | None = None
    dummy: Dummy | None = None
    ovs_bridge: OvsBridge | None = None

    @model_validator(mode="after")
    def _single_payload(self) -> "InterfaceRecord":
        present = [name for name in PAYLOADS if getattr(self, name) is not None]
        if len(present) > 1:
            raise ValueError(f"interface {self.name!r} declares more than one type: {', '.join(present)}")
        return self

    @property
    def payload(self) -> str | None:
        """Name of the technology payload, if any."""

        for name in PAYLOADS:
            if getattr(self, name) is not None:
                return name
        return None
