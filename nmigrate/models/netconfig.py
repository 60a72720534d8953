"""Sysconfig DNS and DHCP settings."""

from collections.abc import Mapping
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Literal

from pydantic import BaseModel, Field


STATIC_POLICY = "STATIC"


class Netconfig(BaseModel):
    """Values of ``/etc/sysconfig/network/config`` relevant to DNS."""

    static_dns_servers: list[IPv4Address | IPv6Address] = Field(default_factory=list)
    """Name servers from ``NETCONFIG_DNS_STATIC_SERVERS``."""

    static_dns_searchlist: list[str] | None = None
    """Search domains from ``NETCONFIG_DNS_STATIC_SEARCHLIST``."""

    dns_policy: list[str] = Field(default_factory=list)
    """Ordered policy tokens from ``NETCONFIG_DNS_POLICY``."""

    warnings: list[str] = Field(default_factory=list)
    """Settings that could not be migrated."""

    @classmethod
    def from_values(cls, values: Mapping[str, str | None]) -> "Netconfig":
        """Interpret the sysconfig variables."""

        netconfig = cls()

        dns_policy = values.get("NETCONFIG_DNS_POLICY") or ""
        if dns_policy == "auto":
            netconfig.dns_policy = [STATIC_POLICY, "*"]
        elif dns_policy:
            if "STATIC_FALLBACK" in dns_policy:
                netconfig.warnings.append('NETCONFIG_DNS_POLICY "STATIC_FALLBACK" is not supported')
            else:
                netconfig.dns_policy = dns_policy.split(" ")

        for server in (values.get("NETCONFIG_DNS_STATIC_SERVERS") or "").split():
            try:
                netconfig.static_dns_servers.append(ip_address(server))
            except ValueError:
                netconfig.warnings.append(f"Invalid value '{server}' in NETCONFIG_DNS_STATIC_SERVERS")

        searchlist = values.get("NETCONFIG_DNS_STATIC_SEARCHLIST") or ""
        if searchlist:
            netconfig.static_dns_searchlist = searchlist.split()

        gratuitous_arp = values.get("SEND_GRATUITOUS_ARP")
        if gratuitous_arp is not None and gratuitous_arp != "auto":
            netconfig.warnings.append(
                "SEND_GRATUITOUS_ARP differs from 'auto', consider the "
                "net.ipv4.conf.{all,default}.arp_notify variable in /etc/sysctl.conf"
            )

        return netconfig


HostnameKind = Literal["empty", "auto", "value"]


def hostname_option_kind(option: str) -> HostnameKind:
    """Classify a ``DHCLIENT*_HOSTNAME_OPTION`` value."""

    if not option:
        return "empty"
    if option == "AUTO":
        return "auto"
    return "value"


class NetconfigDhcp(BaseModel):
    """Values of ``/etc/sysconfig/network/dhcp``."""

    dhclient_hostname_option: str = ""
    """Hostname sent by the IPv4 DHCP client: empty, ``AUTO`` or a literal name."""

    dhclient6_hostname_option: str = ""
    """Hostname sent by the IPv6 DHCP client: empty, ``AUTO`` or a literal name."""

    @classmethod
    def from_values(cls, values: Mapping[str, str | None]) -> "NetconfigDhcp":
        """Interpret the sysconfig variables."""

        return cls(
            dhclient_hostname_option=values.get("DHCLIENT_HOSTNAME_OPTION") or "",
            dhclient6_hostname_option=values.get("DHCLIENT6_HOSTNAME_OPTION") or "",
        )
