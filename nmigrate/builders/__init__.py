"""Per-technology translation of legacy interface records.

This package contains:
- interface: Record dispatch and the fields shared by every connection
- ip: IPv4/IPv6 methods, addresses and routes
- bond, bridge, vlan, wireless, infiniband, tuntap, ovs: Technology payloads
"""

from .bond import bond_options, build_bond
from .bridge import build_bridge, build_bridge_port
from .infiniband import build_infiniband
from .interface import base_connection, build_connections, link_spec
from .ip import build_ip_config, convert_route, ipv4_method, ipv6_method
from .ovs import attach_to_ovs, build_ovs_bridge
from .tuntap import build_tuntap
from .vlan import build_vlan
from .wireless import build_wireless, guess_security_protocol, strict_security_protocol


__all__ = [
    # Dispatch
    "base_connection",
    "build_connections",
    "link_spec",
    # IP
    "build_ip_config",
    "convert_route",
    "ipv4_method",
    "ipv6_method",
    # Technologies
    "attach_to_ovs",
    "bond_options",
    "build_bond",
    "build_bridge",
    "build_bridge_port",
    "build_infiniband",
    "build_ovs_bridge",
    "build_tuntap",
    "build_vlan",
    "build_wireless",
    "guess_security_protocol",
    "strict_security_protocol",
]
