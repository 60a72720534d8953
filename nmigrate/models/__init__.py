"""nmigrate models.

This package contains:
- common: Shared types and the Outcome result type
- legacy: Typed records of the wicked interface configuration
- netconfig: Sysconfig DNS and DHCP settings
- connection: NetworkManager connection model and resolution types
"""

from .common import MTU, Outcome, Tier, Vid, unwrap_list
from .connection import (
    BuiltConnections,
    Connection,
    ConnectionConfig,
    IpConfig,
    IpRoute,
    LinkSpec,
    NetworkState,
    ParentMatch,
    PortDescriptor,
)
from .legacy import InterfaceRecord, LegacyModel
from .netconfig import STATIC_POLICY, Netconfig, NetconfigDhcp, hostname_option_kind


__all__ = [
    # Common types
    "MTU",
    "Outcome",
    "Tier",
    "Vid",
    "unwrap_list",
    # Legacy records
    "InterfaceRecord",
    "LegacyModel",
    "Netconfig",
    "NetconfigDhcp",
    "STATIC_POLICY",
    "hostname_option_kind",
    # Connections
    "BuiltConnections",
    "Connection",
    "ConnectionConfig",
    "IpConfig",
    "IpRoute",
    "LinkSpec",
    "NetworkState",
    "ParentMatch",
    "PortDescriptor",
]
