"""IPv4/IPv6 settings derived from a legacy interface record."""

from ipaddress import IPv4Interface, IPv6Address, ip_address, ip_interface, ip_network

from ..core.errors import BuildError
from ..models.common import Outcome
from ..models.connection import IpConfig, IpRoute, Ipv4Method, Ipv6Method
from ..models.legacy import InterfaceRecord, IpStatic, Route


def ipv4_method(record: InterfaceRecord) -> Ipv4Method:
    """Addressing method for IPv4."""

    if record.ipv4.enabled and record.ipv4_static and record.ipv4_static.addresses:
        return "manual"
    if not record.ipv4.enabled:
        return "disabled"
    return "auto"


def ipv6_method(record: InterfaceRecord) -> Ipv6Method:
    """Addressing method for IPv6."""

    if record.ipv6.enabled and record.ipv6_static and record.ipv6_static.addresses:
        return "manual"
    if record.ipv6.enabled and record.ipv6_dhcp and record.ipv6_dhcp.mode == "managed":
        return "dhcp"
    if not record.ipv6.enabled:
        return "disabled"
    return "auto"


def convert_route(route: Route) -> IpRoute:
    """Convert a single-path route.

    A route without destination becomes the default route of its next-hop's
    family. Callers must filter multipath routes first.
    """

    next_hop = None
    if route.nexthops:
        gateway = route.nexthops[0].gateway
        try:
            next_hop = ip_address(gateway)
        except ValueError as e:
            raise BuildError(f"Invalid route gateway {gateway!r}: {e}") from e

    if route.destination:
        try:
            destination = ip_network(route.destination, strict=False)
        except ValueError as e:
            raise BuildError(f"Invalid route destination {route.destination!r}: {e}") from e
    elif next_hop is not None:
        destination = ip_network("::/0" if isinstance(next_hop, IPv6Address) else "0.0.0.0/0")
    else:
        raise BuildError("Route has neither a destination nor a next-hop")

    return IpRoute(destination=destination, next_hop=next_hop, metric=route.priority)


def _convert_static(static: IpStatic, outcome: Outcome[IpConfig], name: str) -> list[IpRoute]:
    for addr in static.addresses:
        try:
            iface = ip_interface(addr.local)
        except ValueError as e:
            raise BuildError(f"Invalid address {addr.local!r} on {name}: {e}") from e

        if addr.broadcast and isinstance(iface, IPv4Interface):
            expected = iface.network.broadcast_address
            if addr.broadcast != str(expected):
                outcome.warn(
                    f"Custom broadcast {addr.broadcast} of {addr.local} on {name} isn't supported "
                    f"by NetworkManager, {expected} will be used"
                )
        outcome.value.addresses.append(iface)

    routes: list[IpRoute] = []
    for route in static.routes:
        if len(route.nexthops) > 1:
            outcome.warn(f"Multipath routing isn't natively supported by NetworkManager (route on {name} skipped)")
            continue
        routes.append(convert_route(route))
    return routes


def build_ip_config(record: InterfaceRecord) -> Outcome[IpConfig]:
    """Derive methods, addresses and routes for both IP families."""

    outcome = Outcome(IpConfig(method4=ipv4_method(record), method6=ipv6_method(record)))
    ip_config = outcome.value

    if record.ipv4_static:
        ip_config.routes4 = _convert_static(record.ipv4_static, outcome, record.name) or None
    if record.ipv6_static:
        ip_config.routes6 = _convert_static(record.ipv6_static, outcome, record.name) or None

    for dhcp in (record.ipv4_dhcp, record.ipv6_dhcp):
        if dhcp and dhcp.hostname and ip_config.dhcp_hostname is None:
            ip_config.dhcp_hostname = dhcp.hostname

    return outcome
