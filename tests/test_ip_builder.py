"""Tests for IP method, address and route derivation."""

from ipaddress import ip_address, ip_interface, ip_network

import pytest

from nmigrate.builders.ip import build_ip_config, convert_route, ipv4_method, ipv6_method
from nmigrate.core.errors import BuildError
from nmigrate.models.legacy import Route


@pytest.mark.unit
class TestIpMethods:
    """Addressing methods per family."""

    def test_static_addresses_make_manual(self, record):
        r = record("eth0", **{"ipv4-static": {"address": {"local": "192.168.1.10/24"}}})

        assert ipv4_method(r) == "manual"
        assert ipv6_method(r) == "auto"

    def test_disabled_family(self, record):
        r = record("eth0", ipv4={"enabled": "false"}, ipv6={"enabled": "false"})

        assert ipv4_method(r) == "disabled"
        assert ipv6_method(r) == "disabled"

    def test_static_addresses_of_disabled_family_are_not_manual(self, record):
        r = record("eth0", ipv4={"enabled": "false"}, **{"ipv4-static": {"address": {"local": "10.0.0.1/8"}}})

        assert ipv4_method(r) == "disabled"

    def test_managed_dhcpv6(self, record):
        r = record("eth0", **{"ipv6-dhcp": {"enabled": "true", "mode": "managed"}})

        assert ipv6_method(r) == "dhcp"

    def test_defaults_to_auto(self, record):
        r = record("eth0")

        assert ipv4_method(r) == "auto"
        assert ipv6_method(r) == "auto"


@pytest.mark.unit
class TestRoutes:
    """Route conversion."""

    def test_ipv4_next_hop_without_destination_is_default_route(self):
        route = convert_route(Route.model_validate({"nexthop": {"gateway": "10.0.0.1"}}))

        assert route.destination == ip_network("0.0.0.0/0")
        assert route.next_hop == ip_address("10.0.0.1")

    def test_ipv6_next_hop_without_destination_is_default_route(self):
        route = convert_route(Route.model_validate({"nexthop": {"gateway": "fe80::1"}}))

        assert route.destination == ip_network("::/0")

    def test_priority_becomes_metric(self):
        route = convert_route(
            Route.model_validate({"destination": "10.1.0.0/16", "nexthop": {"gateway": "10.0.0.1"}, "priority": "50"})
        )

        assert route.destination == ip_network("10.1.0.0/16")
        assert route.metric == 50

    def test_route_without_destination_and_next_hop_is_fatal(self):
        with pytest.raises(BuildError):
            convert_route(Route.model_validate({"priority": "5"}))

    def test_invalid_gateway_is_fatal(self):
        with pytest.raises(BuildError):
            convert_route(Route.model_validate({"nexthop": {"gateway": "not-an-ip"}}))


@pytest.mark.unit
class TestBuildIpConfig:
    """Full IP config of a record."""

    def test_addresses_and_routes(self, record):
        r = record(
            "eth0",
            **{
                "ipv4-static": {
                    "address": [{"local": "192.168.1.10/24"}, {"local": "192.168.2.10/24"}],
                    "route": {"nexthop": {"gateway": "192.168.1.1"}},
                },
                "ipv6-static": {"address": {"local": "2001:db8::10/64"}},
            },
        )
        outcome = build_ip_config(r)

        assert outcome.warnings == []
        assert outcome.value.addresses == [
            ip_interface("192.168.1.10/24"),
            ip_interface("192.168.2.10/24"),
            ip_interface("2001:db8::10/64"),
        ]
        assert len(outcome.value.routes4) == 1
        assert outcome.value.routes6 is None

    def test_multipath_route_is_skipped_with_warning(self, record):
        r = record(
            "eth0",
            **{
                "ipv4-static": {
                    "address": {"local": "10.0.0.5/24"},
                    "route": {
                        "destination": "10.8.0.0/16",
                        "nexthop": [{"gateway": "10.0.0.1"}, {"gateway": "10.0.0.2"}],
                    },
                }
            },
        )
        outcome = build_ip_config(r)

        assert len(outcome.warnings) == 1
        assert "Multipath" in outcome.warnings[0]
        assert outcome.value.routes4 is None

    def test_broadcast_mismatch_is_a_warning(self, record):
        r = record("eth0", **{"ipv4-static": {"address": {"local": "10.0.0.5/24", "broadcast": "10.0.0.127"}}})
        outcome = build_ip_config(r)

        assert len(outcome.warnings) == 1
        assert "10.0.0.255" in outcome.warnings[0]

    def test_matching_broadcast_is_silent(self, record):
        r = record("eth0", **{"ipv4-static": {"address": {"local": "10.0.0.5/24", "broadcast": "10.0.0.255"}}})

        assert build_ip_config(r).warnings == []

    def test_invalid_address_is_fatal(self, record):
        r = record("eth0", **{"ipv4-static": {"address": {"local": "10.0.0.300/24"}}})

        with pytest.raises(BuildError):
            build_ip_config(r)

    def test_dhcp_hostname_is_copied(self, record):
        r = record("eth0", **{"ipv4-dhcp": {"enabled": "true", "hostname": "client1"}})

        assert build_ip_config(r).value.dhcp_hostname == "client1"
