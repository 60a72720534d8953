"""Tests for the sysconfig DNS and DHCP settings."""

from ipaddress import ip_address

import pytest

from nmigrate.models.netconfig import Netconfig, NetconfigDhcp, hostname_option_kind


@pytest.mark.unit
class TestNetconfig:
    """``/etc/sysconfig/network/config`` interpretation."""

    def test_auto_policy(self):
        netconfig = Netconfig.from_values({"NETCONFIG_DNS_POLICY": "auto"})

        assert netconfig.dns_policy == ["STATIC", "*"]
        assert netconfig.warnings == []

    def test_explicit_policy_keeps_order(self):
        netconfig = Netconfig.from_values({"NETCONFIG_DNS_POLICY": "eth* STATIC"})

        assert netconfig.dns_policy == ["eth*", "STATIC"]

    def test_static_fallback_is_not_supported(self):
        netconfig = Netconfig.from_values({"NETCONFIG_DNS_POLICY": "STATIC_FALLBACK *"})

        assert netconfig.dns_policy == []
        assert "STATIC_FALLBACK" in netconfig.warnings[0]

    def test_servers_and_searchlist(self):
        netconfig = Netconfig.from_values(
            {
                "NETCONFIG_DNS_STATIC_SERVERS": "192.0.2.53 2001:db8::53",
                "NETCONFIG_DNS_STATIC_SEARCHLIST": "example.com example.org",
            }
        )

        assert netconfig.static_dns_servers == [ip_address("192.0.2.53"), ip_address("2001:db8::53")]
        assert netconfig.static_dns_searchlist == ["example.com", "example.org"]

    def test_invalid_server_warns(self):
        netconfig = Netconfig.from_values({"NETCONFIG_DNS_STATIC_SERVERS": "192.0.2.53 dns.example.com"})

        assert netconfig.static_dns_servers == [ip_address("192.0.2.53")]
        assert "dns.example.com" in netconfig.warnings[0]

    @pytest.mark.parametrize(("value", "warns"), [(None, False), ("auto", False), ("yes", True)])
    def test_gratuitous_arp(self, value, warns):
        netconfig = Netconfig.from_values({"SEND_GRATUITOUS_ARP": value})

        assert bool(netconfig.warnings) is warns

    def test_empty_values(self):
        netconfig = Netconfig.from_values({})

        assert netconfig.dns_policy == []
        assert netconfig.static_dns_servers == []
        assert netconfig.static_dns_searchlist is None


@pytest.mark.unit
class TestNetconfigDhcp:
    def test_values(self):
        dhcp = NetconfigDhcp.from_values({"DHCLIENT_HOSTNAME_OPTION": "AUTO", "DHCLIENT6_HOSTNAME_OPTION": None})

        assert dhcp.dhclient_hostname_option == "AUTO"
        assert dhcp.dhclient6_hostname_option == ""

    @pytest.mark.parametrize(("option", "kind"), [("", "empty"), ("AUTO", "auto"), ("myhost", "value")])
    def test_hostname_option_kind(self, option, kind):
        assert hostname_option_kind(option) == kind
