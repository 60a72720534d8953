"""Tests for the DNS priority policy."""

import pytest

from nmigrate.controllers.dns import DnsPolicyEngine
from nmigrate.core.errors import DnsPolicyError
from nmigrate.models.connection import Connection, LoopbackConfig


@pytest.fixture
def connections() -> list[Connection]:
    return [
        Connection(id="lo", interface="lo", config=LoopbackConfig()),
        Connection(id="eth0", interface="eth0"),
        Connection(id="eth1", interface="eth1"),
        Connection(id="wlan0", interface="wlan0"),
    ]


def priorities(connections: list[Connection]) -> dict[str, int | None]:
    return {c.id: c.ip_config.dns_priority4 for c in connections}


@pytest.mark.unit
class TestDnsPolicy:
    """Tier assignment in policy order."""

    def test_static_then_wildcard(self, connections):
        DnsPolicyEngine().apply(["STATIC", "*"], connections)

        assert priorities(connections) == {"lo": 10, "eth0": 20, "eth1": 20, "wlan0": 20}
        assert all(c.ip_config.dns_priority6 == c.ip_config.dns_priority4 for c in connections)
        assert not any(c.ip_config.ignore_auto_dns for c in connections)

    def test_unmatched_ppp_link(self):
        lo = Connection(id="lo", interface="lo", config=LoopbackConfig())
        eth0 = Connection(id="eth0", interface="eth0")
        ppp0 = Connection(id="ppp0", interface="ppp0")

        DnsPolicyEngine().apply(["STATIC", "eth*"], [lo, eth0, ppp0])

        assert (lo.ip_config.dns_priority4, lo.ip_config.dns_priority6) == (10, 10)
        assert (eth0.ip_config.dns_priority4, eth0.ip_config.dns_priority6) == (20, 20)
        assert ppp0.ip_config.dns_priority4 is None
        assert ppp0.ip_config.ignore_auto_dns is True

    def test_earlier_token_wins(self, connections):
        DnsPolicyEngine().apply(["eth1", "eth*", "STATIC"], connections)

        assert priorities(connections) == {"lo": 30, "eth0": 20, "eth1": 10, "wlan0": None}

    def test_unmatched_connections_ignore_auto_dns(self, connections):
        DnsPolicyEngine().apply(["wlan*"], connections)
        by_id = {c.id: c for c in connections}

        assert by_id["wlan0"].ip_config.dns_priority4 == 10
        assert by_id["wlan0"].ip_config.ignore_auto_dns is False
        assert by_id["eth0"].ip_config.ignore_auto_dns is True
        assert by_id["lo"].ip_config.ignore_auto_dns is True

    def test_empty_tokens_do_not_take_a_tier(self, connections):
        DnsPolicyEngine().apply(["", "eth0", " ", "wlan0"], connections)

        assert priorities(connections)["eth0"] == 10
        assert priorities(connections)["wlan0"] == 20

    def test_glob_is_case_sensitive(self, connections):
        DnsPolicyEngine().apply(["ETH*"], connections)

        assert priorities(connections)["eth0"] is None

    def test_empty_policy(self, connections):
        DnsPolicyEngine().apply([], connections)

        assert all(c.ip_config.ignore_auto_dns for c in connections)
        assert set(priorities(connections).values()) == {None}

    def test_static_requires_loopback(self, connections):
        with pytest.raises(DnsPolicyError):
            DnsPolicyEngine().apply(["STATIC"], connections[1:])

    def test_connections_without_interface_are_not_globbed(self):
        connection = Connection(id="floating")

        DnsPolicyEngine().apply(["*"], [connection])

        assert connection.ip_config.dns_priority4 is None
        assert connection.ip_config.ignore_auto_dns is True
