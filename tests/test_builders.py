"""Tests for the per-technology builders."""

import pytest
from pydantic import ValidationError

from nmigrate.builders.bond import bond_options, build_bond
from nmigrate.builders.bridge import build_bridge
from nmigrate.builders.infiniband import MULTICAST_UNSUPPORTED, build_infiniband
from nmigrate.builders.interface import build_connections
from nmigrate.builders.tuntap import build_tuntap
from nmigrate.builders.vlan import build_vlan
from nmigrate.core.errors import BuildError
from nmigrate.models.connection import BridgePortConfig, PortDescriptor
from nmigrate.models.legacy import Bond, Bridge, InfinibandChild, TunTap, Vlan


@pytest.mark.unit
class TestBond:
    """Bond mode and option bag."""

    def test_only_set_options_are_emitted(self):
        bond = Bond.model_validate(
            {
                "mode": "active-backup",
                "miimon": {"frequency": "100", "carrier-detect": "ioctl"},
                "slaves": {"slave": [{"device": "eth0", "primary": "true"}, {"device": "eth1"}]},
            }
        )

        assert bond_options(bond) == {"primary": "eth0", "miimon": "100", "use_carrier": "0"}
        assert build_bond(bond).mode == "active-backup"

    def test_arp_monitoring(self):
        bond = Bond.model_validate(
            {
                "arpmon": {
                    "interval": "200",
                    "validate": "all",
                    "validate-targets": "any",
                    "targets": {"ipv4-address": ["10.0.0.1", "10.0.0.2"]},
                }
            }
        )
        options = bond_options(bond)

        assert options["arp_interval"] == "200"
        assert options["arp_validate"] == "all"
        assert options["arp_ip_target"] == "10.0.0.1,10.0.0.2"
        assert options["arp_all_targets"] == "any"

    def test_tuning_fields(self):
        bond = Bond.model_validate(
            {
                "mode": "802.3ad",
                "xmit-hash-policy": "layer34",
                "lacp-rate": "fast",
                "min-links": "2",
                "all-slaves-active": "true",
            }
        )
        options = bond_options(bond)

        assert options == {
            "xmit_hash_policy": "layer3+4",
            "lacp_rate": "fast",
            "min_links": "2",
            "all_slaves_active": "1",
        }

    def test_unknown_mode_is_rejected(self):
        with pytest.raises(ValidationError):
            Bond.model_validate({"mode": "round-robin"})


@pytest.mark.unit
class TestBridge:
    """Bridge settings."""

    def test_times_are_rounded_and_aging_renamed(self):
        config = build_bridge(
            Bridge.model_validate({"stp": "true", "forward-delay": "15.4", "hello-time": "2.0", "aging-time": "300"})
        )

        assert config.stp is True
        assert config.forward_delay == 15
        assert config.hello_time == 2
        assert config.ageing_time == 300
        assert config.max_age is None

    def test_stp_defaults_to_disabled(self):
        assert build_bridge(Bridge()).stp is False

    def test_declared_ports(self):
        bridge = Bridge.model_validate({"ports": {"port": [{"device": "eth0"}, {"device": "eth1", "priority": "5"}]}})

        assert [p.device for p in bridge.ports] == ["eth0", "eth1"]
        assert bridge.ports[1].priority == 5


@pytest.mark.unit
class TestVlan:
    """VLAN settings."""

    def test_default_protocol(self):
        config = build_vlan(Vlan(device="eth0", tag=10))

        assert config.parent == "eth0"
        assert config.id == 10
        assert config.protocol == "802.1Q"

    def test_802_1ad(self):
        assert build_vlan(Vlan(device="eth0", tag=10, protocol="ieee802-1ad")).protocol == "802.1ad"

    def test_tag_out_of_range(self):
        with pytest.raises(ValidationError):
            Vlan(device="eth0", tag=4095)


@pytest.mark.unit
class TestInfiniband:
    """Infiniband and partitions."""

    def test_child_pkey_is_parsed_from_hex(self):
        child = InfinibandChild.model_validate({"device": "ib0", "pkey": "0x8001"})
        outcome = build_infiniband(child)

        assert outcome.value.p_key == 0x8001
        assert outcome.value.parent == "ib0"
        assert outcome.value.transport_mode == "datagram"
        assert outcome.warnings == []

    def test_multicast_is_a_warning(self, record, strict):
        outcome = build_connections(record("ib0", infiniband={"mode": "connected", "multicast": "allowed"}), strict)

        assert outcome.warnings == [MULTICAST_UNSUPPORTED]
        assert outcome.value.connections[0].config.transport_mode == "connected"


@pytest.mark.unit
class TestTunTap:
    def test_owner_and_group(self):
        config = build_tuntap(TunTap(owner=1000, group=100), "tap")

        assert config.mode == "tap"
        assert config.owner == "1000"
        assert config.group == "100"


@pytest.mark.unit
class TestBuildConnections:
    """Record dispatch and shared fields."""

    def test_plain_record_is_ethernet(self, record, strict):
        outcome = build_connections(record("eth0"), strict)
        [connection] = outcome.value.connections

        assert connection.id == "eth0"
        assert connection.interface == "eth0"
        assert connection.kind == "ethernet"
        assert connection.autoconnect is True
        assert connection.status == "up"
        assert outcome.value.links == {}

    def test_lo_is_loopback(self, record, strict):
        [connection] = build_connections(record("lo"), strict).value.connections

        assert connection.kind == "loopback"

    def test_manual_control_mode_does_not_autoconnect(self, record, strict):
        [connection] = build_connections(record("eth0", control={"mode": "manual"}), strict).value.connections

        assert connection.autoconnect is False
        assert connection.status == "down"

    def test_link_fields(self, record, strict):
        r = record(
            "eth0",
            link={"master": "br0", "mtu": "9000", "port": {"type": "bridge", "priority": "32", "path-cost": "100"}},
            firewall={"zone": "internal"},
        )
        outcome = build_connections(r, strict)
        [connection] = outcome.value.connections

        assert connection.mtu == 9000
        assert connection.firewall_zone == "internal"
        assert connection.port_config == BridgePortConfig(priority=32, path_cost=100)
        link = outcome.value.links[connection.uuid]
        assert link.master == "br0"
        assert link.port == PortDescriptor(port_type="bridge", priority=32, path_cost=100)

    def test_address_becomes_mac_override(self, record, strict):
        [connection] = build_connections(
            record("bond0", bond={"mode": "active-backup", "address": "02:00:00:aa:bb:cc"}), strict
        ).value.connections

        assert connection.kind == "bond"
        assert connection.mac_address == "02:00:00:AA:BB:CC"

    def test_invalid_address_is_fatal(self, record, strict):
        with pytest.raises(BuildError):
            build_connections(record("dummy0", dummy={"address": "nonsense"}), strict)

    def test_more_than_one_payload_is_rejected(self, record):
        with pytest.raises(ValidationError):
            record("eth0", dummy={}, ethernet={})
