"""Tests for reading wicked XML and sysconfig files."""

import io
import logging
import xml.etree.ElementTree as ET

import pytest

from nmigrate.controllers.reader import element_to_value, normalize_tags, parse_interfaces
from nmigrate.core.errors import ReaderError
from nmigrate.core.settings import MigrationSettings


STATIC_ETH0 = """<?xml version="1.0" encoding="UTF-8"?>
<interface origin="compat:suse:/etc/sysconfig/network/ifcfg-eth0">
  <name>eth0</name>
  <control><mode>boot</mode></control>
  <ipv4:static>
    <address><local>192.0.2.10/24</local></address>
    <route><nexthop><gateway>192.0.2.1</gateway></nexthop></route>
  </ipv4:static>
</interface>
<interface>
  <name>eth1</name>
  <ipv4:dhcp><enabled>true</enabled></ipv4:dhcp>
</interface>
"""


@pytest.mark.unit
class TestParsing:
    """XML to interface records."""

    def test_normalize_tags(self):
        assert normalize_tags("<ipv4:static><a/></ipv4:static>") == "<ipv4-static><a/></ipv4-static>"

    def test_element_to_value(self):
        element = ET.fromstring(
            "<bond><slaves><slave><device>a</device></slave><slave><device>b</device></slave></slaves><x/></bond>"
        )

        assert element_to_value(element) == {
            "slaves": {"slave": [{"device": "a"}, {"device": "b"}]},
            "x": {},
        }

    def test_multiple_interfaces(self):
        interfaces = parse_interfaces(STATIC_ETH0)

        assert [i.name for i in interfaces] == ["eth0", "eth1"]
        assert interfaces[0].origin == "compat:suse:/etc/sysconfig/network/ifcfg-eth0"
        assert interfaces[0].ipv4_static.addresses[0].local == "192.0.2.10/24"
        assert interfaces[0].ipv4_static.routes[0].nexthops[0].gateway == "192.0.2.1"
        assert interfaces[1].ipv4_dhcp.enabled is True

    def test_broken_xml(self):
        with pytest.raises(ReaderError):
            parse_interfaces("<interface><name>eth0</name>", "broken.xml")

    def test_doctype_is_rejected(self):
        with pytest.raises(ReaderError):
            parse_interfaces(
                '<!DOCTYPE interface [<!ENTITY n "eth0">]><interface><name>&n;</name></interface>', "dtd.xml"
            )

    def test_two_payloads(self):
        with pytest.raises(ReaderError):
            parse_interfaces("<interface><name>x</name><bond/><bridge/></interface>")


@pytest.mark.unit
class TestReaderController:
    """Reading files and directories through the application."""

    def test_unhandled_fields(self, app, caplog):
        caplog.set_level(logging.WARNING, logger="nmigrate")

        result = app.reader.read_text(
            "<interface><name>eth0</name><lldp><enabled>true</enabled></lldp></interface>", "x"
        )

        assert result.warning == "1 unhandled field(s) in x"
        assert "Unhandled field in interface eth0: lldp" in caplog.text

    def test_nested_unhandled_field(self, app):
        result = app.reader.read_text(
            "<interface><name>br0</name><bridge><stp>false</stp><vlan-filtering/></bridge></interface>", "x"
        )

        assert result.warning is not None
        assert result.interfaces[0].unhandled_fields() == ["bridge.vlan-filtering"]

    def test_directory_is_read_in_sorted_order(self, app, tmp_path):
        (tmp_path / "b.xml").write_text("<interface><name>eth1</name></interface>")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "c.xml").write_text("<interface><name>eth2</name></interface>")
        (tmp_path / "a.xml").write_text("<interface><name>eth0</name></interface>")

        result = app.reader.read([str(tmp_path)])

        assert [i.name for i in result.interfaces] == ["eth0", "eth1", "eth2"]
        assert result.warning is None
        assert result.netconfig is None

    def test_stdin(self, app, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("<interface><name>eth0</name></interface>"))

        assert [i.name for i in app.reader.read(["-"]).interfaces] == ["eth0"]

    def test_netconfig(self, app, tmp_path):
        config = tmp_path / "config"
        config.write_text('NETCONFIG_DNS_POLICY="auto"\nNETCONFIG_DNS_STATIC_SERVERS="192.0.2.53"\n')
        dhcp = tmp_path / "dhcp"
        dhcp.write_text('DHCLIENT_HOSTNAME_OPTION="AUTO"\n')
        xml = tmp_path / "eth0.xml"
        xml.write_text("<interface><name>eth0</name></interface>")
        app.settings = MigrationSettings(with_netconfig=True, netconfig_path=config, netconfig_dhcp_path=dhcp)

        result = app.reader.read([str(xml)])

        assert result.netconfig.dns_policy == ["STATIC", "*"]
        assert [str(s) for s in result.netconfig.static_dns_servers] == ["192.0.2.53"]
        assert result.netconfig_dhcp.dhclient_hostname_option == "AUTO"

    def test_missing_netconfig(self, app, tmp_path):
        app.settings = MigrationSettings(
            with_netconfig=True, netconfig_path=tmp_path / "nope", netconfig_dhcp_path=tmp_path / "nope-dhcp"
        )

        result = app.reader.read([])

        assert result.netconfig is None
        assert result.netconfig_dhcp is None

    def test_unreadable_file(self, app, tmp_path):
        with pytest.raises(ReaderError):
            app.reader.read_file(tmp_path / "missing.xml")
