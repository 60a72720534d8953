"""Reader controller for the legacy configuration files."""

import re
import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import TYPE_CHECKING, Any

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import fromstring
from dotenv import dotenv_values
from pydantic import Field, ValidationError

from ..core.controller import BaseController
from ..core.errors import ReaderError
from ..core.model import DisplayModel
from ..models.legacy import InterfaceRecord
from ..models.netconfig import Netconfig, NetconfigDhcp


if TYPE_CHECKING:
    from ..core.application import Application  # noqa: F401


STDIN = "-"

_PREFIXED_TAG_RE = re.compile(r"<([/]?)(\w+):(\w+)\b")
_XML_DECL_RE = re.compile(r"^\s*<\?xml[^>]*\?>")


class ReadResult(DisplayModel):
    """Everything read from the legacy configuration."""

    interfaces: list[InterfaceRecord] = Field(default_factory=list)
    netconfig: Netconfig | None = None
    netconfig_dhcp: NetconfigDhcp | None = None
    warning: str | None = None
    """Set when some legacy setting was not understood."""


def normalize_tags(text: str) -> str:
    """Rewrite ``<ipv4:static>`` style tags to ``<ipv4-static>``."""

    return _PREFIXED_TAG_RE.sub(r"<\1\2-\3", text)


def element_to_value(element: ET.Element) -> Any:
    """Convert an element into plain data.

    Leaf elements become their text, empty ones an empty mapping, and
    repeated children a list. Attributes are kept under ``@name`` keys.
    """

    children = list(element)
    if not children and not element.attrib:
        text = (element.text or "").strip()
        return text if text else {}

    data: dict[str, Any] = {f"@{key}": value for key, value in element.attrib.items()}
    for child in children:
        value = element_to_value(child)
        if child.tag not in data:
            data[child.tag] = value
        elif isinstance(data[child.tag], list):
            data[child.tag].append(value)
        else:
            data[child.tag] = [data[child.tag], value]
    return data


def parse_interfaces(text: str, source: str = "<string>") -> list[InterfaceRecord]:
    """Parse wicked XML holding any number of ``<interface>`` elements."""

    body = _XML_DECL_RE.sub("", normalize_tags(text), count=1)
    try:
        root = fromstring(f"<interfaces>{body}</interfaces>")
    except ET.ParseError as e:
        raise ReaderError(f"Couldn't parse {source}: {e}") from e
    except DefusedXmlException as e:
        raise ReaderError(f"Refusing unsafe XML in {source}: {e}") from e

    interfaces = []
    for element in root.findall("interface"):
        try:
            interfaces.append(InterfaceRecord.model_validate(element_to_value(element)))
        except ValidationError as e:
            raise ReaderError(f"Invalid interface in {source}: {e}") from e
    return interfaces


def collect_files(path: Path) -> list[Path]:
    """Files below ``path``, recursively and in sorted order."""

    if path.is_dir():
        return sorted(p for p in path.rglob("*") if p.is_file())
    return [path]


class ReaderController(BaseController["Application"]):
    """Controller that turns legacy configuration into typed records."""

    def read_text(self, text: str, source: str) -> ReadResult:
        """Read interfaces from XML text and report unhandled fields."""

        result = ReadResult(interfaces=parse_interfaces(text, source))

        unhandled = 0
        for record in result.interfaces:
            for path in record.unhandled_fields():
                self.logger.warning("Unhandled field in interface %s: %s", record.name, path)
                unhandled += 1
        if unhandled:
            result.warning = f"{unhandled} unhandled field(s) in {source}"
        return result

    def read_file(self, path: Path) -> ReadResult:
        """Read interfaces from one XML file."""

        try:
            text = path.read_text()
        except OSError as e:
            raise ReaderError(f"Couldn't read {path}: {e}") from e
        return self.read_text(text, str(path))

    def read(self, paths: list[str]) -> ReadResult:
        """Read interface files, directories or ``-`` for stdin.

        Also reads the sysconfig DNS and DHCP files when enabled.
        """

        result = ReadResult()
        for raw in paths:
            if raw == STDIN:
                parts = [self.read_text(sys.stdin.read(), "stdin")]
            else:
                parts = [self.read_file(file) for file in collect_files(Path(raw))]

            for part in parts:
                result.interfaces.extend(part.interfaces)
                if result.warning is None:
                    result.warning = part.warning

        self.logger.debug("Read %d interface(s)", len(result.interfaces))

        if self.settings.with_netconfig:
            result.netconfig = self.read_netconfig(self.settings.netconfig_path)
            result.netconfig_dhcp = self.read_netconfig_dhcp(self.settings.netconfig_dhcp_path)
        return result

    def read_netconfig(self, path: Path) -> Netconfig | None:
        """Read ``/etc/sysconfig/network/config``, ``None`` if missing."""

        if not path.is_file():
            self.logger.info("%s not found, DNS settings are not migrated", path)
            return None
        return Netconfig.from_values(dotenv_values(path))

    def read_netconfig_dhcp(self, path: Path) -> NetconfigDhcp | None:
        """Read ``/etc/sysconfig/network/dhcp``, ``None`` if missing."""

        if not path.is_file():
            self.logger.info("%s not found, DHCP hostname options are not migrated", path)
            return None
        return NetconfigDhcp.from_values(dotenv_values(path))
