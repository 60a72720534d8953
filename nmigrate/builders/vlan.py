"""VLAN translation."""

from ..models.connection import VlanConfig, VlanProtocol
from ..models.legacy import Vlan


VLAN_PROTOCOLS: dict[str, VlanProtocol] = {
    "ieee802-1Q": "802.1Q",
    "ieee802-1ad": "802.1ad",
}


def build_vlan(vlan: Vlan) -> VlanConfig:
    return VlanConfig(parent=vlan.device, id=vlan.tag, protocol=VLAN_PROTOCOLS[vlan.protocol])
