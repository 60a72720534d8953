"""Bridge and bridge-port translation."""

from ..models.connection import BridgeConfig, BridgePortConfig, PortDescriptor
from ..models.legacy import Bridge, BridgePort, PortRecord


def _seconds(value: float | None) -> int | None:
    return None if value is None else round(value)


def build_bridge(bridge: Bridge) -> BridgeConfig:
    # wicked spells it "aging", NetworkManager and the kernel "ageing"
    return BridgeConfig(
        stp=bridge.stp,
        priority=bridge.priority,
        forward_delay=_seconds(bridge.forward_delay),
        hello_time=_seconds(bridge.hello_time),
        max_age=_seconds(bridge.max_age),
        ageing_time=_seconds(bridge.aging_time),
    )


def build_bridge_port(port: BridgePort | PortRecord | PortDescriptor) -> BridgePortConfig:
    return BridgePortConfig(priority=port.priority, path_cost=port.path_cost)
