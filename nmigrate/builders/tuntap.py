from typing import Literal

from ..models.connection import TunConfig
from ..models.legacy import TunTap


def build_tuntap(tuntap: TunTap, mode: Literal["tun", "tap"]) -> TunConfig:
    return TunConfig(
        mode=mode,
        owner=None if tuntap.owner is None else str(tuntap.owner),
        group=None if tuntap.group is None else str(tuntap.group),
    )
