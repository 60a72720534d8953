"""Infiniband and infiniband child (partition) translation."""

from ..models.common import Outcome
from ..models.connection import InfinibandConfig
from ..models.legacy import Infiniband, InfinibandChild


MULTICAST_UNSUPPORTED = "Infiniband multicast isn't supported by NetworkManager"


def build_infiniband(ib: Infiniband | InfinibandChild) -> Outcome[InfinibandConfig]:
    outcome = Outcome(InfinibandConfig(transport_mode=ib.mode or "datagram"))
    if isinstance(ib, InfinibandChild):
        outcome.value.p_key = ib.pkey
        outcome.value.parent = ib.device
    if ib.multicast is not None:
        outcome.warn(MULTICAST_UNSUPPORTED)
    return outcome
