"""Bond translation."""

from ..models.connection import BondConfig, BondMode
from ..models.legacy import Bond, WickedBondMode


BOND_MODES: dict[WickedBondMode, BondMode] = {
    "balance-rr": "balance-rr",
    "active-backup": "active-backup",
    "balance-xor": "balance-xor",
    "broadcast": "broadcast",
    "802.3ad": "802.3ad",
    "balance-tlb": "balance-tlb",
    "balance-alb": "balance-alb",
}

XMIT_HASH_POLICIES = {
    "layer2": "layer2",
    "layer23": "layer2+3",
    "layer34": "layer3+4",
    "encap23": "encap2+3",
    "encap34": "encap3+4",
}


def _flag(value: bool) -> str:
    return "1" if value else "0"


def bond_options(bond: Bond) -> dict[str, str]:
    """Kernel bonding options for every field the record sets."""

    options: dict[str, str] = {}

    if primary := bond.primary():
        options["primary"] = primary

    if m := bond.miimon:
        options["miimon"] = str(m.frequency)
        options["use_carrier"] = "0" if m.carrier_detect == "ioctl" else "1"
        if m.downdelay is not None:
            options["downdelay"] = str(m.downdelay)
        if m.updelay is not None:
            options["updelay"] = str(m.updelay)

    if a := bond.arpmon:
        options["arp_interval"] = str(a.interval)
        options["arp_validate"] = a.validate_
        if a.targets:
            options["arp_ip_target"] = ",".join(a.targets)
        if a.validate_targets is not None:
            options["arp_all_targets"] = a.validate_targets

    if bond.xmit_hash_policy is not None:
        options["xmit_hash_policy"] = XMIT_HASH_POLICIES[bond.xmit_hash_policy]
    if bond.tlb_dynamic_lb is not None:
        options["tlb_dynamic_lb"] = _flag(bond.tlb_dynamic_lb)
    if bond.all_slaves_active is not None:
        options["all_slaves_active"] = _flag(bond.all_slaves_active)

    for key in (
        "fail_over_mac",
        "packets_per_slave",
        "lacp_rate",
        "ad_select",
        "ad_user_port_key",
        "ad_actor_sys_prio",
        "ad_actor_system",
        "min_links",
        "primary_reselect",
        "num_grat_arp",
        "num_unsol_na",
        "lp_interval",
        "resend_igmp",
    ):
        value = getattr(bond, key)
        if value is not None:
            options[key] = str(value)

    return options


def build_bond(bond: Bond) -> BondConfig:
    return BondConfig(mode=BOND_MODES[bond.mode], options=bond_options(bond))
