"""Wireless translation.

The security protocol is derived from the declared key-management tokens.
The strict table only accepts token sets that stay inside one family; the
best-effort guess is used only when the caller continues on warnings, and
picks the strongest recognized family.
"""

import logging

from ..core.errors import BuildError
from ..core.mac import normalize_mac
from ..core.settings import MigrationSettings
from ..models.common import Outcome
from ..models.connection import SecurityProtocol, WepSecurity, WirelessConfig, WirelessMode
from ..models.legacy import Wep, Wireless, WirelessNetwork


logger = logging.getLogger(__name__)

# strict rules, checked in order: the token set must be a subset of one family
KEY_MANAGEMENT_FAMILIES: tuple[tuple[frozenset[str], SecurityProtocol], ...] = (
    (frozenset({"wpa-psk", "wpa-psk-sha256", "ft-psk"}), "wpa-psk"),
    (frozenset({"sae", "ft-sae"}), "sae"),
    (frozenset({"wpa-eap", "wpa-eap-sha256", "ft-eap"}), "wpa-eap"),
    (frozenset({"wpa-eap-suite-b-192"}), "wpa-eap-suite-b-192"),
    (frozenset({"owe"}), "owe"),
    (frozenset({"none"}), "none"),
)

# best-effort fallback, strongest first
GUESS_ORDER: tuple[tuple[frozenset[str], SecurityProtocol], ...] = (
    (frozenset({"wpa-eap-suite-b-192"}), "wpa-eap-suite-b-192"),
    (frozenset({"sae", "ft-sae"}), "sae"),
    (frozenset({"wpa-eap", "wpa-eap-sha256", "ft-eap"}), "wpa-eap"),
    (frozenset({"wpa-psk", "wpa-psk-sha256", "ft-psk"}), "wpa-psk"),
    (frozenset({"owe"}), "owe"),
    (frozenset({"none"}), "none"),
)

WIRELESS_MODES: dict[str, WirelessMode] = {
    "ad-hoc": "adhoc",
    "infrastructure": "infrastructure",
    "ap": "ap",
}


def strict_security_protocol(tokens: list[str]) -> SecurityProtocol | None:
    """Security protocol for token sets covered by an exact rule, else ``None``."""

    token_set = frozenset(tokens)
    for family, protocol in KEY_MANAGEMENT_FAMILIES:
        if token_set and token_set <= family:
            return protocol
    return None


def guess_security_protocol(tokens: list[str]) -> SecurityProtocol | None:
    """Strongest protocol among the recognized tokens, else ``None``."""

    token_set = frozenset(tokens)
    for family, protocol in GUESS_ORDER:
        if token_set & family:
            return protocol
    return None


def security_protocol(network: WirelessNetwork, settings: MigrationSettings) -> Outcome[SecurityProtocol | None]:
    tokens = network.key_management
    if not tokens:
        return Outcome("none" if network.wep else None)

    protocol = strict_security_protocol(tokens)
    if protocol is not None:
        return Outcome(protocol)

    joined = ",".join(tokens)
    if not settings.continue_migration:
        raise BuildError(f"Unsupported key-management combination '{joined}' for network '{network.essid}'")

    protocol = guess_security_protocol(tokens)
    if protocol is None:
        raise BuildError(f"Unrecognized key-management protocol '{joined}' for network '{network.essid}'")

    return Outcome(
        protocol,
        [f"Key-management '{joined}' of network '{network.essid}' isn't supported, guessed '{protocol}'"],
    )


def strip_wep_key(key: str) -> str:
    """Drop the ``s:``/``h:`` type markers and byte separators of a WEP key."""

    for marker in ("s:", "h:"):
        key = key.removeprefix(marker)
    return key.replace(":", "").replace("-", "")


def _wep_security(wep: Wep) -> WepSecurity:
    return WepSecurity(
        auth_alg=wep.auth_algo,
        keys=[strip_wep_key(k) for k in wep.key],
        key_index=wep.default_key,
    )


def build_network(network: WirelessNetwork, settings: MigrationSettings) -> Outcome[WirelessConfig]:
    outcome: Outcome[WirelessConfig] = Outcome(
        WirelessConfig(
            ssid=network.essid,
            mode=WIRELESS_MODES[network.mode],
            hidden=network.scan_ssid,
        )
    )
    config = outcome.value
    config.security = outcome.absorb(security_protocol(network, settings))

    if network.wpa_psk:
        config.password = network.wpa_psk.passphrase

    if network.channel is not None:
        config.channel = network.channel
        config.band = "bg" if network.channel <= 14 else "a"
        logger.warning(
            'NetworkManager requires setting a band for wireless when a channel is set. The band has been set to "%s". '
            "This may in certain regions be incorrect.",
            config.band,
        )

    if network.access_point:
        try:
            config.bssid = normalize_mac(network.access_point)
        except ValueError as e:
            raise BuildError(f"Invalid access point of network '{network.essid}': {e}") from e

    if network.wep:
        config.wep_security = _wep_security(network.wep)

    return outcome


def build_wireless(wireless: Wireless, settings: MigrationSettings) -> Outcome[list[WirelessConfig]]:
    """One wireless config per declared network."""

    outcome: Outcome[list[WirelessConfig]] = Outcome([])
    for network in wireless.networks:
        outcome.value.append(outcome.absorb(build_network(network, settings)))
    return outcome
