"""DNS priority assignment from an ordered policy."""

import logging
from fnmatch import fnmatchcase

from ..core.errors import DnsPolicyError
from ..models.connection import Connection
from ..models.netconfig import STATIC_POLICY


logger = logging.getLogger(__name__)

FIRST_TIER = 10
TIER_STEP = 10


class DnsPolicyEngine:
    """Applies a ``NETCONFIG_DNS_POLICY`` token list to a connection set.

    Each non-empty token claims the next tier, starting at 10 and leaving gaps
    of 10. ``STATIC`` belongs to the loopback connection, any other token is a
    glob over interface names. Connections claimed by an earlier token keep
    their tier. Unclaimed connections ignore automatically learned DNS.
    """

    def apply(self, policy: list[str], connections: list[Connection]) -> None:
        tier = FIRST_TIER
        for token in policy:
            token = token.strip()
            if not token:
                continue

            if token == STATIC_POLICY:
                loopback = next((c for c in connections if c.kind == "loopback"), None)
                if loopback is None:
                    raise DnsPolicyError("DNS policy STATIC requires a loopback connection")
                self._assign(loopback, tier)
            else:
                for connection in connections:
                    if (
                        connection.interface
                        and not connection.ip_config.has_dns_priority
                        and fnmatchcase(connection.interface, token)
                    ):
                        self._assign(connection, tier)

            tier += TIER_STEP

        for connection in connections:
            if not connection.ip_config.has_dns_priority:
                connection.ip_config.ignore_auto_dns = True

    @staticmethod
    def _assign(connection: Connection, tier: int) -> None:
        logger.debug("DNS priority %d for %s", tier, connection.id)
        connection.ip_config.dns_priority4 = tier
        connection.ip_config.dns_priority6 = tier
