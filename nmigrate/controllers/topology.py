"""Controller/port topology resolution.

Builders only know the interface name of a connection's controller. The
resolver turns those names into connection uuids, following OVS fake
bridges through to the real bridge they hang off.
"""

import logging
from uuid import UUID

from ..core.errors import TopologyError, WarningAbort
from ..core.settings import MigrationSettings
from ..models.common import Outcome
from ..models.connection import CONTROLLER_TYPES, Connection, LinkSpec, OvsPortConfig, ParentMatch


logger = logging.getLogger(__name__)


class TopologyResolver:
    """Resolves pending links to controller uuids in bounded passes."""

    def __init__(self, settings: MigrationSettings) -> None:
        self.settings = settings
        self.passes = 0

    def find_parent(self, link: LinkSpec, connections: list[Connection]) -> Connection | None:
        """Connection bound to the link's master interface."""

        candidates = [c for c in connections if c.interface == link.master]
        if link.port is not None and link.port.port_type == "ovs-bridge":
            preferred = [c for c in candidates if c.kind == "ovs-interface"]
        else:
            preferred = [c for c in candidates if c.kind in CONTROLLER_TYPES]
        return next(iter(preferred or candidates), None)

    def match(self, link: LinkSpec, parent: Connection, by_uuid: dict[UUID, Connection]) -> ParentMatch | None:
        """Controller for a link whose textual parent is known.

        Returns ``None`` while an OVS parent chain is not resolved yet.
        """

        if link.port is None or link.port.port_type != "ovs-bridge":
            return ParentMatch(controller=parent.uuid)

        # interface -> its port -> the port's bridge
        port = by_uuid.get(parent.controller) if parent.controller else None
        if port is None or not isinstance(port.config, OvsPortConfig) or port.controller is None:
            return None
        return ParentMatch(controller=port.controller, tag=port.config.tag)

    def _missing_parent(self, link: LinkSpec, dependent: Connection, outcome: Outcome) -> None:
        message = f"Parent interface {link.master} of connection {dependent.id} doesn't exist"
        if not self.settings.continue_migration:
            raise WarningAbort(message)
        outcome.warn(message)

    def _apply(self, dependent: Connection, match: ParentMatch) -> None:
        if match.controller == dependent.uuid:
            raise TopologyError(f"Connection {dependent.id} can't be its own controller")
        dependent.controller = match.controller
        if match.tag is not None and isinstance(dependent.config, OvsPortConfig):
            dependent.config.tag = match.tag

    def check_cycles(self, connections: list[Connection], by_uuid: dict[UUID, Connection]) -> None:
        """Fail if following controllers from any connection loops."""

        for connection in connections:
            seen = {connection.uuid}
            current = connection
            while current is not None and current.controller is not None:
                if current.controller in seen:
                    raise TopologyError(f"Controller cycle through connection {connection.id}")
                seen.add(current.controller)
                current = by_uuid.get(current.controller)

    def resolve(self, connections: list[Connection], links: dict[UUID, LinkSpec]) -> Outcome[list[Connection]]:
        """Set ``controller`` on every connection with a pending link."""

        outcome: Outcome[list[Connection]] = Outcome(connections)
        by_uuid = {c.uuid: c for c in connections}
        pending = dict(links)
        missing: set[UUID] = set()
        self.passes = 0

        while pending and self.passes <= len(links):
            self.passes += 1
            matches: dict[UUID, ParentMatch] = {}

            for uuid, link in pending.items():
                dependent = by_uuid[uuid]
                parent = self.find_parent(link, connections)
                if parent is None:
                    if uuid not in missing:
                        self._missing_parent(link, dependent, outcome)
                        missing.add(uuid)
                    continue
                if (match := self.match(link, parent, by_uuid)) is not None:
                    matches[uuid] = match

            logger.debug("Topology pass %d resolved %d of %d link(s)", self.passes, len(matches), len(pending))
            if not matches:
                break

            for uuid, match in matches.items():
                self._apply(by_uuid[uuid], match)
                del pending[uuid]

        unresolved = sorted(by_uuid[uuid].id for uuid in pending if uuid not in missing)
        if unresolved:
            raise TopologyError(
                f"Unable to resolve the controller of {', '.join(unresolved)} (cycle or missing ancestor)"
            )
        for uuid in pending:
            logger.debug("Dropping link of %s to missing parent %s", by_uuid[uuid].id, pending[uuid].master)

        self.check_cycles(connections, by_uuid)
        return outcome
