"""Exceptions raised by the migration pipeline."""


class MigrationError(Exception):
    """Fatal error that aborts the migration."""

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class WarningAbort(MigrationError):
    """Raised when warnings occur and continuing on warnings is disabled."""

    exit_code = 2


class ReaderError(MigrationError):
    """Legacy configuration could not be read or is malformed."""


class BuildError(MigrationError):
    """An interface record cannot be translated into a connection."""


class TopologyError(MigrationError):
    """Controller/port relations cannot be resolved."""


class DnsPolicyError(MigrationError):
    """The DNS policy cannot be applied to the connection set."""


class AdapterError(MigrationError):
    """The target system rejected a read or write."""
