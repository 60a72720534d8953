"""Migration settings passed through the pipeline."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict


DEFAULT_NETCONFIG_PATH = Path("/etc/sysconfig/network/config")
DEFAULT_NETCONFIG_DHCP_PATH = Path("/etc/sysconfig/network/dhcp")
DEFAULT_KEYFILE_DIR = Path("/etc/NetworkManager/system-connections")

AdapterName = Literal["keyfile", "dry-run"]


class MigrationSettings(BaseModel):
    """Caller-level switches for one migration run."""

    model_config = ConfigDict(frozen=True)

    continue_migration: bool = False
    """Log warnings and keep going instead of aborting on the first one."""

    dry_run: bool = False
    """Print the resulting connections instead of writing them."""

    activate_connections: bool = False
    """Bring up connections marked to autoconnect right after writing them."""

    with_netconfig: bool = False
    """Read the sysconfig DNS and DHCP settings."""

    netconfig_path: Path = DEFAULT_NETCONFIG_PATH
    """Path of the sysconfig network config file."""

    netconfig_dhcp_path: Path = DEFAULT_NETCONFIG_DHCP_PATH
    """Path of the sysconfig network dhcp file."""

    keyfile_dir: Path = DEFAULT_KEYFILE_DIR
    """Directory the keyfile adapter writes connection profiles to."""

    @property
    def adapter(self) -> AdapterName:
        """Adapter selected by these settings."""

        return "dry-run" if self.dry_run else "keyfile"
