import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from ..core.errors import AdapterError
from ..models.connection import NetworkState


SYS_CLASS_NET = Path("/sys/class/net")


class Adapter(Protocol):
    """Target system the finished connection graph is handed to."""

    name: str

    def read_state(self) -> NetworkState: ...
    def write(self, state: NetworkState) -> None: ...
    def present_interfaces(self) -> set[str]: ...


def sysfs_interfaces(root: Path = SYS_CLASS_NET) -> set[str]:
    """Names of the network interfaces the kernel currently knows."""

    try:
        return {entry.name for entry in root.iterdir()}
    except OSError:
        return set()


def which_or_die(bin_name: str) -> str:
    p = shutil.which(bin_name)
    if not p:
        raise AdapterError(f"Required binary not found in PATH: {bin_name}")
    return p


def run(cmd: list[str]) -> None:
    try:
        subprocess.run(  # noqa: S603
            cmd,
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        raise AdapterError(f"{' '.join(cmd)} failed: {(e.stderr or '').strip() or e.returncode}") from e
