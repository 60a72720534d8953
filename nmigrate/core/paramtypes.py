"""Custom Click paramtypes with shell completion support."""

from pathlib import Path
from typing import TYPE_CHECKING

import click


if TYPE_CHECKING:
    from click.shell_completion import CompletionItem


def _complete_paths(incomplete: str, want_file) -> list["CompletionItem"]:
    path = Path(incomplete).expanduser() if incomplete else Path(".")
    parent = path.parent if path.name else path
    if not parent.exists():
        parent = Path(".")

    completions = []
    try:
        for item in parent.iterdir():
            if incomplete and not item.name.startswith(Path(incomplete).name):
                continue
            if item.is_dir():
                completions.append(click.shell_completion.CompletionItem(f"{item.name}/"))
            elif item.is_file() and want_file(item):
                completions.append(click.shell_completion.CompletionItem(item.name))
    except PermissionError:
        pass

    return completions


class LegacyPathType(click.ParamType):
    """A wicked XML file, a directory of them, or ``-`` for stdin."""

    name = "legacy_path"

    def shell_complete(self, ctx: click.Context, param: click.Parameter, incomplete: str) -> list["CompletionItem"]:
        """Provide shell completion for wicked XML files and directories."""

        return _complete_paths(incomplete, lambda item: item.suffix.lower() == ".xml")

    def convert(self, value: str, param: click.Parameter | None, ctx: click.Context | None) -> str:
        """Validate the path."""

        if value == "-":
            return value
        path = Path(value).expanduser()
        if not path.exists():
            self.fail(f"Path does not exist: {value}", param, ctx)
        if not (path.is_file() or path.is_dir()):
            self.fail(f"Path is neither a file nor a directory: {value}", param, ctx)
        return str(path)


class SysconfigFileType(click.ParamType):
    """A sysconfig file; missing files are allowed and mean "not configured"."""

    name = "sysconfig_file"

    def shell_complete(self, ctx: click.Context, param: click.Parameter, incomplete: str) -> list["CompletionItem"]:
        """Provide shell completion for sysconfig files."""

        return _complete_paths(incomplete, lambda item: True)

    def convert(self, value: str | Path, param: click.Parameter | None, ctx: click.Context | None) -> Path:
        """Validate the file path."""

        path = Path(value).expanduser()
        if path.exists() and not path.is_file():
            self.fail(f"Path is not a file: {value}", param, ctx)
        return path


class DirectoryType(click.ParamType):
    name = "directory"

    def __init__(self, must_exist: bool = False) -> None:
        super().__init__()
        self.must_exist = must_exist

    def shell_complete(self, ctx: click.Context, param: click.Parameter, incomplete: str) -> list["CompletionItem"]:
        """Provide shell completion for directory paths."""

        return [item for item in _complete_paths(incomplete, lambda item: False) if item.value.endswith("/")]

    def convert(self, value: str | Path, param: click.Parameter | None, ctx: click.Context | None) -> Path:
        """Validate and convert the directory."""

        path = Path(value).expanduser()
        if self.must_exist and not path.exists():
            self.fail(f"Directory does not exist: {value}", param, ctx)
        if path.exists() and not path.is_dir():
            self.fail(f"Path exists but is not a directory: {value}", param, ctx)
        return path
