"""nmigrate CLI."""

import sys

import click
import rich_click

from .core.application import Application
from .core.errors import MigrationError
from .core.logging import LOG_LEVELS, setup_logging
from .core.paramtypes import DirectoryType, LegacyPathType, SysconfigFileType
from .core.settings import (
    DEFAULT_KEYFILE_DIR,
    DEFAULT_NETCONFIG_DHCP_PATH,
    DEFAULT_NETCONFIG_PATH,
    MigrationSettings,
)


# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
rich_click.rich_click.USE_MARKDOWN = False
rich_click.rich_click.STYLE_ERRORS_SUGGESTION = "dim italic"
rich_click.rich_click.MAX_WIDTH = 100

OUTPUT_FORMATS = ("json", "pretty-json", "yaml", "text")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="nmigrate")
@click.option(
    "--log-level",
    envvar="NMIGRATE_LOG_LEVEL",
    default="INFO",
    show_default=True,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Verbosity of the log written to stderr.",
)
@click.option(
    "--without-netconfig",
    envvar="NMIGRATE_WITHOUT_NETCONFIG",
    is_flag=True,
    help="Don't migrate the sysconfig DNS and DHCP settings.",
)
@click.option(
    "--netconfig-path",
    envvar="NMIGRATE_NETCONFIG_PATH",
    default=DEFAULT_NETCONFIG_PATH,
    show_default=True,
    type=SysconfigFileType(),
    help="Path of the sysconfig network config file.",
)
@click.option(
    "--netconfig-dhcp-path",
    envvar="NMIGRATE_NETCONFIG_DHCP_PATH",
    default=DEFAULT_NETCONFIG_DHCP_PATH,
    show_default=True,
    type=SysconfigFileType(),
    help="Path of the sysconfig network dhcp file.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, without_netconfig: bool, netconfig_path, netconfig_dhcp_path):
    """Migrate wicked network configuration to NetworkManager."""

    app = Application.current()
    setup_logging(log_level)

    ctx.obj = {
        "app": app,
        "with_netconfig": not without_netconfig,
        "netconfig_path": netconfig_path,
        "netconfig_dhcp_path": netconfig_dhcp_path,
    }


def _settings(obj: dict, **kwargs) -> MigrationSettings:
    return MigrationSettings(
        with_netconfig=obj["with_netconfig"],
        netconfig_path=obj["netconfig_path"],
        netconfig_dhcp_path=obj["netconfig_dhcp_path"],
        **kwargs,
    )


def _run(app: Application, func, *args):
    try:
        return func(*args)
    except MigrationError as e:
        app.logger.error("%s", e.message)
        sys.exit(e.exit_code)


@cli.command()
@click.option(
    "-f",
    "--format",
    "output_format",
    default="json",
    show_default=True,
    type=click.Choice(OUTPUT_FORMATS),
    help="Output format.",
)
@click.argument("paths", nargs=-1, required=True, type=LegacyPathType())
@click.pass_obj
def show(obj, output_format: str, paths: tuple[str, ...]):
    """Show the wicked configuration as read, without migrating it.

    PATHS are wicked XML files or directories of them, or "-" for stdin.
    """

    app: Application = obj["app"]
    app.settings = _settings(obj, continue_migration=True)

    result = _run(app, app.reader.read, list(paths))
    if output_format == "text":
        result.display_tree(app.console, title="wicked configuration")
    else:
        click.echo(result.serialize(output_format))


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=LegacyPathType())
@click.option(
    "-c",
    "--continue-migration",
    envvar="NMIGRATE_CONTINUE_MIGRATION",
    is_flag=True,
    help="Continue the migration when warnings are encountered.",
)
@click.option(
    "--dry-run",
    envvar="NMIGRATE_DRY_RUN",
    is_flag=True,
    help="Print the resulting connections instead of writing them.",
)
@click.option(
    "--activate-connections",
    envvar="NMIGRATE_ACTIVATE_CONNECTIONS",
    is_flag=True,
    help="Activate connections marked to autoconnect right away.",
)
@click.option(
    "--keyfile-dir",
    envvar="NMIGRATE_KEYFILE_DIR",
    default=DEFAULT_KEYFILE_DIR,
    show_default=True,
    type=DirectoryType(must_exist=False),
    help="Directory NetworkManager keyfiles are written to.",
)
@click.pass_obj
def migrate(
    obj,
    paths: tuple[str, ...],
    continue_migration: bool,
    dry_run: bool,
    activate_connections: bool,
    keyfile_dir,
):
    """Migrate the wicked configuration to NetworkManager.

    PATHS are wicked XML files or directories of them, or "-" for stdin.
    """

    app: Application = obj["app"]
    app.settings = settings = _settings(
        obj,
        continue_migration=continue_migration,
        dry_run=dry_run,
        activate_connections=activate_connections,
        keyfile_dir=keyfile_dir,
    )
    app.logger.debug("Running migration with %s", settings)

    result = _run(app, app.reader.read, list(paths))
    state = _run(app, app.migration.migrate, result, settings)
    if not dry_run:
        app.console.print(f"[green]Migrated {len(state.connections)} connection(s) to {keyfile_dir}.[/green]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
