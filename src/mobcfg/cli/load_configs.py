"""CLI wrapper for loading and migrating plugin config files.

Provides command-line access to the ConfigLoader so server operators can
validate and migrate config files without starting the game server.
"""

import sys
from pathlib import Path

import click

from mobcfg.config import COMPATIBLE_VERSIONS, ConfigDocument, ConfigLoader
from mobcfg.config.loader import get_file_load_error_message
from mobcfg.config.models import LoggingConfig
from mobcfg.system.path_resolver import PathResolver
from mobcfg.utils.structlog_configurator import configure_structlog, get_logger


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the live config files (overrides MOBCFG_DATA)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, log_level: str) -> None:
    """Plugin config file loader.

    Validate, load and migrate the plugin's YAML config files.
    """
    ctx.ensure_object(dict)
    path_resolver = PathResolver()
    if data_dir is not None:
        path_resolver.data_dir = data_dir

    settings = path_resolver.get_loader_settings(LoggingConfig(level=log_level))
    configure_structlog(settings.logging)
    ctx.obj["settings"] = settings
    ctx.obj["loader"] = ConfigLoader(settings, logger=get_logger("mobcfg.cli"))


def _status_line(name: str, document: ConfigDocument | None) -> str:
    if document is None:
        return click.style(f"✗ {name}: YAML syntax error", fg="red")
    version = document.get_int("file-version")
    return click.style(f"✓ {name}: file-version {version}", fg="green")


@cli.command()
@click.argument("name")
@click.option(
    "--version",
    "compatible_version",
    type=click.IntRange(min=0),
    help="Compatible file version (defaults to the built-in version for NAME)",
)
@click.pass_context
def load(ctx: click.Context, name: str, compatible_version: int | None) -> None:
    """Load one config file, migrating it if it is outdated.

    NAME: Logical file name without extension (e.g. 'settings')
    """
    if compatible_version is None:
        if name not in COMPATIBLE_VERSIONS:
            raise click.UsageError(f"No built-in version for '{name}', pass --version")
        compatible_version = COMPATIBLE_VERSIONS[name]

    loader: ConfigLoader = ctx.obj["loader"]
    document = loader.load(name, compatible_version)
    click.echo(_status_line(name, document))
    if document is None:
        click.echo(get_file_load_error_message(f"{name}{loader.settings.extension}"), err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def reload(ctx: click.Context) -> None:
    """Load every config file in plugin order."""
    loader: ConfigLoader = ctx.obj["loader"]
    click.echo("Reload started")
    results = loader.load_all()
    for name, document in results.items():
        click.echo(_status_line(name, document))

    failed = [name for name, document in results.items() if document is None]
    if failed:
        click.echo(
            click.style(f"Reload finished with errors in: {', '.join(failed)}", fg="yellow"),
            err=True,
        )
        sys.exit(1)
    click.echo("Reload finished")


@cli.command()
def versions() -> None:
    """List the file versions this build expects."""
    for name, version in COMPATIBLE_VERSIONS.items():
        click.echo(f"{name}: v{version}")


def main() -> None:
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
