"""
Check Command - Validate dependency options.

Runs every dependency option through validation and prints either the
resulting parameters or every error found.

Usage:
    depparams check -E org.slf4j:slf4j-log4j12 --intransitive com.lihaoyi::os-lib:0.9.1
    depparams check --local-exclude-file excludes.txt --json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Tuple

import click
from rich.console import Console
from rich.table import Table

from ... import config
from ...core.result import Err
from ...options import DependencyOptions
from ...params import DependencyParams, LocalExcludeFileError
from ..utils import configure_logging, echo_error, echo_info, echo_success

console = Console()


@click.command()
@click.option("-E", "--exclude", multiple=True, help="Exclude module org:name from every dependency")
@click.option(
    "--local-exclude-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="File of <parent>--<org>:<name> exclusion rules",
)
@click.option("--intransitive", multiple=True, help="Add a dependency without its own dependencies")
@click.option("--sbt-plugin", multiple=True, help="Add an sbt plugin dependency")
@click.option("--sbt-version", default=None, help="sbt version targeted by plugins")
@click.option("--scaladex", multiple=True, help="Scaladex lookup")
@click.option("--default-configuration", default=None, help="Configuration of dependencies naming none")
@click.option(
    "--scala-version",
    default=config.DEFAULT_SCALA_VERSION,
    show_default=True,
    help="Active Scala version",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=config.MANIFEST_FILE_NAME,
    show_default=True,
    help="Options file; command line flags take precedence",
)
@click.option("--json", "as_json", is_flag=True, help="Output parameters as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs")
def check(
    exclude: Tuple[str, ...],
    local_exclude_file: str | None,
    intransitive: Tuple[str, ...],
    sbt_plugin: Tuple[str, ...],
    sbt_version: str | None,
    scaladex: Tuple[str, ...],
    default_configuration: str | None,
    scala_version: str,
    config_path: str,
    as_json: bool,
    verbose: bool,
):
    """
    Validate dependency options.

    Every problem is reported in one pass. Exits with status 1 when any
    option is invalid.
    """
    configure_logging(verbose)

    try:
        options = DependencyOptions.load(Path(config_path))
    except ValueError as e:
        echo_error(str(e))
        sys.exit(1)

    options = options.merge(
        exclude=exclude,
        local_exclude_file=local_exclude_file,
        intransitive=intransitive,
        sbt_plugin=sbt_plugin,
        sbt_version=sbt_version,
        scaladex=scaladex,
        default_configuration=default_configuration,
    )

    try:
        result = DependencyParams.from_options(scala_version, options)
    except LocalExcludeFileError as e:
        echo_error(str(e))
        sys.exit(1)

    if isinstance(result, Err):
        for message in result.error:
            echo_error(message)
        echo_info(f"{len(result.error)} error(s) found")
        sys.exit(1)

    params = result.value

    if as_json:
        click.echo(json.dumps(params.to_dict(), indent=2))
        return

    echo_success("Dependency options are valid")
    _print_params(params)


def _print_params(params: DependencyParams) -> None:
    """Render validated parameters as rich tables."""
    data = params.to_dict()

    console.print(f"Default configuration: [cyan]{data['default_configuration']}[/cyan]")

    if data["exclude"]:
        console.print(f"Excluded: {', '.join(data['exclude'])}")

    for parent, modules in data["per_module_exclude"].items():
        console.print(f"Excluded below [cyan]{parent}[/cyan]: {', '.join(modules)}")

    for title, entries in (
        ("Intransitive dependencies", data["intransitive_dependencies"]),
        ("sbt plugin dependencies", data["sbt_plugin_dependencies"]),
    ):
        if not entries:
            continue
        table = Table(title=title)
        table.add_column("Module", style="cyan")
        table.add_column("Version")
        table.add_column("Configuration")
        table.add_column("Transitive")
        table.add_column("Attributes", style="dim")
        table.add_column("Exclusions", style="dim")
        for entry in entries:
            table.add_row(
                entry["module"],
                entry["version"],
                entry["configuration"],
                "yes" if entry["transitive"] else "no",
                ", ".join(f"{k}={v}" for k, v in sorted(entry["attributes"].items())),
                ", ".join(entry["exclusions"]),
            )
        console.print(table)

    if data["scaladex_lookups"]:
        console.print(f"Scaladex lookups: {', '.join(data['scaladex_lookups'])}")
