"""
depparams CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import check


@click.group()
@click.version_option(package_name="depparams")
def main():
    """depparams: validate dependency options before resolution.

    \b
    Quick Start:
      depparams check -E org.slf4j:slf4j-log4j12
      depparams check --sbt-plugin org.scalameta:sbt-scalafmt:2.5.2 --sbt-version 1.9.7
      depparams check --config depparams.toml --json
    """
    pass


# Register commands
main.add_command(check.check)

if __name__ == "__main__":
    main()
