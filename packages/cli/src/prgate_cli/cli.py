"""CLI entry point for prgate.

Commands:
  publish  — post the report comment and commit status for a review run
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from prgate_cli.commands.publish import publish_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("prgate"),
    prog_name="prgate",
)
@click.option(
    "--config",
    "config_path",
    default=".prgate.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRGATE_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Keep one up-to-date review report and status check on a pull request."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(publish_cmd)
