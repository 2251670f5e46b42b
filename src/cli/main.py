"""Command line entry point for querying host facts."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from cli.commands import explain, list_facts, show
from cli.config import load_config_model
from cli.logging_config import setup_logging
from facts import FactError, __version__

console = Console()


class FactsGroup(click.Group):
    """Click group that reports fact registration misuse as a CLI error."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except FactError as e:
            console.print(f"[red]Fact definition error:[/] {e}")
            sys.exit(1)


@click.group(cls=FactsGroup)
@click.version_option(version=__version__)
@click.option("-d", "--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file (default: ./facts.yaml or ~/.facts/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, config_path: Optional[Path]):
    """Query facts about this host."""
    try:
        config = load_config_model(config_path)
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    level = "DEBUG" if debug else config.logging.level
    setup_logging(json_mode=config.logging.json_mode, level=level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


cli.add_command(show)
cli.add_command(list_facts)
cli.add_command(explain)


if __name__ == "__main__":
    cli()
