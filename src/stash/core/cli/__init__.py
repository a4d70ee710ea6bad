"""Stash CLI — entry point for add, done, and show commands."""

import click

from stash import __version__


@click.group()
@click.version_option(version=__version__, package_name="stash")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (default: ~/.stash/config.yaml).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Stash — jot notes into a day-grouped journal."""
    from .common import load_config, setup_cli_logging

    config = load_config(config_path)
    settings = setup_cli_logging(config, verbose)
    ctx.obj = {"config": config, "settings": settings}


# Register subcommands (lazy imports keep startup fast)
from .add_cmd import add
from .done_cmd import done
from .show_cmd import show

main.add_command(add)
main.add_command(done)
main.add_command(show)
