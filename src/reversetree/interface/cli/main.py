"""Main CLI entry point.

    reversetree show com.x:lib:2.0
    reversetree list --repo ~/.m2/repository
"""

import sys

import click

from reversetree.foundation.config import load_config
from reversetree.foundation.errors import ReverseTreeError
from reversetree.foundation.logging import configure_logging
from reversetree.interface.cli.error_handler import handle_error
from reversetree.interface.cli.tracking_cmd import list_tracked, show


def cli_entrypoint() -> None:
    """Wrapped entrypoint with global error handling.

    Called from pyproject.toml [project.scripts].
    """
    try:
        main(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        sys.exit(130)
    except Exception as e:
        handle_error(e)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Config file (defaults to .reversetree/config.yaml)")
@click.pass_context
def main(ctx: click.Context, debug: bool, config_path: str | None) -> None:
    """Inspect dependency provenance recorded in a local repository.

    Every artifact resolved from the local repository during dependency
    collection gets a .tracking directory listing, per requesting project,
    the chain of dependencies that pulled it in.
    """
    try:
        config = load_config(config_path)
    except ReverseTreeError as e:
        handle_error(e)
    configure_logging(debug=debug or config.debug)
    ctx.obj = config


main.add_command(show)
main.add_command(list_tracked)


if __name__ == "__main__":
    cli_entrypoint()
