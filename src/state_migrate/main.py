# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Main CLI for state-migrate."""

import sys
import logging
from typing import Optional
import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from pydantic import ValidationError as PydanticValidationError
import tomli

from .config import load_config
from .commands.run import run
from .commands.status import status
from .commands.check import check

console = Console(stderr=True, soft_wrap=True)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=True),
    help='Path to configuration file'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Show detailed debug output'
)
@click.pass_context
def cli(ctx, config: Optional[str], debug: bool):
    """Migrate versioned state files through a chain of migrations."""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    _setup_logging(debug)
    try:
        ctx.obj['config'] = load_config(config)
    except (FileNotFoundError, tomli.TOMLDecodeError, PydanticValidationError) as e:
        console.print(f"[red]Error loading configuration: {escape(str(e))}[/red]")
        sys.exit(1)


# Register commands
cli.add_command(run)
cli.add_command(status)
cli.add_command(check)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
