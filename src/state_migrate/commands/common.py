# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Helpers shared by the CLI commands."""

import sys
from typing import Optional, Tuple

from rich.console import Console
from rich.markup import escape

from ..chain import Migration
from ..config import Config
from ..errors import MigrationError, StateMigrateError, ValidationError, VersionError
from ..loader import load_chain

console = Console()
err_console = Console(stderr=True, soft_wrap=True)


def resolve_chain(ctx, chain_ref: Optional[str]) -> Tuple[Migration, ...]:
    """Load the chain given on the command line, or the one from the config file."""
    config: Config = ctx.obj['config']
    reference = chain_ref or config.chain
    if not reference:
        err_console.print("[red]Error: No migration chain specified[/red]")
        err_console.print("Pass --chain path/to/migrations.py:attr or set 'chain' in state_migrate.toml")
        sys.exit(1)

    try:
        return load_chain(reference)
    except StateMigrateError as e:
        fail(e)


def resolve_key(ctx, key: Optional[str]) -> str:
    config: Config = ctx.obj['config']
    return key or config.key


def fail(error: StateMigrateError) -> None:
    """Print a library error and exit with status 1."""
    if isinstance(error, ValidationError):
        err_console.print(f"[red]Error: Validation failed for version {error.version}[/red]")
        for issue in error.issues:
            location = escape(issue.format_path() or "<root>")
            err_console.print(f"  • [yellow]{location}[/yellow]: {escape(issue.message)}")
    elif isinstance(error, MigrationError):
        err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    elif isinstance(error, VersionError):
        err_console.print(f"[red]Error: Invalid migration chain: {escape(str(error))}[/red]")
    else:
        err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    sys.exit(1)
