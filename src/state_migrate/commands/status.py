# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional
import click
from rich.markup import escape
from rich.table import Table

from ..errors import StateMigrateError
from ..runner import Migrator
from ..state_files import read_state
from .common import console, fail, resolve_chain, resolve_key


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('state_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--chain', 'chain_ref', help='Migration chain reference (file.py:attr or module:attr)')
@click.option('--key', '-k', help='Field holding the state version (default: _version)')
@click.pass_context
def status(ctx, state_file: Path, chain_ref: Optional[str], key: Optional[str]):
    """Show the version of a state file and the migrations it is missing."""
    migrator = Migrator(resolve_chain(ctx, chain_ref), key=resolve_key(ctx, key))

    try:
        state = read_state(state_file)
        to_apply = migrator.pending(state)
        latest = migrator.latest_version
    except StateMigrateError as e:
        fail(e)

    console.print(f"State file:      [blue]{state_file}[/blue]")
    console.print(f"Current version: [yellow]{migrator.current_version(state)}[/yellow]")
    console.print(f"Latest version:  [green]{latest}[/green]\n")

    if not to_apply:
        console.print("[green]✓ State is already up to date![/green]")
        return

    table = Table(title=f"Pending migrations ({len(to_apply)})")
    table.add_column("Version", style="cyan")
    table.add_column("Schema", style="magenta")
    table.add_column("Transformation", style="yellow")

    for migration in to_apply:
        table.add_row(
            str(migration.version),
            escape(_describe(migration.schema)),
            escape(getattr(migration.up, "__qualname__", repr(migration.up)))
        )

    console.print(table)


def _describe(schema) -> str:
    name = getattr(schema, '__name__', None)
    return name if name else repr(schema)
