# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

from typing import Optional
import click

from ..errors import StateMigrateError
from ..runner import check_chain
from ..chain import versions
from .common import console, fail, resolve_chain


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--chain', 'chain_ref', help='Migration chain reference (file.py:attr or module:attr)')
@click.pass_context
def check(ctx, chain_ref: Optional[str]):
    """Check that a migration chain is non-empty and strictly ascending."""
    migrations = resolve_chain(ctx, chain_ref)

    try:
        check_chain(migrations)
    except StateMigrateError as e:
        fail(e)

    listed = " → ".join(str(v) for v in versions(migrations))
    console.print(f"[green]✓ Migration chain is valid ({len(migrations)} migrations)[/green]")
    console.print(f"Versions: {listed}")
