# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional
import click

from ..config import Config
from ..errors import StateMigrateError
from ..runner import migrate, pending
from ..state_files import dump_state, file_format, read_state, write_state
from .common import err_console, fail, resolve_chain, resolve_key


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('state_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--chain', 'chain_ref', help='Migration chain reference (file.py:attr or module:attr)')
@click.option('--key', '-k', help='Field holding the state version (default: _version)')
@click.option(
    '--output', '-o',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Write the migrated state to this file instead of stdout'
)
@click.option('--in-place', '-i', is_flag=True, help='Overwrite STATE_FILE with the migrated state')
@click.pass_context
def run(ctx, state_file: Path, chain_ref: Optional[str], key: Optional[str],
        output: Optional[Path], in_place: bool):
    """Migrate a JSON or TOML state file to the latest version.

    Examples:

      state-migrate run state.json --chain migrations.py

      state-migrate run settings.toml --chain myapp.migrations:chain --in-place
    """
    if output and in_place:
        raise click.UsageError("--output and --in-place cannot be used together")

    config: Config = ctx.obj['config']
    migrations = resolve_chain(ctx, chain_ref)
    version_key = resolve_key(ctx, key)

    try:
        state = read_state(state_file)
        to_apply = pending(state, migrations, version_key)
        migrated = migrate(state, migrations, version_key)
    except StateMigrateError as e:
        fail(e)

    target = state_file if in_place else output

    if not to_apply:
        err_console.print("[green]✓ State is already up to date![/green]")
        # Nothing is written back to files when no migration applied
        if target is not None:
            return

    try:
        if target is None:
            click.echo(dump_state(migrated, file_format(state_file), config.indent), nl=False)
        else:
            write_state(target, migrated, config.indent)
    except StateMigrateError as e:
        fail(e)

    if to_apply:
        applied = ", ".join(str(m.version) for m in to_apply)
        err_console.print(f"[green]✓ Applied migrations: {applied}[/green]")
    if target is not None:
        err_console.print(f"[green]✓ Saved to {target}[/green]")
