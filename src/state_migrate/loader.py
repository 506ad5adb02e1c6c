# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Loading migration chains from Python files or modules.

A chain reference has the form ``<target>[:<attribute>]`` where ``target`` is
either a path to a ``.py`` file (``migrations/state.py``) or a dotted module
name (``myapp.migrations``). The attribute defaults to ``migrations`` and may
hold a ``MigrationChain``, a list/tuple of ``Migration`` objects, or a
callable returning one of those.
"""

import importlib
import importlib.util
from pathlib import Path
from typing import Dict, Tuple

from .chain import Migration, MigrationChain
from .errors import StateMigrateError

DEFAULT_ATTRIBUTE = "migrations"


class LoaderError(StateMigrateError):
    """Raised when a migration chain cannot be loaded."""
    pass


_loaded_files: Dict[Path, object] = {}


def parse_reference(reference: str) -> Tuple[str, str]:
    """Split a chain reference into ``(target, attribute)``."""
    reference = reference.strip()
    if not reference:
        raise LoaderError("Chain reference cannot be empty")

    # Windows drive letters ("C:\\...") contain a colon too
    target, sep, attribute = reference.rpartition(":")
    if not sep or not attribute or "/" in attribute or "\\" in attribute:
        return reference, DEFAULT_ATTRIBUTE
    return target, attribute


def _load_file(path: Path):
    path = path.resolve()
    if path in _loaded_files:
        return _loaded_files[path]

    if not path.exists():
        raise LoaderError(f"Migration file not found: {path}")

    spec = importlib.util.spec_from_file_location(f"state_migrate_chain_{path.stem}", path)
    if not spec or not spec.loader:
        raise LoaderError(f"Failed to load migrations: {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise LoaderError(f"Error while executing {path}: {e}") from e

    _loaded_files[path] = module
    return module


def _load_module(name: str):
    try:
        return importlib.import_module(name)
    except ImportError as e:
        raise LoaderError(f"Cannot import migrations module '{name}': {e}") from e


def _is_file_target(target: str) -> bool:
    return target.endswith(".py") or "/" in target or "\\" in target


def load_chain(reference: str) -> Tuple[Migration, ...]:
    """
    Resolve a chain reference to a tuple of migrations.

    Args:
        reference: ``path/to/file.py[:attr]`` or ``package.module[:attr]``

    Returns:
        The migration steps, in declaration order

    Raises:
        LoaderError: If the target cannot be imported or holds no migrations
    """
    target, attribute = parse_reference(reference)

    if _is_file_target(target):
        module = _load_file(Path(target))
    else:
        module = _load_module(target)

    if not hasattr(module, attribute):
        raise LoaderError(f"'{target}' has no attribute '{attribute}'")

    value = getattr(module, attribute)
    if callable(value) and not isinstance(value, MigrationChain):
        value = value()

    if isinstance(value, MigrationChain):
        return value.build()

    if isinstance(value, (list, tuple)) and all(isinstance(m, Migration) for m in value):
        return tuple(value)

    raise LoaderError(
        f"'{target}:{attribute}' must be a MigrationChain or a list of Migration objects, "
        f"got {type(value).__name__}"
    )
