# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Reading and writing state files for the command line tool."""

import datetime
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .errors import StateMigrateError


class StateFileError(StateMigrateError):
    """Raised when a state file cannot be read or written."""
    pass


def file_format(path: Path) -> str:
    """Return ``'toml'`` or ``'json'`` based on the file extension."""
    suffix = path.suffix.lower()
    if suffix == '.toml':
        return 'toml'
    if suffix in ('.json', ''):
        return 'json'
    raise StateFileError(f"Unsupported state file format: {path.name} (use .json or .toml)")


def read_state(path: Path) -> Any:
    """Load a state value from a JSON or TOML file."""
    fmt = file_format(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if fmt == 'toml':
                # Plain python values so migrations never see tomlkit items
                return tomlkit.load(f).unwrap()
            return json.load(f)
    except (OSError, ValueError, TOMLKitError) as e:
        raise StateFileError(f"Error reading state file {path}: {e}") from e


def _json_default(value: Any) -> Any:
    # TOML dates and times have no JSON type
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dump_state(state: Any, fmt: str, indent: int = 2) -> str:
    """Serialize a state value."""
    if fmt == 'toml':
        if not isinstance(state, Mapping):
            raise StateFileError(
                f"Cannot write {type(state).__name__} state as TOML, a table is required"
            )
        try:
            return tomlkit.dumps(dict(state))
        except (TOMLKitError, TypeError, ValueError) as e:
            raise StateFileError(f"Cannot write state as TOML: {e}") from e
    try:
        return json.dumps(state, indent=indent or None, default=_json_default) + "\n"
    except (TypeError, ValueError) as e:
        raise StateFileError(f"Cannot write state as JSON: {e}") from e


def write_state(path: Path, state: Any, indent: int = 2) -> None:
    """Write a state value to ``path`` in the format given by its extension."""
    content = dump_state(state, file_format(path), indent)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        raise StateFileError(f"Error writing state file {path}: {e}") from e
