# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Applying a migration chain to a state value."""

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field

from .chain import Migration, versions
from .errors import MigrationError, ValidationError, VersionError
from .validators import Validator, as_validator

logger = logging.getLogger(__name__)

DEFAULT_KEY = "_version"


class MigrateOptions(BaseModel):
    """Options shared by every ``migrate()`` call of a ``Migrator``."""
    key: str = Field(
        default=DEFAULT_KEY,
        min_length=1,
        description="Name of the field holding the state's version"
    )


def check_chain(migrations: Sequence[Migration]) -> None:
    """
    Check that a chain can be run.

    Raises:
        VersionError: If the chain is empty or its versions are not strictly ascending
    """
    if len(migrations) == 0:
        raise VersionError("Migrations array cannot be empty")

    for i in range(1, len(migrations)):
        prev = migrations[i - 1].version
        curr = migrations[i].version
        if prev >= curr:
            raise VersionError(
                f"Migrations must be sorted by version in ascending order. "
                f"Found version {prev} before {curr}",
                previous=prev,
                current=curr
            )


def current_version(state: Any, key: str = DEFAULT_KEY) -> Any:
    """
    Read the version recorded on ``state``.

    Anything that is not a mapping with a numeric ``key`` counts as version 0.
    """
    if isinstance(state, Mapping) and key in state:
        found = state[key]
        if isinstance(found, (int, float)) and not isinstance(found, bool):
            return found
    return 0


def pending(
    state: Any,
    migrations: Sequence[Migration],
    key: str = DEFAULT_KEY
) -> List[Migration]:
    """Return the migrations ``migrate()`` would apply to ``state``, in order."""
    check_chain(migrations)
    version = current_version(state, key)
    return [m for m in migrations if m.version > version]


def _stamp(result: Any, key: str, version: int) -> Any:
    if isinstance(result, BaseModel):
        result = result.model_dump()
    if isinstance(result, Mapping):
        stamped = dict(result)
        stamped[key] = version
        return stamped
    return result


def _schema_with_version(migration: Migration, key: str) -> Validator:
    return as_validator(migration.schema).and_(Validator.literal(key, migration.version))


def migrate(state: Any, migrations: Sequence[Migration], key: str = DEFAULT_KEY) -> Any:
    """
    Migrate a state value through a chain of migrations.

    Every migration whose version is greater than the state's current version
    is applied in order. Each result is stamped with the migration's version
    under ``key`` and validated against the migration's schema.

    Args:
        state: The persisted state (any value; non-mappings count as version 0)
        migrations: Steps sorted by strictly ascending version
        key: Field used to store the version

    Returns:
        The migrated state, or ``state`` itself if no migration applies

    Raises:
        VersionError: If migrations is empty or not strictly ascending
        MigrationError: If an ``up()`` function raises
        ValidationError: If a result fails schema validation
    """
    to_apply = pending(state, migrations, key)
    if not to_apply:
        logger.debug("State is up to date at version %s", current_version(state, key))
        return state

    logger.debug(
        "Applying migrations %s to state at version %s",
        versions(to_apply), current_version(state, key)
    )

    current_state = state
    for migration in to_apply:
        try:
            result = migration.up(current_state)
        except Exception as e:
            raise MigrationError(migration.version, e) from e

        result = _stamp(result, key, migration.version)

        parsed = _schema_with_version(migration, key).validate(result)
        if not parsed.ok:
            raise ValidationError(migration.version, parsed.issues)

        current_state = parsed.value
        logger.debug("Migrated state to version %s", migration.version)

    return current_state


class Migrator:
    """A chain bound to a set of options."""

    def __init__(self, migrations: Sequence[Migration], key: Optional[str] = None):
        self.migrations = tuple(migrations)
        self.options = MigrateOptions() if key is None else MigrateOptions(key=key)

    @property
    def key(self) -> str:
        return self.options.key

    @property
    def latest_version(self) -> int:
        check_chain(self.migrations)
        return self.migrations[-1].version

    def check(self) -> None:
        check_chain(self.migrations)

    def current_version(self, state: Any) -> Any:
        return current_version(state, self.key)

    def pending(self, state: Any) -> List[Migration]:
        return pending(state, self.migrations, self.key)

    def needs_upgrade(self, state: Any) -> bool:
        """Check if ``state`` is behind the chain."""
        return bool(self.pending(state))

    def migrate(self, state: Any) -> Any:
        return migrate(state, self.migrations, self.key)
