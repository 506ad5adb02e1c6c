# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Versioned state migrations.

Build a chain of versioned steps with ``create_migrations()`` and bring any
persisted state up to date with ``migrate()``.
"""

from .chain import (
    Migration,
    MigrationChain,
    append,
    create_migration,
    create_migrations,
    empty,
    finalize,
)
from .errors import MigrationError, StateMigrateError, ValidationError, VersionError
from .runner import DEFAULT_KEY, MigrateOptions, Migrator, check_chain, current_version, migrate, pending
from .validators import FieldLiteral, Issue, PydanticValidator, ValidationResult, Validator, as_validator

__all__ = [
    'Migration',
    'MigrationChain',
    'append',
    'create_migration',
    'create_migrations',
    'empty',
    'finalize',
    'MigrationError',
    'StateMigrateError',
    'ValidationError',
    'VersionError',
    'DEFAULT_KEY',
    'MigrateOptions',
    'Migrator',
    'check_chain',
    'current_version',
    'migrate',
    'pending',
    'FieldLiteral',
    'Issue',
    'PydanticValidator',
    'ValidationResult',
    'Validator',
    'as_validator',
]
