# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Errors raised while running a migration chain."""

from typing import Any, List, Optional


class StateMigrateError(Exception):
    """Base class for every error raised by state-migrate."""
    pass


class VersionError(StateMigrateError):
    """Raised when a migration chain is empty or not strictly ascending."""

    def __init__(
        self,
        message: str,
        previous: Optional[int] = None,
        current: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.previous = previous
        self.current = current


class MigrationError(StateMigrateError):
    """Raised when the ``up`` function of a migration fails."""

    def __init__(self, version: int, cause: Any):
        detail = str(cause) if isinstance(cause, BaseException) else ""
        if detail:
            message = f"Migration to version {version} failed: {detail}"
        else:
            message = f"Migration to version {version} failed"
        super().__init__(message)
        self.version = version
        self.cause = cause


class ValidationError(StateMigrateError):
    """Raised when the output of a migration does not match its schema."""

    def __init__(self, version: int, issues: List[Any]):
        messages = ", ".join(issue.message for issue in issues)
        super().__init__(f"Validation failed for version {version}: {messages}")
        self.version = version
        self.issues = list(issues)
