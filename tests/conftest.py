# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Shared pytest fixtures."""

import pytest
from click.testing import CliRunner

from state_migrate import create_migrations
from helpers.chain_helpers import Named, three_step_chain, write_chain_file


@pytest.fixture
def default_name_chain():
    """
    Create a single-step chain producing ``{"name": "default"}``.

    Returns:
        Tuple of migrations
    """
    return (
        create_migrations()
        .add(version=1, schema=Named, up=lambda state: {"name": "default"})
        .build()
    )


@pytest.fixture
def calls():
    """List recording the versions of the ``up`` functions that ran."""
    return []


@pytest.fixture
def chain(calls):
    """
    Create the three-step chain from the helpers, recording calls.

    Returns:
        Tuple of migrations
    """
    return three_step_chain(calls)


@pytest.fixture
def chain_file(tmp_path):
    """
    Create a temporary Python file defining ``migrations``.

    Returns:
        Path to the chain file
    """
    return write_chain_file(tmp_path / "migrations.py")


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """
    Create a CliRunner working inside an empty temporary directory.

    Returns:
        CliRunner instance
    """
    monkeypatch.chdir(tmp_path)
    return CliRunner()
