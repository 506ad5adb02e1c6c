# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Tests for reading and writing state files."""

import datetime
import json
from pathlib import Path

import pytest

from state_migrate.state_files import StateFileError, dump_state, file_format, read_state


def test_file_format():
    assert file_format(Path("state.toml")) == "toml"
    assert file_format(Path("state.JSON")) == "json"
    with pytest.raises(StateFileError):
        file_format(Path("state.yaml"))


def test_toml_dates_written_as_iso_strings_in_json(tmp_path):
    state_file = tmp_path / "state.toml"
    state_file.write_text('created = 2024-01-02T03:04:05\nday = 2024-01-02\n')

    dumped = json.loads(dump_state(read_state(state_file), "json"))

    assert dumped == {"created": "2024-01-02T03:04:05", "day": "2024-01-02"}


def test_unserializable_json_value():
    with pytest.raises(StateFileError, match="Cannot write state as JSON"):
        dump_state({"value": object()}, "json")


def test_toml_null_value():
    with pytest.raises(StateFileError, match="Cannot write state as TOML"):
        dump_state({"name": "x", "nick": None}, "toml")


def test_toml_requires_table():
    with pytest.raises(StateFileError, match="a table is required"):
        dump_state([1, 2], "toml")


def test_json_time_value():
    assert dump_state({"at": datetime.time(8, 30)}, "json", indent=0) == '{"at": "08:30:00"}\n'
