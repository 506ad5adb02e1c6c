# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Helper functions for creating migration chains and chain files in tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from state_migrate import create_migrations


class Named(BaseModel):
    name: str


class Titled(BaseModel):
    title: str


class Counted(BaseModel):
    title: str
    count: int


def three_step_chain(calls: Optional[List[int]] = None):
    """
    Build the chain name -> title -> title + count.

    Args:
        calls: Optional list that records the version of every ``up`` call

    Returns:
        Tuple of migrations
    """
    def record(version: int) -> None:
        if calls is not None:
            calls.append(version)

    def to_v1(state):
        record(1)
        return {"name": "initial"}

    def to_v2(state):
        record(2)
        return {"title": state["name"].upper()}

    def to_v3(state):
        record(3)
        return {"title": state["title"], "count": 0}

    return (
        create_migrations()
        .add(version=1, schema=Named, up=to_v1)
        .add(version=2, schema=Titled, up=to_v2)
        .add(version=3, schema=Counted, up=to_v3)
        .build()
    )


CHAIN_SOURCE = '''
from pydantic import BaseModel
from state_migrate import create_migrations


class V1(BaseModel):
    name: str


class V2(BaseModel):
    title: str
    count: int = 0


def _name(state):
    if isinstance(state, dict) and isinstance(state.get("name"), str):
        return state["name"]
    return "default"


{attribute} = (
    create_migrations()
    .add(version=1, schema=V1, up=lambda state: {{"name": _name(state)}})
    .add(version=2, schema=V2, up=lambda state: {{"title": state["name"].upper()}})
    .build()
)
'''


def write_chain_file(path: Path, attribute: str = "migrations") -> Path:
    """Write a two-step chain module to ``path``."""
    path.write_text(CHAIN_SOURCE.format(attribute=attribute), encoding='utf-8')
    return path


def write_json_state(path: Path, state: Any) -> Path:
    """Write a state value as JSON."""
    path.write_text(json.dumps(state), encoding='utf-8')
    return path


def read_json_state(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding='utf-8'))
