# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Building migration chains.

A chain is an immutable, ordered sequence of ``Migration`` steps. Each
``append()`` returns a new chain and leaves the original untouched:

    migrations = (
        create_migrations()
        .add(version=1, schema=V1, up=lambda state: {"name": "default"})
        .add(version=2, schema=V2, up=lambda state: {"title": state["name"]})
        .build()
    )

Type continuity between steps is documented through the generic
``Migration[TInput, TOutput]`` only: the ``up`` of each step receives the
canonical output of the previous step's schema (or the raw state for the
first step). Version ordering is checked by the runner, not here, since
chains may also be assembled by hand.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, List, Tuple, TypeVar, Union, overload

TInput = TypeVar('TInput')
TOutput = TypeVar('TOutput')


@dataclass(frozen=True)
class Migration(Generic[TInput, TOutput]):
    """A single versioned transformation and the schema of its output."""
    version: int
    schema: Any
    up: Callable[[TInput], TOutput]


def create_migration(version: int, schema: Any, up: Callable[[Any], Any]) -> Migration:
    """Create a standalone migration step."""
    return Migration(version=version, schema=schema, up=up)


class MigrationChain:
    """Immutable ordered collection of migrations."""

    __slots__ = ('_steps',)

    def __init__(self, steps: Tuple[Migration, ...] = ()):
        self._steps = tuple(steps)

    @classmethod
    def empty(cls) -> "MigrationChain":
        return cls()

    def append(self, step: Migration) -> "MigrationChain":
        """Return a new chain with ``step`` added at the end."""
        return MigrationChain(self._steps + (step,))

    def add(self, version: int, schema: Any, up: Callable[[Any], Any]) -> "MigrationChain":
        """Fluent form of ``append()`` taking the step fields directly."""
        return self.append(create_migration(version, schema, up))

    def build(self) -> Tuple[Migration, ...]:
        """Return the steps as a read-only tuple."""
        return self._steps

    @property
    def versions(self) -> List[int]:
        return versions(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Migration]:
        return iter(self._steps)

    @overload
    def __getitem__(self, index: int) -> Migration: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Migration, ...]: ...

    def __getitem__(self, index: Union[int, slice]):
        return self._steps[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MigrationChain):
            return self._steps == other._steps
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._steps)

    def __repr__(self) -> str:
        return f"MigrationChain(versions={self.versions})"


def empty() -> MigrationChain:
    """Return an empty chain."""
    return MigrationChain.empty()


def append(chain: MigrationChain, step: Migration) -> MigrationChain:
    """Return a new chain equal to ``chain`` with ``step`` at the end."""
    return chain.append(step)


def finalize(chain: MigrationChain) -> Tuple[Migration, ...]:
    """Return the steps of ``chain`` as a read-only ordered sequence."""
    return chain.build()


def create_migrations() -> MigrationChain:
    """Start a fluent migration chain."""
    return MigrationChain.empty()


def versions(steps) -> List[int]:
    """List the versions of a sequence of migrations, in order."""
    return [step.version for step in steps]
