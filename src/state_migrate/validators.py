# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Validator capability used by migration steps.

The runner only depends on the small ``Validator`` interface defined here:
``validate()``, ``and_()`` and ``Validator.literal()``. ``PydanticValidator``
adapts pydantic models and type annotations to that interface, so any
``schema`` a step declares can be a plain pydantic model.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError


class Issue(BaseModel):
    """A single validation problem."""
    message: str
    path: List[Union[str, int]] = Field(default_factory=list)
    code: Optional[str] = None

    def format_path(self) -> str:
        """Render the path as ``a.b[0].c`` (empty string for the root)."""
        rendered = ""
        for part in self.path:
            if isinstance(part, int):
                rendered += f"[{part}]"
            elif rendered:
                rendered += f".{part}"
            else:
                rendered = str(part)
        return rendered


class ValidationResult(BaseModel):
    """Outcome of ``Validator.validate()``."""
    ok: bool
    value: Any = None
    issues: List[Issue] = Field(default_factory=list)

    @classmethod
    def success(cls, value: Any) -> "ValidationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, issues: List[Issue]) -> "ValidationResult":
        return cls(ok=False, issues=issues)


class Validator(ABC):
    """Checks a value and returns its canonical form or a list of issues."""

    @abstractmethod
    def validate(self, value: Any) -> ValidationResult:
        """Validate ``value``."""

    def and_(self, other: "Validator") -> "Validator":
        """Return a validator that requires both ``self`` and ``other`` to pass."""
        return AllOf(self, as_validator(other))

    def __and__(self, other: "Validator") -> "Validator":
        return self.and_(other)

    @staticmethod
    def literal(key: str, value: Any) -> "Validator":
        """Return a validator requiring ``input[key]`` to equal ``value`` exactly."""
        return FieldLiteral(key, value)


def _plain(value: Any) -> Any:
    """Turn pydantic model instances into plain dicts, recursively."""
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


class PydanticValidator(Validator):
    """Adapter validating values with a pydantic ``TypeAdapter``.

    ``schema`` may be a ``BaseModel`` subclass, any annotation pydantic
    understands (``int``, ``List[str]``, a ``TypedDict``...) or a
    ``TypeAdapter`` instance.
    """

    def __init__(self, schema: Any):
        self.schema = schema
        if isinstance(schema, TypeAdapter):
            self.adapter = schema
        else:
            self.adapter = TypeAdapter(schema)

    def validate(self, value: Any) -> ValidationResult:
        try:
            parsed = self.adapter.validate_python(value)
        except PydanticValidationError as e:
            return ValidationResult.failure([
                Issue(
                    message=error['msg'],
                    path=list(error['loc']),
                    code=error['type']
                )
                for error in e.errors()
            ])
        return ValidationResult.success(_plain(parsed))

    def __repr__(self) -> str:
        return f"PydanticValidator({self.schema!r})"


def _is_same_literal(actual: Any, expected: Any) -> bool:
    # bool is an int subclass; True must never satisfy a literal 1
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return type(actual) in (int, float, bool, str, type(None)) and actual == expected


class FieldLiteral(Validator):
    """Requires a mapping whose ``key`` holds exactly ``value``."""

    def __init__(self, key: str, value: Any):
        self.key = key
        self.value = value

    def validate(self, value: Any) -> ValidationResult:
        if not isinstance(value, Mapping):
            return ValidationResult.failure([
                Issue(
                    message=f"Expected object, received {type(value).__name__}",
                    path=[],
                    code="invalid_type"
                )
            ])

        if self.key not in value:
            return ValidationResult.failure([
                Issue(
                    message=f"Field required: expected literal value {self.value!r}",
                    path=[self.key],
                    code="missing"
                )
            ])

        actual = value[self.key]
        if not _is_same_literal(actual, self.value):
            return ValidationResult.failure([
                Issue(
                    message=f"Invalid literal value, expected {self.value!r}",
                    path=[self.key],
                    code="invalid_literal"
                )
            ])

        return ValidationResult.success({self.key: actual})

    def __repr__(self) -> str:
        return f"FieldLiteral({self.key!r}, {self.value!r})"


_NO_MERGE = object()


def _merge(left: Any, right: Any) -> Tuple[Any, List[Union[str, int]]]:
    """Merge two validated outputs.

    Returns ``(merged, [])`` on success, or ``(_NO_MERGE, path)`` with the
    path of the first conflicting value.
    """
    if left is right:
        return left, []

    if isinstance(left, Mapping) and isinstance(right, Mapping):
        merged = dict(left)
        for key, value in right.items():
            if key in merged:
                result, path = _merge(merged[key], value)
                if result is _NO_MERGE:
                    return _NO_MERGE, [key] + path
                merged[key] = result
            else:
                merged[key] = value
        return merged, []

    if isinstance(left, list) and isinstance(right, list):
        if len(left) != len(right):
            return _NO_MERGE, []
        items = []
        for index, (a, b) in enumerate(zip(left, right)):
            result, path = _merge(a, b)
            if result is _NO_MERGE:
                return _NO_MERGE, [index] + path
            items.append(result)
        return items, []

    if left == right:
        return left, []

    return _NO_MERGE, []


class AllOf(Validator):
    """Conjunction of two validators; their outputs are merged."""

    def __init__(self, left: Validator, right: Validator):
        self.left = left
        self.right = right

    def validate(self, value: Any) -> ValidationResult:
        left = self.left.validate(value)
        right = self.right.validate(value)

        if not (left.ok and right.ok):
            return ValidationResult.failure(left.issues + right.issues)

        merged, path = _merge(left.value, right.value)
        if merged is _NO_MERGE:
            return ValidationResult.failure([
                Issue(
                    message="Intersection results could not be merged",
                    path=path,
                    code="invalid_intersection_types"
                )
            ])
        return ValidationResult.success(merged)

    def __repr__(self) -> str:
        return f"AllOf({self.left!r}, {self.right!r})"


def as_validator(schema: Any) -> Validator:
    """Wrap ``schema`` in a ``PydanticValidator`` unless it already is a ``Validator``."""
    if isinstance(schema, Validator):
        return schema
    return PydanticValidator(schema)
