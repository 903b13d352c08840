# =============================================================================
# core/schema.py  -  Schema Descriptors (the declared shape of tool I/O)
# =============================================================================
#
# A schema descriptor is a small recursive tree:
#
#   PrimitiveSchema  -> "string" | "number" | "boolean"
#   ObjectSchema     -> ordered fields, each required or optional
#   AnySchema        -> free-form placeholder, accepts anything
#
# Every node carries a human-readable description.  Descriptions are
# documentation for the agent reading the catalog; they never change the
# outcome of validation.
#
# VALIDATION POLICY:
#   - Structural only: kinds must match, required fields must be present.
#     No ranges, no formats, no enums.
#   - Permissive about extras: unknown fields in an object are ignored.
#   - Reports, never throws: validate() returns a ValidationResult listing
#     EVERY failing field as (path, reason), so an agent can fix all of its
#     mistakes in one retry.
# =============================================================================

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, Union

PrimitiveKind = Literal["string", "number", "boolean"]

_PRIMITIVE_KINDS = ("string", "number", "boolean")

REQUIRED_REASON = "field is required"


def _kind_of(value: Any) -> str:
    """Name the JSON kind of a Python value, for failure messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


# -----------------------------------------------------------------------------
# Validation results
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ValidationFailure:
    """One field that failed validation.  The root path is ""."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path or '<root>'}: {self.reason}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a value.  Truthy when there are no failures."""

    failures: tuple[ValidationFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    def __bool__(self) -> bool:
        return self.ok

    def missing_fields(self) -> list[str]:
        """Paths of required fields that were absent."""
        return [f.path for f in self.failures if f.reason == REQUIRED_REASON]

    def describe(self) -> str:
        if self.ok:
            return "valid"
        return "; ".join(str(f) for f in self.failures)


# -----------------------------------------------------------------------------
# Schema nodes
# -----------------------------------------------------------------------------
class SchemaNode:
    """Behaviour shared by every descriptor node."""

    description: str

    def validate(self, value: Any) -> ValidationResult:
        """Check ``value`` against this node.  Never raises."""
        return ValidationResult(tuple(self._check(value, "")))

    def _check(self, value: Any, path: str) -> list[ValidationFailure]:
        raise NotImplementedError

    def prune(self, value: Any) -> Any:
        """Return ``value`` restricted to what this node declares."""
        return value

    def to_json_schema(self) -> dict[str, Any]:
        raise NotImplementedError

    @property
    def is_empty(self) -> bool:
        return False


@dataclass(frozen=True)
class PrimitiveSchema(SchemaNode):
    kind: PrimitiveKind
    description: str = ""

    def __post_init__(self) -> None:
        if self.kind not in _PRIMITIVE_KINDS:
            raise ValueError(f"Unknown primitive kind: {self.kind!r}")

    def _matches(self, value: Any) -> bool:
        if self.kind == "string":
            return isinstance(value, str)
        if self.kind == "boolean":
            return isinstance(value, bool)
        # bool is an int subclass in Python but not a JSON number
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    def _check(self, value: Any, path: str) -> list[ValidationFailure]:
        if self._matches(value):
            return []
        return [ValidationFailure(path, f"expected {self.kind}, got {_kind_of(value)}")]

    def to_json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.kind}
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class AnySchema(SchemaNode):
    """Free-form placeholder: no constraints at all."""

    description: str = ""

    def _check(self, value: Any, path: str) -> list[ValidationFailure]:
        return []

    def to_json_schema(self) -> dict[str, Any]:
        return {"description": self.description} if self.description else {}


@dataclass(frozen=True)
class SchemaField:
    name: str
    schema: SchemaDescriptor
    required: bool = True

    @property
    def description(self) -> str:
        return self.schema.description


@dataclass(frozen=True)
class ObjectSchema(SchemaNode):
    fields: tuple[SchemaField, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        seen: set[str] = set()
        for f in self.fields:
            if f.name in seen:
                raise ValueError(f"Duplicate field name {f.name!r} in object schema")
            seen.add(f.name)

    @property
    def is_empty(self) -> bool:
        return not self.fields

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def required_names(self) -> list[str]:
        return [f.name for f in self.fields if f.required]

    def _check(self, value: Any, path: str) -> list[ValidationFailure]:
        if not isinstance(value, Mapping):
            return [ValidationFailure(path, f"expected object, got {_kind_of(value)}")]

        failures: list[ValidationFailure] = []
        for f in self.fields:
            child_path = _join(path, f.name)
            if f.name not in value:
                if f.required:
                    failures.append(ValidationFailure(child_path, REQUIRED_REASON))
                continue
            child = value[f.name]
            if child is None and not f.required:
                # an explicit null counts as "not supplied" for optional fields
                continue
            failures.extend(f.schema._check(child, child_path))
        return failures

    def prune(self, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        pruned: dict[str, Any] = {}
        for f in self.fields:
            if f.name not in value:
                continue
            child = value[f.name]
            if child is None and not f.required:
                continue
            pruned[f.name] = f.schema.prune(child)
        return pruned

    def to_json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {f.name: f.schema.to_json_schema() for f in self.fields},
            "required": self.required_names,
        }
        if self.description:
            schema["description"] = self.description
        return schema


SchemaDescriptor = Union[PrimitiveSchema, ObjectSchema, AnySchema]


# -----------------------------------------------------------------------------
# Constructors used by the tool modules
# -----------------------------------------------------------------------------
def string(description: str = "") -> PrimitiveSchema:
    return PrimitiveSchema("string", description)


def number(description: str = "") -> PrimitiveSchema:
    return PrimitiveSchema("number", description)


def boolean(description: str = "") -> PrimitiveSchema:
    return PrimitiveSchema("boolean", description)


def anything(description: str = "") -> AnySchema:
    return AnySchema(description)


def required(name: str, schema: SchemaDescriptor) -> SchemaField:
    return SchemaField(name, schema, required=True)


def optional(name: str, schema: SchemaDescriptor) -> SchemaField:
    return SchemaField(name, schema, required=False)


def obj(description: str = "", *fields: SchemaField) -> ObjectSchema:
    return ObjectSchema(fields=tuple(fields), description=description)


EMPTY = ObjectSchema(description="No input required")
