"""Schema node model.

A raw OpenAPI schema mapping is parsed into a closed union of two variants:
`Reference` for `$ref` pointers and `Schema` for inline definitions. The type
resolver dispatches on these variants only.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class Reference:
    """A `$ref` pointer to a component."""

    ref: str


@dataclass(frozen=True, slots=True)
class Discriminator:
    """Discriminator of a polymorphic schema."""

    property_name: str
    mapping: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Schema:
    """An inline schema definition."""

    type: str | None = None
    format: str | None = None
    description: str | None = None
    enum: tuple[Any, ...] | None = None
    nullable: bool = False
    items: SchemaNode | None = None
    properties: dict[str, SchemaNode] | None = None
    required: tuple[str, ...] = ()
    additional_properties: bool | SchemaNode | None = None
    all_of: tuple[SchemaNode, ...] | None = None
    one_of: tuple[SchemaNode, ...] | None = None
    any_of: tuple[SchemaNode, ...] | None = None
    discriminator: Discriminator | None = None
    # Set when the raw mapping had keys, including ones not modelled above
    has_keywords: bool = field(default=False, compare=False)

    @property
    def is_empty(self) -> bool:
        """True only for a literal `{}` schema."""
        return all(getattr(self, f.name) == f.default for f in fields(self))

    @property
    def is_composite(self) -> bool:
        """True when the schema renders as a union or intersection."""
        return bool(self.all_of or self.one_of or self.any_of)


SchemaNode = Union[Reference, Schema]


def is_reference(raw: Any) -> bool:
    """Check whether a raw mapping is a `$ref` pointer."""
    return isinstance(raw, dict) and bool(raw.get("$ref"))


def _parse_list(raw: Any) -> tuple[SchemaNode, ...] | None:
    if not isinstance(raw, list):
        return None
    return tuple(node for node in (parse_schema(item) for item in raw) if node is not None)


def _parse_additional_properties(raw: Any) -> bool | SchemaNode | None:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, dict):
        return parse_schema(raw)
    return None


def _parse_discriminator(raw: Any) -> Discriminator | None:
    if not isinstance(raw, dict) or not raw.get("propertyName"):
        return None
    mapping = raw.get("mapping")
    return Discriminator(
        property_name=raw["propertyName"],
        mapping=dict(mapping) if isinstance(mapping, dict) else {},
    )


def parse_schema(raw: Any) -> SchemaNode | None:
    """Parse a raw schema mapping into a schema node.

    Returns None for a missing schema. Keys next to `$ref` are ignored.
    """
    if raw is None:
        return None
    if isinstance(raw, (Reference, Schema)):
        return raw
    if not isinstance(raw, dict):
        return Schema()
    if is_reference(raw):
        return Reference(raw["$ref"])

    schema_type = raw.get("type")
    enum = raw.get("enum")
    properties = raw.get("properties")
    required = raw.get("required")

    return Schema(
        type=schema_type if isinstance(schema_type, str) else None,
        format=raw.get("format"),
        description=raw.get("description") or None,
        enum=tuple(enum) if isinstance(enum, list) else None,
        nullable=bool(raw.get("nullable", False)),
        items=parse_schema(raw.get("items")),
        properties=(
            {name: parse_schema(prop) for name, prop in properties.items()}
            if isinstance(properties, dict)
            else None
        ),
        required=tuple(required) if isinstance(required, list) else (),
        additional_properties=_parse_additional_properties(raw.get("additionalProperties")),
        all_of=_parse_list(raw.get("allOf")),
        one_of=_parse_list(raw.get("oneOf")),
        any_of=_parse_list(raw.get("anyOf")),
        discriminator=_parse_discriminator(raw.get("discriminator")),
        has_keywords=bool(raw),
    )
