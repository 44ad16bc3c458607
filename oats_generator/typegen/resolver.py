"""Resolve OpenAPI schema nodes into TypeScript type expressions.

Rules follow the OpenAPI 3.0 data types
(https://github.com/OAI/OpenAPI-Specification/blob/master/versions/3.0.1.md#data-types):

- `$ref` pointers become the PascalCase name of the component
- numeric formats become `number`, string formats `string` or a literal union
- arrays become `T[]`, with unions and intersections wrapped in parentheses
- `allOf` becomes an intersection, `oneOf` / `anyOf` a union
- objects become record literals, or `{[key: string]: any}` when free-form
"""

from __future__ import annotations

import re
from typing import Any, Final, Iterable

from oats_generator.shared.errors import InvalidSchemaError, UnsupportedReferenceError
from oats_generator.shared.naming import quote_key, to_pascal_case

from .schema import Reference, Schema, SchemaNode, is_reference, parse_schema

# Component kinds a `$ref` may point to, with the suffix of the generated name
REF_PREFIXES: Final[tuple[tuple[str, str], ...]] = (
    ("#/components/schemas/", ""),
    ("#/components/responses/", "Response"),
    ("#/components/parameters/", "Parameter"),
    ("#/components/requestBodies/", "RequestBody"),
)

NUMBER_TYPES: Final[frozenset[str]] = frozenset({
    "int32", "int64", "number", "integer", "long", "float", "double",
})

STRING_TYPES: Final[frozenset[str]] = frozenset({
    "string", "byte", "binary", "date", "dateTime", "date-time", "password",
})

# Content types whose schema is used for responses and request bodies
CONTENT_TYPE_PREFIXES: Final[tuple[str, ...]] = ("application/json", "application/octet-stream")

FREE_FORM_OBJECT: Final[str] = "{[key: string]: any}"

_PATH_PARAM_RE = re.compile(r"\{(\w+)}")


def resolve_ref_name(ref: str) -> str:
    """Return the type name generated for a `$ref` pointer.

    Raises:
        UnsupportedReferenceError: If the pointer is not rooted at
            `#/components/{schemas,responses,parameters,requestBodies}/`.
    """
    for prefix, suffix in REF_PREFIXES:
        if ref.startswith(prefix):
            return to_pascal_case(ref[len(prefix):]) + suffix
    raise UnsupportedReferenceError(ref)


def format_description(description: str | None, tab_size: int = 0) -> str:
    """Format a description as a doc comment, followed by the indentation."""
    if not description:
        return ""
    indent = " " * tab_size
    lines = "\n".join(f"{indent} * {line}" for line in description.split("\n"))
    return f"/**\n{lines}\n{indent} */\n{indent}"


def _enum_literal(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def resolve_value(node: SchemaNode | None) -> str:
    """Resolve a schema node to a type expression."""
    if node is None:
        return "any"
    if isinstance(node, Reference):
        return resolve_ref_name(node.ref)
    if isinstance(node, Schema):
        return resolve_scalar(node)
    raise TypeError(f"Unexpected schema node: {node!r}")


def resolve_scalar(schema: Schema) -> str:
    """Return the TypeScript equivalent of an inline schema."""
    nullable = " | null" if schema.nullable else ""

    if schema.type in NUMBER_TYPES:
        return "number" + nullable
    if schema.type == "boolean":
        return "boolean" + nullable
    if schema.type == "array":
        return resolve_array(schema) + nullable
    if schema.type in STRING_TYPES:
        if schema.enum is not None:
            return '"' + '" | "'.join(_enum_literal(v) for v in schema.enum) + '"' + nullable
        return "string" + nullable
    return resolve_object(schema) + nullable


def resolve_array(schema: Schema) -> str:
    """Return the type of an array schema.

    Raises:
        InvalidSchemaError: If the array does not declare its `items`.
    """
    items = schema.items
    if items is None:
        raise InvalidSchemaError("All arrays must have an `items` key define")
    if isinstance(items, Schema) and (items.is_composite or items.enum is not None):
        return f"({resolve_value(items)})[]"
    return f"{resolve_value(items)}[]"


def resolve_object(schema: SchemaNode) -> str:
    """Return the type of an object (or untyped) schema."""
    if isinstance(schema, Reference):
        return resolve_ref_name(schema.ref)

    if schema.all_of:
        return " & ".join(resolve_value(member) for member in schema.all_of)
    if schema.one_of:
        return " | ".join(resolve_value(member) for member in schema.one_of)
    if schema.any_of:
        return " | ".join(resolve_value(member) for member in schema.any_of)

    additional = schema.additional_properties
    if schema.type is None and schema.properties is None and not additional:
        return "{}"

    # Free form object (https://swagger.io/docs/specification/data-models/data-types/#free-form)
    if (
        schema.type == "object"
        and schema.properties is None
        and (not additional or additional is True or (isinstance(additional, Schema) and additional.is_empty))
    ):
        return FREE_FORM_OBJECT

    if schema.properties is None and not additional:
        return FREE_FORM_OBJECT if schema.type == "object" else "any"

    fields: list[str] = []
    for key, prop in (schema.properties or {}).items():
        doc = format_description(prop.description, 2) if isinstance(prop, Schema) else ""
        optional = "" if key in schema.required else "?"
        fields.append(f"  {doc}{quote_key(key)}{optional}: {resolve_value(prop)};")

    if additional:
        value = "any" if additional is True else resolve_value(additional)
        fields.append(f"  [key: string]: {value};")

    if not fields:
        return "{}"
    return "{\n" + "\n".join(fields) + "\n}"


def _content_type(entry: Any) -> str:
    if not entry:
        return "void"
    if is_reference(entry):
        return resolve_ref_name(entry["$ref"])

    content = entry.get("content") if isinstance(entry, dict) else None
    if not isinstance(content, dict):
        return "void"
    for content_type, media in content.items():
        if content_type.startswith(CONTENT_TYPE_PREFIXES):
            schema = media.get("schema") if isinstance(media, dict) else None
            if schema is None:
                return "void"
            return resolve_value(parse_schema(schema))
    return "void"


def resolve_content_types(entries: Iterable[tuple[str, Any]]) -> str:
    """Extract the union of response / request body types.

    Args:
        entries: `(key, object)` pairs, where the object is a response, a
            request body, a reference to either, or None.

    Returns:
        The de-duplicated types joined with `" | "`, or an empty string when
        there are no entries.
    """
    types: dict[str, None] = {}
    for _, entry in entries:
        types.setdefault(_content_type(entry), None)
    return " | ".join(types)


def get_params_in_path(route: str) -> list[str]:
    """Return every param in a route.

    Examples:
        >>> get_params_in_path("/pet/{category}/{name}/")
        ['category', 'name']
    """
    return _PATH_PARAM_RE.findall(route)


def is_record_literal(type_expr: str) -> bool:
    """True when a type is a single record literal that can back an interface."""
    return (
        type_expr.startswith("{")
        and type_expr.endswith("}")
        and "|" not in type_expr
        and "&" not in type_expr
    )
