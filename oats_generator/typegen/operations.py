"""Synthesize types and metadata for a single OpenAPI operation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Final

from oats_generator.shared.errors import (
    DuplicateOperationIdError,
    MissingOperationIdError,
    PathParameterNotFoundError,
)
from oats_generator.shared.naming import quote_key, to_pascal_case

from .render import Declaration, GeneratorContext, get_context
from .resolver import (
    format_description,
    get_params_in_path,
    is_record_literal,
    resolve_content_types,
    resolve_value,
)
from .schema import SchemaNode, is_reference, parse_schema

logger = logging.getLogger(__name__)

OperationNameGenerator = Callable[..., str]

# Verbs that produce an operation
OPERATION_VERBS: Final[tuple[str, ...]] = ("get", "post", "patch", "put", "delete")

# Trailing `/${param}` (with an optional slash) of a DELETE route
_LAST_PARAM_RE = re.compile(r"/\$\{(\w+)\}/?$")


@dataclass(frozen=True, slots=True)
class Parameter:
    """An operation parameter, after reference resolution."""

    name: str
    location: str | None
    required: bool = False
    description: str | None = None
    schema: SchemaNode | None = None

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Parameter:
        return cls(
            name=raw.get("name", ""),
            location=raw.get("in"),
            required=bool(raw.get("required", False)),
            description=raw.get("description") or None,
            schema=parse_schema(raw.get("schema")),
        )


@dataclass(slots=True)
class TypeNames:
    """Type names an operation's helpers are typed with."""

    response: str
    query: str = "any"
    body: str = "any"


@dataclass(frozen=True, slots=True)
class GeneratedComponent:
    """Per-operation metadata handed to code-generation hooks."""

    component_name: str
    verb: str
    route: str
    description: str
    type_names: TypeNames
    error_types: str
    header_params: list[Parameter] = field(default_factory=list)
    params_in_path: list[str] = field(default_factory=list)
    params_types: str = ""
    operation: dict[str, Any] = field(default_factory=dict)


def is_ok(status_code: str) -> bool:
    return str(status_code).startswith("2")


def is_error(status_code: str) -> bool:
    status = str(status_code)
    return status.startswith(("4", "5")) or status == "default"


def resolve_parameter(
    raw: dict[str, Any],
    components: dict[str, Any] | None,
) -> dict[str, Any] | None:
    """Resolve a parameter, following a `#/components/<kind>/<name>` ref."""
    if not is_reference(raw):
        return raw
    ref = raw["$ref"]
    if ref.startswith("#/components/"):
        kind, _, name = ref[len("#/components/"):].partition("/")
        resolved = ((components or {}).get(kind) or {}).get(name)
        if isinstance(resolved, dict):
            return resolved
    logger.warning("Skipping parameter with unresolvable $ref '%s'", ref)
    return None


def _group_parameters(
    parameters: list[dict[str, Any]],
    components: dict[str, Any] | None,
) -> dict[str | None, list[Parameter]]:
    grouped: dict[str | None, list[Parameter]] = {}
    for raw in parameters:
        resolved = resolve_parameter(raw, components)
        if resolved is None:
            continue
        param = Parameter.from_raw(resolved)
        grouped.setdefault(param.location, []).append(param)
    return grouped


def _format_operation_description(operation: dict[str, Any]) -> str:
    summary = operation.get("summary") or ""
    description = operation.get("description") or ""
    if summary and description:
        return format_description(f"{summary}\n\n{description}")
    return format_description(f"{summary}{description}")


def _named_declaration(name: str, type_expr: str) -> Declaration:
    kind = "interface" if is_record_literal(type_expr) else "alias"
    return Declaration(name=name, type_expr=type_expr, kind=kind)


def generate_restful_component(
    operation: dict[str, Any],
    verb: str,
    route: str,
    operation_ids: list[str],
    parameters: list[dict[str, Any]] | None = None,
    components: dict[str, Any] | None = None,
    operation_name_generator: OperationNameGenerator | None = None,
    context: GeneratorContext | None = None,
) -> tuple[str, GeneratedComponent]:
    """Generate TypeScript types and metadata for one operation.

    Args:
        operation: The raw operation object.
        verb: HTTP verb, lower case.
        route: Route template, e.g. `/pet/{id}`.
        operation_ids: Names already generated; the new one is appended.
        parameters: Path-item-level parameters.
        components: The spec's `components` mapping.
        operation_name_generator: Called with `verb=` and `route=` when the
            operation has no operationId.
        context: Template context, defaults to the shared one.

    Returns:
        The rendered declarations and the component descriptor.

    Raises:
        MissingOperationIdError: No operationId and no generator.
        DuplicateOperationIdError: The operationId was already used.
        PathParameterNotFoundError: A route placeholder has no path parameter.
    """
    operation_id = operation.get("operationId")
    if not operation_id:
        if operation_name_generator is None:
            raise MissingOperationIdError(verb, route)
        operation_id = operation_name_generator(verb=verb, route=route)
        operation = {**operation, "operationId": operation_id}

    component_name = to_pascal_case(operation_id)
    if component_name in operation_ids:
        raise DuplicateOperationIdError(operation_id, verb, route)
    operation_ids.append(component_name)
    logger.debug("Generating %s (%s %s)", component_name, verb.upper(), route)

    original_route = route
    route = route.replace("{", "${")  # `/pet/{id}` => `/pet/${id}`

    # DELETE helpers take the resource id as an argument: `/pet/${id}` => `/pet`
    last_param_in_route: str | None = None
    if verb == "delete":
        match = _LAST_PARAM_RE.search(route)
        if match:
            last_param_in_route = match.group(1)
            route = route[: match.start()]

    responses = list((operation.get("responses") or {}).items())
    response_types = resolve_content_types(r for r in responses if is_ok(r[0])) or "void"
    error_types = resolve_content_types(r for r in responses if is_error(r[0])) or "unknown"
    request_body_types = resolve_content_types([("body", operation.get("requestBody"))])

    type_names = TypeNames(
        response=response_types,
        body="any" if request_body_types == "void" else request_body_types,
    )

    params_in_path = [
        p for p in get_params_in_path(route)
        if not (verb == "delete" and p == last_param_in_route)
    ]
    grouped = _group_parameters(
        [*(parameters or []), *(operation.get("parameters") or [])],
        components,
    )
    query_params = grouped.get("query", [])
    path_params = {p.name: p for p in grouped.get("path", [])}
    header_params = grouped.get("header", [])

    params_types: list[str] = []
    for name in params_in_path:
        param = path_params.get(name)
        if param is None:
            raise PathParameterNotFoundError(name, operation_id, verb, original_route)
        params_types.append(f"{param.name}{'' if param.required else '?'}: {resolve_value(param.schema)}")

    declarations: list[Declaration] = []

    if "{" in response_types:
        type_names.response = f"{component_name}Response"
        declarations.append(_named_declaration(type_names.response, response_types))

    if query_params:
        type_names.query = f"{component_name}QueryParams"
        fields = "\n".join(
            f"  {format_description(p.description, 2)}{quote_key(p.name)}"
            f"{'' if p.required else '?'}: {resolve_value(p.schema)};"
            for p in query_params
        )
        declarations.append(
            Declaration(name=type_names.query, type_expr="{\n" + fields + "\n}", kind="interface")
        )

    if "{" in request_body_types:
        type_names.body = f"{component_name}RequestBody"
        declarations.append(_named_declaration(type_names.body, request_body_types))

    output = (context or get_context()).render_declarations(declarations)

    return output, GeneratedComponent(
        component_name=component_name,
        verb=verb,
        route=route,
        description=_format_operation_description(operation),
        type_names=type_names,
        error_types=error_types,
        header_params=header_params,
        params_in_path=params_in_path,
        params_types=", ".join(params_types),
        operation=operation,
    )
