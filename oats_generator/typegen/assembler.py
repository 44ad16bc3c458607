"""Assemble the TypeScript output for a whole OpenAPI document."""

from __future__ import annotations

import logging
from typing import Any, Callable

from oats_generator.shared.naming import to_pascal_case
from oats_generator.shared.spec_loader import import_specs

from .discriminator import resolve_discriminator
from .formatter import format_typescript
from .operations import (
    OPERATION_VERBS,
    GeneratedComponent,
    OperationNameGenerator,
    generate_restful_component,
)
from .render import Declaration, GeneratorContext, get_context
from .resolver import format_description, is_record_literal, resolve_content_types, resolve_value
from .schema import Schema, is_reference, parse_schema
from .validation import print_report, validate_spec

logger = logging.getLogger(__name__)

Transformer = Callable[[dict[str, Any]], dict[str, Any]]
CustomGenerator = Callable[[GeneratedComponent], str]
CustomGeneratorWrap = Callable[[str], str]
Formatter = Callable[[str], str]


def _is_interface_schema(raw: Any) -> bool:
    if is_reference(raw):
        return False
    schema = parse_schema(raw)
    return (
        isinstance(schema, Schema)
        and schema.type in (None, "object")
        and not schema.is_composite
        and not schema.nullable
    )


def generate_interface(name: str, schema: Schema) -> Declaration:
    """Build the `interface` declaration of an object schema."""
    return Declaration(
        name=to_pascal_case(name),
        type_expr=resolve_value(schema),
        kind="interface",
        doc=format_description(schema.description),
    )


def generate_schemas_definition(
    schemas: dict[str, Any] | None,
    context: GeneratorContext | None = None,
) -> str:
    """Extract all types from `#/components/schemas`."""
    if not schemas:
        return ""

    declarations: list[Declaration] = []
    for name, raw in schemas.items():
        schema = parse_schema(raw)
        if _is_interface_schema(raw):
            declarations.append(generate_interface(name, schema))
        else:
            declarations.append(Declaration(
                name=to_pascal_case(name),
                type_expr=resolve_value(schema),
                doc=format_description(schema.description if isinstance(schema, Schema) else None),
            ))
    return (context or get_context()).render_declarations(declarations)


def _generate_content_definitions(
    entries: dict[str, Any] | None,
    suffix: str,
    context: GeneratorContext | None,
) -> str:
    if not entries:
        return ""

    declarations: list[Declaration] = []
    for name, entry in entries.items():
        doc = "" if is_reference(entry) else format_description((entry or {}).get("description"))
        type_expr = resolve_content_types([("", entry)])
        type_name = to_pascal_case(name) + suffix
        if type_expr == "{}":
            declarations.append(Declaration(type_name, type_expr, "interface", lint_disable=True))
        elif is_record_literal(type_expr):
            declarations.append(Declaration(type_name, type_expr, "interface", doc))
        else:
            declarations.append(Declaration(type_name, type_expr, "alias", doc))
    return (context or get_context()).render_declarations(declarations)


def generate_request_bodies_definition(
    request_bodies: dict[str, Any] | None,
    context: GeneratorContext | None = None,
) -> str:
    """Extract all types from `#/components/requestBodies`."""
    return _generate_content_definitions(request_bodies, "RequestBody", context)


def generate_responses_definition(
    responses: dict[str, Any] | None,
    context: GeneratorContext | None = None,
) -> str:
    """Extract all types from `#/components/responses`."""
    return _generate_content_definitions(responses, "Response", context)


def generate_paths_definition(
    spec: dict[str, Any],
    operation_name_generator: OperationNameGenerator | None = None,
    context: GeneratorContext | None = None,
) -> tuple[str, list[GeneratedComponent]]:
    """Generate the types of every operation and collect their descriptors."""
    operation_ids: list[str] = []
    components = spec.get("components") or {}
    output = ""
    generated: list[GeneratedComponent] = []

    for route, path_item in (spec.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        for verb, operation in path_item.items():
            if verb not in OPERATION_VERBS or not isinstance(operation, dict):
                continue
            component_output, component = generate_restful_component(
                operation,
                verb,
                route,
                operation_ids,
                path_item.get("parameters"),
                components,
                operation_name_generator,
                context,
            )
            generated.append(component)
            output += component_output

    return output, generated


def import_open_api(
    data: str,
    fmt: str,
    *,
    transformer: Transformer | None = None,
    validation: bool = False,
    custom_import: str | None = None,
    custom_generator: CustomGenerator | None = None,
    custom_generator_wrap: CustomGeneratorWrap | None = None,
    custom_operation_name_generator: OperationNameGenerator | None = None,
    formatter: Formatter | None = format_typescript,
) -> str:
    """Generate TypeScript types from an OpenAPI document.

    Args:
        data: Raw spec text.
        fmt: `yaml` or `json`.
        transformer: Applied to the parsed spec before generation.
        validation: Print a validation report before generating.
        custom_import: Raw import statements placed after the banner.
        custom_generator: Called with every operation descriptor; the
            results are concatenated.
        custom_generator_wrap: Wraps the concatenated hook output.
        custom_operation_name_generator: Called with `verb=` and `route=`
            for operations without an operationId.
        formatter: Applied to the final text; None returns it unformatted.

    Returns:
        The generated TypeScript source.

    Raises:
        OpenApiError: On any fatal generation problem.
    """
    context = get_context()
    spec = import_specs(data, fmt)
    if transformer is not None:
        spec = transformer(spec)

    if validation:
        print_report(validate_spec(spec))

    spec = resolve_discriminator(spec)
    components = spec.get("components") or {}

    output = ""
    output += generate_schemas_definition(components.get("schemas"), context)
    output += generate_request_bodies_definition(components.get("requestBodies"), context)
    output += generate_responses_definition(components.get("responses"), context)

    paths_output, generated = generate_paths_definition(
        spec, custom_operation_name_generator, context,
    )
    output += paths_output
    logger.debug("Generated %d operations", len(generated))

    generator_output = ""
    if custom_generator is not None:
        for component in generated:
            generator_output += custom_generator(component)

    output += custom_generator_wrap(generator_output) if custom_generator_wrap else generator_output

    document = context.render_document(output, custom_import)
    return formatter(document) if formatter else document
