"""OpenAPI 3.0 to TypeScript type generator."""

from .assembler import (
    generate_interface,
    generate_paths_definition,
    generate_request_bodies_definition,
    generate_responses_definition,
    generate_schemas_definition,
    import_open_api,
)
from .discriminator import resolve_discriminator
from .operations import (
    GeneratedComponent,
    Parameter,
    TypeNames,
    generate_restful_component,
)
from .resolver import (
    format_description,
    get_params_in_path,
    resolve_content_types,
    resolve_ref_name,
    resolve_value,
)
from .schema import Reference, Schema, parse_schema

__all__ = [
    # Entry point
    "import_open_api",
    # Assembly
    "generate_interface",
    "generate_paths_definition",
    "generate_request_bodies_definition",
    "generate_responses_definition",
    "generate_schemas_definition",
    "resolve_discriminator",
    # Operations
    "GeneratedComponent",
    "Parameter",
    "TypeNames",
    "generate_restful_component",
    # Type resolution
    "format_description",
    "get_params_in_path",
    "resolve_content_types",
    "resolve_ref_name",
    "resolve_value",
    "Reference",
    "Schema",
    "parse_schema",
]
