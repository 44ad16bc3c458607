"""Shared utilities for the generator."""

from .spec_loader import (
    SourceCache,
    detect_format,
    import_specs,
    parse_spec,
)
from .naming import (
    to_pascal_case,
    to_camel_case,
    is_identifier,
    quote_key,
)
from .errors import (
    OpenApiError,
    UnsupportedReferenceError,
    InvalidSchemaError,
    DiscriminatorError,
    OperationError,
    MissingOperationIdError,
    DuplicateOperationIdError,
    PathParameterNotFoundError,
    SpecImportError,
    ConfigError,
    FormatterError,
)
from .swagger import convert_swagger2

__all__ = [
    # Spec loading
    "SourceCache",
    "detect_format",
    "import_specs",
    "parse_spec",
    "convert_swagger2",
    # Naming utilities
    "to_pascal_case",
    "to_camel_case",
    "is_identifier",
    "quote_key",
    # Errors
    "OpenApiError",
    "UnsupportedReferenceError",
    "InvalidSchemaError",
    "DiscriminatorError",
    "OperationError",
    "MissingOperationIdError",
    "DuplicateOperationIdError",
    "PathParameterNotFoundError",
    "SpecImportError",
    "ConfigError",
    "FormatterError",
]
