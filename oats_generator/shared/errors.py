"""Custom exceptions for the generator."""

from __future__ import annotations


class OpenApiError(Exception):
    """Base exception for everything that aborts a generation run."""

    def __init__(self, message: str, pointer: str | None = None) -> None:
        self.pointer = pointer
        full_message = f"{message}" if not pointer else f"[{pointer}] {message}"
        super().__init__(full_message)


class UnsupportedReferenceError(OpenApiError):
    """Raised for a `$ref` that is not rooted at a supported component kind."""

    def __init__(self, ref: str, pointer: str | None = None) -> None:
        self.ref = ref
        super().__init__(
            "This library only resolve $ref that are include into "
            f"`#/components/*` for now (got '{ref}')",
            pointer,
        )


class InvalidSchemaError(OpenApiError):
    """Raised when a schema cannot be turned into a type."""

    def __init__(
        self,
        message: str,
        pointer: str | None = None,
        field: str | None = None,
    ) -> None:
        self.field = field
        if field:
            message = f"Field '{field}': {message}"
        super().__init__(message, pointer)


class DiscriminatorError(OpenApiError):
    """Raised when a discriminator mapping points outside the schemas."""

    def __init__(self, ref: str, pointer: str | None = None) -> None:
        self.ref = ref
        super().__init__(
            "Discriminator mapping outside of `#/components/schemas` is not "
            f"supported (got '{ref}')",
            pointer,
        )


class OperationError(OpenApiError):
    """Base exception for failures while synthesizing an operation."""

    def __init__(self, message: str, verb: str, route: str) -> None:
        self.verb = verb
        self.route = route
        super().__init__(message, f"{verb.upper()} {route}")


class MissingOperationIdError(OperationError):
    """Raised when an operation has no operationId and no generator is set."""

    def __init__(self, verb: str, route: str) -> None:
        super().__init__(
            f"Every path must have a operationId - No operationId set for {verb} {route}",
            verb,
            route,
        )


class DuplicateOperationIdError(OperationError):
    """Raised when two operations share an operationId."""

    def __init__(self, operation_id: str, verb: str, route: str) -> None:
        self.operation_id = operation_id
        super().__init__(
            f'"{operation_id}" is duplicated in your schema definition!',
            verb,
            route,
        )


class PathParameterNotFoundError(OperationError):
    """Raised when a route placeholder has no matching path parameter."""

    def __init__(self, parameter: str, operation_id: str, verb: str, route: str) -> None:
        self.parameter = parameter
        self.operation_id = operation_id
        super().__init__(
            f"The path params {parameter} can't be found in parameters ({operation_id})",
            verb,
            route,
        )


class SpecImportError(OpenApiError):
    """Raised when a spec cannot be read, fetched or parsed."""


class ConfigError(OpenApiError):
    """Raised for invalid config files, targets or transformer modules."""


class FormatterError(OpenApiError):
    """Raised when the code formatter rejects the generated output."""
