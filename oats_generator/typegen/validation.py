"""Advisory validation of OpenAPI documents.

Errors come from openapi-spec-validator; warnings are style checks on the
operations. Nothing here aborts a generation run.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import Any

from openapi_spec_validator import OpenAPIV30SpecValidator
from openapi_spec_validator.validation.exceptions import OpenAPIValidationError
from referencing.exceptions import Unresolvable

from .operations import OPERATION_VERBS

_CAMEL_CASE_RE = re.compile(r"^[a-z][a-zA-Z0-9]*$")


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single validation finding."""

    message: str
    path: str


@dataclass(slots=True)
class ValidationReport:
    """Errors and warnings found in a spec."""

    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _spec_errors(spec: dict[str, Any]) -> list[ValidationIssue]:
    issues = []
    try:
        for error in OpenAPIV30SpecValidator(spec).iter_errors():
            path = "/".join(str(part) for part in error.absolute_path)
            issues.append(ValidationIssue(error.message, path or "/"))
    except (OpenAPIValidationError, Unresolvable) as e:
        # Dangling $ref
        issues.append(ValidationIssue(str(e), "/"))
    return issues


def _operation_warnings(spec: dict[str, Any]) -> list[ValidationIssue]:
    issues = []
    for route, path_item in (spec.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        for verb, operation in path_item.items():
            if verb not in OPERATION_VERBS or not isinstance(operation, dict):
                continue
            path = f"paths{route}/{verb}"
            operation_id = operation.get("operationId")
            if not operation_id:
                issues.append(ValidationIssue("Operations must have a non-empty `operationId`.", path))
            elif not _CAMEL_CASE_RE.match(operation_id):
                issues.append(ValidationIssue("operationIds must follow case convention: lower_camel_case", f"{path}/operationId"))
            if not operation.get("summary") and not operation.get("description"):
                issues.append(ValidationIssue("Operations must have a non-empty `summary` or `description`.", path))
    return issues


def validate_spec(spec: dict[str, Any]) -> ValidationReport:
    """Validate a spec against the OpenAPI 3.0 schema and style checks."""
    return ValidationReport(errors=_spec_errors(spec), warnings=_operation_warnings(spec))


def print_report(report: ValidationReport) -> None:
    """Print warnings and errors of a validation report to stderr."""
    if report.warnings:
        print("(!) Warnings", file=sys.stderr)
        for issue in report.warnings:
            print(f"\nMessage : {issue.message}\nPath    : {issue.path}", file=sys.stderr)
    if report.errors:
        print("(!) Errors", file=sys.stderr)
        for issue in report.errors:
            print(f"\nMessage : {issue.message}\nPath    : {issue.path}", file=sys.stderr)
