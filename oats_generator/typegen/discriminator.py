"""Propagate discriminator mappings to the mapped schemas."""

from __future__ import annotations

import copy
import logging
from typing import Any

from oats_generator.shared.errors import DiscriminatorError

from .schema import is_reference

logger = logging.getLogger(__name__)

SCHEMAS_PREFIX = "#/components/schemas/"


def resolve_discriminator(spec: dict[str, Any]) -> dict[str, Any]:
    """Narrow every mapped variant's discriminating property to its literal.

    For a schema with `discriminator: {propertyName: petType, mapping: {dog:
    "#/components/schemas/Dog"}}`, `Dog.properties.petType.enum` becomes
    `["dog"]`, so the generated `Dog` type carries `petType: "dog"`.

    Returns a new document; `spec` is left untouched.

    Raises:
        DiscriminatorError: If a mapping points outside `#/components/schemas/`.
    """
    result = copy.deepcopy(spec)
    schemas = (result.get("components") or {}).get("schemas") or {}

    for name, schema in ((spec.get("components") or {}).get("schemas") or {}).items():
        if not isinstance(schema, dict) or is_reference(schema):
            continue
        discriminator = schema.get("discriminator")
        if not isinstance(discriminator, dict) or not discriminator.get("mapping"):
            continue

        property_name = discriminator.get("propertyName")
        for value, ref in discriminator["mapping"].items():
            if not isinstance(ref, str) or not ref.startswith(SCHEMAS_PREFIX):
                raise DiscriminatorError(str(ref), f"#/components/schemas/{name}/discriminator")
            target = ref[len(SCHEMAS_PREFIX):]
            logger.debug("Discriminator %s.%s = %r -> %s", name, property_name, value, target)
            properties = schemas.setdefault(target, {}).setdefault("properties", {})
            properties.setdefault(property_name, {})["enum"] = [value]

    return result
