"""Naming utilities for code generation."""

from __future__ import annotations

import re
from functools import lru_cache

# Property keys and parameter names that can stay unquoted in TypeScript
IDENTIFIER_RE = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$]*$")

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATORS = re.compile(r"[^a-zA-Z0-9]+")


def split_words(value: str) -> list[str]:
    """Split camelCase, PascalCase, snake_case, kebab-case and dotted names."""
    value = _ACRONYM_BOUNDARY.sub(r"\1_\2", value)
    value = _WORD_BOUNDARY.sub(r"\1_\2", value)
    return [part for part in _SEPARATORS.split(value) if part]


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a string to PascalCase.

    Uses caching for repeated calls with the same input.

    Examples:
        >>> to_pascal_case("list-pets")
        'ListPets'
        >>> to_pascal_case("listPets")
        'ListPets'
        >>> to_pascal_case("HTTPResponse")
        'HttpResponse'
    """
    return "".join(word[0].upper() + word[1:].lower() for word in split_words(value))


@lru_cache(maxsize=1024)
def to_camel_case(value: str) -> str:
    """Convert a string to camelCase.

    Examples:
        >>> to_camel_case("ListPets")
        'listPets'
        >>> to_camel_case("get pets by id")
        'getPetsById'
    """
    pascal = to_pascal_case(value)
    words = split_words(pascal)
    if not words:
        return ""
    return words[0].lower() + "".join(words[1:])


def is_identifier(value: str) -> bool:
    """Check whether a name is a valid bare TypeScript identifier."""
    return bool(IDENTIFIER_RE.match(value))


def quote_key(key: str) -> str:
    """Quote a property key unless it can be written as a bare identifier."""
    if is_identifier(key):
        return key
    escaped = key.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
