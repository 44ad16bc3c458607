"""Generate TypeScript types and API helpers from OpenAPI specifications."""

__version__ = "1.0.0"
