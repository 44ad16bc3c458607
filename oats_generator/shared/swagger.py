"""Upgrade a Swagger 2.0 document to OpenAPI 3.0.

Handles:
- definitions / parameters / responses / securityDefinitions -> components
- host + basePath + schemes -> servers
- body and formData parameters -> requestBody (using consumes)
- response schemas -> content (using produces)
- non-body parameter type fields -> parameter schema
- type: file -> type: string, format: binary
- x-nullable -> nullable
- $ref rewriting to the 3.0 component locations
"""

from __future__ import annotations

import copy
from typing import Any, Final

OPENAPI_VERSION: Final[str] = "3.0.0"
DEFAULT_MEDIA_TYPE: Final[str] = "application/json"
HTTP_METHODS: Final[tuple[str, ...]] = (
    "get", "put", "post", "delete", "options", "head", "patch",
)

# Parameter fields that describe the value and move under `schema` in 3.0
_SCHEMA_FIELDS: Final[tuple[str, ...]] = (
    "type", "format", "items", "enum", "default", "minimum", "maximum",
    "exclusiveMinimum", "exclusiveMaximum", "minLength", "maxLength",
    "pattern", "minItems", "maxItems", "uniqueItems", "multipleOf",
)

_FORM_MEDIA_TYPES: Final[tuple[str, ...]] = (
    "multipart/form-data", "application/x-www-form-urlencoded",
)


def _rewrite_ref(ref: str, body_parameters: set[str]) -> str:
    if ref.startswith("#/definitions/"):
        return "#/components/schemas/" + ref[len("#/definitions/"):]
    if ref.startswith("#/parameters/"):
        name = ref[len("#/parameters/"):]
        kind = "requestBodies" if name in body_parameters else "parameters"
        return f"#/components/{kind}/{name}"
    if ref.startswith("#/responses/"):
        return "#/components/responses/" + ref[len("#/responses/"):]
    return ref


def _fix_schema(obj: Any, body_parameters: set[str]) -> None:
    """Recursively rewrite refs and 2.0-only schema keywords in place."""
    if isinstance(obj, dict):
        ref = obj.get("$ref")
        if isinstance(ref, str):
            obj["$ref"] = _rewrite_ref(ref, body_parameters)
        if "x-nullable" in obj:
            obj["nullable"] = bool(obj.pop("x-nullable"))
        if obj.get("type") == "file":
            obj["type"] = "string"
            obj["format"] = "binary"
        for value in obj.values():
            _fix_schema(value, body_parameters)
    elif isinstance(obj, list):
        for item in obj:
            _fix_schema(item, body_parameters)


def _servers(spec: dict[str, Any]) -> list[dict[str, str]]:
    host = spec.get("host")
    base_path = spec.get("basePath", "")
    if not host:
        return [{"url": base_path}] if base_path else []
    schemes = spec.get("schemes") or ["https"]
    return [{"url": f"{scheme}://{host}{base_path}"} for scheme in schemes]


def _convert_parameter(param: dict[str, Any]) -> dict[str, Any]:
    """Convert a non-body 2.0 parameter."""
    if "$ref" in param:
        return param
    converted = {k: v for k, v in param.items() if k not in _SCHEMA_FIELDS and k != "collectionFormat"}
    schema = {k: param[k] for k in _SCHEMA_FIELDS if k in param}
    if schema:
        converted["schema"] = schema
    return converted


def _body_to_request_body(param: dict[str, Any], consumes: list[str]) -> dict[str, Any]:
    request_body: dict[str, Any] = {
        "content": {
            media_type: {"schema": param.get("schema", {})}
            for media_type in consumes
        },
    }
    if param.get("description"):
        request_body["description"] = param["description"]
    if param.get("required"):
        request_body["required"] = True
    return request_body


def _form_to_request_body(params: list[dict[str, Any]], consumes: list[str]) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    required: list[str] = []
    for param in params:
        prop = {k: param[k] for k in _SCHEMA_FIELDS if k in param}
        if param.get("description"):
            prop["description"] = param["description"]
        properties[param["name"]] = prop
        if param.get("required"):
            required.append(param["name"])

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required

    media_types = [m for m in consumes if m in _FORM_MEDIA_TYPES]
    if not media_types:
        media_types = ["application/x-www-form-urlencoded"]
    return {"content": {media_type: {"schema": schema} for media_type in media_types}}


def _convert_response(response: dict[str, Any], produces: list[str]) -> dict[str, Any]:
    if "$ref" in response:
        return response
    converted: dict[str, Any] = {"description": response.get("description", "")}
    if "schema" in response:
        converted["content"] = {
            media_type: {"schema": response["schema"]} for media_type in produces
        }
    if "headers" in response:
        converted["headers"] = {
            name: {
                "description": header.get("description", ""),
                "schema": {k: v for k, v in header.items() if k != "description"},
            }
            for name, header in response["headers"].items()
        }
    return converted


def _convert_security_scheme(scheme: dict[str, Any]) -> dict[str, Any]:
    kind = scheme.get("type")
    if kind == "basic":
        return {"type": "http", "scheme": "basic", **_description(scheme)}
    if kind == "oauth2":
        flow_names = {
            "implicit": "implicit",
            "password": "password",
            "application": "clientCredentials",
            "accessCode": "authorizationCode",
        }
        flow: dict[str, Any] = {"scopes": scheme.get("scopes", {})}
        if "authorizationUrl" in scheme:
            flow["authorizationUrl"] = scheme["authorizationUrl"]
        if "tokenUrl" in scheme:
            flow["tokenUrl"] = scheme["tokenUrl"]
        return {
            "type": "oauth2",
            "flows": {flow_names.get(scheme.get("flow", ""), "implicit"): flow},
            **_description(scheme),
        }
    return dict(scheme)


def _description(obj: dict[str, Any]) -> dict[str, str]:
    return {"description": obj["description"]} if obj.get("description") else {}


def _convert_operation(
    operation: dict[str, Any],
    path_parameters: list[dict[str, Any]],
    consumes: list[str],
    produces: list[str],
    body_parameters: set[str],
) -> dict[str, Any]:
    converted = {
        k: v for k, v in operation.items()
        if k not in ("parameters", "responses", "consumes", "produces", "schemes")
    }
    consumes = operation.get("consumes") or consumes
    produces = operation.get("produces") or produces

    parameters: list[dict[str, Any]] = []
    form_parameters: list[dict[str, Any]] = []
    body: dict[str, Any] | None = None

    own = operation.get("parameters", [])
    own_keys = {(p.get("name"), p.get("in")) for p in own if "$ref" not in p}
    inherited = [p for p in path_parameters if (p.get("name"), p.get("in")) not in own_keys]

    for param in [*inherited, *own]:
        ref = param.get("$ref", "")
        if ref.startswith("#/parameters/") and ref[len("#/parameters/"):] in body_parameters:
            body = {"$ref": ref}
        elif param.get("in") == "body":
            body = _body_to_request_body(param, consumes)
        elif param.get("in") == "formData":
            form_parameters.append(param)
        else:
            parameters.append(_convert_parameter(param))

    if parameters:
        converted["parameters"] = parameters
    if body is not None:
        converted["requestBody"] = body
    elif form_parameters:
        converted["requestBody"] = _form_to_request_body(form_parameters, consumes)

    converted["responses"] = {
        str(status): _convert_response(response, produces)
        for status, response in operation.get("responses", {}).items()
    }
    return converted


def convert_swagger2(spec: dict[str, Any]) -> dict[str, Any]:
    """Return an OpenAPI 3.0 document equivalent to a Swagger 2.0 `spec`.

    The input is not modified.
    """
    spec = copy.deepcopy(spec)
    consumes = spec.get("consumes") or [DEFAULT_MEDIA_TYPE]
    produces = spec.get("produces") or [DEFAULT_MEDIA_TYPE]

    global_parameters: dict[str, Any] = spec.get("parameters", {})
    body_parameters = {
        name for name, param in global_parameters.items() if param.get("in") == "body"
    }

    components: dict[str, Any] = {}
    if spec.get("definitions"):
        components["schemas"] = spec["definitions"]
    if global_parameters:
        non_body = {
            name: _convert_parameter(param)
            for name, param in global_parameters.items()
            if name not in body_parameters
        }
        if non_body:
            components["parameters"] = non_body
        if body_parameters:
            components["requestBodies"] = {
                name: _body_to_request_body(global_parameters[name], consumes)
                for name in sorted(body_parameters)
            }
    if spec.get("responses"):
        components["responses"] = {
            name: _convert_response(response, produces)
            for name, response in spec["responses"].items()
        }
    if spec.get("securityDefinitions"):
        components["securitySchemes"] = {
            name: _convert_security_scheme(scheme)
            for name, scheme in spec["securityDefinitions"].items()
        }

    paths: dict[str, Any] = {}
    for route, path_item in spec.get("paths", {}).items():
        path_parameters = path_item.get("parameters", [])
        converted_item: dict[str, Any] = {
            k: v for k, v in path_item.items()
            if k not in HTTP_METHODS and k != "parameters"
        }
        for method in HTTP_METHODS:
            if method in path_item:
                converted_item[method] = _convert_operation(
                    path_item[method], path_parameters, consumes, produces, body_parameters,
                )
        paths[route] = converted_item

    result: dict[str, Any] = {"openapi": OPENAPI_VERSION, "info": spec.get("info", {})}
    servers = _servers(spec)
    if servers:
        result["servers"] = servers
    result["paths"] = paths
    if components:
        result["components"] = components
    for key in ("security", "tags", "externalDocs"):
        if key in spec:
            result[key] = spec[key]
    for key, value in spec.items():
        if key.startswith("x-"):
            result[key] = value

    _fix_schema(result, body_parameters)
    return result
