import copy

import pytest

from oats_generator.shared.swagger import convert_swagger2


@pytest.fixture
def swagger():
    return {
        "swagger": "2.0",
        "info": {"title": "Pets", "version": "1.0"},
        "host": "api.example.com",
        "basePath": "/v1",
        "schemes": ["https"],
        "consumes": ["application/json"],
        "produces": ["application/json"],
        "paths": {
            "/pets": {
                "get": {
                    "operationId": "listPets",
                    "parameters": [{"name": "limit", "in": "query", "type": "integer", "format": "int32"}],
                    "responses": {
                        "200": {
                            "description": "ok",
                            "schema": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
                        },
                        "default": {"$ref": "#/responses/Error"},
                    },
                },
                "post": {
                    "operationId": "createPet",
                    "parameters": [
                        {"name": "body", "in": "body", "required": True, "schema": {"$ref": "#/definitions/Pet"}},
                    ],
                    "responses": {"201": {"description": "created"}},
                },
            },
            "/pets/{petId}/photo": {
                "parameters": [{"name": "petId", "in": "path", "required": True, "type": "string"}],
                "post": {
                    "operationId": "uploadPhoto",
                    "consumes": ["multipart/form-data"],
                    "parameters": [{"name": "file", "in": "formData", "type": "file", "required": True}],
                    "responses": {"200": {"description": "ok"}},
                },
                "put": {
                    "operationId": "replacePhoto",
                    "parameters": [{"$ref": "#/parameters/PhotoBody"}],
                    "responses": {"200": {"description": "ok"}},
                },
            },
        },
        "parameters": {
            "PhotoBody": {"name": "photo", "in": "body", "schema": {"type": "string"}},
            "Limit": {"name": "limit", "in": "query", "type": "integer"},
        },
        "responses": {"Error": {"description": "error", "schema": {"$ref": "#/definitions/Error"}}},
        "definitions": {
            "Pet": {"type": "object", "properties": {"name": {"type": "string", "x-nullable": True}}},
            "Error": {"type": "object", "properties": {"message": {"type": "string"}}},
        },
        "securityDefinitions": {
            "basicAuth": {"type": "basic"},
            "oauth": {
                "type": "oauth2",
                "flow": "accessCode",
                "authorizationUrl": "https://example.com/auth",
                "tokenUrl": "https://example.com/token",
                "scopes": {"read": "Read access"},
            },
        },
        "tags": [{"name": "pets"}],
        "x-extra": True,
    }


class TestConvertSwagger2:
    def test_top_level(self, swagger):
        result = convert_swagger2(swagger)
        assert result["openapi"] == "3.0.0"
        assert result["servers"] == [{"url": "https://api.example.com/v1"}]
        assert result["tags"] == [{"name": "pets"}]
        assert result["x-extra"] is True
        assert "swagger" not in result
        assert "definitions" not in result

    def test_input_is_not_mutated(self, swagger):
        before = copy.deepcopy(swagger)
        convert_swagger2(swagger)
        assert swagger == before

    def test_definitions_become_schemas(self, swagger):
        schemas = convert_swagger2(swagger)["components"]["schemas"]
        assert schemas["Pet"]["properties"]["name"] == {"type": "string", "nullable": True}

    def test_query_parameter_gets_schema(self, swagger):
        operation = convert_swagger2(swagger)["paths"]["/pets"]["get"]
        assert operation["parameters"] == [
            {"name": "limit", "in": "query", "schema": {"type": "integer", "format": "int32"}},
        ]

    def test_response_schema_moves_to_content(self, swagger):
        responses = convert_swagger2(swagger)["paths"]["/pets"]["get"]["responses"]
        assert responses["200"]["content"]["application/json"]["schema"] == {
            "type": "array",
            "items": {"$ref": "#/components/schemas/Pet"},
        }
        assert responses["default"] == {"$ref": "#/components/responses/Error"}

    def test_body_parameter_becomes_request_body(self, swagger):
        operation = convert_swagger2(swagger)["paths"]["/pets"]["post"]
        assert "parameters" not in operation
        assert operation["requestBody"] == {
            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}},
            "required": True,
        }
        assert operation["responses"]["201"] == {"description": "created"}

    def test_form_data_becomes_request_body(self, swagger):
        item = convert_swagger2(swagger)["paths"]["/pets/{petId}/photo"]
        operation = item["post"]
        assert "parameters" not in item
        assert operation["parameters"] == [
            {"name": "petId", "in": "path", "required": True, "schema": {"type": "string"}},
        ]
        schema = operation["requestBody"]["content"]["multipart/form-data"]["schema"]
        assert schema["properties"]["file"] == {"type": "string", "format": "binary"}
        assert schema["required"] == ["file"]

    def test_global_body_parameter_becomes_request_body(self, swagger):
        result = convert_swagger2(swagger)
        assert result["components"]["requestBodies"]["PhotoBody"] == {
            "content": {"application/json": {"schema": {"type": "string"}}},
        }
        assert result["components"]["parameters"] == {
            "Limit": {"name": "limit", "in": "query", "schema": {"type": "integer"}},
        }
        operation = result["paths"]["/pets/{petId}/photo"]["put"]
        assert operation["requestBody"] == {"$ref": "#/components/requestBodies/PhotoBody"}

    def test_global_responses(self, swagger):
        responses = convert_swagger2(swagger)["components"]["responses"]
        assert responses["Error"] == {
            "description": "error",
            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Error"}}},
        }

    def test_security_schemes(self, swagger):
        schemes = convert_swagger2(swagger)["components"]["securitySchemes"]
        assert schemes["basicAuth"] == {"type": "http", "scheme": "basic"}
        assert schemes["oauth"] == {
            "type": "oauth2",
            "flows": {
                "authorizationCode": {
                    "scopes": {"read": "Read access"},
                    "authorizationUrl": "https://example.com/auth",
                    "tokenUrl": "https://example.com/token",
                }
            },
        }

    def test_servers_without_host(self):
        result = convert_swagger2({"swagger": "2.0", "info": {}, "basePath": "/api", "paths": {}})
        assert result["servers"] == [{"url": "/api"}]
        assert "components" not in result
