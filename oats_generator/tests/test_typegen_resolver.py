import pytest

from oats_generator.shared.errors import InvalidSchemaError, UnsupportedReferenceError
from oats_generator.typegen.resolver import (
    FREE_FORM_OBJECT,
    format_description,
    get_params_in_path,
    is_record_literal,
    resolve_content_types,
    resolve_ref_name,
    resolve_value,
)
from oats_generator.typegen.schema import parse_schema


def resolve(raw):
    return resolve_value(parse_schema(raw))


class TestResolveRefName:
    @pytest.mark.parametrize(
        "ref,expected",
        [
            ("#/components/schemas/Pet", "Pet"),
            ("#/components/schemas/pet_store", "PetStore"),
            ("#/components/responses/not-found", "NotFoundResponse"),
            ("#/components/parameters/limit", "LimitParameter"),
            ("#/components/requestBodies/new_pet", "NewPetRequestBody"),
        ],
    )
    def test_suffix_depends_on_root(self, ref, expected):
        assert resolve_ref_name(ref) == expected

    @pytest.mark.parametrize(
        "ref",
        [
            "#/definitions/Pet",
            "models.yaml#/components/schemas/Pet",
            "#/components/examples/Pet",
            "#/paths/~1pets",
        ],
    )
    def test_unsupported_roots_fail(self, ref):
        with pytest.raises(UnsupportedReferenceError) as exc_info:
            resolve_ref_name(ref)
        assert exc_info.value.ref == ref

    def test_resolving_generated_name_is_idempotent(self):
        """A name produced by the resolver resolves to itself."""
        name = resolve_ref_name("#/components/schemas/pet-store_item")
        assert resolve_ref_name(f"#/components/schemas/{name}") == name


class TestScalars:
    @pytest.mark.parametrize("type_", ["int32", "int64", "number", "integer", "long", "float", "double"])
    def test_numbers(self, type_):
        assert resolve({"type": type_}) == "number"

    def test_nullable_number(self):
        assert resolve({"type": "integer", "nullable": True}) == "number | null"

    def test_boolean(self):
        assert resolve({"type": "boolean"}) == "boolean"
        assert resolve({"type": "boolean", "nullable": True}) == "boolean | null"

    @pytest.mark.parametrize("type_", ["string", "byte", "binary", "date", "dateTime", "date-time", "password"])
    def test_string_family(self, type_):
        assert resolve({"type": type_}) == "string"

    def test_string_enum(self):
        assert resolve({"type": "string", "enum": ["available", "sold"]}) == '"available" | "sold"'

    def test_nullable_string_enum(self):
        assert resolve({"type": "string", "enum": ["a"], "nullable": True}) == '"a" | null'

    def test_empty_string_enum(self):
        assert resolve({"type": "string", "enum": []}) == '""'

    def test_integer_enum_stays_number(self):
        assert resolve({"type": "integer", "enum": [1, 2]}) == "number"

    def test_missing_schema_is_any(self):
        assert resolve_value(None) == "any"


class TestArrays:
    def test_array_of_reference(self):
        assert resolve({"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}) == "Pet[]"

    def test_array_of_scalars(self):
        assert resolve({"type": "array", "items": {"type": "string"}}) == "string[]"

    def test_array_of_arrays(self):
        schema = {"type": "array", "items": {"type": "array", "items": {"type": "integer"}}}
        assert resolve(schema) == "number[][]"

    def test_one_of_items_are_wrapped(self):
        schema = {
            "type": "array",
            "items": {"oneOf": [{"$ref": "#/components/schemas/A"}, {"$ref": "#/components/schemas/B"}]},
        }
        assert resolve(schema) == "(A | B)[]"

    def test_all_of_items_are_wrapped(self):
        schema = {
            "type": "array",
            "items": {"allOf": [{"$ref": "#/components/schemas/A"}, {"$ref": "#/components/schemas/B"}]},
        }
        assert resolve(schema) == "(A & B)[]"

    def test_enum_items_are_wrapped(self):
        schema = {"type": "array", "items": {"type": "string", "enum": ["a", "b"]}}
        assert resolve(schema) == '("a" | "b")[]'

    def test_nullable_array(self):
        assert resolve({"type": "array", "items": {"type": "string"}, "nullable": True}) == "string[] | null"

    def test_array_without_items_fails(self):
        with pytest.raises(InvalidSchemaError, match="items"):
            resolve({"type": "array"})


class TestObjects:
    def test_empty_schema(self):
        assert resolve({}) == "{}"

    @pytest.mark.parametrize(
        "schema",
        [
            {"type": "object"},
            {"type": "object", "additionalProperties": True},
            {"type": "object", "additionalProperties": {}},
            {"type": "object", "additionalProperties": False},
        ],
    )
    def test_free_form_objects(self, schema):
        assert resolve(schema) == FREE_FORM_OBJECT

    def test_nullable_free_form_object(self):
        result = resolve({"type": "object", "nullable": True})
        assert result.endswith("| null")
        assert result == "{[key: string]: any} | null"

    def test_properties(self):
        schema = {
            "type": "object",
            "required": ["id"],
            "properties": {
                "id": {"type": "integer"},
                "name": {"type": "string", "description": "The name"},
            },
        }
        assert resolve(schema) == (
            "{\n"
            "  id: number;\n"
            "  /**\n"
            "   * The name\n"
            "   */\n"
            "  name?: string;\n"
            "}"
        )

    def test_untyped_schema_with_properties(self):
        schema = {"properties": {"tag": {"$ref": "#/components/schemas/Tag"}}}
        assert resolve(schema) == "{\n  tag?: Tag;\n}"

    def test_non_identifier_keys_are_quoted(self):
        schema = {
            "type": "object",
            "required": ["content-type"],
            "properties": {"content-type": {"type": "string"}, "$meta": {"type": "string"}},
        }
        assert resolve(schema) == '{\n  "content-type": string;\n  $meta?: string;\n}'

    def test_properties_and_additional_properties(self):
        schema = {
            "type": "object",
            "properties": {"a": {"type": "string"}},
            "additionalProperties": {"type": "integer"},
        }
        assert resolve(schema) == "{\n  a?: string;\n  [key: string]: number;\n}"

    def test_properties_and_additional_properties_true(self):
        schema = {
            "type": "object",
            "properties": {"a": {"type": "string"}},
            "additionalProperties": True,
        }
        assert resolve(schema) == "{\n  a?: string;\n  [key: string]: any;\n}"

    def test_additional_properties_with_unmodelled_keywords(self):
        """Only a literal `{}` counts as free-form."""
        schema = {"type": "object", "additionalProperties": {"example": 1}}
        assert resolve(schema) == "{\n  [key: string]: {};\n}"

    def test_typed_additional_properties(self):
        schema = {"type": "object", "additionalProperties": {"$ref": "#/components/schemas/Pet"}}
        assert resolve(schema) == "{\n  [key: string]: Pet;\n}"

    def test_empty_properties(self):
        assert resolve({"type": "object", "properties": {}}) == "{}"

    def test_all_of_is_intersection(self):
        schema = {
            "allOf": [
                {"$ref": "#/components/schemas/Base"},
                {"type": "object", "properties": {"x": {"type": "string"}}},
            ]
        }
        assert resolve(schema) == "Base & {\n  x?: string;\n}"

    def test_one_of_is_union(self):
        schema = {"oneOf": [{"$ref": "#/components/schemas/Cat"}, {"type": "string"}]}
        assert resolve(schema) == "Cat | string"

    def test_any_of_is_union(self):
        schema = {"anyOf": [{"type": "integer"}, {"type": "boolean"}]}
        assert resolve(schema) == "number | boolean"

    def test_unknown_type_is_any(self):
        assert resolve({"type": "file"}) == "any"

    def test_reference(self):
        assert resolve({"$ref": "#/components/schemas/Pet"}) == "Pet"


class TestFormatDescription:
    def test_empty(self):
        assert format_description(None) == ""
        assert format_description("") == ""

    def test_single_line(self):
        assert format_description("Hello") == "/**\n * Hello\n */\n"

    def test_multi_line_with_indentation(self):
        assert format_description("a\nb", 2) == "/**\n   * a\n   * b\n   */\n  "


class TestResolveContentTypes:
    def test_json_reference(self):
        entries = [("200", {"content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}}})]
        assert resolve_content_types(entries) == "Pet"

    def test_octet_stream(self):
        entries = [("200", {"content": {"application/octet-stream": {"schema": {"type": "string", "format": "binary"}}}})]
        assert resolve_content_types(entries) == "string"

    def test_json_with_charset(self):
        entries = [("200", {"content": {"application/json; charset=utf-8": {"schema": {"type": "boolean"}}}})]
        assert resolve_content_types(entries) == "boolean"

    def test_unsupported_content_is_void(self):
        entries = [("200", {"content": {"text/html": {"schema": {"type": "string"}}}})]
        assert resolve_content_types(entries) == "void"

    def test_no_content_is_void(self):
        assert resolve_content_types([("204", {"description": "No content"})]) == "void"

    def test_missing_entry_is_void(self):
        assert resolve_content_types([("body", None)]) == "void"

    def test_reference_entry(self):
        assert resolve_content_types([("default", {"$ref": "#/components/responses/Error"})]) == "ErrorResponse"

    def test_deduplicates_in_order(self):
        pet = {"content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}}}
        entries = [("200", pet), ("204", {}), ("201", pet)]
        assert resolve_content_types(entries) == "Pet | void"

    def test_no_entries(self):
        assert resolve_content_types([]) == ""


class TestHelpers:
    def test_get_params_in_path(self):
        assert get_params_in_path("/pet/{category}/{name}/") == ["category", "name"]
        assert get_params_in_path("/pets") == []

    @pytest.mark.parametrize(
        "type_expr,expected",
        [
            ("{\n  a: string;\n}", True),
            ("{}", True),
            ("{\n  a: string;\n}[]", False),
            ("Pet & {\n  a: string;\n}", False),
            ("Pet", False),
        ],
    )
    def test_is_record_literal(self, type_expr, expected):
        assert is_record_literal(type_expr) is expected
