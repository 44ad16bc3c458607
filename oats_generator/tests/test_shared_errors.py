import pytest

from oats_generator.shared.errors import (
    ConfigError,
    DiscriminatorError,
    DuplicateOperationIdError,
    FormatterError,
    InvalidSchemaError,
    MissingOperationIdError,
    OpenApiError,
    OperationError,
    PathParameterNotFoundError,
    SpecImportError,
    UnsupportedReferenceError,
)


class TestOpenApiError:
    def test_message_only(self):
        error = OpenApiError("boom")
        assert str(error) == "boom"
        assert error.pointer is None

    def test_message_with_pointer(self):
        error = OpenApiError("boom", "#/components/schemas/Pet")
        assert str(error) == "[#/components/schemas/Pet] boom"

    @pytest.mark.parametrize(
        "error",
        [
            UnsupportedReferenceError("#/definitions/Pet"),
            InvalidSchemaError("bad"),
            DiscriminatorError("#/x"),
            MissingOperationIdError("get", "/pets"),
            DuplicateOperationIdError("listPets", "get", "/pets"),
            PathParameterNotFoundError("id", "getPet", "get", "/pets/{id}"),
            SpecImportError("bad"),
            ConfigError("bad"),
            FormatterError("bad"),
        ],
    )
    def test_hierarchy(self, error):
        assert isinstance(error, OpenApiError)


class TestSchemaErrors:
    def test_unsupported_reference(self):
        error = UnsupportedReferenceError("#/definitions/Pet")
        assert error.ref == "#/definitions/Pet"
        assert "`#/components/*`" in str(error)
        assert "'#/definitions/Pet'" in str(error)

    def test_invalid_schema_with_field(self):
        error = InvalidSchemaError("must be an array", "#/components/schemas/Pets", "items")
        assert error.field == "items"
        assert str(error) == "[#/components/schemas/Pets] Field 'items': must be an array"

    def test_discriminator(self):
        error = DiscriminatorError("#/components/responses/Dog")
        assert "#/components/schemas" in str(error)
        assert error.ref == "#/components/responses/Dog"


class TestOperationErrors:
    def test_pointer_is_verb_and_route(self):
        error = OperationError("failed", "post", "/pets")
        assert error.pointer == "POST /pets"
        assert str(error) == "[POST /pets] failed"

    def test_missing_operation_id(self):
        error = MissingOperationIdError("get", "/pets")
        assert "Every path must have a operationId" in str(error)
        assert isinstance(error, OperationError)

    def test_duplicate_operation_id(self):
        error = DuplicateOperationIdError("listPets", "get", "/pets")
        assert error.operation_id == "listPets"
        assert str(error) == '[GET /pets] "listPets" is duplicated in your schema definition!'

    def test_path_parameter_not_found(self):
        error = PathParameterNotFoundError("id", "getPet", "get", "/pets/{id}")
        assert error.parameter == "id"
        assert str(error) == "[GET /pets/{id}] The path params id can't be found in parameters (getPet)"
