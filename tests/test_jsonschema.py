import json
from dataclasses import dataclass, field
from typing import Optional

import pytest

from gptwire.jsonschema import (
    DataType,
    Definition,
    SchemaValidationError,
    UnsupportedTypeError,
    generate_schema_for_type,
    validate,
    verify_schema_and_unmarshal,
)


MARSHAL_CASES = [
    (Definition(), {"properties": {}}),
    (
        Definition(
            type=DataType.STRING,
            description="A string type",
            properties={"name": Definition(type=DataType.STRING)},
        ),
        {
            "type": "string",
            "description": "A string type",
            "properties": {"name": {"type": "string", "properties": {}}},
        },
    ),
    (
        Definition(
            type=DataType.OBJECT,
            properties={
                "user": Definition(
                    type=DataType.OBJECT,
                    properties={
                        "name": Definition(type=DataType.STRING),
                        "age": Definition(type=DataType.INTEGER),
                    },
                )
            },
        ),
        {
            "type": "object",
            "properties": {
                "user": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string", "properties": {}},
                        "age": {"type": "integer", "properties": {}},
                    },
                }
            },
        },
    ),
    (
        Definition(
            type=DataType.OBJECT,
            properties={
                "user": Definition(
                    type=DataType.OBJECT,
                    properties={
                        "name": Definition(type=DataType.STRING),
                        "age": Definition(type=DataType.INTEGER),
                        "address": Definition(
                            type=DataType.OBJECT,
                            properties={
                                "city": Definition(type=DataType.STRING),
                                "country": Definition(type=DataType.STRING),
                            },
                        ),
                    },
                )
            },
        ),
        {
            "type": "object",
            "properties": {
                "user": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string", "properties": {}},
                        "age": {"type": "integer", "properties": {}},
                        "address": {
                            "type": "object",
                            "properties": {
                                "city": {"type": "string", "properties": {}},
                                "country": {"type": "string", "properties": {}},
                            },
                        },
                    },
                }
            },
        },
    ),
    (
        Definition(
            type=DataType.ARRAY,
            items=Definition(type=DataType.STRING),
            properties={"name": Definition(type=DataType.STRING)},
        ),
        {
            "type": "array",
            "items": {"type": "string", "properties": {}},
            "properties": {"name": {"type": "string", "properties": {}}},
        },
    ),
]


@pytest.mark.parametrize("definition, expected", MARSHAL_CASES)
def test_definition_marshal(definition, expected):
    assert json.loads(Definition.to_json(definition)) == expected
    assert Definition.to_dict(definition) == expected


def test_additional_properties_false_is_kept():
    definition = Definition(type=DataType.OBJECT, additional_properties=False)
    assert definition.to_dict() == {
        "type": "object",
        "properties": {},
        "additionalProperties": False,
    }


def test_additional_properties_definition_is_nested():
    definition = Definition(
        type=DataType.OBJECT,
        additional_properties=Definition(type=DataType.STRING),
    )
    assert definition.to_dict()["additionalProperties"] == {
        "type": "string",
        "properties": {},
    }


def test_enum_and_required_are_serialised():
    definition = Definition(
        type=DataType.OBJECT,
        properties={
            "unit": Definition(type=DataType.STRING, enum=["celsius", "fahrenheit"])
        },
        required=["unit"],
    )
    data = definition.to_dict()
    assert data["required"] == ["unit"]
    assert data["properties"]["unit"]["enum"] == ["celsius", "fahrenheit"]


VALIDATE_CASES = [
    ("ABC", Definition(type=DataType.STRING), True),
    (123, Definition(type=DataType.STRING), False),
    (123, Definition(type=DataType.INTEGER), True),
    (123.4, Definition(type=DataType.INTEGER), False),
    ("ABC", Definition(type=DataType.NUMBER), False),
    (123, Definition(type=DataType.NUMBER), True),
    (False, Definition(type=DataType.BOOLEAN), True),
    (123, Definition(type=DataType.BOOLEAN), False),
    (None, Definition(type=DataType.NULL), True),
    (0, Definition(type=DataType.NULL), False),
    (
        ["a", "b", "c"],
        Definition(type=DataType.ARRAY, items=Definition(type=DataType.STRING)),
        True,
    ),
    (
        [1, 2, 3],
        Definition(type=DataType.ARRAY, items=Definition(type=DataType.STRING)),
        False,
    ),
    (
        [1, 2, 3],
        Definition(type=DataType.ARRAY, items=Definition(type=DataType.INTEGER)),
        True,
    ),
    (
        [1, 2, 3.4],
        Definition(type=DataType.ARRAY, items=Definition(type=DataType.INTEGER)),
        False,
    ),
]

OBJECT_SCHEMA = Definition(
    type=DataType.OBJECT,
    properties={
        "string": Definition(type=DataType.STRING),
        "integer": Definition(type=DataType.INTEGER),
        "number": Definition(type=DataType.NUMBER),
        "boolean": Definition(type=DataType.BOOLEAN),
        "array": Definition(type=DataType.ARRAY, items=Definition(type=DataType.NUMBER)),
    },
    required=["string"],
)


@pytest.mark.parametrize("data, schema, expected", VALIDATE_CASES)
def test_validate(data, schema, expected):
    assert validate(schema, data) is expected


def test_validate_object_with_all_fields():
    data = {
        "string": "abc",
        "integer": 123,
        "number": 123.4,
        "boolean": False,
        "array": [1, 2, 3],
    }
    assert validate(OBJECT_SCHEMA, data) is True


def test_validate_object_missing_required_field():
    data = {"integer": 123, "number": 123.4, "boolean": False, "array": [1, 2, 3]}
    assert validate(OBJECT_SCHEMA, data) is False


def test_validate_bool_is_not_a_number():
    assert validate(Definition(type=DataType.NUMBER), True) is False
    assert validate(Definition(type=DataType.INTEGER), True) is False


def test_validate_untyped_schema_rejects_everything():
    assert validate(Definition(), "anything") is False


def test_unmarshal_optional_fields():
    schema = Definition(
        type=DataType.OBJECT,
        properties={
            "string": Definition(type=DataType.STRING),
            "number": Definition(type=DataType.NUMBER),
        },
    )
    result = verify_schema_and_unmarshal(schema, b'{"string":"abc","number":123.4}')
    assert result == {"string": "abc", "number": 123.4}


def test_unmarshal_missing_required_fails():
    schema = Definition(
        type=DataType.OBJECT,
        properties={
            "string": Definition(type=DataType.STRING),
            "number": Definition(type=DataType.NUMBER),
        },
        required=["string", "number"],
    )
    with pytest.raises(SchemaValidationError):
        verify_schema_and_unmarshal(schema, b'{"string":"abc"}')


INTEGER_SCHEMA = Definition(
    type=DataType.OBJECT,
    properties={
        "string": Definition(type=DataType.STRING),
        "integer": Definition(type=DataType.INTEGER),
    },
    required=["string", "integer"],
)


def test_unmarshal_validate_integer():
    result = verify_schema_and_unmarshal(INTEGER_SCHEMA, '{"string":"abc","integer":123}')
    assert result == {"string": "abc", "integer": 123}


def test_unmarshal_validate_integer_failed():
    with pytest.raises(SchemaValidationError, match="data validation failed"):
        verify_schema_and_unmarshal(INTEGER_SCHEMA, '{"string":"abc","integer":123.4}')


def test_unmarshal_invalid_json():
    with pytest.raises(json.JSONDecodeError):
        verify_schema_and_unmarshal(INTEGER_SCHEMA, "{not json")


def test_definition_unmarshal_method():
    assert INTEGER_SCHEMA.unmarshal('{"string":"x","integer":1}') == {
        "string": "x",
        "integer": 1,
    }


@dataclass
class StructuredResponse:
    pascal_case: str = field(
        metadata={"json": "pascal_case", "required": "true", "description": "PascalCase"}
    )
    camel_case: str = field(
        metadata={"json": "camel_case", "required": "true", "description": "CamelCase"}
    )
    kebab_case: str = field(
        metadata={"json": "kebab_case", "required": "true", "description": "KebabCase"}
    )
    snake_case: str = field(
        metadata={"json": "snake_case", "required": "true", "description": "SnakeCase"}
    )


@dataclass
class Address:
    city: str
    zip_code: Optional[str] = field(default=None, metadata={"json": "zip,omitempty"})


@dataclass
class Person:
    name: str
    age: int
    score: float
    active: bool
    tags: list[str]
    address: Address
    nickname: Optional[str] = field(default=None, metadata={"json": "nickname,omitempty"})
    forced: Optional[int] = field(
        default=None, metadata={"json": "forced,omitempty", "required": "true"}
    )
    skipped: int = field(default=0, metadata={"required": "false"})
    _hidden: int = 0


@dataclass
class WithMapping:
    data: dict


def test_generate_schema_for_structured_response():
    schema = generate_schema_for_type(StructuredResponse)
    assert schema.type == DataType.OBJECT
    assert schema.additional_properties is False
    assert schema.required == ["pascal_case", "camel_case", "kebab_case", "snake_case"]
    assert schema.properties["pascal_case"] == Definition(
        type=DataType.STRING, description="PascalCase"
    )


def test_generate_schema_accepts_instance():
    instance = StructuredResponse("A", "b", "c", "d")
    assert generate_schema_for_type(instance) == generate_schema_for_type(StructuredResponse)


def test_generate_schema_for_nested_dataclass():
    schema = generate_schema_for_type(Person)
    props = schema.properties
    assert set(props) == {
        "name", "age", "score", "active", "tags", "address", "nickname", "forced", "skipped"
    }
    assert props["age"].type == DataType.INTEGER
    assert props["score"].type == DataType.NUMBER
    assert props["active"].type == DataType.BOOLEAN
    assert props["tags"] == Definition(type=DataType.ARRAY, items=Definition(type=DataType.STRING))
    assert props["nickname"].type == DataType.STRING
    assert props["address"].required == ["city"]
    assert "zip" in props["address"].properties
    assert schema.required == ["name", "age", "score", "active", "tags", "address", "forced"]


def test_generated_schema_validates_matching_data():
    schema = generate_schema_for_type(Person)
    data = {
        "name": "Ann",
        "age": 30,
        "score": 1.5,
        "active": True,
        "tags": ["x"],
        "address": {"city": "Town"},
        "forced": 2,
    }
    assert validate(schema, data) is True
    del data["forced"]
    assert validate(schema, data) is False


def test_generate_schema_for_primitives():
    assert generate_schema_for_type(str) == Definition(type=DataType.STRING)
    assert generate_schema_for_type(bool) == Definition(type=DataType.BOOLEAN)
    assert generate_schema_for_type(list[int]) == Definition(
        type=DataType.ARRAY, items=Definition(type=DataType.INTEGER)
    )


def test_generate_schema_unsupported_type():
    with pytest.raises(UnsupportedTypeError, match="unsupported type"):
        generate_schema_for_type(WithMapping)
    with pytest.raises(UnsupportedTypeError):
        generate_schema_for_type(complex)