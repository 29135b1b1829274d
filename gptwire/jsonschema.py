"""A small JSON Schema model for describing function parameters and structured output."""

from __future__ import annotations

import collections.abc
import dataclasses
import json
import math
import types
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

_INVALID_DATA_MESSAGE = "data validation failed against the provided schema"
_OMITEMPTY = ",omitempty"
_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_SEQUENCE_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)
_BUILTIN_NAMES: dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
}


class DataType(str, Enum):
    """JSON Schema primitive type names."""

    OBJECT = "object"
    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"
    ARRAY = "array"
    NULL = "null"
    BOOLEAN = "boolean"

    def __str__(self) -> str:
        return self.value


class SchemaValidationError(ValueError):
    """Raised when data does not match a schema."""


class UnsupportedTypeError(TypeError):
    """Raised when a Python type has no schema equivalent."""


@dataclass
class Definition:
    """A (possibly nested) JSON Schema description."""

    type: DataType | None = None
    description: str = ""
    enum: list[str] | None = None
    properties: dict[str, Definition] | None = None
    required: list[str] | None = None
    items: Definition | None = None
    additional_properties: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the schema as JSON-ready data; ``properties`` is always present."""
        out: dict[str, Any] = {}
        if self.type:
            out["type"] = DataType(self.type).value
        if self.description:
            out["description"] = self.description
        if self.enum:
            out["enum"] = list(self.enum)
        out["properties"] = {
            name: child.to_dict() for name, child in (self.properties or {}).items()
        }
        if self.required:
            out["required"] = list(self.required)
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.additional_properties is not None:
            extra = self.additional_properties
            out["additionalProperties"] = (
                extra.to_dict() if isinstance(extra, Definition) else extra
            )
        return out

    def to_json(self) -> str:
        """Serialise the schema to a JSON string."""
        return json.dumps(self.to_dict())

    def unmarshal(self, content: str | bytes) -> Any:
        """Parse ``content`` as JSON and check it against this schema."""
        return verify_schema_and_unmarshal(self, content)


def generate_schema_for_type(tp: Any) -> Definition:
    """Build a schema from a Python type (or from an instance of one).

    Dataclass fields may carry ``json``, ``description`` and ``required``
    metadata entries; a ``json`` name ending in ``,omitempty`` marks the
    field as optional.
    """
    if not (isinstance(tp, type) or get_origin(tp) is not None):
        tp = type(tp)
    return _reflect(tp)


def _reflect(tp: Any) -> Definition:
    if isinstance(tp, str):
        resolved = _BUILTIN_NAMES.get(tp.strip())
        if resolved is None:
            raise UnsupportedTypeError(f"unsupported type: {tp!r}")
        tp = resolved
    origin = get_origin(tp)
    if origin is Annotated:
        return _reflect(get_args(tp)[0])
    if origin in (Union, types.UnionType):
        args = get_args(tp)
        present = [arg for arg in args if arg is not type(None)]
        if len(present) == 1 and len(args) == 2:
            return _reflect(present[0])
        raise UnsupportedTypeError(f"unsupported type: {tp!r}")
    if origin in _SEQUENCE_ORIGINS:
        args = get_args(tp)
        if len(args) != 1:
            raise UnsupportedTypeError(f"unsupported type: {tp!r}")
        return Definition(type=DataType.ARRAY, items=_reflect(args[0]))
    if origin is tuple:
        args = get_args(tp)
        if len(args) == 2 and args[1] is Ellipsis:
            return Definition(type=DataType.ARRAY, items=_reflect(args[0]))
        raise UnsupportedTypeError(f"unsupported type: {tp!r}")
    if origin is not None or not isinstance(tp, type):
        raise UnsupportedTypeError(f"unsupported type: {tp!r}")

    if dataclasses.is_dataclass(tp):
        return _reflect_object(tp)
    if issubclass(tp, bool):
        return Definition(type=DataType.BOOLEAN)
    if issubclass(tp, int):
        return Definition(type=DataType.INTEGER)
    if issubclass(tp, float):
        return Definition(type=DataType.NUMBER)
    if issubclass(tp, str):
        return Definition(type=DataType.STRING)
    raise UnsupportedTypeError(f"unsupported type: {tp.__name__}")


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value) in _TRUE_WORDS


def _reflect_object(tp: type) -> Definition:
    properties: dict[str, Definition] = {}
    required: list[str] = []
    for fld in dataclasses.fields(tp):
        if fld.name.startswith("_"):
            continue
        tag = fld.metadata.get("json", "")
        is_required = True
        if not tag:
            name = fld.name
        elif tag.endswith(_OMITEMPTY):
            name = tag[: -len(_OMITEMPTY)]
            is_required = False
        else:
            name = tag

        item = _reflect(fld.type)
        description = fld.metadata.get("description", "")
        if description:
            item.description = description
        properties[name] = item

        flag = fld.metadata.get("required", "")
        if flag != "":
            is_required = _parse_bool(flag)
        if is_required:
            required.append(name)

    return Definition(
        type=DataType.OBJECT,
        properties=properties,
        required=required or None,
        additional_properties=False,
    )


def verify_schema_and_unmarshal(schema: Definition, content: str | bytes) -> Any:
    """Decode JSON ``content`` and return it if it satisfies ``schema``."""
    data = json.loads(content)
    if not validate(schema, data):
        raise SchemaValidationError(_INVALID_DATA_MESSAGE)
    return data


def validate(schema: Definition, data: Any) -> bool:
    """Report whether decoded JSON ``data`` satisfies ``schema``."""
    kind = schema.type
    if kind == DataType.OBJECT:
        return _validate_object(schema, data)
    if kind == DataType.ARRAY:
        return _validate_array(schema, data)
    if kind == DataType.STRING:
        return isinstance(data, str)
    if kind == DataType.NUMBER:
        return isinstance(data, (int, float)) and not isinstance(data, bool)
    if kind == DataType.BOOLEAN:
        return isinstance(data, bool)
    if kind == DataType.INTEGER:
        if isinstance(data, bool):
            return False
        if isinstance(data, int):
            return True
        return isinstance(data, float) and math.isfinite(data) and data.is_integer()
    if kind == DataType.NULL:
        return data is None
    return False


def _validate_object(schema: Definition, data: Any) -> bool:
    if not isinstance(data, dict):
        return False
    required = schema.required or []
    if any(name not in data for name in required):
        return False
    for key, value_schema in (schema.properties or {}).items():
        if key in data:
            if not validate(value_schema, data[key]):
                return False
        elif key in required:
            return False
    return True


def _validate_array(schema: Definition, data: Any) -> bool:
    if not isinstance(data, list):
        return False
    if schema.items is None:
        return not data
    return all(validate(schema.items, item) for item in data)