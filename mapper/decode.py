from __future__ import annotations

import logging
import types
from typing import Any, Dict, List, Optional, Type, TypeVar, Union, get_args, get_origin

from pydantic import ValidationError

from mapper.errors import JsonParseError, MissingField, SchemaMismatch, TypeMismatch, UnexpectedVariant
from mapper.results import Json, Object, Scalar, variant_name
from mapper.types import Record

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)

_TYPE_LABELS = {
    "string_type": "str",
    "int_type": "int",
    "int_from_float": "int",
    "float_type": "float",
    "bool_type": "bool",
    "uuid_type": "UUID",
    "uuid_parsing": "UUID",
    "model_type": "object",
}


def _error_path(error: Dict[str, Any]) -> str:
    return ".".join(str(part) for part in error.get("loc", ()))


def _expected_label(error: Dict[str, Any]) -> str:
    kind = str(error.get("type", ""))
    if kind in _TYPE_LABELS:
        return _TYPE_LABELS[kind]
    ctx = {key: value for key, value in (error.get("ctx") or {}).items() if key != "error"}
    if ctx:
        return f"{kind} ({', '.join(f'{key}={value}' for key, value in ctx.items())})"
    return kind


def _link_schema(annotation: Any) -> Optional[Type[Record]]:
    # Record or Optional[Record]; anything else is not a link.
    if isinstance(annotation, type) and issubclass(annotation, Record):
        return annotation
    if get_origin(annotation) in (Union, getattr(types, "UnionType", Union)):
        for arg in get_args(annotation):
            if isinstance(arg, type) and issubclass(arg, Record):
                return arg
    return None


def _object_data(obj: Object) -> Dict[str, Any]:
    # None is an empty set: the field counts as absent.
    data: Dict[str, Any] = {}
    for field in obj.fields:
        if field.value is None:
            continue
        data[field.name] = _object_data(field.value) if isinstance(field.value, Object) else field.value
    return data


def _require_object(result: Any) -> Object:
    if not isinstance(result, Object):
        raise UnexpectedVariant("Object", variant_name(result))
    return result


def decode_scalar(result: Any, expected_type: type) -> Any:
    if not isinstance(result, Scalar):
        raise TypeMismatch(None, expected_type.__name__, variant_name(result))
    # Exact match: bool is not accepted as int, int is not accepted as float.
    if type(result.value) is not expected_type:
        raise TypeMismatch(None, expected_type.__name__, type(result.value).__name__)
    return result.value


def decode_object(result: Any, schema: Type[R]) -> R:
    obj = _require_object(result)
    try:
        return schema.model_validate(_object_data(obj))
    except ValidationError as exc:
        error = exc.errors()[0]
        path = _error_path(error)
        logger.debug(f"decode_object into {schema.__name__} failed at '{path}': {error.get('msg')}")
        if error["type"] == "missing":
            raise MissingField(path) from exc
        raise TypeMismatch(path or None, _expected_label(error), type(error.get("input")).__name__) from exc


def _check_shape(obj: Object, schema: Type[Record], prefix: str = "") -> None:
    declared: List[str] = list(schema.model_fields)
    elements = list(obj.explicit())
    for idx, expected in enumerate(declared):
        if idx >= len(elements):
            break
        element = elements[idx]
        if element.name != expected:
            path = f"{prefix}{expected}"
            logger.debug(f"{schema.__name__}: unexpected field '{element.name}' at position {idx} of '{prefix or '.'}'")
            raise SchemaMismatch(
                "wrong_field",
                f"Wrong field: unexpected '{element.name}', expected '{path}'",
                name=path,
                unexpected=element.name,
                expected=expected,
            )
    if len(elements) != len(declared):
        where = f" at '{prefix[:-1]}'" if prefix else ""
        raise SchemaMismatch(
            "field_number",
            f"Field number mismatch for {schema.__name__}{where}: expected {len(declared)}, got {len(elements)}",
            name=prefix[:-1] or None,
            unexpected=str(len(elements)),
            expected=str(len(declared)),
        )
    for element in elements:
        if not isinstance(element.value, Object):
            continue
        nested = _link_schema(schema.model_fields[element.name].annotation)
        if nested is not None:
            _check_shape(element.value, nested, f"{prefix}{element.name}.")


def decode_queryable(result: Any, schema: Type[R]) -> R:
    """Decode an object whose fields must line up with the schema exactly.

    The explicit fields of the object have to appear in the order the schema
    declares them and there must be no extra ones, so ``{id, username}`` does
    not decode into a schema declared as ``username, id``. Links to other
    records are checked the same way.
    """
    obj = _require_object(result)
    _check_shape(obj, schema)
    return decode_object(obj, schema)


def decode_json(result: Any) -> str:
    if not isinstance(result, Json):
        raise UnexpectedVariant("Json", variant_name(result))
    return result.text


def decode_typed(json_text: Any, schema: Type[R]) -> R:
    if not isinstance(json_text, (str, bytes, bytearray)):
        raise JsonParseError(f"Expected json text, got {type(json_text).__name__}")
    try:
        return schema.model_validate_json(json_text)
    except ValidationError as exc:
        error = exc.errors()[0]
        if error["type"] == "json_invalid":
            raise JsonParseError(f"Invalid json: {error.get('msg')}") from exc
        path = _error_path(error)
        logger.debug(f"decode_typed into {schema.__name__} failed at '{path}': {error.get('msg')}")
        kind = "missing_field" if error["type"] == "missing" else "invalid_value"
        where = f" at '{path}'" if path else ""
        raise SchemaMismatch(kind, f"Json does not match {schema.__name__}{where}: {error.get('msg')}", name=path or None) from exc


def encode_record(record: Record) -> str:
    return record.model_dump_json()
