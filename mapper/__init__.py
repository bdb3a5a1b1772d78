"""Decoding of query results into typed records."""

from mapper.decode import decode_json, decode_object, decode_queryable, decode_scalar, decode_typed, encode_record
from mapper.errors import DecodeError, JsonParseError, MissingField, SchemaMismatch, TypeMismatch, UnexpectedVariant
from mapper.results import Json, Object, ObjectField, QueryResult, Scalar, to_python
from mapper.types import Bool, Float64, Int16, Int32, Int64, Record, Str, Uuid

__all__ = [
    "Bool",
    "DecodeError",
    "Float64",
    "Int16",
    "Int32",
    "Int64",
    "Json",
    "JsonParseError",
    "MissingField",
    "Object",
    "ObjectField",
    "QueryResult",
    "Record",
    "Scalar",
    "SchemaMismatch",
    "Str",
    "TypeMismatch",
    "UnexpectedVariant",
    "Uuid",
    "decode_json",
    "decode_object",
    "decode_queryable",
    "decode_scalar",
    "decode_typed",
    "encode_record",
    "to_python",
]
