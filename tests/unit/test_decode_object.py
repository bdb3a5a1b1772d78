from typing import Optional
from uuid import uuid4

import pytest

from mapper.decode import decode_object
from mapper.errors import MissingField, TypeMismatch, UnexpectedVariant
from mapper.results import Json, Object, ObjectField, Scalar
from mapper.types import Float64, Int16, Record, Str
from tutorial.records import Account, IsAStruct, Post


class Username(Record):
    username: Str


class Profile(Record):
    username: Str
    nickname: Optional[Str] = None


def test_decode_object_single_field():
    assert decode_object(Object.of(username="alice"), Username) == Username(username="alice")


def test_decode_object_empty_object_reports_missing_field():
    with pytest.raises(MissingField) as exc_info:
        decode_object(Object(), Username)
    assert exc_info.value.name == "username"


def test_decode_object_field_for_field():
    account_id = uuid4()
    account = decode_object(Object.of(username="alice", id=account_id), Account)
    assert account.username == "alice"
    assert account.id == account_id


def test_decode_object_ignores_extra_and_implicit_fields():
    obj = Object(
        (
            ObjectField("__tname__", "default::Account", implicit=True),
            ObjectField("username", "alice"),
            ObjectField("created_by", "seed"),
        )
    )
    assert decode_object(obj, Username) == Username(username="alice")


def test_decode_object_field_names_are_case_sensitive():
    with pytest.raises(MissingField, match="username"):
        decode_object(Object.of(Username="alice"), Username)


def test_decode_object_optional_field_absent_or_null():
    assert decode_object(Object.of(username="alice"), Profile).nickname is None
    assert decode_object(Object.of(username="alice", nickname=None), Profile).nickname is None
    assert decode_object(Object.of(username="alice", nickname="al"), Profile).nickname == "al"


def test_decode_object_null_required_field_is_missing():
    with pytest.raises(MissingField, match="username"):
        decode_object(Object.of(username=None), Username)


def test_decode_object_type_mismatch_names_field():
    with pytest.raises(TypeMismatch) as exc_info:
        decode_object(Object.of(name="gadget", number="7", is_cool=True), IsAStruct)
    assert exc_info.value.name == "number"


def test_decode_object_rejects_int_for_bool():
    with pytest.raises(TypeMismatch) as exc_info:
        decode_object(Object.of(name="gadget", number=7, is_cool=1), IsAStruct)
    assert exc_info.value.name == "is_cool"


def test_decode_object_int16_range():
    class Small(Record):
        number: Int16

    assert decode_object(Object.of(number=32767), Small).number == 32767
    with pytest.raises(TypeMismatch) as exc_info:
        decode_object(Object.of(number=32768), Small)
    assert exc_info.value.name == "number"


def test_decode_object_nested_links():
    author = Object.of(username="alice", id=uuid4())
    editor = Object.of(username="bob", id=uuid4())

    post = decode_object(Object.of(title="Hello", likes=3, author=author, editor=editor), Post)
    assert post.author.username == "alice"
    assert post.editor is not None and post.editor.username == "bob"

    unedited = decode_object(Object.of(title="Hello", likes=3, author=author, editor=None), Post)
    assert unedited.editor is None


def test_decode_object_nested_errors_use_dotted_path():
    author = Object.of(id=uuid4())
    with pytest.raises(MissingField) as exc_info:
        decode_object(Object.of(title="Hello", likes=3, author=author), Post)
    assert exc_info.value.name == "author.username"

    with pytest.raises(MissingField) as exc_info:
        decode_object(Object.of(title="Hello", likes=3), Post)
    assert exc_info.value.name == "author"


def test_decode_object_link_must_be_an_object():
    with pytest.raises(TypeMismatch) as exc_info:
        decode_object(Object.of(title="Hello", likes=3, author="alice"), Post)
    assert exc_info.value.name == "author"


def test_decode_object_rejects_other_variants():
    with pytest.raises(UnexpectedVariant):
        decode_object(Scalar("alice"), Username)

    with pytest.raises(UnexpectedVariant):
        decode_object(Json('{"username": "alice"}'), Username)


class Measure(Record):
    value: Float64


def test_decode_object_float_does_not_widen_ints():
    assert decode_object(Object.of(value=9.8), Measure).value == 9.8

    with pytest.raises(TypeMismatch) as exc_info:
        decode_object(Object.of(value=10), Measure)
    assert exc_info.value.name == "value"
    assert exc_info.value.expected == "float"
    assert exc_info.value.actual == "int"

    with pytest.raises(TypeMismatch):
        decode_object(Object.of(value=True), Measure)


def test_decode_object_type_mismatch_labels():
    with pytest.raises(TypeMismatch) as exc_info:
        decode_object(Object.of(name="gadget", number="7", is_cool=True), IsAStruct)
    assert exc_info.value.expected == "int"
    assert exc_info.value.actual == "str"

    with pytest.raises(TypeMismatch) as exc_info:
        decode_object(Object.of(name="gadget", number=40000, is_cool=True), IsAStruct)
    assert exc_info.value.expected == "less_than_equal (le=32767)"
