from uuid import uuid4

from adapters.base import shape_row
from mapper.results import Object, ObjectField, Scalar, to_python


def test_single_column_rows_are_scalars():
    assert shape_row(["greeting"], ("Hi",)) == Scalar("Hi")


def test_single_column_row_as_object():
    assert shape_row(["username"], ("alice",), as_object=True) == Object.of(username="alice")


def test_multi_column_rows_keep_column_order():
    account_id = uuid4()
    result = shape_row(["id", "username"], (account_id, "alice"))
    assert isinstance(result, Object)
    assert [f.name for f in result.fields] == ["id", "username"]
    assert result.get("id").value == account_id


def test_dotted_columns_build_links():
    result = shape_row(
        ["title", "author.username", "author.id", "likes", "editor.username", "editor.id"],
        ("Hello", "alice", "a-1", 3, None, None),
    )
    assert [f.name for f in result.fields] == ["title", "author", "likes", "editor"]
    assert result.get("author").value == Object.of(username="alice", id="a-1")
    assert result.get("editor").value is None


def test_dunder_columns_are_implicit():
    result = shape_row(["__tname__", "username"], ("Account", "alice"))
    assert result.fields[0] == ObjectField("__tname__", "Account", implicit=True)
    assert [f.name for f in result.explicit()] == ["username"]


def test_to_python_nests_links():
    result = shape_row(["title", "author.username"], ("Hello", "alice"))
    assert to_python(result) == {"title": "Hello", "author": {"username": "alice"}}
    assert to_python(Scalar(3)) == 3
