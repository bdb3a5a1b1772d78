import pytest

from adapters.sql_renderer import get_sql_dialect


def test_sqlite_placeholders_follow_argument_order():
    dialect = get_sql_dialect("sqlite")
    sql, params = dialect.bind("SELECT $1 AS b, $0 AS a, $1 AS c", ("x", "y"))
    assert sql == "SELECT ? AS b, ? AS a, ? AS c"
    assert params == ("y", "x", "y")


def test_postgres_placeholders_escape_percent():
    dialect = get_sql_dialect("postgresql")
    assert dialect.engine == "postgres"
    sql, params = dialect.bind("SELECT username FROM account WHERE username LIKE 'User_%' AND id = $0", ("abc",))
    assert sql == "SELECT username FROM account WHERE username LIKE 'User_%%' AND id = %s"
    assert params == ("abc",)


def test_bind_without_arguments_leaves_sql_untouched():
    dialect = get_sql_dialect("postgres")
    assert dialect.bind("SELECT '100%'") == ("SELECT '100%'", ())


def test_bind_rejects_missing_and_unused_arguments():
    dialect = get_sql_dialect("sqlite")
    with pytest.raises(ValueError, match=r"Missing query argument \$1"):
        dialect.bind("SELECT $0, $1", ("only one",))

    with pytest.raises(ValueError, match="Query takes no arguments"):
        dialect.bind("SELECT 1", ("unused",))
