import sqlite3

import pytest

from adapters.base import QueryExecutionError, classify_query_error
from adapters.factory import get_engine
from adapters.postgres import PostgresEngine
from adapters.sqlite import SQLiteEngine


@pytest.mark.parametrize(
    "message, kind",
    [
        ("UNIQUE constraint failed: account.username", "constraint_violation"),
        ('duplicate key value violates unique constraint "account_username_key"', "constraint_violation"),
        ("no such table: acount", "missing_table"),
        ('relation "acount" does not exist', "missing_table"),
        ('column "usernme" does not exist', "missing_column"),
        ('near "SELEC": syntax error', "syntax_error"),
        ("database is locked", "timeout"),
        ("canceling statement due to statement timeout", "timeout"),
        ("unable to open database file", "connection_failure"),
        ("something else entirely", "execution_error"),
    ],
)
def test_classify_query_error(message, kind):
    assert classify_query_error(sqlite3.OperationalError(message)) == kind


def test_get_engine_by_name(monkeypatch):
    monkeypatch.delenv("DB_ENGINE", raising=False)
    assert isinstance(get_engine(), SQLiteEngine)
    assert isinstance(get_engine("postgresql"), PostgresEngine)

    monkeypatch.setenv("DB_ENGINE", "postgres")
    assert isinstance(get_engine(), PostgresEngine)


def test_get_engine_rejects_unknown_engine():
    with pytest.raises(QueryExecutionError, match="Unsupported db_engine: oracle"):
        get_engine("oracle")


def test_get_engine_reads_timeout(monkeypatch):
    monkeypatch.setenv("QUERY_TIMEOUT_MS", "2500")
    assert get_engine("sqlite").timeout_ms == 2500

    monkeypatch.setenv("QUERY_TIMEOUT_MS", "soon")
    with pytest.raises(ValueError, match="QUERY_TIMEOUT_MS must be an integer"):
        get_engine("sqlite")


def test_postgres_engine_requires_connection_settings(monkeypatch):
    for name in ("DB_HOST", "DB_NAME", "DB_USER", "DB_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    engine = PostgresEngine()
    with pytest.raises(ValueError, match="DB_HOST is required"):
        engine.query("SELECT 1")
