from __future__ import annotations

import os
import sqlite3
from pathlib import Path
from typing import Any, List, Tuple
from uuid import UUID

from adapters.base import QueryEngine
from adapters.sql_renderer import get_sql_dialect
from utils.env_loader import load_environments

DEFAULT_DB_PATH = "data/tutorial.db"


def _convert_bool(raw: bytes) -> bool:
    return bool(int(raw))


def _convert_uuid(raw: bytes) -> UUID:
    return UUID(raw.decode("utf-8"))


def _bind_param(value: Any) -> Any:
    return str(value) if isinstance(value, UUID) else value


# Declared column types BOOLEAN and UUID come back as bool and UUID, the way
# a typed engine would return them. Converters are process-wide in sqlite3 but
# only apply to connections opened with detect_types; UUID parameters are
# bound per call in _run rather than through a global adapter.
sqlite3.register_converter("BOOLEAN", _convert_bool)
sqlite3.register_converter("UUID", _convert_uuid)


class SQLiteEngine(QueryEngine):
    engine = "sqlite"
    dialect = get_sql_dialect("sqlite")

    def _db_path(self) -> str:
        load_environments()
        raw = self.source_config.get("db_path") or os.getenv("SQLITE_DB_PATH", DEFAULT_DB_PATH)
        if not raw:
            raise ValueError("SQLITE_DB_PATH is required for sqlite engine")
        db_path = Path(str(raw))
        db_path.parent.mkdir(parents=True, exist_ok=True)
        return str(db_path)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            self._db_path(),
            timeout=self.timeout_ms / 1000.0,
            detect_types=sqlite3.PARSE_DECLTYPES,
        )
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _run(self, sql: str, params: Tuple[Any, ...]) -> Tuple[List[str], List[Tuple[Any, ...]]]:
        conn = self._connect()
        try:
            conn.execute(f"PRAGMA busy_timeout = {int(self.timeout_ms)}")
            cur = conn.cursor()
            cur.execute(sql, tuple(_bind_param(p) for p in params))
            rows = [tuple(row) for row in cur.fetchall()]
            columns = [desc[0] for desc in cur.description] if cur.description else []
            conn.commit()
            return columns, rows
        finally:
            conn.close()

    def _run_script(self, script: str) -> None:
        conn = self._connect()
        try:
            conn.executescript(script)
            conn.commit()
        finally:
            conn.close()
