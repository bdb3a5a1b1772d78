from __future__ import annotations

import os
from typing import Any, Dict, List, Tuple

from adapters.base import QueryEngine, QueryExecutionError
from adapters.sql_renderer import get_sql_dialect
from utils.env_loader import load_environments


class PostgresEngine(QueryEngine):
    engine = "postgres"
    dialect = get_sql_dialect("postgres")

    def _db_params(self) -> Dict[str, Any]:
        load_environments()
        host = self.source_config.get("host") or os.getenv("DB_HOST")
        dbname = self.source_config.get("dbname") or os.getenv("DB_NAME")
        user = self.source_config.get("user") or os.getenv("DB_USER")
        password = self.source_config.get("password") or os.getenv("DB_PASSWORD")
        port_raw = self.source_config.get("port") or os.getenv("DB_PORT", "5432")
        if not host:
            raise ValueError("DB_HOST is required")
        if not dbname:
            raise ValueError("DB_NAME is required")
        if not user:
            raise ValueError("DB_USER is required")
        if not password:
            raise ValueError("DB_PASSWORD is required")
        return {
            "host": host,
            "port": int(port_raw),
            "dbname": dbname,
            "user": user,
            "password": password,
        }

    def _connect(self):
        params = self._db_params()
        try:
            import psycopg  # type: ignore

            connect = psycopg.connect
        except ImportError:
            try:
                import psycopg2  # type: ignore

                connect = psycopg2.connect
            except ImportError as exc:
                raise ImportError(
                    "No PostgreSQL driver found. Install one of: "
                    '`python -m pip install "psycopg[binary]"` or `python -m pip install psycopg2-binary`.'
                ) from exc
        try:
            return connect(**params)
        except Exception as exc:
            raise QueryExecutionError(str(exc), kind="connection_failure") from exc

    def _run(self, sql: str, params: Tuple[Any, ...]) -> Tuple[List[str], List[Tuple[Any, ...]]]:
        conn = self._connect()
        try:
            with conn.cursor() as cur:
                cur.execute(f"SET statement_timeout = '{int(self.timeout_ms)}ms'")
                cur.execute(sql, params or None)
                columns = [desc[0] for desc in cur.description] if cur.description else []
                rows = [tuple(row) for row in cur.fetchall()] if cur.description else []
            conn.commit()
            return columns, rows
        finally:
            conn.close()

    def _run_script(self, script: str) -> None:
        conn = self._connect()
        try:
            with conn.cursor() as cur:
                cur.execute(script)
            conn.commit()
        finally:
            conn.close()
