from __future__ import annotations

import os
from typing import Any, Dict, Optional

from adapters.base import QueryEngine, QueryExecutionError
from adapters.postgres import PostgresEngine
from adapters.sqlite import SQLiteEngine
from utils.env_loader import env_int, load_environments


def get_engine(
    db_engine: Optional[str] = None,
    source_config: Optional[Dict[str, Any]] = None,
    timeout_ms: Optional[int] = None,
) -> QueryEngine:
    load_environments()
    engine = (db_engine or os.getenv("DB_ENGINE", "sqlite")).strip().lower()
    timeout = timeout_ms if timeout_ms is not None else env_int("QUERY_TIMEOUT_MS", 15_000)
    if engine in {"postgres", "postgresql"}:
        return PostgresEngine(source_config=source_config, timeout_ms=timeout)
    if engine == "sqlite":
        return SQLiteEngine(source_config=source_config, timeout_ms=timeout)
    raise QueryExecutionError(f"Unsupported db_engine: {engine}", kind="connection_failure")
