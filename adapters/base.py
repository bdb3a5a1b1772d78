from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from adapters.sql_renderer import SQLDialect
from mapper.results import Json, Object, ObjectField, QueryResult, Scalar, to_python

logger = logging.getLogger(__name__)


class QueryExecutionError(RuntimeError):
    def __init__(self, message: str, kind: str = "execution_error"):
        self.kind = kind
        super().__init__(message)


def classify_query_error(exc: Exception) -> str:
    text = str(exc).lower()
    if "unique" in text or "constraint" in text or "duplicate key" in text or "violates" in text:
        return "constraint_violation"
    if "no such table" in text or ("relation" in text and "does not exist" in text):
        return "missing_table"
    if "no such column" in text or ("column" in text and "does not exist" in text):
        return "missing_column"
    if "syntax error" in text or "incomplete input" in text:
        return "syntax_error"
    if "timeout" in text or "timed out" in text or "locked" in text:
        return "timeout"
    if "connect" in text or "unable to open" in text or "connection" in text:
        return "connection_failure"
    return "execution_error"


def _is_implicit(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _build_object(columns: Sequence[str], row: Sequence[Any]) -> Object:
    # Entries are fields or link names; a link sits at the position of its first column.
    entries: List[Any] = []
    links: Dict[str, Tuple[List[str], List[Any]]] = {}
    for name, value in zip(columns, row):
        if "." in name:
            link, rest = name.split(".", 1)
            if link not in links:
                links[link] = ([], [])
                entries.append(link)
            links[link][0].append(rest)
            links[link][1].append(value)
            continue
        entries.append(ObjectField(name, value, implicit=_is_implicit(name)))

    fields: List[ObjectField] = []
    for entry in entries:
        if isinstance(entry, ObjectField):
            fields.append(entry)
            continue
        sub_columns, sub_values = links[entry]
        # A link whose columns are all NULL is an empty set.
        nested = None if all(v is None for v in sub_values) else _build_object(sub_columns, sub_values)
        fields.append(ObjectField(entry, nested))
    return Object(tuple(fields))


def shape_row(columns: Sequence[str], row: Sequence[Any], as_object: Optional[bool] = None) -> QueryResult:
    if as_object is None:
        as_object = len(columns) != 1 or "." in columns[0]
    if not as_object:
        return Scalar(row[0])
    return _build_object(columns, row)


class QueryEngine(ABC):
    engine: str = "unknown"
    dialect: SQLDialect

    def __init__(self, source_config: Optional[Dict[str, Any]] = None, timeout_ms: int = 15_000):
        self.source_config = source_config or {}
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        self.timeout_ms = timeout_ms

    @abstractmethod
    def _run(self, sql: str, params: Tuple[Any, ...]) -> Tuple[List[str], List[Tuple[Any, ...]]]:
        """Execute one statement and return its column names and rows."""
        raise NotImplementedError

    @abstractmethod
    def _run_script(self, script: str) -> None:
        raise NotImplementedError

    def _fetch(self, sql: str, args: Sequence[Any]) -> Tuple[List[str], List[Tuple[Any, ...]]]:
        rendered, params = self.dialect.bind(sql, args)
        logger.debug(f"[{self.engine}] {rendered} params={len(params)}")
        try:
            return self._run(rendered, params)
        except (QueryExecutionError, ValueError, ImportError):
            raise
        except Exception as exc:
            kind = classify_query_error(exc)
            logger.warning(f"[{self.engine}] query failed ({kind}): {exc}")
            raise QueryExecutionError(str(exc), kind=kind) from exc

    def execute(self, sql: str, args: Sequence[Any] = ()) -> None:
        self._fetch(sql, args)

    def query(self, sql: str, args: Sequence[Any] = (), as_object: Optional[bool] = None) -> List[QueryResult]:
        columns, rows = self._fetch(sql, args)
        return [shape_row(columns, row, as_object=as_object) for row in rows]

    def query_single(self, sql: str, args: Sequence[Any] = (), as_object: Optional[bool] = None) -> Optional[QueryResult]:
        results = self.query(sql, args, as_object=as_object)
        if len(results) > 1:
            raise QueryExecutionError(f"Expected at most one result, got {len(results)}", kind="cardinality_mismatch")
        return results[0] if results else None

    def query_required_single(self, sql: str, args: Sequence[Any] = (), as_object: Optional[bool] = None) -> QueryResult:
        result = self.query_single(sql, args, as_object=as_object)
        if result is None:
            raise QueryExecutionError("Expected exactly one result, got none", kind="cardinality_mismatch")
        return result

    def query_json(self, sql: str, args: Sequence[Any] = (), as_object: Optional[bool] = None) -> Json:
        results = self.query(sql, args, as_object=as_object)
        return Json(json.dumps([to_python(r) for r in results], default=str))

    def query_single_json(self, sql: str, args: Sequence[Any] = (), as_object: Optional[bool] = None) -> Optional[Json]:
        result = self.query_single(sql, args, as_object=as_object)
        if result is None:
            return None
        return Json(json.dumps(to_python(result), default=str))

    def apply_schema(self, schema_path: str | Path) -> None:
        path = Path(schema_path)
        if not path.exists():
            raise ValueError(f"Schema file does not exist: {path}")
        logger.info(f"[{self.engine}] applying schema {path}")
        try:
            self._run_script(path.read_text(encoding="utf-8"))
        except (QueryExecutionError, ValueError, ImportError):
            raise
        except Exception as exc:
            kind = classify_query_error(exc)
            logger.warning(f"[{self.engine}] schema apply failed ({kind}): {exc}")
            raise QueryExecutionError(str(exc), kind=kind) from exc
