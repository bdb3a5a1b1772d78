from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

_ARG_RE = re.compile(r"\$(\d+)")


@dataclass(frozen=True)
class SQLDialect:
    engine: str
    placeholder: str

    def bind(self, sql: str, args: Sequence[Any] = ()) -> Tuple[str, Tuple[Any, ...]]:
        """Render ``$0``, ``$1``, ... to driver placeholders.

        Parameters are returned in order of appearance, so an argument used
        twice is bound twice.
        """
        params: List[Any] = []
        if not _ARG_RE.search(sql):
            if args:
                raise ValueError(f"Query takes no arguments, got {len(args)}")
            return sql, ()

        if self.placeholder == "%s":
            sql = sql.replace("%", "%%")

        def _substitute(match: re.Match) -> str:
            index = int(match.group(1))
            if index >= len(args):
                raise ValueError(f"Missing query argument ${index}")
            params.append(args[index])
            return self.placeholder

        rendered = _ARG_RE.sub(_substitute, sql)
        return rendered, tuple(params)


def get_sql_dialect(db_engine: str) -> SQLDialect:
    engine = (db_engine or "sqlite").strip().lower()
    if engine in {"postgres", "postgresql"}:
        return SQLDialect(engine="postgres", placeholder="%s")
    if engine == "sqlite":
        return SQLDialect(engine="sqlite", placeholder="?")
    return SQLDialect(engine=engine, placeholder="%s")
