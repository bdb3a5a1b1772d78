"""Query engine adapters that shape rows into query results."""

from adapters.base import QueryEngine, QueryExecutionError
from adapters.factory import get_engine

__all__ = ["QueryEngine", "QueryExecutionError", "get_engine"]
