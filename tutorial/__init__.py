"""Tutorial schema, records and sample queries."""

from pathlib import Path

SCHEMA_PATH = Path(__file__).with_name("schema.sql")
