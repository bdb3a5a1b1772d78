from __future__ import annotations

from typing import Optional


class DecodeError(ValueError):
    pass


class TypeMismatch(DecodeError):
    def __init__(self, name: Optional[str], expected: str, actual: str):
        self.name = name
        self.expected = expected
        self.actual = actual
        where = f"field '{name}'" if name else "scalar"
        super().__init__(f"Type mismatch for {where}: expected {expected}, got {actual}")


class MissingField(DecodeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing required field: {name}")


class UnexpectedVariant(DecodeError):
    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected a {expected} result, got {actual}")


class JsonParseError(DecodeError):
    pass


class SchemaMismatch(DecodeError):
    """Decoded data does not fit the target schema.

    ``kind`` is ``wrong_field`` or ``field_number`` for shape checks, and
    ``missing_field`` or ``invalid_value`` for json that fails validation.
    """

    def __init__(
        self,
        kind: str,
        message: str,
        name: Optional[str] = None,
        unexpected: Optional[str] = None,
        expected: Optional[str] = None,
    ):
        self.kind = kind
        self.name = name
        self.unexpected = unexpected
        self.expected = expected
        super().__init__(message)
