from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class ObjectField:
    name: str
    value: Any
    implicit: bool = False


@dataclass(frozen=True)
class Object:
    """A named-field record returned by the engine.

    Field values are primitives, ``None`` for an empty set, or a nested
    ``Object`` for a link. Order is the order the engine returned them in.
    """

    fields: Tuple[ObjectField, ...] = ()

    @classmethod
    def of(cls, **values: Any) -> "Object":
        return cls(tuple(ObjectField(name, value) for name, value in values.items()))

    def get(self, name: str) -> Optional[ObjectField]:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def explicit(self) -> Iterator[ObjectField]:
        return (field for field in self.fields if not field.implicit)


@dataclass(frozen=True)
class Json:
    text: str


QueryResult = Union[Scalar, Object, Json]


def variant_name(result: Any) -> str:
    if isinstance(result, (Scalar, Object, Json)):
        return type(result).__name__
    return f"not a query result ({type(result).__name__})"


def to_python(result: Any) -> Any:
    if isinstance(result, Scalar):
        return result.value
    if isinstance(result, Object):
        out: Dict[str, Any] = {}
        for field in result.fields:
            out[field.name] = to_python(field.value) if isinstance(field.value, Object) else field.value
        return out
    if isinstance(result, Json):
        return result.text
    return result
