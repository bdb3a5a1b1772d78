from __future__ import annotations

from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic_core import PydanticCustomError


def _require_float(value: Any) -> Any:
    # StrictFloat alone still accepts an int.
    if type(value) is not float:
        raise PydanticCustomError("float_type", "Input should be a float, got {actual}", {"actual": type(value).__name__})
    return value


# Semantic field types for record schemas. Numbers and booleans are strict so
# that a bool never passes as an int and a numeric string never passes as a number.
Str = StrictStr
Bool = StrictBool
Float64 = Annotated[StrictFloat, BeforeValidator(_require_float)]
Int16 = Annotated[StrictInt, Field(ge=-(2**15), le=2**15 - 1)]
Int32 = Annotated[StrictInt, Field(ge=-(2**31), le=2**31 - 1)]
Int64 = Annotated[StrictInt, Field(ge=-(2**63), le=2**63 - 1)]
Uuid = UUID


class Record(BaseModel):
    """Base class for decoded query results.

    Subclasses declare their fields with the semantic types above, nested
    ``Record`` subclasses for links, and ``Optional[...] = None`` for fields
    that may be absent. Field names are matched exactly. Infinite floats are
    written to json as ``Infinity`` so they decode back unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", ser_json_inf_nan="constants")
