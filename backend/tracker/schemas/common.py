"""Shared schema building blocks."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import to_jsonable_python

T = TypeVar("T")


class CamelModel(BaseModel):
    """Model whose JSON form uses camelCase keys, as stored on disk.

    Unknown keys are kept so that fields written by newer clients survive
    a read-modify-write cycle.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope."""

    success: bool
    data: T | None = None
    error: str | None = None


class Deleted(BaseModel):
    deleted: bool = True


def ok(data: Any = None) -> dict[str, Any]:
    """Build a success envelope."""
    return {"success": True, "data": data}


def fail(error: str) -> dict[str, Any]:
    """Build a failure envelope."""
    return {"success": False, "error": error}


def provided_fields(payload: CamelModel) -> dict[str, Any]:
    """Top-level fields the client actually sent, keyed by their stored name.

    Nested models are dumped in full so their defaults are persisted.
    """
    model_fields = type(payload).model_fields
    fields: dict[str, Any] = {}
    for name in payload.model_fields_set:
        if name not in model_fields:
            continue
        key = model_fields[name].alias or name
        fields[key] = to_jsonable_python(getattr(payload, name), by_alias=True)
    fields.update(payload.model_extra or {})
    return fields
