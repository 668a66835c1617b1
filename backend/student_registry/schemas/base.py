# student_registry/schemas/base.py
from typing import Any, Iterable, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

M = TypeVar("M", bound="APIModel")


class APIModel(BaseModel):
    # camelCase on the wire, snake_case accepted on input too
    model_config = ConfigDict(
        from_attributes=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )


def to_wire(schema: Type[M], obj: Any) -> dict:
    """Serialize an ORM row the same way the HTTP API does"""
    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)


def to_wire_list(schema: Type[M], rows: Iterable[Any]) -> list[dict]:
    return [to_wire(schema, row) for row in rows]


class DeleteResult(APIModel):
    success: bool
