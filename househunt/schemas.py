from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(BaseModel, Generic[T]):
    """Every JSON response: {success, data?, error?, message?}."""

    success: bool = True
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None

    @model_serializer(mode="wrap")
    def _drop_empty_keys(self, handler: Any) -> Dict[str, Any]:
        dumped = handler(self)
        return {key: value for key, value in dumped.items() if value is not None}


class Page(CamelModel, Generic[T]):
    data: List[T]
    page: int
    page_size: int
    total: int
    total_pages: int
