"""
ShopDesk Backend: Shared Schemas
================================

What:  Request-body base class and the small response shapes used by
       several routers.
"""

import math
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, Field, PlainSerializer, field_validator


class FormPayload(BaseModel):
    """
    Base for request bodies that may arrive as JSON, urlencoded or multipart.

    Form fields are always strings, so empty strings are read as "not sent"
    and numbers sent as JSON are accepted for text fields.
    """

    model_config = {"coerce_numbers_to_str": True, "extra": "ignore"}

    @field_validator("*", mode="before")
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and v == "":
            return None
        return v


class MessageResponse(BaseModel):
    message: str = Field(description="Human-readable result")


class ErrorResponse(BaseModel):
    """
    Error body shape for OpenAPI docs.

    Product and store errors fill `error`; registration errors fill `message`.
    """
    error: Optional[str] = Field(default=None, description="Error description")
    message: Optional[str] = Field(default=None, description="Error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


def _whole_as_int(value: float) -> Optional[Union[int, float]]:
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


# REAL column values: whole numbers go out as JSON integers (50, not 50.0),
# infinities and NaN as null
Number = Annotated[
    float,
    PlainSerializer(_whole_as_int, return_type=Optional[Union[int, float]], when_used="json"),
]
