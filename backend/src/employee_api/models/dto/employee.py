"""Employee DTOs."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base DTO serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Pagination(CamelModel):
    """Pagination metadata for list responses."""

    current_page: int
    total_pages: int
    total_count: int
    has_next: bool
    has_prev: bool

    @classmethod
    def from_counts(cls, page: int, limit: int, total_count: int) -> "Pagination":
        """Build pagination metadata from the requested page and the total count."""
        total_pages = math.ceil(total_count / limit) if limit else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


class EmployeeResponse(CamelModel):
    """Single employee response envelope."""

    success: bool = True
    data: dict[str, Any]
    message: str


class EmployeeListResponse(CamelModel):
    """Employee list response envelope."""

    success: bool = True
    data: list[dict[str, Any]]
    pagination: Pagination
    message: str


class MessageResponse(CamelModel):
    """Envelope for responses that carry no data."""

    success: bool = True
    message: str


class FieldErrorResponse(BaseModel):
    """One field-level validation error."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned on every failure path."""

    success: bool = False
    message: str
    errors: list[FieldErrorResponse] | None = Field(default=None)
    stack: str | None = Field(default=None)
