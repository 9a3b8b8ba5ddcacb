"""Base schemas and common response types used across rankline."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
    )


# ===========================================
# ERROR RESPONSES
# ===========================================


class ErrorDetail(BaseSchema):
    """Error body returned by the exception handlers."""

    error: str = Field(description="Machine-readable error type")
    detail: str = Field(description="Human-readable explanation")
    errors: list[dict[str, Any]] | None = Field(
        default=None, description="Additional error details"
    )
