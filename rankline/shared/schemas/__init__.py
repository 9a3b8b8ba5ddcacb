"""Shared schemas module."""

from rankline.shared.schemas.base import BaseSchema, ErrorDetail

__all__ = ["BaseSchema", "ErrorDetail"]
