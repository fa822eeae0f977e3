"""API Schemas for request/response validation."""

from rolebridge.infrastructure.api.schemas.common_schemas import (
    ErrorResponse,
    MessageResponse,
    SeedResponse,
    ToolListResponse,
)

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "SeedResponse",
    "ToolListResponse",
]
