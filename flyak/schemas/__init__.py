"""Pydantic request/response schemas."""

from flyak.schemas.auth import Principal, UserResponse

__all__ = [
    "Principal",
    "UserResponse",
]
