"""Pydantic schemas for authentication."""

from pydantic import BaseModel, EmailStr, Field


class Principal(BaseModel):
    """The subject a token is issued for. Built from a ``User`` or by hand."""

    id: int
    name: str
    roles: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    """Public user information."""

    id: int
    name: str
    email: EmailStr | None = None
    roles: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}
