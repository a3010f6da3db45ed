"""Authentication API endpoints.

Token issuance sits behind the credential check, which is not part of
this service. Only the /me endpoint lives here for token introspection.
"""

from fastapi import APIRouter

from flyak.auth.dependencies import CurrentUser
from flyak.schemas.auth import UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: CurrentUser) -> UserResponse:
    """Return the authenticated user's profile."""
    return UserResponse.model_validate(current_user)
