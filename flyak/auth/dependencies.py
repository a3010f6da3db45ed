"""FastAPI dependencies for bearer-token authentication."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from flyak.dependencies import Tokens
from flyak.models.user import User
from flyak.providers import RoleRepo

# Tokens are issued by the login flow that owns credentials; tokenUrl is
# only used by Swagger UI's "Authorize" dialog.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_id(
    token: Annotated[str, Depends(oauth2_scheme)],
    tokens: Tokens,
) -> int:
    """Validate the bearer token and return the numeric user id it names."""
    if not tokens.validate(token):
        raise _credentials_exception()

    # The token may expire between the two parses
    try:
        return int(tokens.get_subject(token))
    except (JWTError, ValueError) as exc:
        raise _credentials_exception() from exc


CurrentUserId = Annotated[int, Depends(get_current_user_id)]


async def get_current_user(user_id: CurrentUserId, repo: RoleRepo) -> User:
    """Load the user a valid token was issued for."""
    user = await repo.get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
