"""Bearer credential helpers for protected routes."""

from typing import Optional

from fpv.application.usecase.auth import GetCurrentUserRequest, GetCurrentUserUseCase
from fpv.application.usecase.dto import UserInfo
from fpv.interface.error import AuthenticationRequiredError

BEARER_PREFIX = "bearer "


def bearer_token(authorization: Optional[str]) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header.

    Raises:
        AuthenticationRequiredError: If the header is missing, empty or not
            a bearer credential
    """
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        raise AuthenticationRequiredError()

    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise AuthenticationRequiredError()
    return token


async def require_user(
    authorization: Optional[str], get_current_user_use_case: GetCurrentUserUseCase
) -> UserInfo:
    """Resolve the synced user behind the request's bearer token.

    Raises:
        AuthenticationRequiredError: If no token was sent
        AuthenticationError: If the token is invalid or expired
        NotFoundError: If the caller never synced
    """
    token = bearer_token(authorization)
    response = await get_current_user_use_case.execute(
        GetCurrentUserRequest(token=token)
    )
    return response.user
