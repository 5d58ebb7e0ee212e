"""Authentication routes.

Sign-in happens on the client with Firebase; these routes only verify the
resulting ID token and keep the user directory in sync with it.
"""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from fpv.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
    SyncUserRequest,
    SyncUserResponse,
    SyncUserUseCase,
    VerifyTokenRequest,
    VerifyTokenResponse,
    VerifyTokenUseCase,
)
from fpv.interface.api.security import bearer_token

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post("/sync", response_model=SyncUserResponse)
async def sync_user(
    sync_user_use_case: FromDishka[SyncUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> SyncUserResponse:
    """Create or refresh the caller's user record.

    Called by the client right after every Firebase sign-in.

    Args:
        sync_user_use_case: Sync user use case from DI
        authorization: Bearer ID token

    Returns:
        The synced user
    """
    return await sync_user_use_case.execute(
        SyncUserRequest(token=bearer_token(authorization))
    )


@router.get("/me", response_model=GetCurrentUserResponse)
async def get_me(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> GetCurrentUserResponse:
    """Get the caller's stored user record (404 until synced)."""
    return await get_current_user_use_case.execute(
        GetCurrentUserRequest(token=bearer_token(authorization))
    )


@router.get("/verify", response_model=VerifyTokenResponse)
async def verify(
    verify_token_use_case: FromDishka[VerifyTokenUseCase],
    authorization: Optional[str] = Header(default=None),
) -> VerifyTokenResponse:
    """Check that the bearer token is valid and show its claims."""
    return await verify_token_use_case.execute(
        VerifyTokenRequest(token=bearer_token(authorization))
    )
