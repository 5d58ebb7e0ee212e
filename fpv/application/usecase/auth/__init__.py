"""Authentication use cases."""

from .get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from .sync_user import SyncUserRequest, SyncUserResponse, SyncUserUseCase
from .verify_token import VerifyTokenRequest, VerifyTokenResponse, VerifyTokenUseCase

__all__ = [
    "GetCurrentUserRequest",
    "GetCurrentUserResponse",
    "GetCurrentUserUseCase",
    "SyncUserRequest",
    "SyncUserResponse",
    "SyncUserUseCase",
    "VerifyTokenRequest",
    "VerifyTokenResponse",
    "VerifyTokenUseCase",
]
