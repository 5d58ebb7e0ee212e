"""Sync user use case."""

from pydantic import BaseModel

from fpv.application.usecase.dto import CamelModel, UserInfo
from fpv.domain.service import AuthService, UserService


class SyncUserRequest(BaseModel):
    """Sync user request."""

    token: str  # Firebase ID token


class SyncUserResponse(CamelModel):
    """Sync user response."""

    message: str = "User synced successfully"
    user: UserInfo


class SyncUserUseCase:
    """Use case for creating or refreshing the caller's user record.

    Called by the client after every sign-in. Safe to repeat.
    """

    def __init__(self, auth_service: AuthService, user_service: UserService) -> None:
        """Initialize sync user use case.

        Args:
            auth_service: Authentication domain service
            user_service: User domain service
        """
        self.auth_service = auth_service
        self.user_service = user_service

    async def execute(self, request: SyncUserRequest) -> SyncUserResponse:
        """Execute sync flow.

        Steps:
        1. Verify the ID token with the identity provider
        2. Create or update the user from the verified claims

        Raises:
            AuthenticationError: If the token is invalid or expired
            ValidationError: If the identity has no email
            ConflictError: If the email belongs to another user
        """
        identity = await self.auth_service.verify_token(request.token)
        user = await self.user_service.sync_user(identity)
        return SyncUserResponse(user=UserInfo.from_user(user))
