"""Get current user use case."""

from pydantic import BaseModel

from fpv.application.usecase.dto import CamelModel, UserInfo
from fpv.domain.service import AuthService, UserService


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # Firebase ID token


class GetCurrentUserResponse(CamelModel):
    """Get current user response."""

    user: UserInfo


class GetCurrentUserUseCase:
    """Use case for getting the stored record of the authenticated caller."""

    def __init__(self, auth_service: AuthService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            auth_service: Authentication domain service
            user_service: User domain service
        """
        self.auth_service = auth_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Steps:
        1. Verify the ID token
        2. Load the user synced for that identity

        Args:
            request: Request with ID token

        Returns:
            The caller's user record

        Raises:
            AuthenticationError: If token is invalid or expired
            NotFoundError: If the caller never synced
        """
        identity = await self.auth_service.verify_token(request.token)
        user = await self.user_service.get_synced_user(identity)
        return GetCurrentUserResponse(user=UserInfo.from_user(user))
