"""Verify token use case."""

from pydantic import BaseModel

from fpv.application.usecase.dto import CamelModel, IdentityInfo
from fpv.domain.service import AuthService


class VerifyTokenRequest(BaseModel):
    """Verify token request."""

    token: str


class VerifyTokenResponse(CamelModel):
    """Verify token response."""

    message: str = "Token is valid"
    user: IdentityInfo


class VerifyTokenUseCase:
    """Use case for checking a credential without touching stored users."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(self, request: VerifyTokenRequest) -> VerifyTokenResponse:
        identity = await self.auth_service.verify_token(request.token)
        return VerifyTokenResponse(user=IdentityInfo.from_identity(identity))
