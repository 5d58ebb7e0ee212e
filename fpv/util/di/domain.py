"""Domain layer DI providers."""

from dishka import Scope, provide

from fpv.domain.repository import PostRepository, UserRepository
from fpv.domain.service import (
    AuthService,
    IdentityVerifier,
    LikeService,
    PostService,
    StatsService,
    UserService,
)
from fpv.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, identity_verifier: IdentityVerifier) -> AuthService:
        """Provide authentication domain service."""
        return AuthService(identity_verifier=identity_verifier)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_post_service(
        self, post_repository: PostRepository, user_repository: UserRepository
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository, user_repository=user_repository
        )

    @provide
    def get_like_service(
        self, post_repository: PostRepository, user_repository: UserRepository
    ) -> LikeService:
        """Provide like domain service."""
        return LikeService(
            post_repository=post_repository, user_repository=user_repository
        )

    @provide
    def get_stats_service(
        self, post_repository: PostRepository, user_repository: UserRepository
    ) -> StatsService:
        """Provide stats domain service."""
        return StatsService(
            post_repository=post_repository, user_repository=user_repository
        )
