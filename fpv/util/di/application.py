"""Application layer DI providers."""

from dishka import Scope, provide

from fpv.application.usecase.auth import (
    GetCurrentUserUseCase,
    SyncUserUseCase,
    VerifyTokenUseCase,
)
from fpv.application.usecase.like import ToggleLikeUseCase
from fpv.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetMyPostsUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    UpdatePostUseCase,
)
from fpv.application.usecase.stats import GetCategoriesUseCase, GetStatsUseCase
from fpv.domain.service import (
    AuthService,
    LikeService,
    PostService,
    StatsService,
    UserService,
)
from fpv.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed.

    Use cases are REQUEST-scoped like the domain services they orchestrate.
    """

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_sync_user_use_case(
        self, auth_service: AuthService, user_service: UserService
    ) -> SyncUserUseCase:
        """Provide sync user use case."""
        return SyncUserUseCase(auth_service=auth_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_get_current_user_use_case(
        self, auth_service: AuthService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            auth_service=auth_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_verify_token_use_case(
        self, auth_service: AuthService
    ) -> VerifyTokenUseCase:
        """Provide verify token use case."""
        return VerifyTokenUseCase(auth_service=auth_service)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_update_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_my_posts_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> GetMyPostsUseCase:
        """Provide get my posts use case."""
        return GetMyPostsUseCase(post_service=post_service, user_service=user_service)

    # Like use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(self, like_service: LikeService) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(like_service=like_service)

    # Stats use cases
    @provide(scope=Scope.REQUEST)
    def get_get_stats_use_case(self, stats_service: StatsService) -> GetStatsUseCase:
        """Provide get stats use case."""
        return GetStatsUseCase(stats_service=stats_service)

    @provide(scope=Scope.REQUEST)
    def get_get_categories_use_case(
        self, stats_service: StatsService
    ) -> GetCategoriesUseCase:
        """Provide get categories use case."""
        return GetCategoriesUseCase(stats_service=stats_service)
