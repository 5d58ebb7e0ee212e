"""Unit tests for the stats use cases."""

from uuid import uuid4

import pytest

from fpv.application.usecase.stats import GetCategoriesUseCase, GetStatsUseCase
from fpv.domain.repository import PostRepository
from fpv.domain.value import Category, PostStatus, UserId
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetStatsUseCase:
    """Tests for GetStatsUseCase."""

    @pytest.mark.asyncio
    async def test_total_likes_matches_recomputation(self, unit_env):
        """totalLikes equals the like counts summed over published posts."""
        # Arrange
        repo = await unit_env.get(PostRepository)
        author_id = UserId(uuid4())
        posts = [
            make_post(author_id, likes=[UserId(uuid4()) for _ in range(n)])
            for n in (0, 2, 5)
        ]
        posts.append(
            make_post(author_id, status=PostStatus.DRAFT, likes=[UserId(uuid4())])
        )
        for post in posts:
            await repo.save(post)
        use_case = await unit_env.get(GetStatsUseCase)

        # Act
        response = await use_case.execute()

        # Assert
        expected = sum(p.like_count for p in posts if p.status == PostStatus.PUBLISHED)
        assert response.stats.total_likes == expected == 7
        assert response.stats.total_posts == 3
        assert response.stats.categories == 6
        assert set(response.model_dump(by_alias=True)["stats"]) == {
            "totalPosts",
            "totalUsers",
            "totalLikes",
            "categories",
        }


class TestGetCategoriesUseCase:
    """Tests for GetCategoriesUseCase."""

    @pytest.mark.asyncio
    async def test_categories_with_counts(self, unit_env):
        """Only categories with published posts, busiest first."""
        # Arrange
        repo = await unit_env.get(PostRepository)
        author_id = UserId(uuid4())
        await repo.save(make_post(author_id, category=Category.CINEMATIC))
        await repo.save(make_post(author_id, category=Category.REVIEWS))
        await repo.save(make_post(author_id, category=Category.REVIEWS))
        use_case = await unit_env.get(GetCategoriesUseCase)

        # Act
        response = await use_case.execute()

        # Assert
        assert response.model_dump(by_alias=True) == {
            "categories": [
                {"category": "Reviews", "count": 2},
                {"category": "Cinematic", "count": 1},
            ]
        }
