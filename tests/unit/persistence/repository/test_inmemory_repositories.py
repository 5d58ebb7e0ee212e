"""Unit tests for the in-memory repositories."""

from uuid import uuid4

import pytest

from fpv.domain.error import ConflictError
from fpv.domain.repository import PostFilter, PostSortOrder
from fpv.domain.value import Category, PostStatus, UserId
from fpv.persistence.repository.inmemory import (
    InMemoryPostRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from tests.conftest import make_post, make_user


class TestInMemoryPostRepository:
    """Tests for InMemoryPostRepository."""

    @pytest.mark.asyncio
    async def test_latest_sort_is_newest_first(self):
        """Default order is created_at descending."""
        # Arrange
        repo = InMemoryPostRepository()
        author_id = UserId(uuid4())
        old = make_post(author_id, minutes_ago=30)
        new = make_post(author_id, minutes_ago=1)
        mid = make_post(author_id, minutes_ago=10)
        for post in (old, new, mid):
            await repo.save(post)

        # Act
        posts = await repo.find_all(PostFilter())

        # Assert
        assert [p.id for p in posts] == [new.id, mid.id, old.id]

    @pytest.mark.asyncio
    async def test_most_liked_ties_fall_back_to_newest(self):
        """Equal like counts keep newest first."""
        # Arrange
        repo = InMemoryPostRepository()
        author_id = UserId(uuid4())
        fan = UserId(uuid4())
        older = make_post(author_id, minutes_ago=20, likes=[fan])
        newer = make_post(author_id, minutes_ago=5, likes=[fan])
        top = make_post(author_id, minutes_ago=50, likes=[fan, UserId(uuid4())])
        for post in (older, newer, top):
            await repo.save(post)

        # Act
        posts = await repo.find_all(PostFilter(sort=PostSortOrder.MOST_LIKED))

        # Assert
        assert [p.id for p in posts] == [top.id, newer.id, older.id]

    @pytest.mark.asyncio
    async def test_search_matches_any_text_field(self):
        """Title, excerpt and content are all searched."""
        # Arrange
        repo = InMemoryPostRepository()
        author_id = UserId(uuid4())
        by_title = make_post(author_id, title="GEPRC Mark5 build", minutes_ago=1)
        by_excerpt = make_post(author_id, excerpt="A mark5 in the snow", minutes_ago=2)
        by_content = make_post(author_id, content="My MARK5 crashed", minutes_ago=3)
        await repo.save(make_post(author_id, title="Unrelated"))
        for post in (by_title, by_excerpt, by_content):
            await repo.save(post)

        # Act
        posts = await repo.find_all(PostFilter(search="Mark5"))

        # Assert
        assert [p.id for p in posts] == [by_title.id, by_excerpt.id, by_content.id]

    @pytest.mark.asyncio
    async def test_category_and_status_filters_combine(self):
        """Both filters must match."""
        # Arrange
        repo = InMemoryPostRepository()
        author_id = UserId(uuid4())
        wanted = make_post(author_id, category=Category.BUILDS, status=PostStatus.DRAFT)
        await repo.save(wanted)
        await repo.save(make_post(author_id, category=Category.BUILDS))
        await repo.save(
            make_post(author_id, category=Category.TIPS, status=PostStatus.DRAFT)
        )

        # Act
        posts = await repo.find_all(
            PostFilter(category=Category.BUILDS, status=PostStatus.DRAFT)
        )

        # Assert
        assert [p.id for p in posts] == [wanted.id]

    @pytest.mark.asyncio
    async def test_toggle_like_on_missing_post(self):
        """Unknown posts return None."""
        # Arrange
        repo = InMemoryPostRepository()

        # Act & Assert
        assert await repo.toggle_like(uuid4(), UserId(uuid4())) is None

    @pytest.mark.asyncio
    async def test_resaving_existing_post_keeps_views_and_likes(self):
        """save on an existing post only rewrites author-editable fields."""
        # Arrange
        repo = InMemoryPostRepository()
        fan = UserId(uuid4())
        post = make_post(UserId(uuid4()))
        await repo.save(post)
        await repo.increment_view_count(post.id)
        await repo.toggle_like(post.id, fan)

        # Act
        saved = await repo.save(post.model_copy(update={"title": "Renamed"}))

        # Assert
        assert saved.title == "Renamed"
        assert saved.view_count == 1
        assert saved.likes == [fan]

    @pytest.mark.asyncio
    async def test_update_fields_rejects_system_fields(self):
        """view_count and likes can't be written through update_fields."""
        # Arrange
        repo = InMemoryPostRepository()
        post = make_post(UserId(uuid4()))
        await repo.save(post)

        # Act & Assert
        with pytest.raises(ValueError):
            await repo.update_fields(post.id, {"view_count": 99})
        assert await repo.update_fields(uuid4(), {"title": "x"}) is None

    @pytest.mark.asyncio
    async def test_delete_reports_whether_post_existed(self):
        """delete is True once, then False."""
        # Arrange
        repo = InMemoryPostRepository()
        post = make_post(UserId(uuid4()))
        await repo.save(post)

        # Act & Assert
        assert await repo.delete(post.id) is True
        assert await repo.delete(post.id) is False


class TestInMemoryUserRepository:
    """Tests for InMemoryUserRepository."""

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self):
        """Two users can't share an email."""
        # Arrange
        repo = InMemoryUserRepository()
        await repo.save(make_user(email="same@example.com"))

        # Act & Assert
        with pytest.raises(ConflictError):
            await repo.save(make_user(email="same@example.com"))

    @pytest.mark.asyncio
    async def test_external_id_never_changes(self):
        """Saving an existing user keeps the original Firebase UID."""
        # Arrange
        repo = InMemoryUserRepository()
        user = make_user(external_id="original")
        await repo.save(user)

        # Act
        saved = await repo.save(user.model_copy(update={"external_id": "changed"}))

        # Assert
        assert saved.external_id == "original"
        assert (await repo.find_by_external_id("original")).id == user.id

    @pytest.mark.asyncio
    async def test_repositories_share_a_store(self):
        """Repositories over one store see each other's writes."""
        # Arrange
        store = InMemoryStore()
        user = make_user()
        await InMemoryUserRepository(store).save(user)

        # Act
        found = await InMemoryUserRepository(store).find_by_id(user.id)

        # Assert
        assert found == user
