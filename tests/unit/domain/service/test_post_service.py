"""Unit tests for PostService."""

import asyncio
from uuid import uuid4

import pytest

from fpv.domain.error import AuthorizationError, NotFoundError, ValidationError
from fpv.domain.repository import PostFilter, PostSortOrder
from fpv.domain.service import PostChanges, PostDraft, PostService, validate_post_fields
from fpv.domain.value import Category, PostId, PostStatus
from fpv.persistence.repository.inmemory import (
    InMemoryPostRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from tests.conftest import make_post, make_user


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def post_repo(store):
    return InMemoryPostRepository(store)


@pytest.fixture
def user_repo(store):
    return InMemoryUserRepository(store)


@pytest.fixture
def service(post_repo, user_repo):
    return PostService(post_repo, user_repo)


def _draft(**overrides) -> PostDraft:
    fields = {
        "title": "Cinematic dive",
        "excerpt": "Chasing waterfalls with a 5 inch",
        "content": "word " * 450,
        "category": "Cinematic",
    }
    fields.update(overrides)
    return PostDraft(**fields)


class SlowReadPostRepository(InMemoryPostRepository):
    """Yields to the event loop after every lookup, like a database round trip."""

    async def find_by_id(self, post_id):
        post = await super().find_by_id(post_id)
        await asyncio.sleep(0)
        return post


class TestValidatePostFields:
    """Tests for validate_post_fields()."""

    def test_valid_fields_have_no_errors(self):
        """A complete, valid set of fields passes."""
        assert validate_post_fields(_draft().model_dump()) == []

    def test_excerpt_at_limit_is_accepted(self):
        """Exactly 150 characters is allowed."""
        assert validate_post_fields({"excerpt": "x" * 150}) == []

    def test_excerpt_over_limit_is_rejected(self):
        """151 characters is one too many."""
        errors = validate_post_fields({"excerpt": "x" * 151})

        assert [error.field for error in errors] == ["excerpt"]

    def test_all_violations_reported_together(self):
        """Every failing field appears in the result."""
        errors = validate_post_fields(
            {"title": "  ", "excerpt": "", "content": "", "category": "Drifting"}
        )

        assert {error.field for error in errors} == {
            "title",
            "excerpt",
            "content",
            "category",
        }

    def test_only_present_keys_are_checked(self):
        """Partial updates only validate what they touch."""
        assert validate_post_fields({"title": "New title"}) == []

    @pytest.mark.parametrize("read_time", [0, -3])
    def test_non_positive_read_time_is_rejected(self, read_time):
        """Read time must be at least one minute."""
        errors = validate_post_fields({"read_time": read_time})

        assert [error.field for error in errors] == ["read_time"]

    def test_unknown_status_is_rejected(self):
        """Only published and draft exist."""
        errors = validate_post_fields({"status": "archived"})

        assert [error.field for error in errors] == ["status"]


class TestCreatePost:
    """Tests for PostService.create_post()."""

    @pytest.mark.asyncio
    async def test_create_post_defaults(self, service, user_repo, post_repo):
        """New posts start unviewed, unliked and published."""
        # Arrange
        author = make_user()
        await user_repo.save(author)

        # Act
        post = await service.create_post(author.id, _draft(tags=["5inch"]))

        # Assert
        assert post.author_id == author.id
        assert post.view_count == 0
        assert post.likes == []
        assert post.status == PostStatus.PUBLISHED
        assert post.category == Category.CINEMATIC
        assert post.tags == ["5inch"]
        assert post.created_at == post.updated_at
        assert await post_repo.find_by_id(post.id) == post

    @pytest.mark.asyncio
    async def test_read_time_estimated_from_content(self, service, user_repo):
        """450 words at 200 words per minute rounds up to 3 minutes."""
        # Arrange
        author = make_user()
        await user_repo.save(author)

        # Act
        post = await service.create_post(author.id, _draft())

        # Assert
        assert post.read_time == 3

    @pytest.mark.asyncio
    async def test_short_content_reads_in_one_minute(self, service, user_repo):
        """The estimate never drops below one minute."""
        # Arrange
        author = make_user()
        await user_repo.save(author)

        # Act
        post = await service.create_post(author.id, _draft(content="Short hop."))

        # Assert
        assert post.read_time == 1

    @pytest.mark.asyncio
    async def test_explicit_read_time_wins(self, service, user_repo):
        """A provided positive read time is kept as-is."""
        # Arrange
        author = make_user()
        await user_repo.save(author)

        # Act
        post = await service.create_post(author.id, _draft(read_time=12))

        # Assert
        assert post.read_time == 12

    @pytest.mark.asyncio
    @pytest.mark.parametrize("read_time", [0, -3])
    async def test_non_positive_read_time_falls_back_to_estimate(
        self, service, user_repo, read_time
    ):
        """A zero or negative read time is replaced by the estimate."""
        # Arrange
        author = make_user()
        await user_repo.save(author)

        # Act
        post = await service.create_post(author.id, _draft(read_time=read_time))

        # Assert
        assert post.read_time == 3

    @pytest.mark.asyncio
    async def test_invalid_draft_is_not_stored(self, service, user_repo, post_repo):
        """Validation failures leave the store untouched."""
        # Arrange
        author = make_user()
        await user_repo.save(author)

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await service.create_post(author.id, _draft(excerpt="x" * 151))

        assert exc_info.value.errors[0].field == "excerpt"
        assert await post_repo.count() == 0

    @pytest.mark.asyncio
    async def test_unsynced_author_is_rejected(self, service):
        """Posts need an existing author."""
        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.create_post(make_user().id, _draft())


class TestViewPost:
    """Tests for PostService.view_post()."""

    @pytest.mark.asyncio
    async def test_each_view_counts(self, service, post_repo):
        """Three fetches give view counts 1, 2 and 3."""
        # Arrange
        post = make_post(make_user().id)
        await post_repo.save(post)

        # Act
        counts = [(await service.view_post(post.id)).view_count for _ in range(3)]

        # Assert
        assert counts == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_view_missing_post(self, service):
        """Unknown posts are not found."""
        # Act & Assert
        with pytest.raises(NotFoundError) as exc_info:
            await service.view_post(PostId(uuid4()))

        assert str(exc_info.value) == "Blog post not found"

    @pytest.mark.asyncio
    async def test_get_post_by_id_does_not_count_view(self, service, post_repo):
        """Internal lookups leave the view counter alone."""
        # Arrange
        post = make_post(make_user().id)
        await post_repo.save(post)

        # Act
        found = await service.get_post_by_id(post.id)

        # Assert
        assert found.view_count == 0


class TestUpdatePost:
    """Tests for PostService.update_post()."""

    @pytest.mark.asyncio
    async def test_author_updates_provided_fields(self, service, post_repo):
        """Only supplied fields change, and updated_at moves forward."""
        # Arrange
        author = make_user()
        post = make_post(author.id, tags=["old"])
        await post_repo.save(post)

        # Act
        updated = await service.update_post(
            post.id,
            author.id,
            PostChanges(title="  Retitled  ", category="Racing"),
        )

        # Assert
        assert updated.title == "Retitled"
        assert updated.category == Category.RACING
        assert updated.excerpt == post.excerpt
        assert updated.tags == ["old"]
        assert updated.created_at == post.created_at
        assert updated.updated_at > post.updated_at

    @pytest.mark.asyncio
    async def test_empty_featured_image_clears_it(self, service, post_repo):
        """An empty string removes the image."""
        # Arrange
        author = make_user()
        post = make_post(author.id, featured_image="https://img/cover.jpg")
        await post_repo.save(post)

        # Act
        updated = await service.update_post(
            post.id, author.id, PostChanges(featured_image="")
        )

        # Assert
        assert updated.featured_image is None

    @pytest.mark.asyncio
    async def test_update_keeps_views_and_likes(self, service, post_repo):
        """System-managed fields survive an author edit."""
        # Arrange
        author = make_user()
        fan = make_user()
        post = make_post(author.id, view_count=7, likes=[fan.id])
        await post_repo.save(post)

        # Act
        updated = await service.update_post(
            post.id, author.id, PostChanges(content="Rewritten")
        )

        # Assert
        assert updated.view_count == 7
        assert updated.likes == [fan.id]

    @pytest.mark.asyncio
    async def test_views_and_likes_during_update_are_kept(self, user_repo, store):
        """A view and a like landing between the update's read and write survive."""
        # Arrange
        post_repo = SlowReadPostRepository(store)
        service = PostService(post_repo, user_repo)
        author = make_user()
        fan = make_user()
        post = make_post(author.id)
        await post_repo.save(post)

        async def view_and_like():
            await post_repo.increment_view_count(post.id)
            await post_repo.toggle_like(post.id, fan.id)

        # Act
        updated, _ = await asyncio.gather(
            service.update_post(post.id, author.id, PostChanges(title="New")),
            view_and_like(),
        )

        # Assert
        stored = await post_repo.find_by_id(post.id)
        assert updated.title == "New"
        assert stored.title == "New"
        assert stored.view_count == 1
        assert stored.likes == [fan.id]

    @pytest.mark.asyncio
    async def test_update_of_post_deleted_meanwhile_is_not_found(
        self, user_repo, store
    ):
        """A post deleted after the ownership check is reported missing."""
        # Arrange
        post_repo = SlowReadPostRepository(store)
        service = PostService(post_repo, user_repo)
        author = make_user()
        post = make_post(author.id)
        await post_repo.save(post)

        async def delete():
            await post_repo.delete(post.id)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await asyncio.gather(
                service.update_post(post.id, author.id, PostChanges(title="New")),
                delete(),
            )

    @pytest.mark.asyncio
    async def test_non_author_cannot_update(self, service, post_repo):
        """Other users get an authorization error and the post is unchanged."""
        # Arrange
        post = make_post(make_user().id)
        await post_repo.save(post)

        # Act & Assert
        with pytest.raises(AuthorizationError):
            await service.update_post(
                post.id, make_user().id, PostChanges(title="Hijacked")
            )

        assert await post_repo.find_by_id(post.id) == post

    @pytest.mark.asyncio
    async def test_invalid_update_is_rejected(self, service, post_repo):
        """Rule violations in an update are reported and nothing changes."""
        # Arrange
        author = make_user()
        post = make_post(author.id)
        await post_repo.save(post)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.update_post(
                post.id, author.id, PostChanges(excerpt="x" * 151, read_time=0)
            )

        assert await post_repo.find_by_id(post.id) == post

    @pytest.mark.asyncio
    async def test_update_missing_post(self, service):
        """Unknown posts are not found."""
        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.update_post(
                PostId(uuid4()), make_user().id, PostChanges(title="x")
            )


class TestDeletePost:
    """Tests for PostService.delete_post()."""

    @pytest.mark.asyncio
    async def test_author_deletes_post(self, service, post_repo):
        """The post is gone afterwards."""
        # Arrange
        author = make_user()
        post = make_post(author.id)
        await post_repo.save(post)

        # Act
        await service.delete_post(post.id, author.id)

        # Assert
        assert await post_repo.find_by_id(post.id) is None

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(self, service, post_repo):
        """The post survives a delete by someone else."""
        # Arrange
        post = make_post(make_user().id)
        await post_repo.save(post)

        # Act & Assert
        with pytest.raises(AuthorizationError):
            await service.delete_post(post.id, make_user().id)

        assert await post_repo.find_by_id(post.id) is not None


class TestListPosts:
    """Tests for PostService.list_posts() and list_author_posts()."""

    @pytest.mark.asyncio
    async def test_category_filter_is_exact(self, service, post_repo):
        """Only posts in the requested category are returned."""
        # Arrange
        author = make_user()
        racing = make_post(author.id, category=Category.RACING)
        await post_repo.save(racing)
        await post_repo.save(make_post(author.id, category=Category.FREESTYLE))

        # Act
        posts = await service.list_posts(PostFilter(category=Category.RACING))

        # Assert
        assert [p.id for p in posts] == [racing.id]

    @pytest.mark.asyncio
    async def test_drafts_hidden_by_default(self, service, post_repo):
        """The default listing shows published posts only."""
        # Arrange
        author = make_user()
        published = make_post(author.id)
        await post_repo.save(published)
        await post_repo.save(make_post(author.id, status=PostStatus.DRAFT))

        # Act
        posts = await service.list_posts(PostFilter())

        # Assert
        assert [p.id for p in posts] == [published.id]

    @pytest.mark.asyncio
    async def test_most_viewed_sort(self, service, post_repo):
        """Higher view counts come first."""
        # Arrange
        author = make_user()
        quiet = make_post(author.id, view_count=1, minutes_ago=1)
        busy = make_post(author.id, view_count=40, minutes_ago=2)
        await post_repo.save(quiet)
        await post_repo.save(busy)

        # Act
        posts = await service.list_posts(PostFilter(sort=PostSortOrder.MOST_VIEWED))

        # Assert
        assert [p.id for p in posts] == [busy.id, quiet.id]

    @pytest.mark.asyncio
    async def test_author_posts_include_drafts_and_totals(self, service, post_repo):
        """My-posts covers every status and sums likes and views."""
        # Arrange
        author = make_user()
        fan = make_user()
        await post_repo.save(make_post(author.id, view_count=5, likes=[fan.id]))
        await post_repo.save(
            make_post(author.id, status=PostStatus.DRAFT, view_count=2, minutes_ago=5)
        )
        await post_repo.save(make_post(fan.id, view_count=100))

        # Act
        posts, stats = await service.list_author_posts(author.id)

        # Assert
        assert len(posts) == 2
        assert posts[0].created_at > posts[1].created_at
        assert stats.total_posts == 2
        assert stats.total_likes == 1
        assert stats.total_views == 7
