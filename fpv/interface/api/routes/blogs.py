"""Blog post routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status

from fpv.application.usecase.auth import GetCurrentUserUseCase
from fpv.application.usecase.dto import CamelModel
from fpv.application.usecase.like import (
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
)
from fpv.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetMyPostsRequest,
    GetMyPostsResponse,
    GetMyPostsUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    UpdatePostRequest,
    UpdatePostResponse,
    UpdatePostUseCase,
)
from fpv.interface.api.security import require_user

router = APIRouter(prefix="/blogs", tags=["blogs"], route_class=DishkaRoute)


class CreatePostAPIRequest(CamelModel):
    """API request for creating a post.

    Field rules are checked by the post service so that every violation is
    reported at once.
    """

    title: str = ""
    excerpt: str = ""
    content: str = ""
    category: str = ""
    tags: Optional[list[str]] = None
    featured_image: Optional[str] = None
    read_time: Optional[int] = None
    status: Optional[str] = None


class UpdatePostAPIRequest(CamelModel):
    """API request for a partial post update.

    Omitted fields are left unchanged; `featuredImage: ""` clears the image.
    """

    title: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[list[str]] = None
    featured_image: Optional[str] = None
    read_time: Optional[int] = None
    status: Optional[str] = None


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    search: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    post_status: Optional[str] = Query(default=None, alias="status"),
) -> ListPostsResponse:
    """List posts, newest first unless sorted otherwise.

    Args:
        list_posts_use_case: List posts use case from DI
        search: Case-insensitive text matched against title, excerpt and content
        category: Exact category ("All" for every category)
        sort_by: latest, mostLiked or mostViewed
        post_status: published (default) or draft

    Returns:
        All matching posts and their count
    """
    return await list_posts_use_case.execute(
        ListPostsRequest(
            search=search, category=category, sort_by=sort_by, status=post_status
        )
    )


@router.post(
    "", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED
)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> CreatePostResponse:
    """Create a new post owned by the caller.

    Requires authentication and a synced user.
    """
    user = await require_user(authorization, get_current_user_use_case)
    return await create_post_use_case.execute(
        CreatePostRequest(author_id=user.id, **request.model_dump())
    )


# Declared before /{post_id} so the literal path wins
@router.get("/user/my-posts", response_model=GetMyPostsResponse)
async def get_my_posts(
    get_my_posts_use_case: FromDishka[GetMyPostsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> GetMyPostsResponse:
    """List the caller's posts of any status with like and view totals."""
    user = await require_user(authorization, get_current_user_use_case)
    return await get_my_posts_use_case.execute(GetMyPostsRequest(user_id=user.id))


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: str,
    get_post_use_case: FromDishka[GetPostUseCase],
) -> GetPostResponse:
    """Read a post. Each call adds one view."""
    return await get_post_use_case.execute(GetPostRequest(post_id=post_id))


@router.put("/{post_id}", response_model=UpdatePostResponse)
async def update_post(
    post_id: str,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> UpdatePostResponse:
    """Update a post. Only its author may do this."""
    user = await require_user(authorization, get_current_user_use_case)
    return await update_post_use_case.execute(
        UpdatePostRequest(
            post_id=post_id,
            user_id=user.id,
            changes=request.model_dump(exclude_unset=True),
        )
    )


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: str,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> DeletePostResponse:
    """Delete a post permanently. Only its author may do this."""
    user = await require_user(authorization, get_current_user_use_case)
    return await delete_post_use_case.execute(
        DeletePostRequest(post_id=post_id, user_id=user.id)
    )


@router.post("/{post_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    post_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ToggleLikeResponse:
    """Like the post, or unlike it if the caller already likes it."""
    user = await require_user(authorization, get_current_user_use_case)
    return await toggle_like_use_case.execute(
        ToggleLikeRequest(post_id=post_id, user_id=user.id)
    )
