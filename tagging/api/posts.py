"""
API endpoints для постов и их тегов.

Пост - пример тегируемой сущности: здесь видно, как HTTP слой
пользуется TaggingService (tag / untag / retag / фильтры).
"""

from fastapi import APIRouter, Depends, Query, status

from ..models import Post
from ..services import PostService, TaggingService
from .dependencies import get_post_service, get_tagging_service
from .schemas import ErrorResponse, PostCreate, PostResponse, PostUpdate, TagNamesRequest, TagUsageResponse

router = APIRouter(prefix="/posts", tags=["posts"])


async def _to_response(post: Post, tagging: TaggingService) -> PostResponse:
    return PostResponse(
        id=post.id,
        title=post.title,
        body=post.body,
        tags=await tagging.tag_names(post),
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


# ============================================================================
# EXISTING TAGS
# ============================================================================


@router.get(
    "/tags/existing",
    response_model=list[TagUsageResponse],
    summary="Теги, используемые постами",
)
async def get_existing_tags(
    groups: list[str] | None = Query(None, description="Только теги из этих групп"),
    tagging: TaggingService = Depends(get_tagging_service),
) -> list[TagUsageResponse]:
    """
    Различные теги, которые стоят хотя бы на одном посте.

    Пример запроса:
    ```
    GET /posts/tags/existing?groups=topics
    ```
    """
    if groups:
        usages = await tagging.existing_tags_in_groups(Post, groups)
    else:
        usages = await tagging.existing_tags(Post)
    return [TagUsageResponse(name=u.name, slug=u.slug, count=u.count) for u in usages]


# ============================================================================
# POSTS CRUD
# ============================================================================


@router.get("", response_model=list[PostResponse], summary="Получить посты")
async def get_posts(
    all: list[str] | None = Query(None, description="Пост должен иметь ВСЕ теги"),
    any: list[str] | None = Query(None, description="Пост должен иметь ЛЮБОЙ из тегов"),
    without: list[str] | None = Query(None, description="У поста НЕ должно быть этих тегов"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: PostService = Depends(get_post_service),
    tagging: TaggingService = Depends(get_tagging_service),
) -> list[PostResponse]:
    """
    Список постов с фильтрами по тегам.

    Пример запроса:
    ```
    GET /posts?all=travel&all=food&without=draft
    ```
    """
    posts = await service.list_posts(
        all_tags=all, any_tags=any, without=without, skip=skip, limit=limit
    )
    return [await _to_response(post, tagging) for post in posts]


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать пост",
    responses={400: {"model": ErrorResponse, "description": "Ошибка валидации"}},
)
async def create_post(
    data: PostCreate,
    service: PostService = Depends(get_post_service),
    tagging: TaggingService = Depends(get_tagging_service),
) -> PostResponse:
    """
    Создать пост (опционально сразу с тегами).

    Пример запроса:
    ```json
    {"title": "Weekend in Lisbon", "tag_names": ["Cooking", "Travel"]}
    ```
    """
    post = await service.create_post(title=data.title, body=data.body, tag_names=data.tag_names)
    return await _to_response(post, tagging)


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Получить пост по ID",
    responses={404: {"model": ErrorResponse, "description": "Пост не найден"}},
)
async def get_post(
    post_id: int,
    service: PostService = Depends(get_post_service),
    tagging: TaggingService = Depends(get_tagging_service),
) -> PostResponse:
    post = await service.get_post(post_id)
    return await _to_response(post, tagging)


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    summary="Обновить пост",
    responses={404: {"model": ErrorResponse, "description": "Пост не найден"}},
)
async def update_post(
    post_id: int,
    data: PostUpdate,
    service: PostService = Depends(get_post_service),
    tagging: TaggingService = Depends(get_tagging_service),
) -> PostResponse:
    """
    Обновить пост.

    tag_names: не передан/null - теги не меняются, [] - снять все, иначе retag.
    """
    post = await service.update_post(
        post_id, title=data.title, body=data.body, tag_names=data.tag_names
    )
    return await _to_response(post, tagging)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удалить пост",
    responses={404: {"model": ErrorResponse, "description": "Пост не найден"}},
)
async def delete_post(post_id: int, service: PostService = Depends(get_post_service)) -> None:
    """Удалить пост. При TAGGING_UNTAG_ON_DELETE теги снимаются до удаления."""
    await service.delete_post(post_id)


# ============================================================================
# POST TAGS
# ============================================================================


@router.post(
    "/{post_id}/tags",
    response_model=PostResponse,
    summary="Добавить теги",
    responses={404: {"model": ErrorResponse, "description": "Пост или группа не найдены"}},
)
async def tag_post(
    post_id: int,
    data: TagNamesRequest,
    service: PostService = Depends(get_post_service),
    tagging: TaggingService = Depends(get_tagging_service),
) -> PostResponse:
    """
    Добавить теги посту. Уже имеющиеся теги пропускаются.

    Пример запроса:
    ```json
    {"names": ["Lisbon"], "group": "regions"}
    ```
    """
    post = await service.get_post(post_id)
    await tagging.tag(post, data.names, group_name=data.group, use_sorting=data.use_sorting)
    return await _to_response(post, tagging)


@router.put("/{post_id}/tags", response_model=PostResponse, summary="Заменить теги")
async def retag_post(
    post_id: int,
    data: TagNamesRequest,
    service: PostService = Depends(get_post_service),
    tagging: TaggingService = Depends(get_tagging_service),
) -> PostResponse:
    """Заменить набор тегов поста (минимальный diff по slug)."""
    post = await service.get_post(post_id)
    await tagging.retag(post, data.names)
    return await _to_response(post, tagging)


@router.delete("/{post_id}/tags", response_model=PostResponse, summary="Снять теги")
async def untag_post(
    post_id: int,
    names: list[str] | None = Query(None, description="Какие теги снять (по умолчанию все)"),
    group: str | None = Query(None, description="Снимать только теги группы"),
    service: PostService = Depends(get_post_service),
    tagging: TaggingService = Depends(get_tagging_service),
) -> PostResponse:
    """
    Снять теги с поста.

    Пример запроса:
    ```
    DELETE /posts/1/tags?names=cooking
    ```
    """
    post = await service.get_post(post_id)
    await tagging.untag(post, names, group_name=group)
    return await _to_response(post, tagging)
