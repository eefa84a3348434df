"""
API endpoints для работы с реестром тегов.

Автоматическая нормализация: slug = lowercase + дефисы,
отображаемое имя - Title Case.
"""

from fastapi import APIRouter, Depends, Query, status

from ..services import TagGroupService, TagService
from .dependencies import get_tag_group_service, get_tag_service
from .schemas import (
    CountResponse,
    ErrorResponse,
    TagCreate,
    TagGroupAssign,
    TagResponse,
    TagSuggestUpdate,
    TagTranslationCreate,
    TagTranslationResponse,
)

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=list[TagResponse], summary="Получить все теги")
async def get_tags(
    search: str | None = Query(None, description="Поиск по имени или slug"),
    group: str | None = Query(None, description="Только теги группы"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: TagService = Depends(get_tag_service),
) -> list[TagResponse]:
    """
    Получить список тегов.

    Пример запроса:
    ```
    GET /tags?search=trav
    ```
    """
    if search:
        tags = await service.search_tags(search)
    elif group:
        tags = await service.tags_in_group(group)
    else:
        tags = await service.get_all_tags(skip=skip, limit=limit)
    return [TagResponse.model_validate(t) for t in tags]


@router.get("/suggested", response_model=list[TagResponse], summary="Предлагаемые теги")
async def get_suggested_tags(service: TagService = Depends(get_tag_service)) -> list[TagResponse]:
    tags = await service.list_suggested()
    return [TagResponse.model_validate(t) for t in tags]


@router.get("/unused", response_model=list[TagResponse], summary="Неиспользуемые теги")
async def get_unused_tags(service: TagService = Depends(get_tag_service)) -> list[TagResponse]:
    """Теги без связей (предлагаемые не включаются - их не удаляют)."""
    tags = await service.get_unused_tags()
    return [TagResponse.model_validate(t) for t in tags]


@router.delete("/unused", response_model=CountResponse, summary="Удалить неиспользуемые теги")
async def delete_unused_tags(service: TagService = Depends(get_tag_service)) -> CountResponse:
    return CountResponse(count=await service.delete_unused())


@router.post("/recount", response_model=CountResponse, summary="Пересчитать счётчики")
async def recount_tags(service: TagService = Depends(get_tag_service)) -> CountResponse:
    """Пересчитать count всех тегов по таблице tagged. Возвращает число исправленных."""
    return CountResponse(count=await service.recount())


@router.post(
    "",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать тег",
    responses={
        400: {"model": ErrorResponse, "description": "Пустое название"},
        404: {"model": ErrorResponse, "description": "Группа не найдена"},
    },
)
async def create_tag(data: TagCreate, service: TagService = Depends(get_tag_service)) -> TagResponse:
    """
    Создать тег (или вернуть существующий с тем же slug).

    Пример запроса:
    ```json
    {"name": "web development", "suggest": true}
    ```

    Будет создан тег "Web Development" со slug "web-development".
    """
    tag = await service.create_tag(data.name, group_name=data.group, suggest=data.suggest)
    return TagResponse.model_validate(tag)


@router.get(
    "/{tag_id}",
    response_model=TagResponse,
    summary="Получить тег по ID",
    responses={404: {"model": ErrorResponse, "description": "Тег не найден"}},
)
async def get_tag(tag_id: int, service: TagService = Depends(get_tag_service)) -> TagResponse:
    tag = await service.get_tag(tag_id)
    return TagResponse.model_validate(tag)


@router.put("/{tag_id}/suggest", response_model=TagResponse, summary="Флаг suggest")
async def set_suggest(
    tag_id: int, data: TagSuggestUpdate, service: TagService = Depends(get_tag_service)
) -> TagResponse:
    tag = await service.set_suggest(tag_id, data.suggest)
    return TagResponse.model_validate(tag)


@router.put(
    "/{tag_id}/group",
    response_model=TagResponse,
    summary="Привязать тег к группе",
    responses={404: {"model": ErrorResponse, "description": "Тег или группа не найдены"}},
)
async def set_group(
    tag_id: int,
    data: TagGroupAssign,
    service: TagService = Depends(get_tag_service),
    groups: TagGroupService = Depends(get_tag_group_service),
) -> TagResponse:
    tag = await service.get_tag(tag_id)
    tag = await groups.set_group(tag, data.group)
    return TagResponse.model_validate(tag)


@router.delete(
    "/{tag_id}/group",
    response_model=TagResponse,
    summary="Отвязать тег от группы",
    responses={404: {"model": ErrorResponse, "description": "Тег или группа не найдены"}},
)
async def remove_group(
    tag_id: int,
    group: str = Query(..., description="Группа, из которой убрать тег"),
    service: TagService = Depends(get_tag_service),
    groups: TagGroupService = Depends(get_tag_group_service),
) -> TagResponse:
    tag = await service.get_tag(tag_id)
    tag = await groups.remove_group(tag, group)
    return TagResponse.model_validate(tag)


@router.post(
    "/{tag_id}/translations",
    response_model=TagTranslationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Добавить перевод тега",
)
async def add_translation(
    tag_id: int, data: TagTranslationCreate, service: TagService = Depends(get_tag_service)
) -> TagTranslationResponse:
    """
    Добавить или заменить перевод тега.

    Пример запроса:
    ```json
    {"locale": "de", "name": "Reisen"}
    ```
    """
    translation = await service.add_translation(tag_id, data.locale, data.name)
    return TagTranslationResponse.model_validate(translation)
