"""API endpoints для групп тегов."""

from fastapi import APIRouter, Depends, status

from ..services import TagGroupService
from .dependencies import get_tag_group_service
from .schemas import ErrorResponse, TagGroupCreate, TagGroupResponse

router = APIRouter(prefix="/tag-groups", tags=["tag-groups"])


@router.get("", response_model=list[TagGroupResponse], summary="Получить все группы")
async def get_groups(
    service: TagGroupService = Depends(get_tag_group_service),
) -> list[TagGroupResponse]:
    groups = await service.list_groups()
    return [TagGroupResponse.model_validate(g) for g in groups]


@router.post(
    "",
    response_model=TagGroupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать группу",
    responses={400: {"model": ErrorResponse, "description": "Группа уже существует"}},
)
async def create_group(
    data: TagGroupCreate, service: TagGroupService = Depends(get_tag_group_service)
) -> TagGroupResponse:
    """
    Создать группу тегов.

    Пример запроса:
    ```json
    {"name": "Regions"}
    ```
    """
    group = await service.create_group(data.name)
    return TagGroupResponse.model_validate(group)
