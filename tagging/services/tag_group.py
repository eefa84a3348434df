"""Tag group service."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import TaggingConfig
from ..core.exceptions import AlreadyExistsError, NotFoundError, ValidationError
from ..models import Tag, TagGroup
from ..repositories import TagGroupRepository


class TagGroupService:
    """
    Группы тегов: создание и привязка тегов к группам.

    Группа всегда ищется по slug (normalizer(group_name)),
    поэтому "Regions", "regions" и " REGIONS " - одна и та же группа.
    """

    def __init__(self, db: AsyncSession, config: TaggingConfig | None = None):
        self.db = db
        self.config = config or TaggingConfig.from_settings()
        self.group_repo = TagGroupRepository(db)

    async def create_group(self, name: str) -> TagGroup:
        """
        Создать группу тегов.

        Raises:
            ValidationError: Пустое название
            AlreadyExistsError: Группа с таким slug уже есть
        """
        if not name or not name.strip():
            raise ValidationError("Tag group name cannot be empty")

        slug = self.config.normalizer(name)
        if await self.group_repo.get_by_slug(slug):
            raise AlreadyExistsError("TagGroup", slug)

        return await self.group_repo.create(TagGroup(name=name.strip(), slug=slug))

    async def get_group(self, group_name: str) -> TagGroup:
        """
        Raises:
            NotFoundError: Группа не найдена
        """
        group = await self.group_repo.get_by_slug(self.config.normalizer(group_name))
        if group is None:
            raise NotFoundError("TagGroup", group_name)
        return group

    async def list_groups(self) -> list[TagGroup]:
        return await self.group_repo.get_all_ordered()

    async def set_group(self, tag: Tag, group_name: str) -> Tag:
        """Привязать тег к группе (NotFoundError, если группы нет)."""
        group = await self.get_group(group_name)
        tag.group = group
        await self.db.flush()
        return tag

    async def remove_group(self, tag: Tag, group_name: str) -> Tag:
        """
        Отвязать тег от группы.

        Если тег состоит в другой группе - ничего не меняем.
        """
        group = await self.get_group(group_name)
        if tag.tag_group_id == group.id:
            tag.group = None
            await self.db.flush()
        return tag

    async def is_in_group(self, tag: Tag, group_name: str) -> bool:
        """True, если slug текущей группы тега совпадает с normalizer(group_name)."""
        if tag.tag_group_id is None:
            return False
        group = await self.group_repo.get_by_slug(self.config.normalizer(group_name))
        return group is not None and group.id == tag.tag_group_id
