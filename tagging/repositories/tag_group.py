"""Tag group repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import TagGroup
from .base import BaseRepository


class TagGroupRepository(BaseRepository[TagGroup]):
    """Репозиторий групп тегов. Группы ищутся по slug."""

    def __init__(self, db: AsyncSession):
        super().__init__(TagGroup, db)

    async def get_by_slug(self, slug: str) -> TagGroup | None:
        """
        Получить группу по slug.

        SQL эквивалент:
            SELECT * FROM tag_groups WHERE slug = {slug};
        """
        result = await self.db.execute(select(TagGroup).where(TagGroup.slug == slug))
        return result.scalar_one_or_none()

    async def get_all_ordered(self) -> list[TagGroup]:
        result = await self.db.execute(select(TagGroup).order_by(TagGroup.slug))
        return list(result.scalars().all())
