"""Repository for taggable entities (posts, notes, ...)."""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from .base import BaseRepository, ModelType


class EntityRepository(BaseRepository[ModelType]):
    """
    Репозиторий для любой тегируемой сущности.

    Пример:
        posts = EntityRepository(Post, db)
        query = tagging.with_any_tag(posts.query(), Post, ["python"])
        found = await posts.fetch(query)
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        super().__init__(model, db)

    def query(self) -> Select:
        """Базовый SELECT, к которому можно применять фильтры по тегам."""
        return select(self.model).order_by(self.model.id)

    async def fetch(self, query: Select, skip: int = 0, limit: int = 100) -> list[ModelType]:
        result = await self.db.execute(query.offset(skip).limit(limit))
        return list(result.scalars().all())

    async def remove(self, obj: ModelType) -> None:
        """Удалить загруженный объект (DELETE + flush)."""
        await self.db.delete(obj)
        await self.db.flush()
